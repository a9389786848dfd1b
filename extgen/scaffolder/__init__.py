"""Extension scaffolder -- renders the template set for a ``GenerationConfig``.

Quick usage::

    from extgen.scaffolder import ExtensionGenerator

    generator = ExtensionGenerator(config)
    project_path = await generator.generate("/tmp/output")
"""

from extgen.scaffolder.generator import ExtensionGenerator
from extgen.scaffolder.templates import TemplateRenderer

__all__ = [
    "ExtensionGenerator",
    "TemplateRenderer",
]
