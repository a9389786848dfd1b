"""extgen -- interactive scaffolder for Visual Studio Code extensions.

Quick usage::

    from extgen import BuilderOptions, ConfigurationBuilder, ExtensionGenerator
    from extgen.env import VSCodeEnvironment
    from extgen.prompts import QuestionaryAnswerSource

    builder = ConfigurationBuilder(VSCodeEnvironment())
    config = await builder.build(BuilderOptions(), QuestionaryAnswerSource())
    project_path = await ExtensionGenerator(config).generate(".")
"""

from extgen.builder import ConfigurationBuilder
from extgen.models import BuilderOptions, ExtensionType, GenerationConfig, PackageManager
from extgen.scaffolder import ExtensionGenerator

__version__ = "0.1.0"

__all__ = [
    "BuilderOptions",
    "ConfigurationBuilder",
    "ExtensionGenerator",
    "ExtensionType",
    "GenerationConfig",
    "PackageManager",
]
