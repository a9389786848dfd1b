"""Command-line entry point.

Runs one full generation: welcome banner, configuration builder, template
rendering, installation and next steps.  The camelCase flag spellings are
accepted next to the kebab-case ones for scripts written against the
original generator.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

from extgen.builder import ConfigurationBuilder
from extgen.config import Settings
from extgen.env import VSCodeEnvironment
from extgen.errors import GenerationError, PromptAbortedError
from extgen.installer import Installer
from extgen.models import BuilderOptions, ExtensionType
from extgen.prompts import AnswerSource, QuestionaryAnswerSource
from extgen.scaffolder import ExtensionGenerator
from extgen.utils import print_error, print_summary_table, print_welcome


async def run(
    options: BuilderOptions,
    settings: Settings,
    answers: Optional[AnswerSource] = None,
    skip_install: bool = False,
    banner: bool = True,
) -> Path:
    """Collect the configuration, write the extension and finish it.

    Returns:
        Path to the generated extension.
    """
    if banner:
        print_welcome("Welcome to the Visual Studio Code Extension generator!")

    builder = ConfigurationBuilder(VSCodeEnvironment(settings))
    config = await builder.build(options, answers or QuestionaryAnswerSource())
    print_summary_table(config.summary(), title="Extension")

    project_root = await ExtensionGenerator(config).generate(settings.output_dir)
    await Installer(config, settings).run(project_root, skip_install=skip_install)
    return project_root


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="extgen",
        description="Scaffold a new Visual Studio Code extension",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  extgen\n"
            "  extgen --extension-type command-js --extension-name hello-world\n"
            "  extgen --extension-type extensionpack --extension-param y -o ./packs\n"
        ),
    )
    parser.add_argument(
        "--extension-type", "--extensionType",
        dest="extension_type",
        help=f"Extension type: {', '.join(ExtensionType.option_values())}",
    )
    parser.add_argument(
        "--extension-name", "--extensionName",
        dest="extension_name",
        help="Extension identifier (package.json name)",
    )
    parser.add_argument(
        "--extension-description", "--extensionDescription",
        dest="extension_description",
        help="Extension description",
    )
    parser.add_argument(
        "--extension-display-name", "--extensionDisplayName",
        dest="extension_display_name",
        help="Extension display name",
    )
    parser.add_argument(
        "--extension-param", "--extensionParam",
        dest="extension_param",
        help="Extension packs: 'y' to add the installed extensions, 'n' for a placeholder",
    )
    parser.add_argument(
        "--extension-param2", "--extensionParam2",
        dest="extension_param2",
        help=argparse.SUPPRESS,
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Parent directory of the new extension (default: current directory)",
    )
    parser.add_argument(
        "--skip-install",
        action="store_true",
        help="Do not install dependencies after generating",
    )
    parser.add_argument(
        "--no-banner",
        action="store_true",
        help="Do not print the welcome banner",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point for ``extgen`` and ``python -m extgen``."""
    args = build_parser().parse_args(argv)

    settings = Settings.from_env()
    if args.output:
        settings = settings.model_copy(update={"output_dir": Path(args.output)})

    options = BuilderOptions(
        extension_type=args.extension_type,
        extension_name=args.extension_name,
        extension_description=args.extension_description,
        extension_display_name=args.extension_display_name,
        extension_param=args.extension_param,
        extension_param2=args.extension_param2,
    )

    try:
        asyncio.run(
            run(
                options,
                settings,
                skip_install=args.skip_install,
                banner=not args.no_banner,
            )
        )
    except PromptAbortedError:
        print_error("Aborted.")
        sys.exit(130)
    except GenerationError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
