"""Configuration builder: turns options and answers into a ``GenerationConfig``.

The builder runs a fixed, ordered list of steps.  Each step either resolves
its field immediately (pre-supplied value, or a step that does not apply to
the chosen extension type) or awaits one answer from the
:class:`~extgen.prompts.AnswerSource`.  Later steps read earlier fields as
defaults, so the order is part of the contract:

1. extension type
2. extension list (extension packs)
3. display name
4. identifier (validated)
5. description
6. JavaScript type checking, git init, package manager (new extensions)

Invalid input is never fatal: a bad pre-supplied type or identifier is
reported and the question is asked instead.  Collaborator failures (the
installed-extension query) are reported and the build carries on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from extgen.env import VSCodeEnvironment
from extgen.errors import EnvironmentQueryError
from extgen.models import (
    DEFAULT_EXTENSION_LIST,
    BuilderOptions,
    ExtensionType,
    GenerationConfig,
    PackageManager,
)
from extgen.prompts import AnswerSource, Choice, Question, QuestionKind
from extgen.utils import print_error, print_warning, slugify
from extgen.validator import validate_extension_id

Reporter = Callable[[str], None]


@dataclass
class _Draft:
    """The in-progress record, filled in field by field."""

    type: Optional[ExtensionType] = None
    display_name: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    vscode_engine: Optional[str] = None
    extension_list: Optional[list[str]] = None
    check_javascript: Optional[bool] = None
    git_init: Optional[bool] = None
    pkg_manager: Optional[PackageManager] = None

    def freeze(self) -> GenerationConfig:
        return GenerationConfig(
            type=self.type,
            display_name=self.display_name or "",
            name=self.name,
            description=self.description or "",
            vscode_engine=self.vscode_engine,
            extension_list=self.extension_list,
            check_javascript=self.check_javascript,
            git_init=self.git_init,
            pkg_manager=self.pkg_manager,
        )


Step = Callable[[_Draft, BuilderOptions, AnswerSource], Awaitable[None]]


class ConfigurationBuilder:
    """Collects a complete :class:`GenerationConfig`.

    Args:
        environment: Source of the engine version and the installed
            extensions.
        warn: Receives recoverable input problems (invalid type or name).
        error: Receives collaborator failures.
    """

    def __init__(
        self,
        environment: VSCodeEnvironment,
        warn: Reporter = print_warning,
        error: Reporter = print_error,
    ) -> None:
        self.environment = environment
        self.warn = warn
        self.error = error

    # -- Public API --------------------------------------------------------

    async def build(
        self, options: BuilderOptions, answers: AnswerSource
    ) -> GenerationConfig:
        """Run every step in order and return the frozen config."""
        draft = _Draft()
        draft.vscode_engine = await self.environment.latest_engine()
        for step in self.steps():
            await step(draft, options, answers)
        return draft.freeze()

    def steps(self) -> list[Step]:
        return [
            self._ask_for_type,
            self._ask_for_extension_pack_info,
            self._ask_for_display_name,
            self._ask_for_extension_id,
            self._ask_for_description,
            self._ask_for_javascript_info,
            self._ask_for_git,
            self._ask_for_package_manager,
        ]

    async def resolve_field(
        self,
        presupplied: Optional[str],
        question: Question,
        answers: AnswerSource,
    ) -> Any:
        """Use *presupplied* when given, otherwise ask *question*.

        With a validator on the question, a pre-supplied value that fails it
        is reported and the question is asked instead, and answers are
        re-asked until one passes.
        """
        validate = question.validate
        if presupplied:
            if validate is None:
                return presupplied
            result = validate(presupplied)
            if result is True:
                return presupplied
            self.warn(f"{result}: {presupplied!r}")

        while True:
            answer = await answers.ask(question)
            if validate is None:
                return answer
            result = validate(answer)
            if result is True:
                return answer
            self.warn(f"{result}: {answer!r}")

    # -- Steps -------------------------------------------------------------

    async def _ask_for_type(
        self, draft: _Draft, options: BuilderOptions, answers: AnswerSource
    ) -> None:
        if options.extension_type:
            extension_type = ExtensionType.from_option(options.extension_type)
            if extension_type is not None:
                draft.type = extension_type
                return
            self.warn(
                f"Invalid extension type: {options.extension_type}. "
                f"Possible types are: {', '.join(ExtensionType.option_values())}"
            )

        answer = await answers.ask(
            Question(
                kind=QuestionKind.LIST,
                name="type",
                message="What type of extension do you want to create?",
                choices=[Choice(member.label, member) for member in ExtensionType],
            )
        )
        draft.type = ExtensionType(answer)

    async def _ask_for_extension_pack_info(
        self, draft: _Draft, options: BuilderOptions, answers: AnswerSource
    ) -> None:
        if draft.type is not ExtensionType.EXTENSION_PACK:
            return

        param = (options.extension_param or "").strip().lower()
        if param == "n":
            draft.extension_list = list(DEFAULT_EXTENSION_LIST)
            return
        if param == "y":
            draft.extension_list = []
            await self._add_installed_extensions(draft)
            return

        add_extensions = await answers.ask(
            Question(
                kind=QuestionKind.CONFIRM,
                name="addExtensions",
                message="Add the currently installed extensions to the extension pack?",
                default=True,
            )
        )
        draft.extension_list = list(DEFAULT_EXTENSION_LIST)
        if add_extensions:
            await self._add_installed_extensions(draft)

    async def _ask_for_display_name(
        self, draft: _Draft, options: BuilderOptions, answers: AnswerSource
    ) -> None:
        draft.display_name = await self.resolve_field(
            options.extension_display_name,
            Question(
                kind=QuestionKind.INPUT,
                name="displayName",
                message="What's the name of your extension?",
                default=draft.display_name or "",
            ),
            answers,
        )

    async def _ask_for_extension_id(
        self, draft: _Draft, options: BuilderOptions, answers: AnswerSource
    ) -> None:
        default = draft.name
        if not default and draft.display_name:
            default = slugify(draft.display_name)

        draft.name = await self.resolve_field(
            options.extension_name,
            Question(
                kind=QuestionKind.INPUT,
                name="name",
                message="What's the identifier of your extension?",
                default=default or "",
                validate=validate_extension_id,
            ),
            answers,
        )

    async def _ask_for_description(
        self, draft: _Draft, options: BuilderOptions, answers: AnswerSource
    ) -> None:
        draft.description = await self.resolve_field(
            options.extension_description,
            Question(
                kind=QuestionKind.INPUT,
                name="description",
                message="What's the description of your extension?",
            ),
            answers,
        )

    async def _ask_for_javascript_info(
        self, draft: _Draft, options: BuilderOptions, answers: AnswerSource
    ) -> None:
        if draft.type is not ExtensionType.COMMAND_JS:
            return
        answer = await answers.ask(
            Question(
                kind=QuestionKind.CONFIRM,
                name="checkJavaScript",
                message="Enable JavaScript type checking in 'jsconfig.json'?",
                default=False,
            )
        )
        draft.check_javascript = bool(answer)

    async def _ask_for_git(
        self, draft: _Draft, options: BuilderOptions, answers: AnswerSource
    ) -> None:
        if draft.type is not ExtensionType.COMMAND_JS:
            return
        answer = await answers.ask(
            Question(
                kind=QuestionKind.CONFIRM,
                name="gitInit",
                message="Initialize a git repository?",
                default=True,
            )
        )
        draft.git_init = bool(answer)

    async def _ask_for_package_manager(
        self, draft: _Draft, options: BuilderOptions, answers: AnswerSource
    ) -> None:
        if draft.type is not ExtensionType.COMMAND_JS:
            return
        answer = await answers.ask(
            Question(
                kind=QuestionKind.LIST,
                name="pkgManager",
                message="Which package manager to use?",
                choices=[Choice(pm.value, pm) for pm in PackageManager],
                default=PackageManager.NPM,
            )
        )
        draft.pkg_manager = PackageManager(answer)

    # -- Helpers -----------------------------------------------------------

    async def _add_installed_extensions(self, draft: _Draft) -> None:
        """Replace the list with the installed extensions; keep it on failure or no output."""
        try:
            installed = await self.environment.installed_extensions()
        except EnvironmentQueryError as exc:
            self.error(str(exc))
            return
        if installed:
            draft.extension_list = installed
