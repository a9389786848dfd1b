"""Question descriptors and the interactive answer source.

The configuration builder never talks to the terminal directly.  It
describes each question with a :class:`Question` and hands it to an
:class:`AnswerSource`; the production source renders it with questionary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Protocol

import questionary

from extgen.errors import PromptAbortedError


class QuestionKind(str, Enum):
    LIST = "list"
    INPUT = "input"
    CONFIRM = "confirm"


@dataclass(frozen=True)
class Choice:
    """One entry of a single-choice question."""

    title: str
    value: Any


@dataclass
class Question:
    """Everything needed to render one question.

    ``validate`` is only honoured for free-text questions and follows the
    questionary contract: return ``True`` to accept, or an error message.
    """

    kind: QuestionKind
    name: str
    message: str
    choices: list[Choice] = field(default_factory=list)
    default: Any = None
    validate: Optional[Callable[[str], bool | str]] = None


class AnswerSource(Protocol):
    async def ask(self, question: Question) -> Any:
        ...


class QuestionaryAnswerSource:
    """Renders questions in the terminal with questionary.

    questionary re-renders a free-text question until its validator passes
    and returns ``None`` when the user presses Ctrl-C; the latter is turned
    into :class:`PromptAbortedError`.
    """

    def __init__(self, style: Optional[questionary.Style] = None) -> None:
        self.style = style

    async def ask(self, question: Question) -> Any:
        answer = await self._build(question).ask_async()
        if answer is None:
            raise PromptAbortedError(question.name)
        return answer

    def _build(self, question: Question) -> questionary.Question:
        if question.kind is QuestionKind.LIST:
            choices = [questionary.Choice(title=c.title, value=c.value) for c in question.choices]
            default = next((c for c in choices if c.value == question.default), None)
            return questionary.select(
                question.message, choices=choices, default=default, style=self.style
            )
        if question.kind is QuestionKind.CONFIRM:
            return questionary.confirm(
                question.message, default=bool(question.default), style=self.style
            )
        validate = question.validate if question.validate is not None else (lambda _: True)
        return questionary.text(
            question.message,
            default=question.default or "",
            validate=validate,
            style=self.style,
        )
