"""Exception hierarchy for the extension generator.

Only :class:`GenerationError` and :class:`PromptAbortedError` ever reach the
CLI as failures.  The collaborator errors are caught where they occur and
turned into console diagnostics.
"""


class ExtGenError(Exception):
    """Base class for every error raised by ``extgen``."""


class PromptAbortedError(ExtGenError):
    """Raised when the user interrupts an interactive question."""

    def __init__(self, question: str = ""):
        self.question = question
        message = f"Prompt aborted: {question}" if question else "Prompt aborted"
        super().__init__(message)


class CommandError(ExtGenError):
    """Raised when an external command fails to start, times out or exits non-zero."""

    def __init__(self, message: str, command: str = "", stderr: str = ""):
        self.command = command
        self.stderr = stderr
        super().__init__(message)


class EnvironmentQueryError(CommandError):
    """The installed-extension query (``code --list-extensions``) failed."""


class InstallError(CommandError):
    """Dependency installation or ``git init`` failed."""


class VersionLookupError(ExtGenError):
    """The latest VS Code release could not be determined."""


class GenerationError(ExtGenError):
    """The extension directory could not be written."""
