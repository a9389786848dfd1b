"""Pydantic v2 models for the extension generator.

``GenerationConfig`` is the single record that determines what gets
generated: which template set is rendered, the values substituted into it,
and the post-generation actions.  ``BuilderOptions`` carries the values
pre-supplied on the command line.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from extgen.validator import validate_extension_id


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ExtensionType(str, Enum):
    """Kind of extension to scaffold. The value names the template set."""
    COMMAND_JS = "ext-command-js"
    EXTENSION_PACK = "ext-extensionpack"

    @property
    def option_value(self) -> str:
        """Value accepted by ``--extension-type`` (``command-js``, ``extensionpack``)."""
        return self.value[len("ext-"):]

    @property
    def label(self) -> str:
        return _TYPE_LABELS[self]

    @classmethod
    def option_values(cls) -> list[str]:
        return [member.option_value for member in cls]

    @classmethod
    def from_option(cls, value: str) -> Optional["ExtensionType"]:
        """Resolve a command-line value, with or without the ``ext-`` prefix.

        Returns ``None`` for anything that is not a known type.
        """
        cleaned = value.strip().lower()
        for member in cls:
            if cleaned in (member.option_value, member.value):
                return member
        return None


_TYPE_LABELS: dict[ExtensionType, str] = {
    ExtensionType.COMMAND_JS: "New Extension (JavaScript)",
    ExtensionType.EXTENSION_PACK: "New Extension Pack",
}


class PackageManager(str, Enum):
    """Package manager used to install the new extension's dependencies."""
    NPM = "npm"
    YARN = "yarn"


DEFAULT_EXTENSION_LIST: list[str] = ["publisher.extensionName"]


# ---------------------------------------------------------------------------
# Pre-supplied options
# ---------------------------------------------------------------------------

class BuilderOptions(BaseModel):
    """Values supplied up front (command-line flags). Anything left ``None`` is asked for."""

    extension_type: Optional[str] = Field(default=None, description="command-js or extensionpack")
    extension_name: Optional[str] = Field(default=None, description="Extension identifier")
    extension_description: Optional[str] = Field(default=None)
    extension_display_name: Optional[str] = Field(default=None)
    extension_param: Optional[str] = Field(
        default=None,
        description="Extension packs: 'y' adds the installed extensions, 'n' uses the placeholder",
    )
    extension_param2: Optional[str] = Field(
        default=None, description="Reserved second pass-through parameter"
    )


# ---------------------------------------------------------------------------
# Generation config
# ---------------------------------------------------------------------------

class GenerationConfig(BaseModel):
    """Complete, read-only description of the extension to generate.

    Fields that only make sense for one extension type stay ``None`` for the
    other; mixing them is rejected at construction time.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    type: ExtensionType
    display_name: str = Field(default="", description="Human readable name shown in the marketplace")
    name: str = Field(..., description="Identifier, used as the output directory name")
    description: str = Field(default="")
    vscode_engine: str = Field(..., alias="vsCodeEngine", description="engines.vscode range")

    # Extension pack only
    extension_list: Optional[list[str]] = Field(default=None)

    # New extension only
    check_javascript: Optional[bool] = Field(default=None, alias="checkJavaScript")
    git_init: Optional[bool] = Field(default=None)
    pkg_manager: Optional[PackageManager] = Field(default=None)

    @field_validator("name")
    @classmethod
    def _name_is_identifier(cls, value: str) -> str:
        result = validate_extension_id(value)
        if result is not True:
            raise ValueError(f"{result}: {value!r}")
        return value

    @model_validator(mode="after")
    def _fields_match_type(self) -> "GenerationConfig":
        if self.type is ExtensionType.EXTENSION_PACK:
            mixed = [
                field
                for field in ("check_javascript", "git_init", "pkg_manager")
                if getattr(self, field) is not None
            ]
            if mixed:
                raise ValueError(f"Extension packs do not support: {', '.join(mixed)}")
        elif self.extension_list is not None:
            raise ValueError("extension_list is only valid for extension packs")
        return self

    @computed_field(alias="installDependencies")
    @property
    def install_dependencies(self) -> bool:
        return self.type is ExtensionType.COMMAND_JS

    def template_context(self) -> dict[str, Any]:
        """Return the Jinja2 context: camelCase keys, unset fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def summary(self) -> dict[str, str]:
        """Human readable ``{label: value}`` pairs for the CLI summary table."""
        rows = {
            "Type": self.type.label,
            "Display name": self.display_name,
            "Identifier": self.name,
            "Description": self.description,
            "VS Code engine": self.vscode_engine,
        }
        if self.extension_list is not None:
            rows["Extensions"] = ", ".join(self.extension_list) or "(none)"
        if self.check_javascript is not None:
            rows["Type-check JavaScript"] = "yes" if self.check_javascript else "no"
        if self.git_init is not None:
            rows["Initialize git"] = "yes" if self.git_init else "no"
        if self.pkg_manager is not None:
            rows["Package manager"] = self.pkg_manager.value
        return rows
