"""Canonical Pydantic models shared across all intellicomp modules.

This is the single source of truth for data shapes in the project. The models
fall into two groups:

**Schema models** -- the declarative description of one command, loaded from a
YAML/JSON schema document and consumed by the completion resolver:
    :class:`Command`, :class:`KeywordArgument`, :class:`PositionalArgument`,
    :class:`KeywordArgumentStyle` and the :data:`ValueType` union
    (:class:`FlagValue`, :class:`StringValue`, :class:`PathValue`,
    :class:`EnumerationValue`, :class:`UnknownValue`).

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`OutputConfig` and :class:`GlobalConfig`.

Schema models are frozen: a schema is immutable once loaded and compares by
structure. Value types use adjacent tagging on the wire::

    value_type:
      type: Enumeration
      content: [foo, bar, baz]

The set of value types is open. Tags this version does not know deserialise
into :class:`UnknownValue`, which keeps the raw tag and content so that a
schema written for a newer release survives a load/dump cycle unchanged.
"""

from __future__ import annotations

import enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator


# --- Value types ---


class FlagValue(BaseModel):
    """The argument is a flag and thus does not have an associated value."""

    model_config = ConfigDict(frozen=True)

    type: Literal["Flag"] = "Flag"


class StringValue(BaseModel):
    """Free-text value; no completion can be done for it."""

    model_config = ConfigDict(frozen=True)

    type: Literal["String"] = "String"


class PathValue(BaseModel):
    """Filesystem path, completed relative to the current working directory."""

    model_config = ConfigDict(frozen=True)

    type: Literal["Path"] = "Path"


class EnumerationValue(BaseModel):
    """The value must be one of a fixed, ordered set of strings.

    Example::

        EnumerationValue(content=["foo", "bar", "baz"])
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["Enumeration"] = "Enumeration"
    content: list[str] = Field(default_factory=list)

    @property
    def values(self) -> list[str]:
        """The allowed values, in declaration order."""
        return self.content


class UnknownValue(BaseModel):
    """A value type tag this version does not recognise.

    Kept so that schemas written for newer releases still load. The resolver
    offers no completions for it.
    """

    model_config = ConfigDict(frozen=True)

    type: str
    content: Any = None


_KNOWN_VALUE_TYPES = frozenset({"Flag", "String", "Path", "Enumeration"})


def _value_type_tag(value: Any) -> str:
    """Pick the union member for *value*, routing unrecognised tags to ``Unknown``."""
    if isinstance(value, dict):
        tag = value.get("type")
    else:
        tag = getattr(value, "type", None)
    if isinstance(value, UnknownValue) or tag not in _KNOWN_VALUE_TYPES:
        return "Unknown"
    return tag


ValueType = Annotated[
    Union[
        Annotated[FlagValue, Tag("Flag")],
        Annotated[StringValue, Tag("String")],
        Annotated[PathValue, Tag("Path")],
        Annotated[EnumerationValue, Tag("Enumeration")],
        Annotated[UnknownValue, Tag("Unknown")],
    ],
    Discriminator(_value_type_tag),
]
"""Tagged union of every value type an argument can declare."""


# --- Arguments ---


class KeywordArgumentStyle(str, enum.Enum):
    """How a keyword argument is spelled on the command line.

    Only affects how the name is displayed in candidate lists; matching
    ignores the dash prefix entirely.
    """

    STANDARD = "Standard"
    OLD = "Old"

    @property
    def prefix(self) -> str:
        """The dash prefix: ``--`` for ``Standard``, ``-`` for ``Old``."""
        return "--" if self is KeywordArgumentStyle.STANDARD else "-"


class KeywordArgument(BaseModel):
    """A named, flag-style argument such as ``--file`` or ``-name``.

    Example::

        KeywordArgument(
            name="enum",
            description="Pick one",
            value_type=EnumerationValue(content=["foo", "bar"]),
        )
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Flag identifier without its dash prefix")
    description: str = ""
    shorthand: Optional[str] = Field(
        default=None, description="Optional single-character alias"
    )
    repeatable: bool = Field(
        default=False, description="May appear more than once per command line"
    )
    style: KeywordArgumentStyle = KeywordArgumentStyle.STANDARD
    value_type: ValueType
    incompatible_with: list[str] = Field(
        default_factory=list,
        description="Reserved: names of arguments this one conflicts with (not enforced)",
    )

    @property
    def display_name(self) -> str:
        """The name as offered in candidate lists, e.g. ``--file``."""
        return f"{self.style.prefix}{self.name}"


class PositionalArgument(BaseModel):
    """An argument bound by position, consumed in declaration order."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    value_type: ValueType
    incompatible_with: list[str] = Field(
        default_factory=list,
        description="Reserved: names of arguments this one conflicts with (not enforced)",
    )


class Command(BaseModel):
    """The completion schema of one command.

    Keyword argument names must be unique within a schema; this is the
    schema author's responsibility and is not validated here.

    ``keyword_arguments`` may be written either as a list of argument objects
    or as a mapping from name to argument body, in which case the key
    supplies each argument's ``name``.

    See Also:
        :func:`~intellicomp.schema.loader.load_schema`: Load a schema document.
        :func:`~intellicomp.completion.resolver.generate_completions`: Consume one.
    """

    model_config = ConfigDict(frozen=True)

    description: str = Field(default="", description="A brief overview of the command")
    keyword_arguments: list[KeywordArgument] = Field(
        default_factory=list, description="Arguments passed by flag"
    )
    positional_arguments: list[PositionalArgument] = Field(
        default_factory=list,
        description="Arguments passed by position, in consumption order",
    )

    @field_validator("keyword_arguments", mode="before")
    @classmethod
    def _keyword_arguments_from_mapping(cls, value: Any) -> Any:
        if isinstance(value, dict):
            arguments = []
            for name, body in value.items():
                body = dict(body or {})
                body.setdefault("name", name)
                arguments.append(body)
            return arguments
        return value


# --- Configuration ---


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/intellicomp/config.json``.

    Loaded and saved by :func:`~intellicomp.config.load_global_config` and
    :func:`~intellicomp.config.save_global_config`. ``schema_dir`` has the
    lowest precedence but one in :func:`~intellicomp.config.resolve_schema_dir`.
    """

    schema_dir: Optional[str] = Field(
        default=None, description="Directory holding <command>.yaml schemas"
    )
    output: OutputConfig = Field(default_factory=OutputConfig)
