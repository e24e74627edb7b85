"""Typed configuration for receivers and transformations.

Components are configured with URI-style descriptors such as
``github://?secret=s33kret&ref=refs/heads/main`` or
``githubcommits://?exclude_deletions=true``. Descriptors are parsed and
validated once, at construction time, into frozen pydantic models.

Parsing rules:
- only the first value of a repeated query key is used;
- an empty value means "unset" and the default applies;
- booleans accept the literals in ``TRUE_LITERALS`` / ``FALSE_LITERALS``;
- unknown keys are rejected.
"""

from __future__ import annotations

from typing import Any, Self
from urllib.parse import parse_qs, urlsplit

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from webhookd.errors import ConfigurationError

TRUE_LITERALS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
FALSE_LITERALS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def parse_bool(value: str) -> bool:
    """Parse a boolean query value, rejecting anything but the known literals."""
    if value in TRUE_LITERALS:
        return True
    if value in FALSE_LITERALS:
        return False
    raise ValueError(f"invalid boolean literal '{value}'")


def split_descriptor(uri: str) -> tuple[str, dict[str, str]]:
    """Split a descriptor into its scheme and the non-empty query parameters."""
    parts = urlsplit(uri)
    if not parts.scheme:
        raise ConfigurationError(f"Descriptor '{uri}' has no scheme")

    raw = parse_qs(parts.query, keep_blank_values=True)
    params = {key: values[0] for key, values in raw.items() if values and values[0] != ""}
    return parts.scheme, params


class _Descriptor(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    @classmethod
    def from_uri(cls, uri: str) -> Self:
        """Build the config from a descriptor string.

        Raises:
            ConfigurationError: On an unknown key or an unparsable value.
        """
        _, params = split_descriptor(uri)
        return cls.from_params(params)

    @classmethod
    def from_params(cls, params: dict[str, Any]) -> Self:
        try:
            return cls.model_validate(params)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid {cls.__name__}: {exc}") from exc


class ReceiverConfig(_Descriptor):
    """Settings for the GitHub receiver.

    An empty ``secret`` means every real signature fails verification.
    An empty ``ref`` disables branch filtering.
    """

    secret: str = ""
    ref: str = ""


class TransformerConfig(_Descriptor):
    """Flags shared by the commits and repo transformations."""

    exclude_additions: bool = False
    exclude_modifications: bool = False
    exclude_deletions: bool = False
    prepend_message: bool = False
    prepend_author: bool = False

    @field_validator(
        "exclude_additions",
        "exclude_modifications",
        "exclude_deletions",
        "prepend_message",
        "prepend_author",
        mode="before",
    )
    @classmethod
    def _strict_bool(cls, value: object) -> object:
        if isinstance(value, str):
            return parse_bool(value)
        return value


class CommitsTransformerConfig(TransformerConfig):
    """``githubcommits://`` settings; halts when the head commit message contains ``halt_on_message``."""

    halt_on_message: str | None = None


class RepoTransformerConfig(TransformerConfig):
    """``githubrepo://`` settings; halts when the head commit author contains ``halt_on_author``."""

    halt_on_author: str | None = None
