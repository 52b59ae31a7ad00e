"""Configuration model shared by the markup scanners.

ScannerConfig

`tags` (`str`)
: Recognized formatting tags, one uppercase letter each. Only these letters
  open a markup span (`C<...>`, `B<< ... >>`, ...).

`entity_tag` (`str`)
: Letter introducing entity escapes such as `E<gt>`. Entity sub-forms are
  opaque to delimiter matching and must not double as a formatting tag.

`nobreak_tag` (`str`)
: Tag whose spans forbid any internal line break (`S<...>`).

`paragraph_separator` (`str`)
: Regular expression matching the gap between two paragraphs. Scans never
  cross a match of this pattern.

`escape_triggers` (`str`)
: Characters which, typed right before `>` inside a single-angle span, make
  the `>` read as an operator (`->`, `=>`, ` >`) that needs `E<gt>`.

`nobreak_after` (`tuple[str, ...]`)
: Literal markup after which a line break is never allowed, such as the
  `C<!>` operator reference which would otherwise look like the end of a
  sentence.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
import yaml

from .exceptions import ConfigurationError


DEFAULT_TAGS = "BCFILSXZ"
DEFAULT_PARAGRAPH_SEPARATOR = r"\n[ \t]*\n"


class ScannerConfig(BaseModel):
    """Markup conventions applied by every scanner component."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tags: str = Field(default=DEFAULT_TAGS, description="Recognized tag letters")
    entity_tag: str = Field(default="E", description="Entity escape letter")
    nobreak_tag: str = Field(default="S", description="Non-breaking span tag")
    paragraph_separator: str = Field(
        default=DEFAULT_PARAGRAPH_SEPARATOR, description="Paragraph gap pattern"
    )
    escape_triggers: str = Field(default="-= ", description="Characters escaping a typed '>'")
    nobreak_after: tuple[str, ...] = Field(default=("C<!>",))

    @field_validator("tags")
    @classmethod
    def _validate_tags(cls, value: str) -> str:
        if not value:
            raise ValueError("at least one tag letter is required")
        for letter in value:
            if not ("A" <= letter <= "Z"):
                raise ValueError(f"tag '{letter}' is not a single uppercase letter")
        return "".join(dict.fromkeys(value))

    @field_validator("entity_tag", "nobreak_tag")
    @classmethod
    def _validate_letter(cls, value: str) -> str:
        if len(value) != 1 or not ("A" <= value <= "Z"):
            raise ValueError(f"'{value}' is not a single uppercase letter")
        return value

    @field_validator("paragraph_separator")
    @classmethod
    def _validate_separator(cls, value: str) -> str:
        try:
            compiled = re.compile(value)
        except re.error as exc:
            raise ValueError(f"invalid paragraph separator pattern: {exc}") from exc
        if compiled.match(""):
            raise ValueError("paragraph separator must not match the empty string")
        return value

    @model_validator(mode="after")
    def _check_entity_tag(self) -> ScannerConfig:
        if self.entity_tag in self.tags:
            raise ValueError(f"entity tag '{self.entity_tag}' cannot also be a formatting tag")
        return self

    @property
    def tag_class(self) -> str:
        """Return a regex character class matching any recognized tag."""
        return f"[{re.escape(self.tags)}]"

    def paragraph_pattern(self) -> re.Pattern[str]:
        return re.compile(self.paragraph_separator)


DEFAULT_CONFIG = ScannerConfig()


def resolve_config(config: ScannerConfig | Mapping[str, Any] | None) -> ScannerConfig:
    """Return a validated configuration, accepting plain mappings."""
    if config is None:
        return DEFAULT_CONFIG
    if isinstance(config, ScannerConfig):
        return config
    try:
        return ScannerConfig.model_validate(dict(config))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid scanner configuration: {exc}") from exc


def load_config(path: Path) -> ScannerConfig:
    """Load a YAML mapping from ``path`` into a :class:`ScannerConfig`."""
    try:
        payload = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Failed to read configuration '{path}': {exc}") from exc

    try:
        data = yaml.safe_load(payload)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in '{path}': {exc}") from exc

    if data is None:
        return DEFAULT_CONFIG
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Configuration '{path}' must contain a mapping.")
    return resolve_config(data)


__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_PARAGRAPH_SEPARATOR",
    "DEFAULT_TAGS",
    "ScannerConfig",
    "load_config",
    "resolve_config",
]
