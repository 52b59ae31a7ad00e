from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError
import pytest

from podsmith.core.config import DEFAULT_CONFIG, ScannerConfig, load_config, resolve_config
from podsmith.core.exceptions import ConfigurationError


def test_defaults() -> None:
    config = ScannerConfig()

    assert config.tags == "BCFILSXZ"
    assert config.entity_tag == "E"
    assert config.nobreak_tag == "S"
    assert config.nobreak_after == ("C<!>",)
    assert config.tag_class == "[BCFILSXZ]"


def test_duplicate_tags_are_collapsed() -> None:
    assert ScannerConfig(tags="CCBB").tags == "CB"


@pytest.mark.parametrize("tags", ["", "c", "C1", "CB<"])
def test_invalid_tags_are_rejected(tags: str) -> None:
    with pytest.raises(ValidationError):
        ScannerConfig(tags=tags)


def test_entity_tag_cannot_be_a_formatting_tag() -> None:
    with pytest.raises(ValidationError, match="entity tag"):
        ScannerConfig(tags="BCE")


@pytest.mark.parametrize("pattern", ["(unclosed", r"\n*"])
def test_invalid_paragraph_separator(pattern: str) -> None:
    with pytest.raises(ValidationError):
        ScannerConfig(paragraph_separator=pattern)


def test_unknown_fields_are_rejected() -> None:
    with pytest.raises(ValidationError):
        ScannerConfig(colour="red")  # type: ignore[call-arg]


def test_config_is_frozen() -> None:
    config = ScannerConfig()
    with pytest.raises(ValidationError):
        config.tags = "C"  # type: ignore[misc]


def test_resolve_config_accepts_mappings() -> None:
    assert resolve_config(None) is DEFAULT_CONFIG
    assert resolve_config({"tags": "Q"}).tags == "Q"
    with pytest.raises(ConfigurationError):
        resolve_config({"tags": "q"})


def test_load_config_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "podsmith.yml"
    path.write_text(
        "tags: BCIQ\nnobreak_after:\n  - C<!>\n  - C<~>\n",
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.tags == "BCIQ"
    assert config.nobreak_after == ("C<!>", "C<~>")


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) is DEFAULT_CONFIG


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ("tags: [unclosed", "Invalid YAML"),
        ("- just\n- a list\n", "must contain a mapping"),
        ("tags: lower\n", "Invalid scanner configuration"),
    ],
)
def test_bad_config_files(tmp_path: Path, payload: str, message: str) -> None:
    path = tmp_path / "bad.yml"
    path.write_text(payload, encoding="utf-8")
    with pytest.raises(ConfigurationError, match=message):
        load_config(path)


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Failed to read"):
        load_config(tmp_path / "absent.yml")
