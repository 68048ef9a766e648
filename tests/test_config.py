"""Tests for elementdocs.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from elementdocs.config import ConfigError, ElementDocsConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, ElementDocsConfig)
    assert config.root == tmp_path.resolve()
    assert config.docs_dir == tmp_path.resolve() / "docs" / "components"
    assert config.docs == {}
    assert config.root_class == "LitElement"
    assert config.max_depth == 16
    assert config.strict_markers is False


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".elementdocs.yml"
    config_file.write_text(
        """
docs_dir: site/components
root_class: ReactiveElement
max_depth: 4
strict_markers: "yes"
docs:
  segmented-button.md:
    - components/segmented-button/outlined-segmented-button.ts
  checkbox.md: components/checkbox/checkbox.ts
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    root = tmp_path.resolve()
    assert config.docs_dir == root / "site" / "components"
    assert config.root_class == "ReactiveElement"
    assert config.max_depth == 4
    assert config.strict_markers is True
    assert config.docs == {
        "segmented-button.md": ["components/segmented-button/outlined-segmented-button.ts"],
        "checkbox.md": ["components/checkbox/checkbox.ts"],
    }
    assert config.doc_path("checkbox.md") == root / "site" / "components" / "checkbox.md"
    assert config.entrypoint_path("components/checkbox/checkbox.ts") == (
        root / "components" / "checkbox" / "checkbox.ts"
    )


def test_load_config_accepts_custom_file_name(tmp_path: Path) -> None:
    config_file = tmp_path / "docs.yml"
    config_file.write_text("docs:\n  a.md: [a.ts]\n", encoding="utf-8")

    assert load_config(config_file).docs == {"a.md": ["a.ts"]}


def test_load_config_empty_file_returns_defaults(tmp_path: Path) -> None:
    (tmp_path / ".elementdocs.yml").write_text("\n", encoding="utf-8")
    assert load_config(tmp_path).docs == {}


@pytest.mark.parametrize(
    "content, message",
    [
        ("- just\n- a list\n", "mapping at the root"),
        ("docs: [a.ts]\n", "docs must map"),
        ("docs:\n  a.md: []\n", "at least one entrypoint"),
        ("max_depth: -1\n", "must not be negative"),
        ("docs: {a.md: [unterminated\n", "Failed to parse"),
    ],
)
def test_load_config_rejects_invalid_files(tmp_path: Path, content: str, message: str) -> None:
    (tmp_path / ".elementdocs.yml").write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError, match=message):
        load_config(tmp_path)
