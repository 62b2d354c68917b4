"""Tests for minibuild.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from minibuild.config import (
    DEFAULT_HELPER_PATTERN,
    BuildConfig,
    ConfigError,
    ValidationConfig,
    WatchConfig,
    load_config,
)


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, BuildConfig)
    assert config.root == tmp_path.resolve()
    assert config.source_dir == "source"
    assert config.build_dir == "dist"
    assert config.build_type == "wx"
    assert config.transformer == "copy"
    assert config.aliases["@components"] == "source/components"
    assert config.helper_pattern == DEFAULT_HELPER_PATTERN
    assert config.validation == ValidationConfig()
    assert config.watch == WatchConfig()
    assert config.patch_entries == []
    assert config.redirect_styles is False


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".minibuild.yml"
    config_file.write_text(
        """
source_dir: src_app
build_dir: out
build_type: quick
entry: main.js
aliases:
  "@common": src_app/common
validation:
  max_lines: 300
  runtime_prefix: Runtime
watch:
  ignored: "\\\\.tmp$"
  settle_seconds: 0.2
patch_entries:
  - node_modules/ui/components/Button/index.js
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.source_dir == "src_app"
    assert config.build_type == "quick"
    assert config.entry_path == tmp_path.resolve() / "src_app" / "main.js"
    assert config.build_path == tmp_path.resolve() / "src"
    assert config.aliases["@common"] == "src_app/common"
    assert config.aliases["@components"] == "src_app/components"
    assert config.validation.max_lines == 300
    assert config.validation.runtime_prefix == "Runtime"
    assert config.watch.ignored == "\\.tmp$"
    assert config.watch.settle_seconds == pytest.approx(0.2)
    assert config.patch_entries == ["node_modules/ui/components/Button/index.js"]
    assert config.redirect_styles is True
    assert config.inline_styles is True


def test_build_path_uses_build_dir_outside_quick(tmp_path: Path) -> None:
    (tmp_path / ".minibuild.yml").write_text("build_dir: out\nbuild_type: ali\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.build_path == tmp_path.resolve() / "out"
    assert config.inline_styles is False


def test_load_config_accepts_any_file_in_project(tmp_path: Path) -> None:
    (tmp_path / ".minibuild.yml").write_text("build_type: tt\n", encoding="utf-8")

    config = load_config(tmp_path / "package.json")

    assert config.build_type == "tt"


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".minibuild.yml").write_text("\n", encoding="utf-8")

    assert load_config(tmp_path).build_type == "wx"


def test_non_mapping_root_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".minibuild.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_yaml_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".minibuild.yml").write_text("build_type: [wx\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_build_type_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".minibuild.yml").write_text("build_type: desktop\n", encoding="utf-8")

    with pytest.raises(ConfigError) as excinfo:
        load_config(tmp_path)

    assert "desktop" in str(excinfo.value)
