"""Tests for minibuild.assets."""

from __future__ import annotations

from minibuild.assets import copy_assets, copy_project_config
from tests._fixtures.project_builder import ProjectBuilder


def test_copy_assets_skips_compiled_sources(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            "source/assets/images/logo.png": "png",
            "source/assets/fonts/icon.ttf": "ttf",
            "source/assets/style/base.scss": ".a {}",
            "source/assets/lib/util.js": "1",
        }
    )

    copied = copy_assets(project_builder.config())

    dist = project_builder.path() / "dist"
    assert sorted(copied) == sorted(
        [dist / "assets/fonts/icon.ttf", dist / "assets/images/logo.png"]
    )
    assert not (dist / "assets/style/base.scss").exists()


def test_copy_assets_without_assets_dir(project_builder: ProjectBuilder) -> None:
    assert copy_assets(project_builder.config()) == []


def test_copy_project_config_respects_build_type(project_builder: ProjectBuilder) -> None:
    project_builder.write({"project.config.json": "{}"})

    assert copy_project_config(project_builder.config()) == project_builder.path() / "dist" / "project.config.json"

    project_builder.write({".minibuild.yml": "build_type: ali\n"})
    assert copy_project_config(project_builder.config()) is None


def test_copy_project_config_missing_file(project_builder: ProjectBuilder) -> None:
    assert copy_project_config(project_builder.config()) is None
