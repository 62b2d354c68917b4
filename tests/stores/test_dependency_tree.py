"""Tests for the script to style dependency tree."""

from __future__ import annotations

from minibuild.stores import DependencyTree


def test_record_keeps_order_without_duplicates() -> None:
    tree = DependencyTree()
    tree.record(
        "pages/home/index.js",
        ["pages/home/index.scss", "components/Card/index.scss", "pages/home/index.scss"],
    )

    assert tree.styles_for("pages/home/index.js") == (
        "pages/home/index.scss",
        "components/Card/index.scss",
    )


def test_record_replaces_edges_from_an_earlier_pass() -> None:
    tree = DependencyTree()
    tree.record("pages/home/index.js", ["pages/home/index.scss", "shared.scss"])
    tree.record("pages/home/index.js", ["pages/home/index.scss"])

    assert tree.styles_for("pages/home/index.js") == ("pages/home/index.scss",)
    assert tree.owner_of("shared.scss") is None


def test_record_ignores_scripts_without_styles() -> None:
    tree = DependencyTree()
    tree.record("app.js", [])

    assert "app.js" not in tree
    assert len(tree) == 0


def test_record_without_styles_drops_a_known_script() -> None:
    tree = DependencyTree()
    tree.record("app.js", ["app.scss"])
    tree.record("app.js", [])

    assert "app.js" not in tree
    assert tree.owner_of("app.scss") is None


def test_owner_of_returns_first_recorded_script() -> None:
    tree = DependencyTree()
    tree.record("pages/a/index.js", ["shared.scss"])
    tree.record("pages/b/index.js", ["shared.scss"])

    assert tree.owner_of("shared.scss") == "pages/a/index.js"
    assert tree.owner_of("unknown.scss") is None


def test_style_moving_between_scripts_changes_its_owner() -> None:
    tree = DependencyTree()
    tree.record("pages/a/index.js", ["shared.scss"])
    tree.record("pages/b/index.js", ["pages/b/index.scss"])

    tree.record("pages/a/index.js", ["pages/a/index.scss"])
    tree.record("pages/b/index.js", ["shared.scss"])

    assert tree.owner_of("shared.scss") == "pages/b/index.js"


def test_clear() -> None:
    tree = DependencyTree()
    tree.record("a.js", ["a.less"])

    tree.clear()

    assert "a.js" not in tree
    assert len(tree) == 0
