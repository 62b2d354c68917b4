"""CLI parser and exit-code behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from minibuild.cli import _build_parser, main
from tests._fixtures.project_builder import ProjectBuilder


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "build"])
    assert args.verbose is True
    assert args.command == "build"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["build", "--verbose"])
    assert args.verbose is True
    assert args.command == "build"


def test_cli_accepts_type_and_watch_flags() -> None:
    parser = _build_parser()
    args = parser.parse_args(["build", "app", "--type", "quick", "--watch"])
    assert args.path == "app"
    assert args.build_type == "quick"
    assert args.watch is True


def test_cli_rejects_unknown_build_type() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["build", "--type", "desktop"])


def test_build_exits_zero_with_warnings_only(project_builder: ProjectBuilder) -> None:
    project_builder.write({"source/app.js": "// line\n" * 501})

    main(["build", str(project_builder.path())])

    assert (project_builder.path() / "dist" / "app.js").exists()


def test_build_exits_non_zero_on_errors(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            "source/app.js": "import home from './pages/home/index';\n",
            "source/pages/home/index.js": "import Welcome from '@components/Welcome/view';\n",
            "source/components/Welcome/view.js": "export default 1;\n",
        }
    )

    with pytest.raises(SystemExit) as excinfo:
        main(["build", str(project_builder.path())])

    assert excinfo.value.code == 1
    assert not (project_builder.path() / "dist").exists()


def test_build_exits_non_zero_on_unresolved_import(project_builder: ProjectBuilder) -> None:
    project_builder.write({"source/app.js": "import x from './missing';\n"})

    with pytest.raises(SystemExit) as excinfo:
        main(["build", str(project_builder.path())])

    assert excinfo.value.code == 1


def test_build_exits_non_zero_on_bad_config(project_builder: ProjectBuilder) -> None:
    project_builder.write({".minibuild.yml": "build_type: desktop\n"})

    with pytest.raises(SystemExit) as excinfo:
        main(["build", str(project_builder.path())])

    assert excinfo.value.code == 1


def test_cli_accepts_log_file(tmp_path: Path) -> None:
    parser = _build_parser()
    args = parser.parse_args(["watch", "app", "--log-file", str(tmp_path / "watch.log")])
    assert args.log_file == tmp_path / "watch.log"


def test_build_writes_log_file(project_builder: ProjectBuilder, tmp_path: Path) -> None:
    project_builder.write({"source/app.js": "export default 1;\n"})
    log_file = tmp_path / "build.log"

    main(["build", str(project_builder.path()), "--log-file", str(log_file)])

    text = log_file.read_text(encoding="utf-8")
    assert "Resolving dependencies from source/app.js" in text
    assert "Build finished" in text
