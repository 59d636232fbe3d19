from __future__ import annotations

"""
Unit tests for the CLI Application Controller.

Runs the controller in-process with logging bootstrap disabled and checks
exit codes, printed summaries and filesystem side effects.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from skeletree.interface.cli import app


@pytest.fixture(autouse=True)
def no_logging_bootstrap():
    """Keep the root logger untouched by in-process CLI runs."""
    with patch("skeletree.interface.cli.app.configure_logging"):
        yield


@pytest.fixture
def structure_file(tmp_path: Path, sample_markdown: str) -> Path:
    doc = tmp_path / "STRUCTURE.md"
    doc.write_text(sample_markdown, encoding="utf-8")
    return doc

# -----------------------------------------------------------------------------
# CREATE
# -----------------------------------------------------------------------------

def test_create_from_file(tmp_path: Path, structure_file: Path, capsys: pytest.CaptureFixture) -> None:
    target = tmp_path / "out"
    target.mkdir()

    code = app.main(["--use-defaults", "create", str(structure_file), "-t", str(target)])

    out = capsys.readouterr().out
    assert code == app.EXIT_OK
    assert (target / "project" / "src" / "App.php").is_file()
    assert "Directories: 5" in out
    assert "Files: 4" in out
    assert "Total items: 9" in out


def test_create_missing_target_requires_force(tmp_path: Path, structure_file: Path) -> None:
    target = tmp_path / "new"

    assert app.main(["--use-defaults", "create", str(structure_file), "-t", str(target)]) == app.EXIT_FAILURE
    assert not target.exists()

    assert app.main(["--use-defaults", "create", str(structure_file), "-t", str(target), "-f"]) == app.EXIT_OK
    assert (target / "project").is_dir()


def test_create_missing_structure_file(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    code = app.main(["--use-defaults", "create", str(tmp_path / "nope.md"), "-t", str(tmp_path)])

    assert code == app.EXIT_BAD_INPUT
    assert "not found" in capsys.readouterr().err


def test_create_dry_run_json(tmp_path: Path, structure_file: Path, capsys: pytest.CaptureFixture) -> None:
    code = app.main([
        "--use-defaults", "create", str(structure_file), "-t", str(tmp_path), "--dry-run", "--json",
    ])

    data = json.loads(capsys.readouterr().out)
    assert code == app.EXIT_OK
    assert data["ok"] is True
    assert data["report"]["dry_run"] is True
    assert "project/README.md" in data["report"]["created_files"]
    assert not (tmp_path / "project").exists()


def test_create_validate_only_reports_errors(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    doc = tmp_path / "bad.md"
    doc.write_text("```\nproject/\n└── AUX\n```\n", encoding="utf-8")

    code = app.main(["--use-defaults", "create", str(doc), "-t", str(tmp_path), "--validate-only"])

    err = capsys.readouterr().err
    assert code == app.EXIT_FAILURE
    assert "Reserved filename: project/AUX" in err


def test_create_unknown_template(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    code = app.main([
        "--use-defaults", "create", "no-such-template", "--template", "-t", str(tmp_path),
    ])

    assert code == app.EXIT_FAILURE
    assert "Template 'no-such-template' not found" in capsys.readouterr().err

# -----------------------------------------------------------------------------
# GENERATE
# -----------------------------------------------------------------------------

def test_generate_saves_document(project_dir: Path, capsys: pytest.CaptureFixture) -> None:
    code = app.main(["--use-defaults", "generate", str(project_dir)])

    out = capsys.readouterr().out
    assert code == app.EXIT_OK
    assert (project_dir / "STRUCTURE.md").is_file()
    assert "Total directories: 2" in out
    assert "Total files: 4" in out


def test_generate_stdout_with_extra_excludes(project_dir: Path, capsys: pytest.CaptureFixture) -> None:
    code = app.main(["--use-defaults", "generate", str(project_dir), "--stdout", "-e", "*.json,README.md"])

    out = capsys.readouterr().out
    assert code == app.EXIT_OK
    assert out.startswith("# Project Structure")
    assert "composer.json" not in out
    assert "README.md" not in out
    assert not (project_dir / "STRUCTURE.md").exists()


def test_generate_preview_declined(project_dir: Path, capsys: pytest.CaptureFixture) -> None:
    with patch("builtins.input", return_value="n"):
        code = app.main(["--use-defaults", "generate", str(project_dir), "-p"])

    assert code == app.EXIT_OK
    assert "Operation cancelled." in capsys.readouterr().out
    assert not (project_dir / "STRUCTURE.md").exists()


def test_generate_preview_confirmed(project_dir: Path) -> None:
    code = app.main(["--use-defaults", "generate", str(project_dir), "-p", "-y", "-o", "docs/TREE.md"])

    assert code == app.EXIT_OK
    assert (project_dir / "docs" / "TREE.md").is_file()


def test_generate_missing_directory(tmp_path: Path) -> None:
    assert app.main(["--use-defaults", "generate", str(tmp_path / "missing")]) == app.EXIT_BAD_INPUT

# -----------------------------------------------------------------------------
# TEMPLATES AND CONFIG
# -----------------------------------------------------------------------------

def test_templates_lists_bundled(capsys: pytest.CaptureFixture) -> None:
    code = app.main(["--use-defaults", "templates"])

    out = capsys.readouterr().out
    assert code == app.EXIT_OK
    assert "  - php-library" in out
    assert "  - python-package" in out


def test_config_set_and_reset(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    config_path = tmp_path / "config.json"

    with patch("skeletree.domain.config.CONFIG_FILE", str(config_path)):
        assert app.main(["config", "--set", "max_depth=4"]) == app.EXIT_OK
        saved = json.loads(config_path.read_text(encoding="utf-8"))
        assert saved["settings"]["max_depth"] == 4

        assert app.main(["config", "--set", "bogus=1"]) == app.EXIT_FAILURE

        assert app.main(["config", "--reset"]) == app.EXIT_OK
        saved = json.loads(config_path.read_text(encoding="utf-8"))
        assert saved["settings"]["max_depth"] == 10

    capsys.readouterr()


def test_confirm_defaults_on_eof() -> None:
    with patch("builtins.input", side_effect=EOFError):
        assert app._confirm("Save?") is True
        assert app._confirm("Save?", default=False) is False


def test_config_set_ignores_per_run_overrides(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"settings": {"output_file": "TREE.md"}}), encoding="utf-8")

    with patch("skeletree.domain.config.CONFIG_FILE", str(config_path)):
        assert app.main(["--debug", "config", "--set", "max_depth=3"]) == app.EXIT_OK
        assert app.main(["--use-defaults", "config", "--set", "save_log=true"]) == app.EXIT_OK

    settings = json.loads(config_path.read_text(encoding="utf-8"))["settings"]
    assert settings["max_depth"] == 3
    assert settings["save_log"] is True
    assert settings["output_file"] == "TREE.md"
    assert settings["log_level"] == "WARNING"
    capsys.readouterr()
