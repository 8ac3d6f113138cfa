"""Tests for CLI help text."""

from __future__ import annotations

import pytest

from filespec.cli import main


def _render_help(capsys: pytest.CaptureFixture[str]) -> str:
    """Run `filespec --help` via CLI entrypoint and return captured stdout."""
    with pytest.raises(SystemExit) as exc:
        main(["--help"])
    assert exc.value.code == 0
    return capsys.readouterr().out


def test_help_includes_tagline(capsys: pytest.CaptureFixture[str]) -> None:
    out = _render_help(capsys)
    assert "filespec: List files matching Windows-style path patterns" in out


def test_help_includes_common_usage(capsys: pytest.CaptureFixture[str]) -> None:
    out = _render_help(capsys)
    assert "Common usage:" in out
    assert "filespec -r 'src\\*.py'" in out
    assert "filespec --split 'c:\\dir\\file.ext'" in out


def test_help_lists_options(capsys: pytest.CaptureFixture[str]) -> None:
    out = _render_help(capsys)
    for flag in ("--recursive", "--sizes", "--exclude", "--split", "--no-wildcards"):
        assert flag in out


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--version"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("v") or out.startswith("unknown")
