import pytest
from pathlib import Path
from unittest.mock import patch

import pyperclip

from smartcontext.file import clear_ignore_caches
from smartcontext.main import main


@pytest.fixture(autouse=True)
def quiet_environment(monkeypatch):
    monkeypatch.setenv("SMART_CONTEXT_NO_LOG", "1")
    clear_ignore_caches()
    yield
    clear_ignore_caches()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "proj"
    root.mkdir()
    (root / "app.js").write_text(
        "class App {\n  start() {\n    if (ready) {\n      go();\n    }\n  }\n}\n"
    )
    (root / "notes.md").write_text("# Notes\n\nSome text.\n")
    return root


def test_folder_strip_copies_to_clipboard(project: Path, capsys):
    with patch("smartcontext.main.pyperclip.copy") as mock_copy:
        exit_code = main(["folder", str(project), "--strip"])

    assert exit_code == 0
    copied = mock_copy.call_args[0][0]
    assert copied.startswith("proj Folder Structure:\n")
    assert "Stripped Methods (Logic Removed):" in copied
    assert "class App {\n  start(){}\n}\n" in copied
    assert "go();" not in copied
    assert "copied to clipboard! (2 files)" in capsys.readouterr().out


def test_folder_stdout_skips_clipboard(project: Path, capsys):
    with patch("smartcontext.main.pyperclip.copy") as mock_copy:
        exit_code = main(["folder", str(project), "--minify", "--stdout"])

    assert exit_code == 0
    mock_copy.assert_not_called()
    out = capsys.readouterr().out
    assert "File Contents (Minified):" in out
    assert "Some text." in out


def test_folder_invalid_path(tmp_path: Path, capsys):
    exit_code = main(["folder", str(tmp_path / "missing")])
    assert exit_code == 1
    assert "Please select a valid folder." in capsys.readouterr().out


def test_folder_without_text_files(tmp_path: Path, capsys):
    (tmp_path / "pic.png").write_bytes(b"\x89PNG")
    with patch("smartcontext.main.pyperclip.copy") as mock_copy:
        exit_code = main(["folder", str(tmp_path)])
    assert exit_code == 0
    mock_copy.assert_not_called()
    assert "No text files found" in capsys.readouterr().out


def test_clipboard_failure_falls_back_to_stdout(project: Path, capsys):
    with patch(
        "smartcontext.main.pyperclip.copy",
        side_effect=pyperclip.PyperclipException("no clipboard"),
    ):
        exit_code = main(["folder", str(project)])

    assert exit_code == 0
    captured = capsys.readouterr()
    assert "Failed to copy to clipboard" in captured.err
    assert "Failed to copy to clipboard" not in captured.out
    assert captured.out.startswith("proj Folder Structure:\n")
    assert "File Contents:" in captured.out


def test_files_command_skips_missing(project: Path, capsys):
    with patch("smartcontext.main.pyperclip.copy") as mock_copy:
        exit_code = main(
            ["files", str(project / "app.js"), str(project / "gone.js"), "--strip"]
        )

    assert exit_code == 0
    copied = mock_copy.call_args[0][0]
    assert copied.startswith("Selected Files Methods (Logic Removed):\n")
    assert "start(){}" in copied
    out = capsys.readouterr().out
    assert "is not a file. Skipping." in out
    assert "(1 files)" in out


def test_minify_and_strip_are_exclusive(project: Path):
    with pytest.raises(SystemExit):
        main(["folder", str(project), "--minify", "--strip"])
