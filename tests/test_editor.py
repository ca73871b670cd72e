import shlex
import sys
from pathlib import Path

import pytest

from tagedit.tags.editor import EditorError, edit_tag, editor_command, run_editor


def _python_editor(code: str) -> str:
    """Editor command running code with the scratch file path in sys.argv[1]."""
    return shlex.join([sys.executable, "-c", code])


def test_edited_value_is_applied(fake_handle, capsys):
    editor = _python_editor(
        "import sys; p = sys.argv[1]; s = open(p).read(); open(p, 'w').write(s + ' (Live)\\n')"
    )
    snapshot = fake_handle.snapshot()
    assert edit_tag(fake_handle, snapshot, "title", editor) == 1
    assert snapshot["title"] == "Old (Live)"
    assert fake_handle.calls == [("title", "Old (Live)")]
    assert "Changing title to 'Old (Live)'" in capsys.readouterr().out


def test_unchanged_save_is_no_change(fake_handle):
    editor = _python_editor("import sys; open(sys.argv[1], 'a').write('\\n')")
    snapshot = fake_handle.snapshot()
    assert edit_tag(fake_handle, snapshot, "title", editor) == 0
    assert fake_handle.calls == []


def test_only_one_line_end_is_stripped():
    editor = _python_editor("import sys; open(sys.argv[1], 'w', newline='').write('a\\nb\\r\\n\\r\\n')")
    assert run_editor("x", editor) == "a\nb\r\n"


def test_editor_failure_raises_and_cleans_up(tmp_path):
    record = tmp_path / "scratch-path"
    editor = _python_editor(
        f"import sys; open({str(record)!r}, 'w').write(sys.argv[1]); sys.exit(3)"
    )
    with pytest.raises(EditorError, match="status 3"):
        run_editor("value", editor)

    scratch = record.read_text()
    assert scratch
    assert not Path(scratch).exists()


def test_missing_editor_raises():
    with pytest.raises(EditorError, match="cannot run editor"):
        run_editor("value", "/nonexistent/editor-binary")


def test_scratch_file_is_removed_after_success(tmp_path):
    record = tmp_path / "scratch-path"
    editor = _python_editor(f"import sys; open({str(record)!r}, 'w').write(sys.argv[1])")
    run_editor("value", editor)
    assert not Path(record.read_text()).exists()


def test_editor_command_fallbacks(monkeypatch):
    assert editor_command("nano -w") == ["nano", "-w"]
    monkeypatch.setenv("EDITOR", "emacs -nw")
    assert editor_command() == ["emacs", "-nw"]
    monkeypatch.setenv("VISUAL", "code --wait")
    assert editor_command() == ["code", "--wait"]
    monkeypatch.delenv("VISUAL")
    monkeypatch.delenv("EDITOR")
    assert editor_command() == ["vi"]


def test_non_utf8_result_raises_and_cleans_up(tmp_path):
    record = tmp_path / "scratch-path"
    editor = _python_editor(
        f"import sys; open({str(record)!r}, 'w').write(sys.argv[1]); "
        "open(sys.argv[1], 'wb').write(b'caf\\xe9\\n')"
    )
    with pytest.raises(EditorError, match="not valid UTF-8"):
        run_editor("cafe", editor)
    assert not Path(record.read_text()).exists()
