import pytest

import scrib.__main__ as scrib_main
from scrib import config, keys, themes

CTRL_Q = keys.ctrl_key("q")
CTRL_S = keys.ctrl_key("s")


@pytest.fixture
def fake_session(monkeypatch, fake_terminal):
    term = fake_terminal
    term.rows, term.cols = 10, 40
    monkeypatch.setattr(scrib_main.terminal, "RawTerminalSession", lambda: term)
    monkeypatch.setattr(scrib_main.config, "load_config", lambda: config.EditorConfig())
    monkeypatch.setattr(scrib_main.themes, "load_all_themes", themes.get_builtin_themes)
    return term


def test_edit_save_and_quit(fake_session, tmp_path):
    path = tmp_path / "doc.txt"
    path.write_bytes(b"hello\n")
    fake_session.feed(b"\x1b[F!" + bytes([CTRL_S, CTRL_Q]))
    assert scrib_main.main([str(path)]) == 0
    assert path.read_bytes() == b"hello!\n"
    assert not fake_session.enabled
    assert b"HELP: Ctrl-S = save" in fake_session.output


def test_quit_new_buffer(fake_session):
    fake_session.feed(bytes([CTRL_Q]))
    assert scrib_main.main([]) == 0
    assert b"scrib editor -- version" in fake_session.output


def test_missing_file_is_fatal(fake_session, tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        scrib_main.main([str(tmp_path / "missing.txt")])
    assert exc.value.code == 1
    assert "fopen" in capsys.readouterr().err
    assert not fake_session.enabled
    assert fake_session.output.endswith(b"\x1b[2J\x1b[H")


def test_window_size_failure_is_fatal(fake_session, monkeypatch, capsys):
    def broken():
        raise scrib_main.terminal.TerminalError("no size")

    monkeypatch.setattr(fake_session, "get_window_size", broken)
    with pytest.raises(SystemExit):
        scrib_main.main([])
    assert "getWindowSize: no size" in capsys.readouterr().err


def fail_after_input(term, error):
    """Replace term.read_byte so it raises `error` once the scripted input is used up."""
    scripted = term.read_byte

    def read_byte():
        if term.input:
            return scripted()
        raise error
    return read_byte


def test_read_failure_in_main_loop_is_fatal(fake_session, monkeypatch, capsys):
    fake_session.feed(b"x")
    monkeypatch.setattr(fake_session, "read_byte",
                        fail_after_input(fake_session, scrib_main.terminal.TerminalError("read: boom")))
    with pytest.raises(SystemExit) as exc:
        scrib_main.main([])
    assert exc.value.code == 1
    assert "read: " in capsys.readouterr().err
    assert fake_session.enabled is False
    assert fake_session.output.endswith(b"\x1b[2J\x1b[H")


def test_unexpected_error_still_restores_terminal(fake_session, monkeypatch):
    monkeypatch.setattr(fake_session, "read_byte",
                        fail_after_input(fake_session, RuntimeError("boom")))
    with pytest.raises(RuntimeError):
        scrib_main.main([])
    assert fake_session.enabled is False


def test_context_uses_configured_tab_stop_and_theme(fake_terminal):
    context = scrib_main.EditorContext(
        fake_terminal, config.EditorConfig(tab_stop=8, theme="coral"))
    context.buffer.load_from_lines([b"\tx"])
    assert context.buffer.row(0).render == b" " * 8 + b"x"
    assert context.theme_data == themes.get_builtin_themes()["coral"]


def test_unknown_theme_keeps_inverse(fake_terminal):
    context = scrib_main.EditorContext(fake_terminal, config.EditorConfig(theme="nope"))
    assert context.theme_data is None
