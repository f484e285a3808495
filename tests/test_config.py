import pathlib
import shutil

from scrib import config, logger, themes

EXAMPLE_THEME = pathlib.Path(__file__).resolve().parent.parent / "config" / "themes" / "example.py"


def test_defaults():
    settings = config.EditorConfig()
    assert (settings.tab_stop, settings.quit_times, settings.message_timeout, settings.theme) == (
        4, 3, 5, "inverse")


def test_parse_config_reads_known_keys():
    settings = config.parse_config(
        "# comment\n\ntab_stop = 8\nquit_times=1\nmessage_timeout=2.5\ntheme=boring\n")
    assert settings.tab_stop == 8
    assert settings.quit_times == 1
    assert settings.message_timeout == 2.5
    assert settings.theme == "boring"


def test_parse_config_ignores_bad_lines(log_to_tmp):
    settings = config.parse_config("tab_stop=0\nquit_times=lots\nnonsense\ncolour=red\ntheme=\n")
    assert settings == config.EditorConfig()
    log_text = log_to_tmp.read_text(encoding="utf-8")
    assert "tab_stop='0'" in log_text
    assert "expected key=value" in log_text


def test_missing_config_gives_defaults(tmp_path):
    assert config.load_config(str(tmp_path / "absent.conf")) == config.EditorConfig()


def test_builtin_themes_include_inverse():
    builtin = themes.get_builtin_themes()
    assert builtin["inverse"] == {}
    assert themes.status_bar_style(builtin["inverse"]) == themes.INVERSE
    assert themes.status_bar_style(None) == themes.INVERSE


def test_rgb_theme_style():
    style = themes.status_bar_style({"fg": (1, 2, 3), "accent": (4, 5, 6)})
    assert style == b"\x1b[38;2;1;2;3m\x1b[48;2;4;5;6m"


def test_load_example_theme_file():
    name, data = themes.load_theme_file(str(EXAMPLE_THEME))
    assert name == "nord"
    assert data["accent"] == (136, 192, 208)


def test_load_all_themes_skips_broken_files(tmp_path, log_to_tmp):
    shutil.copy(EXAMPLE_THEME, tmp_path / "nord.py")
    (tmp_path / "broken.py").write_text("theme_name = \n", encoding="utf-8")
    (tmp_path / "empty.py").write_text("x = 1\n", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("not a theme\n", encoding="utf-8")
    loaded = themes.load_all_themes(str(tmp_path))
    assert "nord" in loaded
    assert "boring" in loaded
    assert "broken.py" in log_to_tmp.read_text(encoding="utf-8")


def test_load_all_themes_without_directory(tmp_path):
    assert themes.load_all_themes(str(tmp_path / "none")) == themes.get_builtin_themes()


def test_logger_appends_timestamped_lines(log_to_tmp):
    logger.log("first")
    logger.log("second")
    lines = log_to_tmp.read_text(encoding="utf-8").splitlines()
    assert lines[0].endswith("] first")
    assert lines[1].endswith("] second")
    assert lines[0].startswith("[")


def test_logger_never_raises(monkeypatch, tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    monkeypatch.setattr(logger, "LOG_FILE_PATH", str(blocker / "sub" / "log.txt"))
    logger.log("ignored")


def test_sample_theme_directory_loads():
    loaded = themes.load_all_themes(str(EXAMPLE_THEME.parent))
    assert loaded["gruvbox"]["accent"] == (215, 153, 33)
    assert loaded["nord"]["fg"] == (216, 222, 233)


def test_sample_config_file_parses():
    sample = EXAMPLE_THEME.parent.parent / "scrib.conf"
    assert config.load_config(str(sample)) == config.EditorConfig()
