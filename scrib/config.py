"""
Configuration for the scrib text editor.

Settings live in a plain key=value file, by default ~/scrib/config/scrib.conf:

    tab_stop=4
    quit_times=3
    message_timeout=5
    theme=inverse

Blank lines and lines starting with '#' are skipped. Unknown keys are ignored and
bad values keep the default.
"""
import os
from dataclasses import dataclass

from scrib import logger

CONFIG_DIR = os.path.expanduser("~/scrib/config")
CONFIG_PATH = os.environ.get("SCRIB_CONFIG") or os.path.join(CONFIG_DIR, "scrib.conf")


@dataclass
class EditorConfig:
    tab_stop: int = 4
    quit_times: int = 3
    message_timeout: float = 5
    theme: str = "inverse"

    def set_value(self, key: str, value: str) -> bool:
        """Apply one key=value pair. Returns False if it was rejected."""
        if key == "tab_stop":
            try:
                number = int(value)
            except ValueError:
                return False
            if number < 1:
                return False
            self.tab_stop = number
        elif key == "quit_times":
            try:
                number = int(value)
            except ValueError:
                return False
            if number < 0:
                return False
            self.quit_times = number
        elif key == "message_timeout":
            try:
                seconds = float(value)
            except ValueError:
                return False
            if seconds < 0:
                return False
            self.message_timeout = seconds
        elif key == "theme":
            if not value:
                return False
            self.theme = value
        else:
            return False
        return True


def parse_config(text: str) -> EditorConfig:
    config = EditorConfig()
    for lineno, line in enumerate(text.splitlines(), 1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            logger.log(f"config line {lineno}: expected key=value, got {line!r}")
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not config.set_value(key, value):
            logger.log(f"config line {lineno}: ignoring {key}={value!r}")
    return config


def load_config(path: str = None) -> EditorConfig:
    """
    Load settings from `path` (default CONFIG_PATH).
    A missing or unreadable file gives the defaults.
    """
    path = path or CONFIG_PATH
    if not os.path.isfile(path):
        return EditorConfig()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return parse_config(f.read())
    except (OSError, UnicodeDecodeError) as e:
        logger.log(f"could not read config {path}: {e}")
        return EditorConfig()