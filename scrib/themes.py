"""
themes.py

Status bar themes for scrib. A theme is a dict of RGB tuples; the status bar is
drawn with "fg" text on an "accent" background using 24-bit SGR colors. The
"inverse" theme has no colors and uses plain inverted video, which works on
every VT100-style terminal.

Any .py file in ~/scrib/config/themes/ that defines `theme_name` and
`theme_data` is picked up as an extra theme.
"""
import importlib.util
import os

from scrib import logger

THEMES_DIR = os.path.expanduser("~/scrib/config/themes")

INVERSE = b"\x1b[7m"
RESET = b"\x1b[m"


def get_builtin_themes():
    """
    Returns a dict mapping built-in theme names to their color definitions.
    """
    return {
        "inverse": {},
        "boring": {
            "fg": (248, 248, 242),
            "accent": (98, 114, 164),
        },
        "coral": {
            "fg": (250, 240, 230),
            "accent": (255, 165, 125),
        },
        "catpuccin": {
            "fg": (205, 214, 244),
            "accent": (137, 180, 250),
        },
    }


def load_theme_file(path: str):
    """
    Import one user theme module. Returns (name, data) or None if the file
    does not define a usable theme.
    """
    spec = importlib.util.spec_from_file_location("scrib_custom_theme", path)
    if not spec or not spec.loader:
        return None
    mod = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(mod)
    except Exception as e:
        # A broken user theme must not stop the editor from starting
        logger.log(f"theme {path}: {e}")
        return None
    name = getattr(mod, "theme_name", None)
    data = getattr(mod, "theme_data", None)
    if not isinstance(name, str) or not isinstance(data, dict):
        return None
    return name, data


def load_all_themes(themes_dir: str = None):
    """Built-in themes plus every user theme found in `themes_dir`."""
    themes = get_builtin_themes()
    themes_dir = themes_dir or THEMES_DIR
    if not os.path.isdir(themes_dir):
        return themes
    for fname in sorted(os.listdir(themes_dir)):
        if not fname.endswith(".py") or fname == "__init__.py":
            continue
        loaded = load_theme_file(os.path.join(themes_dir, fname))
        if loaded:
            name, data = loaded
            themes[name] = data
    return themes


def status_bar_style(theme_data) -> bytes:
    """SGR sequence that starts the status bar for `theme_data`."""
    if not theme_data or "fg" not in theme_data or "accent" not in theme_data:
        return INVERSE
    fg = theme_data["fg"]
    bg = theme_data["accent"]
    return (f"\x1b[38;2;{fg[0]};{fg[1]};{fg[2]}m"
            f"\x1b[48;2;{bg[0]};{bg[1]};{bg[2]}m").encode("ascii")
