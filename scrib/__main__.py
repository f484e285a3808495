"""
Main entry point and editor context for the scrib text editor.
"""
import sys
import time

from scrib import buffer, config, keys, logger, search, terminal, themes, viewport
from scrib.ui import input as ui_input
from scrib.ui import screen

HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find"


class EditorContext:
    """
    Holds the state of the editor: the text buffer, cursor and scroll position,
    search state, terminal session, settings and the status message.
    """
    def __init__(self, term, settings: config.EditorConfig = None, available_themes=None):
        self.terminal = term
        self.config = settings or config.EditorConfig()

        self.buffer = buffer.TextBuffer(tab_stop=self.config.tab_stop)
        self.viewport = viewport.Viewport()
        self.search = search.SearchEngine(self.buffer, self.viewport)
        self.decoder = keys.KeyDecoder(term.read_byte)

        # Status message and the time it was set
        self.status_message = ""
        self.status_time = 0.0

        # Extra Ctrl-Q presses still needed to quit with unsaved changes
        self.quit_times = self.config.quit_times

        self.available_themes = available_themes or themes.get_builtin_themes()
        self.theme_data = None
        self.apply_theme(self.config.theme)

        # Running flag
        self.exit_flag = False

    def update_window_size(self):
        """Size the text area to the terminal, leaving two lines for the bars."""
        rows, cols = self.terminal.get_window_size()
        self.viewport.resize(rows - 2, cols)

    def apply_theme(self, theme_name: str):
        """Use `theme_name` for the status bar; unknown names keep the current theme."""
        if theme_name not in self.available_themes:
            logger.log(f"unknown theme: {theme_name}")
            return
        self.theme_data = self.available_themes[theme_name]

    def set_status_message(self, message: str):
        self.status_message = message
        self.status_time = time.time()

    def log_command(self, msg: str):
        logger.log(msg)

    def read_key(self) -> int:
        return self.decoder.read_key()

    def open_file(self, filename: str):
        self.buffer.open(filename)
        self.log_command(f"opened {filename} ({self.buffer.row_count} lines)")

    def process_keypress(self):
        ui_input.handle_key(self, self.read_key())

    def graceful_exit(self):
        logger.log("Editor exited.")
        self.exit_flag = True


def die(term, message: str, error: Exception):
    """Fatal error: restore the terminal, clear the screen, report and exit."""
    logger.log(f"fatal: {message}: {error}")
    try:
        term.disable()
    except terminal.TerminalError:
        pass
    try:
        screen.clear_screen(term)
    except OSError:
        pass
    print(f"{message}: {error}", file=sys.stderr)
    sys.exit(1)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    settings = config.load_config()
    term = terminal.RawTerminalSession()

    try:
        term.enable()
    except terminal.TerminalError as e:
        die(term, "enableRawMode", e)

    context = EditorContext(term, settings, themes.load_all_themes())
    try:
        context.update_window_size()
    except terminal.TerminalError as e:
        die(term, "getWindowSize", e)

    if argv:
        try:
            context.open_file(argv[0])
        except OSError as e:
            die(term, "fopen", e)

    context.set_status_message(HELP_MESSAGE)

    try:
        while not context.exit_flag:
            screen.display(context)
            context.process_keypress()
    except terminal.TerminalError as e:
        die(term, "read", e)
    finally:
        term.disable()
    return 0


def run():
    """
    Console script entry point.
    """
    sys.exit(main())


if __name__ == "__main__":
    run()
