"""
scrib/ui/screen.py

Implements all drawing for the scrib text editor. A frame is assembled in
memory as one bytes object of VT100 escape sequences and text, then written to
the terminal in a single call so the screen never shows a half-drawn state:
text rows, an inverted status bar, and a one-line message bar.
"""
import os
import time

from wcwidth import wcswidth, wcwidth

from scrib import themes

SCRIB_VERSION = "0.0.1"

HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"
CURSOR_HOME = b"\x1b[H"
CLEAR_LINE = b"\x1b[K"
CLEAR_SCREEN = b"\x1b[2J"
NEWLINE = b"\r\n"

FILENAME_WIDTH = 20


def text_width(text: str) -> int:
    """Visual width of `text` in terminal columns."""
    width = wcswidth(text)
    if width < 0:
        # non-printable characters: count each as one column
        return len(text)
    return width


def fit_width(text: str, width: int) -> str:
    """Trim `text` so it takes at most `width` terminal columns."""
    out = []
    used = 0
    for ch in text:
        w = wcwidth(ch)
        if w < 0:
            w = 1
        if used + w > width:
            break
        out.append(ch)
        used += w
    return "".join(out)


def move_cursor(row: int, col: int) -> bytes:
    """Absolute cursor position, 0-based arguments."""
    return f"\x1b[{row + 1};{col + 1}H".encode("ascii")


def welcome_line(width: int) -> bytes:
    welcome = f"scrib editor -- version {SCRIB_VERSION}"[:width]
    padding = (width - len(welcome)) // 2
    line = b""
    if padding:
        line += b"~"
        padding -= 1
    return line + b" " * padding + welcome.encode("ascii")


def draw_rows(context, out: bytearray):
    """Append every visible text row (or '~' filler) to `out`."""
    buf = context.buffer
    vp = context.viewport
    for y in range(vp.height):
        filerow = y + vp.row_offset
        if filerow >= buf.row_count:
            if buf.row_count == 0 and y == vp.height // 3:
                out += welcome_line(vp.width)
            else:
                out += b"~"
        else:
            render = buf.rows[filerow].render
            out += render[vp.col_offset:vp.col_offset + vp.width]
        out += CLEAR_LINE
        out += NEWLINE


def status_text(context, width: int) -> str:
    """Left and right status bar parts laid out to exactly `width` columns."""
    buf = context.buffer
    fname = os.fsdecode(buf.filename) if buf.filename else "[No Name]"
    status = f"{fname[:FILENAME_WIDTH]} - {buf.row_count} lines {'(modified)' if buf.dirty else ''}"
    rstatus = f"{context.viewport.cy + 1}/{buf.row_count}"
    status = fit_width(status, width)
    used = text_width(status)
    if width - used >= len(rstatus):
        return status + " " * (width - used - len(rstatus)) + rstatus
    return status + " " * (width - used)


def draw_status_bar(context, out: bytearray):
    width = context.viewport.width
    out += themes.status_bar_style(context.theme_data)
    out += status_text(context, width).encode("utf-8")
    out += themes.RESET
    out += NEWLINE


def draw_message_bar(context, out: bytearray, now: float = None):
    out += CLEAR_LINE
    now = time.time() if now is None else now
    message = context.status_message
    if message and now - context.status_time < context.config.message_timeout:
        out += fit_width(message, context.viewport.width).encode("utf-8")


def build_frame(context, now: float = None) -> bytes:
    """Scroll the viewport to the cursor and return the bytes of a full redraw."""
    vp = context.viewport
    vp.scroll(context.buffer)

    out = bytearray()
    out += HIDE_CURSOR
    out += CURSOR_HOME
    draw_rows(context, out)
    draw_status_bar(context, out)
    draw_message_bar(context, out, now)
    out += move_cursor(vp.screen_row, vp.screen_col)
    out += SHOW_CURSOR
    return bytes(out)


def display(context):
    """
    Re-draw the entire screen: text area, status bar, and message bar.
    """
    context.terminal.write(build_frame(context))


def clear_screen(terminal):
    terminal.write(CLEAR_SCREEN + CURSOR_HOME)
