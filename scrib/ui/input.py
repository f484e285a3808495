"""
Input handling for scrib text editor.

Maps decoded keys to editor actions and runs the one-line prompt used by
"save as" and find.
"""
from scrib import commands, keys
from scrib.ui import screen

CTRL_F = keys.ctrl_key('f')
CTRL_H = keys.ctrl_key('h')
CTRL_L = keys.ctrl_key('l')
CTRL_Q = keys.ctrl_key('q')
CTRL_S = keys.ctrl_key('s')

MOVE_KEYS = (keys.ARROW_UP, keys.ARROW_DOWN, keys.ARROW_LEFT, keys.ARROW_RIGHT)


def handle_key(context, key: int):
    """Handle one key press in the main editing view."""
    buf = context.buffer
    vp = context.viewport

    if key == keys.ENTER:
        vp.cy, vp.cx = buf.split_row(vp.cy, vp.cx)

    elif key == CTRL_Q:
        # Quitting with unsaved changes needs a few extra presses in a row
        if buf.dirty and context.quit_times > 0:
            context.set_status_message(
                "WARNING!!! File has unsaved changes. "
                f"Press Ctrl-Q {context.quit_times} more times to quit.")
            context.quit_times -= 1
            return
        commands.quit_editor(context)
        return

    elif key == CTRL_S:
        commands.save(context)

    elif key == keys.HOME_KEY:
        vp.home()

    elif key == keys.END_KEY:
        vp.end(buf)

    elif key == CTRL_F:
        commands.find(context)

    elif key in (keys.BACKSPACE, CTRL_H, keys.DEL_KEY):
        if key == keys.DEL_KEY:
            vp.move_cursor(keys.ARROW_RIGHT, buf)
        vp.cy, vp.cx = buf.delete_char(vp.cy, vp.cx)

    elif key in (keys.PAGE_UP, keys.PAGE_DOWN):
        vp.page(key, buf)

    elif key in MOVE_KEYS:
        vp.move_cursor(key, buf)

    elif key in (CTRL_L, keys.ESC):
        pass

    elif key < 256:
        vp.cy, vp.cx = buf.insert_char(vp.cy, vp.cx, key)

    context.quit_times = context.config.quit_times


def prompt_input(context, prompt: str, callback=None):
    """
    Read a line of input on the message bar. `prompt` holds one %s where the
    typed text goes. `callback(text, key)` runs after every key press.
    Returns the entered bytes, or None if ESC cancelled the prompt.
    """
    typed = bytearray()
    while True:
        context.set_status_message(prompt % typed.decode("ascii"))
        screen.display(context)
        key = context.read_key()

        if key in (keys.DEL_KEY, CTRL_H, keys.BACKSPACE):
            if typed:
                del typed[-1]
        elif key == keys.ESC:
            context.set_status_message("")
            if callback:
                callback(bytes(typed), key)
            return None
        elif key == keys.ENTER:
            if typed:
                context.set_status_message("")
                if callback:
                    callback(bytes(typed), key)
                return bytes(typed)
        elif 32 <= key < 127:
            typed.append(key)

        if callback:
            callback(bytes(typed), key)
