"""
Editor commands for scrib text editor.

The actions bound to control keys that do more than a single edit: saving
(with a "save as" prompt for new buffers), incremental find, and quitting.
"""
import os

from scrib.ui import input as ui_input
from scrib.ui import screen


def save(context):
    """Write the buffer to disk, asking for a filename if it has none."""
    buf = context.buffer
    if buf.filename is None:
        name = ui_input.prompt_input(context, "Save as: %s (ESC to cancel)")
        if name is None:
            context.set_status_message("Save aborted")
            context.log_command("save: aborted")
            return False
        buf.filename = os.fsdecode(name)
    try:
        written = buf.save()
    except OSError as e:
        context.set_status_message(f"Can't save! I/O error: {e.strerror or e}")
        context.log_command(f"save: {buf.filename}: {e}")
        return False
    context.set_status_message(f"{written} bytes written to disk")
    context.log_command(f"save: {buf.filename} ({written} bytes)")
    return True


def find(context):
    """
    Incremental search. The cursor follows the matches while the query is typed;
    ESC puts the cursor and scroll position back where they were.
    """
    saved = context.viewport.snapshot()
    context.search.reset()
    query = ui_input.prompt_input(context, "Search: %s (Use ESC/Arrows/Enter)",
                                  context.search.on_query_changed)
    if query is None:
        context.viewport.restore(saved)
        context.log_command("find: cancelled")
    else:
        context.log_command(f"find: {query!r}")
    return query


def quit_editor(context):
    """Clear the screen and stop the main loop."""
    screen.clear_screen(context.terminal)
    context.graceful_exit()
