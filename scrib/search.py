"""
Incremental search for scrib.

The find prompt calls SearchEngine.on_query_changed() after every keystroke.
Arrow keys step to the next/previous match, any edit to the query starts over
from the top of the buffer, Enter or ESC ends the session.
"""
from scrib import keys

FORWARD = 1
BACKWARD = -1


class SearchEngine:
    def __init__(self, buffer, viewport):
        self.buffer = buffer
        self.viewport = viewport
        self.last_match = None
        self.direction = FORWARD

    def reset(self):
        self.last_match = None
        self.direction = FORWARD

    def on_query_changed(self, query: bytes, key: int):
        """Update the search state for `key` and move the cursor to the next hit."""
        if key in (keys.ENTER, keys.ESC):
            self.reset()
            return None
        if key in (keys.ARROW_RIGHT, keys.ARROW_DOWN):
            self.direction = FORWARD
        elif key in (keys.ARROW_LEFT, keys.ARROW_UP):
            self.direction = BACKWARD
        else:
            self.reset()
        return self.find_next(query)

    def find_next(self, query: bytes):
        """Scan each row once, starting after the last match. Returns the hit row or None."""
        if self.last_match is None:
            self.direction = FORWARD
            current = -1
        else:
            current = self.last_match

        row_count = self.buffer.row_count
        for _ in range(row_count):
            current += self.direction
            if current == -1:
                current = row_count - 1
            elif current == row_count:
                current = 0

            row = self.buffer.row(current)
            offset = row.render.find(query)
            if offset != -1:
                self.last_match = current
                self.viewport.cy = current
                self.viewport.cx = row.rx_to_cx(offset)
                # Next scroll() brings the match to the top of the screen
                self.viewport.row_offset = row_count
                return current
        return None
