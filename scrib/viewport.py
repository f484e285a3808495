"""
Cursor and scroll state for scrib.

The Viewport keeps the cursor in buffer coordinates (cx, cy) and the top-left
corner of the visible window (row_offset, col_offset). scroll() is run before
every screen draw and pulls the window along so the cursor stays visible.
"""
from dataclasses import dataclass

from scrib import keys


@dataclass
class ViewportSnapshot:
    cx: int
    cy: int
    row_offset: int
    col_offset: int


class Viewport:
    def __init__(self, height: int = 0, width: int = 0):
        self.height = height
        self.width = width
        self.cx = 0
        self.cy = 0
        self.rx = 0
        self.row_offset = 0
        self.col_offset = 0

    def resize(self, height: int, width: int):
        self.height = max(1, height)
        self.width = max(1, width)

    def scroll(self, buffer):
        """Recompute rx and move the offsets so the cursor is inside the window."""
        self.rx = 0
        if self.cy < buffer.row_count:
            self.rx = buffer.cx_to_rx(self.cy, self.cx)

        # vertical
        if self.cy < self.row_offset:
            self.row_offset = self.cy
        if self.cy >= self.row_offset + self.height:
            self.row_offset = self.cy - self.height + 1

        # horizontal
        if self.rx < self.col_offset:
            self.col_offset = self.rx
        if self.rx >= self.col_offset + self.width:
            self.col_offset = self.rx - self.width + 1

    @property
    def screen_row(self) -> int:
        return self.cy - self.row_offset

    @property
    def screen_col(self) -> int:
        return self.rx - self.col_offset

    ##########################################
    # CURSOR MOVEMENT
    ##########################################
    def clamp(self, buffer):
        """Keep cx inside the active row (a row past the end has length 0)."""
        row = buffer.row(self.cy)
        row_len = len(row) if row is not None else 0
        if self.cx > row_len:
            self.cx = row_len

    def move_cursor(self, key: int, buffer):
        row = buffer.row(self.cy)
        if key == keys.ARROW_LEFT:
            if self.cx != 0:
                self.cx -= 1
            elif self.cy > 0:
                self.cy -= 1
                self.cx = len(buffer.row(self.cy))
        elif key == keys.ARROW_RIGHT:
            if row is not None and self.cx < len(row):
                self.cx += 1
            elif row is not None and self.cx == len(row):
                self.cy += 1
                self.cx = 0
        elif key == keys.ARROW_UP:
            if self.cy != 0:
                self.cy -= 1
        elif key == keys.ARROW_DOWN:
            # may stop one past the last row, the append position
            if self.cy < buffer.row_count:
                self.cy += 1
        self.clamp(buffer)

    def home(self):
        self.cx = 0

    def end(self, buffer):
        row = buffer.row(self.cy)
        if row is not None:
            self.cx = len(row)

    def page(self, key: int, buffer):
        """Page-Up / Page-Down: jump to the window edge, then move one screenful."""
        if key == keys.PAGE_UP:
            self.cy = self.row_offset
            direction = keys.ARROW_UP
        else:
            self.cy = min(self.row_offset + self.height - 1, buffer.row_count)
            direction = keys.ARROW_DOWN
        for _ in range(self.height):
            self.move_cursor(direction, buffer)

    def snapshot(self) -> ViewportSnapshot:
        return ViewportSnapshot(self.cx, self.cy, self.row_offset, self.col_offset)

    def restore(self, snap: ViewportSnapshot):
        self.cx = snap.cx
        self.cy = snap.cy
        self.row_offset = snap.row_offset
        self.col_offset = snap.col_offset
