"""
Buffer module for scrib text editor.

Defines the Row and TextBuffer classes that hold the document being edited.
Each Row keeps its raw bytes plus a rendered copy with tabs expanded to spaces;
the TextBuffer owns every edit operation and the load/save round trip.
"""
import os

DEFAULT_TAB_STOP = 4


class Row:
    """One line of the document: raw bytes and their tab-expanded render."""
    def __init__(self, chars=b"", tab_stop: int = DEFAULT_TAB_STOP):
        self.tab_stop = tab_stop
        self.chars = bytearray(chars)
        self.render = b""
        self.update()

    def __len__(self):
        return len(self.chars)

    def __repr__(self):
        return f"Row({bytes(self.chars)!r})"

    def update(self):
        """Rebuild the render cache from chars. Call after every change to chars."""
        out = bytearray()
        for byte in self.chars:
            if byte == 9:  # TAB
                out.append(32)
                while len(out) % self.tab_stop != 0:
                    out.append(32)
            else:
                out.append(byte)
        self.render = bytes(out)

    def cx_to_rx(self, cx: int) -> int:
        """Rendered column of logical column cx."""
        rx = 0
        for byte in self.chars[:cx]:
            if byte == 9:
                rx += (self.tab_stop - 1) - (rx % self.tab_stop)
            rx += 1
        return rx

    def rx_to_cx(self, rx: int) -> int:
        """Logical column whose rendered span first goes past rx."""
        cur_rx = 0
        for cx, byte in enumerate(self.chars):
            if byte == 9:
                cur_rx += (self.tab_stop - 1) - (cur_rx % self.tab_stop)
            cur_rx += 1
            if cur_rx > rx:
                return cx
        return len(self.chars)

    def insert_char(self, at: int, byte: int):
        if at < 0 or at > len(self.chars):
            at = len(self.chars)
        self.chars.insert(at, byte)
        self.update()

    def append_bytes(self, data):
        self.chars.extend(data)
        self.update()

    def delete_char(self, at: int) -> bool:
        if at < 0 or at >= len(self.chars):
            return False
        del self.chars[at]
        self.update()
        return True

    def truncate(self, at: int):
        del self.chars[at:]
        self.update()


class TextBuffer:
    """Represents the text being edited (file content) with editing operations."""
    def __init__(self, filename: str = None, tab_stop: int = DEFAULT_TAB_STOP):
        self.filename = filename  # Path to file or None for new/unsaved
        self.tab_stop = tab_stop
        self.rows = []
        # Number of changes since the last load or save; 0 means clean
        self.dirty = 0

    def __len__(self):
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def row(self, at: int):
        """Return the Row at index `at`, or None past the end of the buffer."""
        if 0 <= at < len(self.rows):
            return self.rows[at]
        return None

    ##########################################
    # ROW OPERATIONS
    ##########################################
    def insert_row(self, at: int, text=b""):
        """Insert a new row holding `text` at index `at` (no-op outside [0, row_count])."""
        if at < 0 or at > len(self.rows):
            return
        self.rows.insert(at, Row(text, self.tab_stop))
        self.dirty += 1

    def delete_row(self, at: int):
        """Remove row `at` (no-op outside [0, row_count))."""
        if at < 0 or at >= len(self.rows):
            return
        del self.rows[at]
        self.dirty += 1

    def insert_char(self, row: int, col: int, byte: int):
        """
        Insert one byte at (row, col) and return the cursor position after it.
        A cursor parked one past the last row gets a fresh empty row first.
        """
        if row == len(self.rows):
            self.insert_row(len(self.rows), b"")
        target = self.rows[row]
        if col < 0 or col > len(target):
            col = len(target)
        target.insert_char(col, byte)
        self.dirty += 1
        return row, col + 1

    def delete_char(self, row: int, col: int):
        """
        Delete the byte left of (row, col) and return the new cursor position.
        At column 0 the row is joined onto the end of the previous row.
        """
        if row >= len(self.rows):
            return row, col
        if row == 0 and col == 0:
            return row, col
        target = self.rows[row]
        if col > 0:
            if target.delete_char(col - 1):
                self.dirty += 1
                return row, col - 1
            return row, col
        previous = self.rows[row - 1]
        new_col = len(previous)
        previous.append_bytes(target.chars)
        self.dirty += 1
        self.delete_row(row)
        return row - 1, new_col

    def split_row(self, row: int, col: int):
        """Break the line at (row, col); return the cursor position on the new line."""
        if col == 0 or row >= len(self.rows):
            self.insert_row(row, b"")
        else:
            target = self.rows[row]
            self.insert_row(row + 1, bytes(target.chars[col:]))
            target.truncate(col)
        return row + 1, 0

    ##########################################
    # COLUMN TRANSFORMS
    ##########################################
    def cx_to_rx(self, row: int, cx: int) -> int:
        target = self.row(row)
        if target is None:
            return 0
        return target.cx_to_rx(cx)

    def rx_to_cx(self, row: int, rx: int) -> int:
        target = self.row(row)
        if target is None:
            return 0
        return target.rx_to_cx(rx)

    ##########################################
    # SERIALIZATION / FILE I/O
    ##########################################
    def to_flat_text(self) -> bytes:
        """All rows joined into the on-disk form, one newline after every row."""
        return b"".join(bytes(r.chars) + b"\n" for r in self.rows)

    def load_from_lines(self, lines):
        """Replace the content with `lines` (bytes), dropping trailing CR/LF from each."""
        self.rows = [Row(line.rstrip(b"\r\n"), self.tab_stop) for line in lines]
        self.dirty = 0

    def open(self, filename: str):
        """Load `filename` into the buffer. OSError from open() propagates to the caller."""
        with open(filename, 'rb') as f:
            self.load_from_lines(f)
        self.filename = filename

    def save(self, filename: str = None) -> int:
        """
        Write the buffer to `filename` (or self.filename) by truncating the file to
        the new length and writing the whole buffer. Returns the number of bytes
        written. Raises OSError on failure, leaving `dirty` untouched.
        """
        path = filename or self.filename
        if not path:
            raise ValueError("no filename associated with buffer")
        data = self.to_flat_text()
        fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o644)
        try:
            os.ftruncate(fd, len(data))
            written = os.write(fd, data)
        finally:
            os.close(fd)
        if written != len(data):
            raise OSError(f"short write ({written} of {len(data)} bytes)")
        self.filename = path
        self.dirty = 0
        return written
