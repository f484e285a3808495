"""
Terminal handling for scrib.

RawTerminalSession switches the controlling terminal into raw mode (no line
buffering, no echo, no signal keys, no output post-processing) and puts the
original settings back on every way out of the program.
"""
import atexit
import errno
import os
import re
import sys
import termios

from scrib import logger

# Terminal attribute list indexes, see termios.tcgetattr()
IFLAG, OFLAG, CFLAG, LFLAG, ISPEED, OSPEED, CC = range(7)

# Deciseconds a read waits before giving up (VTIME)
READ_TIMEOUT = 1

CURSOR_REPORT = re.compile(rb"\x1b\[(\d+);(\d+)")


class TerminalError(Exception):
    """The terminal cannot be controlled; the editor cannot go on."""


class RawTerminalSession:
    """Owns raw mode on a terminal file descriptor pair."""
    def __init__(self, stdin_fd: int = None, stdout_fd: int = None):
        self.stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
        self.stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
        self.orig_attrs = None
        self._atexit_registered = False

    def enable(self):
        """Save the current attributes and apply raw mode."""
        try:
            self.orig_attrs = termios.tcgetattr(self.stdin_fd)
        except termios.error as e:
            raise TerminalError(f"tcgetattr: {e}") from e

        if not self._atexit_registered:
            atexit.register(self.disable)
            self._atexit_registered = True

        raw = list(self.orig_attrs)
        raw[CC] = list(self.orig_attrs[CC])
        raw[IFLAG] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK |
                        termios.ISTRIP | termios.IXON)
        raw[OFLAG] &= ~termios.OPOST
        raw[CFLAG] |= termios.CS8
        raw[LFLAG] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
        raw[CC][termios.VMIN] = 0
        raw[CC][termios.VTIME] = READ_TIMEOUT
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, raw)
        except termios.error as e:
            raise TerminalError(f"tcsetattr: {e}") from e
        logger.log("raw mode enabled")

    def disable(self):
        """Restore the attributes saved by enable(). Safe to call more than once."""
        if self.orig_attrs is None:
            return
        attrs = self.orig_attrs
        self.orig_attrs = None
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, attrs)
        except termios.error as e:
            raise TerminalError(f"tcsetattr: {e}") from e
        logger.log("raw mode disabled")

    ##########################################
    # I/O
    ##########################################
    def read_byte(self):
        """Read one byte; None when the read timed out with nothing to return."""
        try:
            data = os.read(self.stdin_fd, 1)
        except OSError as e:
            if e.errno in (errno.EAGAIN, errno.EINTR):
                return None
            raise TerminalError(f"read: {e}") from e
        if not data:
            return None
        return data[0]

    def write(self, data: bytes) -> int:
        total = 0
        while total < len(data):
            total += os.write(self.stdout_fd, data[total:])
        return total

    ##########################################
    # SIZE
    ##########################################
    def get_cursor_position(self):
        """Ask the terminal where the cursor is (ESC [ 6 n) and parse the reply."""
        if self.write(b"\x1b[6n") != 4:
            raise TerminalError("getCursorPosition: write failed")
        reply = bytearray()
        while len(reply) < 31:
            byte = self.read_byte()
            if byte is None or byte == ord('R'):
                break
            reply.append(byte)
        match = CURSOR_REPORT.match(bytes(reply))
        if not match:
            raise TerminalError("getCursorPosition: bad reply")
        return int(match.group(1)), int(match.group(2))

    def get_window_size(self):
        """Return (rows, cols) of the terminal."""
        try:
            size = os.get_terminal_size(self.stdout_fd)
        except OSError:
            size = None
        if size is not None and size.columns > 0:
            return size.lines, size.columns
        # Push the cursor to the bottom-right corner and ask where it ended up
        self.write(b"\x1b[999C\x1b[999B")
        try:
            return self.get_cursor_position()
        except TerminalError as e:
            raise TerminalError(f"getWindowSize: {e}") from e
