import collections

import pytest

from scrib import logger


class FakeTerminal:
    """Stands in for RawTerminalSession: scripted input bytes, captured output."""
    def __init__(self, data=b"", rows=24, cols=80):
        self.input = collections.deque(data)
        self.output = bytearray()
        self.rows = rows
        self.cols = cols
        self.enabled = False

    def feed(self, data):
        self.input.extend(data)

    def read_byte(self):
        if not self.input:
            return None
        return self.input.popleft()

    def write(self, data):
        self.output += data
        return len(data)

    def get_window_size(self):
        return self.rows, self.cols

    def enable(self):
        self.enabled = True

    def disable(self):
        self.enabled = False


@pytest.fixture(autouse=True)
def log_to_tmp(tmp_path, monkeypatch):
    path = tmp_path / "scrib.log"
    monkeypatch.setattr(logger, "LOG_FILE_PATH", str(path))
    return path


@pytest.fixture
def fake_terminal():
    return FakeTerminal()


@pytest.fixture
def make_context():
    from scrib.__main__ import EditorContext

    def _make(lines=None, data=b"", rows=24, cols=80, settings=None):
        term = FakeTerminal(data, rows, cols)
        context = EditorContext(term, settings)
        context.update_window_size()
        if lines is not None:
            context.buffer.load_from_lines(lines)
        return context
    return _make
