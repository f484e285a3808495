"""
Key decoding for scrib.

Turns the raw byte stream coming from the terminal into key codes. Plain bytes
(printable or control) come back as their integer value; escape sequences for
the cursor and editing keys come back as the named codes below.
"""

ESC = 0x1b
ENTER = 0x0d
BACKSPACE = 127

# Special keys, numbered out of the byte range
ARROW_LEFT = 1000
ARROW_RIGHT = 1001
ARROW_UP = 1002
ARROW_DOWN = 1003
DEL_KEY = 1004
HOME_KEY = 1005
END_KEY = 1006
PAGE_UP = 1007
PAGE_DOWN = 1008

# ESC [ <digit> ~
TILDE_KEYS = {
    ord('1'): HOME_KEY,
    ord('3'): DEL_KEY,
    ord('4'): END_KEY,
    ord('5'): PAGE_UP,
    ord('6'): PAGE_DOWN,
    ord('7'): HOME_KEY,
    ord('8'): END_KEY,
}

# ESC [ <letter>
CSI_KEYS = {
    ord('A'): ARROW_UP,
    ord('B'): ARROW_DOWN,
    ord('C'): ARROW_RIGHT,
    ord('D'): ARROW_LEFT,
    ord('H'): HOME_KEY,
    ord('F'): END_KEY,
}

# ESC O <letter>
SS3_KEYS = {
    ord('H'): HOME_KEY,
    ord('F'): END_KEY,
}

# Decoder states
GROUND = "ground"
ESCAPE = "escape"          # seen ESC
INTRO = "intro"            # seen ESC + one byte
CSI_PARAM = "csi_param"    # seen ESC [ digit


def ctrl_key(ch: str) -> int:
    """Key code produced by holding Ctrl with `ch`."""
    return ord(ch) & 0x1f


class KeyDecoder:
    """
    State machine decoding terminal input one byte at a time.

    feed() returns a key code once a key is complete, or None while an escape
    sequence is still being read. timeout() is called when the input runs dry
    in the middle of a sequence. Sequences it does not know decode to a bare
    ESC, so stray terminal output never reaches the editor as text.
    """
    def __init__(self, read_byte=None):
        self.read_byte = read_byte
        self.state = GROUND
        self.intro = None
        self.param = None

    def reset(self):
        self.state = GROUND
        self.intro = None
        self.param = None

    def _emit(self, key: int) -> int:
        self.reset()
        return key

    def feed(self, byte: int):
        if self.state == GROUND:
            if byte == ESC:
                self.state = ESCAPE
                return None
            return byte

        if self.state == ESCAPE:
            self.intro = byte
            self.state = INTRO
            return None

        if self.state == INTRO:
            if self.intro == ord('['):
                if ord('0') <= byte <= ord('9'):
                    self.param = byte
                    self.state = CSI_PARAM
                    return None
                return self._emit(CSI_KEYS.get(byte, ESC))
            if self.intro == ord('O'):
                return self._emit(SS3_KEYS.get(byte, ESC))
            return self._emit(ESC)

        if self.state == CSI_PARAM:
            if byte == ord('~'):
                return self._emit(TILDE_KEYS.get(self.param, ESC))
            return self._emit(ESC)

        return self._emit(ESC)

    def timeout(self):
        """Input went quiet: a partial sequence becomes a bare ESC."""
        if self.state == GROUND:
            return None
        return self._emit(ESC)

    def feed_bytes(self, data):
        """Decode a whole byte string, returning every complete key in order."""
        keys = []
        for byte in data:
            key = self.feed(byte)
            if key is not None:
                keys.append(key)
        key = self.timeout()
        if key is not None:
            keys.append(key)
        return keys

    def read_key(self) -> int:
        """
        Block until one key is available from self.read_byte.

        read_byte returns an int, or None when its read timed out. Waiting for
        the first byte is not an error; a timeout inside an escape sequence
        ends the sequence. Real I/O errors raised by read_byte propagate.
        """
        while True:
            byte = self.read_byte()
            if byte is None:
                continue
            key = self.feed(byte)
            if key is not None:
                return key
            break
        while True:
            byte = self.read_byte()
            if byte is None:
                return self.timeout()
            key = self.feed(byte)
            if key is not None:
                return key
