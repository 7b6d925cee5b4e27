"""
Byte-stream decoder for raw keyboard input.

Turns the bytes read from a raw-mode terminal into ``KeyToken`` values. Most
bytes decode on their own. A byte that starts a multi-byte key sequence
(ESC on POSIX terminals, 0x00/0xE0 on the Windows console) puts the decoder
into an awaiting state with a deadline; the sequence is finished either by a
byte that completes a known sequence, by a byte that cannot continue it, or
by ``expire()`` once the deadline passes. The caller supplies the clock, so
the decoder never sleeps or blocks.
"""
from typing import Optional, Union

from .input import Key, KeyToken

ESC = 0x1B

POSIX_SEQUENCES: dict[bytes, Key] = {
    b"\x1b[A": Key.UP,
    b"\x1b[B": Key.DOWN,
    b"\x1b[C": Key.RIGHT,
    b"\x1b[D": Key.LEFT,
    # Application cursor mode
    b"\x1bOA": Key.UP,
    b"\x1bOB": Key.DOWN,
    b"\x1bOC": Key.RIGHT,
    b"\x1bOD": Key.LEFT,
}

# msvcrt.getch() reports extended keys as a 0x00 or 0xE0 prefix plus a scan code
WINDOWS_SEQUENCES: dict[bytes, Key] = {
    b"\xe0H": Key.UP,
    b"\xe0P": Key.DOWN,
    b"\xe0M": Key.RIGHT,
    b"\xe0K": Key.LEFT,
    b"\x00H": Key.UP,
    b"\x00P": Key.DOWN,
    b"\x00M": Key.RIGHT,
    b"\x00K": Key.LEFT,
}

DEFAULT_SEQUENCES: dict[bytes, Key] = {**POSIX_SEQUENCES, **WINDOWS_SEQUENCES}

SINGLE_BYTE_KEYS: dict[int, Key] = {
    0x03: Key.INTERRUPT,
    0x08: Key.BACKSPACE,
    0x09: Key.TAB,
    0x0A: Key.ENTER,
    0x0D: Key.ENTER,
    0x7F: Key.BACKSPACE,
}

DEFAULT_ESCAPE_TIMEOUT = 0.1
MAX_SEQUENCE_LENGTH = 16

TrieNode = dict[int, Union["TrieNode", Key]]


def build_sequence_trie(sequences: dict[bytes, Key]) -> TrieNode:
    """Build a nested dict keyed by byte from a sequence table."""
    root: TrieNode = {}
    for sequence, key in sequences.items():
        node = root
        for byte in sequence[:-1]:
            child = node.setdefault(byte, {})
            if not isinstance(child, dict):
                raise ValueError(f"Sequence {sequence!r} extends a complete sequence")
            node = child
        node[sequence[-1]] = key
    return root


class InputDecoder:
    """Incremental decoder with a bounded wait for multi-byte sequences."""

    def __init__(
        self,
        sequences: Optional[dict[bytes, Key]] = None,
        escape_timeout: float = DEFAULT_ESCAPE_TIMEOUT,
    ):
        self.escape_timeout = escape_timeout
        self._trie = build_sequence_trie(sequences or DEFAULT_SEQUENCES)

        self._pending = bytearray()
        self._node: Optional[TrieNode] = None
        # Inside an unknown CSI/SS3 sequence, waiting for its final byte
        self._absorbing = False
        self._deadline: Optional[float] = None

    @property
    def awaiting(self) -> bool:
        """True while a sequence prefix is buffered."""
        return bool(self._pending)

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    def feed(self, data: bytes, now: float) -> list[KeyToken]:
        """Decode a chunk of bytes read at time ``now``."""
        tokens: list[KeyToken] = []
        for byte in data:
            token = self._feed_byte(byte, now)
            if token is not None:
                tokens.append(token)
        return tokens

    def expire(self, now: float) -> Optional[KeyToken]:
        """Resolve a buffered prefix whose deadline has passed."""
        if self._pending and self._deadline is not None and now >= self._deadline:
            return self._finish_unrecognized()
        return None

    def flush(self) -> Optional[KeyToken]:
        """Resolve any buffered prefix immediately."""
        if self._pending:
            return self._finish_unrecognized()
        return None

    def decode(self, data: bytes) -> list[KeyToken]:
        """Decode a complete chunk at once, flushing any unfinished prefix."""
        tokens = self.feed(data, now=0.0)
        leftover = self.flush()
        if leftover is not None:
            tokens.append(leftover)
        return tokens

    def reset(self) -> None:
        self._pending.clear()
        self._node = None
        self._absorbing = False
        self._deadline = None

    def _feed_byte(self, byte: int, now: float) -> Optional[KeyToken]:
        if not self._pending:
            return self._start(byte, now)

        self._deadline = now + self.escape_timeout

        # A new introducer closes the old prefix and opens its own
        if self._absorbing and isinstance(self._trie.get(byte), dict):
            return self._restart(byte, now)

        if self._absorbing:
            self._pending.append(byte)
            if 0x40 <= byte <= 0x7E or len(self._pending) >= MAX_SEQUENCE_LENGTH:
                return self._finish_unrecognized()
            return None

        assert self._node is not None
        child = self._node.get(byte)
        if isinstance(child, Key):
            raw = bytes(self._pending) + bytes([byte])
            self.reset()
            return KeyToken.named(child, raw=raw)
        if isinstance(child, dict):
            self._pending.append(byte)
            self._node = child
            return None

        if isinstance(self._trie.get(byte), dict):
            return self._restart(byte, now)

        self._pending.append(byte)
        if self._pending[0] == ESC and len(self._pending) == 2 and byte in b"[O":
            self._absorbing = True
            return None
        if self._pending[0] == ESC and len(self._pending) > 2 and not 0x40 <= byte <= 0x7E:
            self._absorbing = True
            return None
        return self._finish_unrecognized()

    def _start(self, byte: int, now: float) -> Optional[KeyToken]:
        child = self._trie.get(byte)
        if isinstance(child, dict):
            self._pending.append(byte)
            self._node = child
            self._deadline = now + self.escape_timeout
            return None

        raw = bytes([byte])
        if isinstance(child, Key):
            return KeyToken.named(child, raw=raw)
        if byte in SINGLE_BYTE_KEYS:
            return KeyToken.named(SINGLE_BYTE_KEYS[byte], raw=raw)
        if 0x20 <= byte < 0x7F:
            return KeyToken.character(chr(byte), raw=raw)
        return KeyToken.unrecognized(raw)

    def _restart(self, byte: int, now: float) -> KeyToken:
        token = self._finish_unrecognized()
        self._start(byte, now)
        return token

    def _finish_unrecognized(self) -> KeyToken:
        token = KeyToken.unrecognized(bytes(self._pending))
        self.reset()
        return token
