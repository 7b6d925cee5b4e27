from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Optional


class KeyKind(Enum):
    CHARACTER = auto()
    DIRECTION = auto()
    CONTROL = auto()
    UNRECOGNIZED = auto()


class Key(Enum):
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()

    ENTER = auto()
    TAB = auto()
    BACKSPACE = auto()
    INTERRUPT = auto()


DIRECTION_KEYS = {Key.UP, Key.DOWN, Key.LEFT, Key.RIGHT}

# Display names shared by the status line, the menu and the settings file
KEY_NAMES = {
    Key.UP: "UP_ARROW",
    Key.DOWN: "DOWN_ARROW",
    Key.LEFT: "LEFT_ARROW",
    Key.RIGHT: "RIGHT_ARROW",
    Key.ENTER: "ENTER",
    Key.TAB: "TAB",
    Key.BACKSPACE: "BACKSPACE",
    Key.INTERRUPT: "CTRL_C",
}

_NAME_ALIASES = {
    "UP": Key.UP,
    "DOWN": Key.DOWN,
    "LEFT": Key.LEFT,
    "RIGHT": Key.RIGHT,
    "RETURN": Key.ENTER,
    "INTERRUPT": Key.INTERRUPT,
}


@dataclass(frozen=True)
class KeyToken:
    """A decoded key press.

    Two tokens are equal when they name the same key, regardless of the raw
    bytes the platform used to deliver it. An arrow key read as ``ESC [ D``
    on a POSIX terminal equals the same key read as ``0xE0 K`` on Windows.
    """
    kind: KeyKind
    key: Optional[Key] = None
    char: Optional[str] = None
    raw: bytes = field(default=b"", compare=False)

    @classmethod
    def character(cls, char: str, raw: Optional[bytes] = None) -> "KeyToken":
        return cls(kind=KeyKind.CHARACTER, char=char, raw=raw if raw is not None else char.encode())

    @classmethod
    def named(cls, key: Key, raw: bytes = b"") -> "KeyToken":
        kind = KeyKind.DIRECTION if key in DIRECTION_KEYS else KeyKind.CONTROL
        return cls(kind=kind, key=key, raw=raw)

    @classmethod
    def unrecognized(cls, raw: bytes) -> "KeyToken":
        return cls(kind=KeyKind.UNRECOGNIZED, raw=bytes(raw))

    @classmethod
    def parse(cls, name: str) -> "KeyToken":
        """Build a token from its display name (``"a"``, ``"LEFT_ARROW"``, ``"SPACE"``...).

        Raises:
            ValueError: if the name does not describe a bindable key
        """
        if not isinstance(name, str) or not name:
            raise ValueError(f"Invalid key name: {name!r}")

        if len(name) == 1:
            if not name.isprintable():
                raise ValueError(f"Key {name!r} is not printable")
            return cls.character(name)

        upper = name.strip().upper()
        if upper == "SPACE":
            return cls.character(" ")

        for key, key_name in KEY_NAMES.items():
            if upper == key_name:
                return cls.named(key)

        if upper in _NAME_ALIASES:
            return cls.named(_NAME_ALIASES[upper])

        raise ValueError(f"Unknown key name: {name!r}")

    @property
    def is_direction(self) -> bool:
        return self.kind == KeyKind.DIRECTION

    @property
    def is_recognized(self) -> bool:
        return self.kind != KeyKind.UNRECOGNIZED

    def display(self) -> str:
        if self.kind == KeyKind.CHARACTER and self.char is not None:
            return "SPACE" if self.char == " " else self.char
        if self.key is not None:
            return KEY_NAMES[self.key]
        if not self.raw:
            return "NONE"
        return "SEQ(" + " ".join(f"0x{byte:02X}" for byte in self.raw) + ")"

    def __str__(self) -> str:
        return self.display()


@dataclass(frozen=True)
class KeyBinding:
    left: KeyToken
    right: KeyToken

    @classmethod
    def default(cls) -> "KeyBinding":
        return cls(left=KeyToken.character("a"), right=KeyToken.character("d"))

    def direction_of(self, token: KeyToken) -> int:
        """Return -1, +1 or 0 for a token matching left, right, or neither."""
        if token == self.left:
            return -1
        if token == self.right:
            return 1
        return 0

    def describe(self) -> str:
        return f"Left={self.left.display()} Right={self.right.display()}"
