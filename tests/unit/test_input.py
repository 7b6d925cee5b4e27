"""Unit tests for key tokens and key bindings."""
import pytest

from racer.core.input import Key, KeyBinding, KeyKind, KeyToken


class TestKeyToken:

    def test_character_token(self):
        token = KeyToken.character("a")
        assert token.kind == KeyKind.CHARACTER
        assert token.char == "a"
        assert token.raw == b"a"

    def test_named_direction_token(self):
        token = KeyToken.named(Key.LEFT)
        assert token.kind == KeyKind.DIRECTION
        assert token.is_direction

    def test_named_control_token(self):
        assert KeyToken.named(Key.INTERRUPT).kind == KeyKind.CONTROL

    def test_equality_ignores_raw_bytes(self):
        assert KeyToken.named(Key.LEFT, raw=b"\x1b[D") == KeyToken.named(Key.LEFT, raw=b"\xe0K")
        assert hash(KeyToken.named(Key.LEFT, raw=b"\x1b[D")) == hash(KeyToken.named(Key.LEFT, raw=b"\xe0K"))

    def test_case_matters_for_characters(self):
        assert KeyToken.character("q") != KeyToken.character("Q")

    @pytest.mark.parametrize("token, expected", [
        (KeyToken.named(Key.UP), "UP_ARROW"),
        (KeyToken.named(Key.DOWN), "DOWN_ARROW"),
        (KeyToken.named(Key.LEFT), "LEFT_ARROW"),
        (KeyToken.named(Key.RIGHT), "RIGHT_ARROW"),
        (KeyToken.named(Key.ENTER), "ENTER"),
        (KeyToken.named(Key.TAB), "TAB"),
        (KeyToken.character(" "), "SPACE"),
        (KeyToken.character("x"), "x"),
        (KeyToken.unrecognized(b"\x1b[5~"), "SEQ(0x1B 0x5B 0x35 0x7E)"),
    ])
    def test_display(self, token, expected):
        assert token.display() == expected

    @pytest.mark.parametrize("name, expected", [
        ("a", KeyToken.character("a")),
        ("SPACE", KeyToken.character(" ")),
        ("LEFT_ARROW", KeyToken.named(Key.LEFT)),
        ("right", KeyToken.named(Key.RIGHT)),
        ("CTRL_C", KeyToken.named(Key.INTERRUPT)),
        ("enter", KeyToken.named(Key.ENTER)),
    ])
    def test_parse(self, name, expected):
        assert KeyToken.parse(name) == expected

    @pytest.mark.parametrize("name", ["", "NOPE", "\x07"])
    def test_parse_rejects_unknown(self, name):
        with pytest.raises(ValueError):
            KeyToken.parse(name)

    def test_parse_display_round_trip(self):
        for token in (KeyToken.named(Key.UP), KeyToken.character("z"), KeyToken.character(" ")):
            assert KeyToken.parse(token.display()) == token


class TestKeyBinding:

    def test_default_binding(self):
        binding = KeyBinding.default()
        assert binding.left == KeyToken.character("a")
        assert binding.right == KeyToken.character("d")

    def test_direction_of(self):
        binding = KeyBinding(left=KeyToken.named(Key.LEFT), right=KeyToken.named(Key.RIGHT))
        assert binding.direction_of(KeyToken.named(Key.LEFT, raw=b"\x1bOD")) == -1
        assert binding.direction_of(KeyToken.named(Key.RIGHT)) == 1
        assert binding.direction_of(KeyToken.character("a")) == 0

    def test_describe(self):
        assert KeyBinding.default().describe() == "Left=a Right=d"
