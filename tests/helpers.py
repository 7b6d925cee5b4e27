"""Deterministic stand-ins for the clock and random source used by the game loop."""


class FakeClock:
    """Manually advanced monotonic clock; ``sleep`` advances it too."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class StubRandom:
    """Random source with fixed answers for the spawn policy."""

    def __init__(self, value: float = 0.0, column: int = 2):
        self.value = value
        self.column = column
        self.randint_calls: list[tuple[int, int]] = []

    def random(self) -> float:
        return self.value

    def randint(self, a: int, b: int) -> int:
        self.randint_calls.append((a, b))
        return self.column
