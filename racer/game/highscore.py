from pathlib import Path
from typing import Union


class HighScoreStore:
    """Best score kept as a single integer in a plain text file.

    A missing, unreadable or malformed file reads as 0.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> int:
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return 0

        try:
            value = int(text.strip())
        except ValueError:
            return 0
        return value if value >= 0 else 0

    def save(self, candidate: int) -> bool:
        """Store ``candidate`` if it beats the stored score. Returns True when written."""
        if candidate <= self.load():
            return False
        self.path.write_text(str(candidate), encoding="utf-8")
        return True
