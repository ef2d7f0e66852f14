"""NameEntry - keystroke buffer for the end-of-day leaderboard name prompt."""

DEFAULT_NAME_LENGTH = 3
PLACEHOLDER = "_"


class NameEntry:
    """Collects a fixed-length, upper-case, letters-only player name.

    The buffer ignores anything that is not a letter and stops accepting
    input once ``length`` letters have been typed. A complete name can be
    submitted exactly once.
    """

    def __init__(self, length: int = DEFAULT_NAME_LENGTH) -> None:
        if length < 1:
            raise ValueError(f"Name length must be positive, got {length}")
        self._length = length
        self._letters: list[str] = []
        self._submitted = False

    @property
    def length(self) -> int:
        return self._length

    @property
    def value(self) -> str:
        return "".join(self._letters)

    @property
    def is_complete(self) -> bool:
        return len(self._letters) == self._length

    @property
    def submitted(self) -> bool:
        return self._submitted

    def type(self, char: str) -> bool:
        """Append ``char`` if it is a single letter and there is room.

        Letters whose upper-case form is longer than one character (``ß``)
        are rejected so the name keeps its fixed length.

        Returns True if the buffer changed.
        """
        if self._submitted or len(char) != 1 or not char.isalpha():
            return False
        upper = char.upper()
        if len(upper) != 1:
            return False
        if self.is_complete:
            return False
        self._letters.append(upper)
        return True

    def backspace(self) -> bool:
        """Remove the last letter. Returns True if the buffer changed."""
        if self._submitted or not self._letters:
            return False
        self._letters.pop()
        return True

    def submit(self) -> str:
        """Lock the entry and return the completed name."""
        if self._submitted:
            raise RuntimeError("Name has already been submitted")
        if not self.is_complete:
            raise ValueError(
                f"Name needs {self._length} letters, got {len(self._letters)}"
            )
        self._submitted = True
        return self.value

    def display(self, blink_on: bool = True) -> str:
        """Render the buffer with a trailing placeholder while incomplete."""
        if blink_on and not self.is_complete and not self._submitted:
            return self.value + PLACEHOLDER
        return self.value
