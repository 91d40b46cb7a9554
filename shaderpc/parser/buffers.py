"""Character buffers used by the shader scanner."""

from __future__ import annotations

from shaderpc.errors import ScannerOverflowError


class WordBuilder:
    """Accumulates characters of the pending word."""

    def __init__(self, capacity: int | None = None):
        self.capacity = capacity
        self._chars: list[str] = []

    def append(self, c: str) -> None:
        if self.capacity is not None and len(self._chars) >= self.capacity:
            raise ScannerOverflowError(
                f"Word longer than {self.capacity} characters: '{''.join(self._chars[:32])}...'"
            )
        self._chars.append(c)

    def size(self) -> int:
        return len(self._chars)

    def __len__(self):
        return len(self._chars)

    def build(self) -> str:
        """Return the accumulated word and reset the buffer."""
        word = "".join(self._chars)
        self._chars.clear()
        return word


class SectionBuilder:
    """Accumulates the raw source text of one section.

    Line breaks and tabs are dropped so the captured source is a single
    flowing string.
    """

    ILLEGAL_CHARACTERS = frozenset("\r\n\t")

    def __init__(self, capacity: int | None = None):
        self.capacity = capacity
        self._chars: list[str] = []

    def append(self, c: str) -> None:
        if c in self.ILLEGAL_CHARACTERS:
            return
        if self.capacity is not None and len(self._chars) >= self.capacity:
            raise ScannerOverflowError(f"Section source longer than {self.capacity} characters")
        self._chars.append(c)

    def back(self, amount: int = 1) -> None:
        """Retract the last `amount` appended characters."""
        if amount >= len(self._chars):
            self._chars.clear()
        elif amount > 0:
            del self._chars[-amount:]

    def size(self) -> int:
        return len(self._chars)

    def __len__(self):
        return len(self._chars)

    def build(self) -> str:
        """Return the accumulated source and reset the buffer."""
        source = "".join(self._chars)
        self._chars.clear()
        return source
