"""Block key generation."""

import random

_KEY_SPACE = 2**24
_DIGITS = "0123456789abcdefghijklmnopqrstuv"


def _to_base32(value: int) -> str:
    digits = []
    while True:
        value, remainder = divmod(value, 32)
        digits.append(_DIGITS[remainder])
        if value == 0:
            return "".join(reversed(digits))


class KeyGenerator:
    """Issues short random keys, never the same one twice.

    Args:
        seed: Optional seed for reproducible keys
    """

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random(seed)
        self._seen: set[str] = set()

    def generate(self) -> str:
        while True:
            key = _to_base32(self._random.randrange(_KEY_SPACE))
            if key not in self._seen:
                self._seen.add(key)
                return key
