import random
from typing import Optional, Protocol, Sequence, Tuple


HEX_DIGITS = "0123456789abcdef"


class RandomSource(Protocol):
    def choice(self, seq: Sequence[str]) -> str: ...


def random_color(rng: Optional[RandomSource] = None) -> str:
    """Return a color such as ``#a3f2c1``, each digit drawn independently."""
    rng = rng or random.SystemRandom()
    return "#" + "".join(rng.choice(HEX_DIGITS) for _ in range(6))


def gradient_colors(rng: Optional[RandomSource] = None) -> Tuple[str, str]:
    """Return two independent colors for the gradient stops; they may coincide."""
    rng = rng or random.SystemRandom()
    return random_color(rng), random_color(rng)
