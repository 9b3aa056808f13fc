# core/interval.py
import math


class Interval:
    """
    A closed range [min, max] over the reals. An interval whose min is above
    its max is empty.
    """
    __slots__ = ("min", "max")

    def __init__(self, min: float = math.inf, max: float = -math.inf):
        self.min = min
        self.max = max

    @staticmethod
    def union(a: "Interval", b: "Interval") -> "Interval":
        """
        Smallest interval enclosing both a and b.
        """
        return Interval(a.min if a.min <= b.min else b.min,
                        a.max if a.max >= b.max else b.max)

    def size(self) -> float:
        return self.max - self.min

    def is_empty(self) -> bool:
        return self.min > self.max

    def contains(self, x: float) -> bool:
        return self.min <= x <= self.max

    def surrounds(self, x: float) -> bool:
        return self.min < x < self.max

    def clamp(self, x: float) -> float:
        if x < self.min:
            return self.min
        if x > self.max:
            return self.max
        return x

    def expand(self, delta: float) -> "Interval":
        padding = delta / 2
        return Interval(self.min - padding, self.max + padding)

    def shift(self, offset: float) -> "Interval":
        return Interval(self.min + offset, self.max + offset)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self.min == other.min and self.max == other.max

    def __repr__(self) -> str:
        return f"Interval({self.min}, {self.max})"


EMPTY = Interval(math.inf, -math.inf)
UNIVERSE = Interval(-math.inf, math.inf)
