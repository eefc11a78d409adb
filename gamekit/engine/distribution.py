"""
Weighted probability distributions over discrete elements (usually moves).

Sampling draws from a numpy Generator so results are reproducible when a
seeded generator is passed in; otherwise numpy's default generator is used.

    >>> coin = Distribution([('heads', 3.0), ('tails', 1.0)])
    >>> coin.probabilities.tolist()
    [0.75, 0.25]
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

import numpy as np


class Distribution:
    """A weighted distribution over a finite list of elements.

    Args:
        weighted_elements: Pairs of (element, weight). Weights are relative;
                           they are normalised to probabilities.

    Raises:
        ValueError: If there are no elements, any weight is negative or not
                    finite, or the weights sum to zero.
    """

    __slots__ = ("_elements", "_probabilities")

    def __init__(self, weighted_elements: Iterable[tuple[Any, float]]) -> None:
        pairs = list(weighted_elements)
        if not pairs:
            raise ValueError("cannot build a distribution over no elements")
        elements = [element for element, _ in pairs]
        weights = np.asarray([weight for _, weight in pairs], dtype=np.float64)
        if not np.all(np.isfinite(weights)) or np.any(weights < 0):
            raise ValueError(f"distribution weights must be finite and non-negative: {weights.tolist()}")
        total = weights.sum()
        if total <= 0:
            raise ValueError("distribution weights sum to zero")
        self._elements: tuple = tuple(elements)
        self._probabilities: np.ndarray = weights / total
        self._probabilities.setflags(write=False)

    @classmethod
    def flat(cls, elements: Sequence[Any]) -> Distribution:
        """A uniform distribution over the given elements."""
        return cls((element, 1.0) for element in elements)

    @property
    def elements(self) -> tuple:
        return self._elements

    @property
    def probabilities(self) -> np.ndarray:
        return self._probabilities

    def items(self) -> list[tuple[Any, float]]:
        """(element, probability) pairs in construction order."""
        return [(e, float(p)) for e, p in zip(self._elements, self._probabilities)]

    def probability_of(self, element: Any) -> float:
        """Total probability mass assigned to elements equal to `element`."""
        return float(sum(p for e, p in zip(self._elements, self._probabilities) if e == element))

    def sample(self, rng: np.random.Generator | None = None) -> Any:
        """Draw one element according to the distribution."""
        if rng is None:
            rng = np.random.default_rng()
        index = int(rng.choice(len(self._elements), p=self._probabilities))
        return self._elements[index]

    def __len__(self) -> int:
        return len(self._elements)

    def __repr__(self) -> str:
        return f"Distribution({self.items()!r})"
