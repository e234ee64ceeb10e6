# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Random shock sources for the goal simulator and the asset revaluation step.

Both engines consume "shocks": zero-mean symmetric draws that scale a
volatility term. Production uses UniformShockSource, a uniform variable on
[-1, 1]. That is a simplified stand-in for a Gaussian shock and understates
tail risk; NormalShockSource is the drop-in alternative when a proper normal
draw is wanted. SequenceRandomSource replays a fixed list of shocks so tests
can assert exact outputs.
"""

from abc import ABC, abstractmethod
from itertools import cycle
from typing import Iterable, Optional, Tuple, Union

import numpy as np

Shape = Union[int, Tuple[int, ...]]


class RandomSource(ABC):
    """Capability interface for drawing shocks.

    Subclasses implement next(); draw() fills an array in C order, so for a
    (paths, months) shape every month of path 0 is drawn before path 1.
    """

    @abstractmethod
    def next(self) -> float:
        """Return the next shock."""

    def draw(self, shape: Shape) -> np.ndarray:
        """Return an array of shocks with the given shape."""
        dims = (shape,) if isinstance(shape, int) else tuple(shape)
        count = int(np.prod(dims)) if dims else 1
        values = np.fromiter((self.next() for _ in range(count)), dtype=float, count=count)
        return values.reshape(dims)


class UniformShockSource(RandomSource):
    """Uniform shocks on [-1, 1] backed by a numpy Generator."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = np.random.default_rng(seed)

    def next(self) -> float:
        return float(self._rng.uniform(-1.0, 1.0))

    def draw(self, shape: Shape) -> np.ndarray:
        return self._rng.uniform(-1.0, 1.0, size=shape)


class NormalShockSource(RandomSource):
    """Standard normal shocks. Unbounded, unlike the uniform source."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = np.random.default_rng(seed)

    def next(self) -> float:
        return float(self._rng.standard_normal())

    def draw(self, shape: Shape) -> np.ndarray:
        return self._rng.standard_normal(size=shape)


class SequenceRandomSource(RandomSource):
    """Replays a fixed sequence of shocks, cycling when exhausted.

    Example:
        >>> source = SequenceRandomSource([0.5, -0.5])
        >>> [source.next() for _ in range(3)]
        [0.5, -0.5, 0.5]
    """

    def __init__(self, values: Iterable[float]):
        values = [float(v) for v in values]
        if not values:
            raise ValueError("SequenceRandomSource needs at least one value")
        self._values = cycle(values)

    def next(self) -> float:
        return next(self._values)


def create_random_source(distribution: str = "uniform",
                         seed: Optional[int] = None) -> RandomSource:
    """Build the shock source named by a MonteCarloConfig.shock_distribution."""
    if distribution == "uniform":
        return UniformShockSource(seed)
    if distribution == "normal":
        return NormalShockSource(seed)
    raise ValueError(f"Unknown shock distribution: {distribution!r}")
