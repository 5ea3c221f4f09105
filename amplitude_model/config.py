from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

DuplicatePolicy = Literal['raise', 'overwrite']


@dataclass(frozen=True)
class BuildConfig:
    """Knobs for workspace population.

    on_duplicate:
        'raise' rejects a second component with an already used name.
        'overwrite' keeps the last definition (logged as a warning).
    """
    on_duplicate: DuplicatePolicy = 'raise'

    def __post_init__(self) -> None:
        if self.on_duplicate not in ('raise', 'overwrite'):
            raise ValueError(f"on_duplicate must be 'raise' or 'overwrite', got {self.on_duplicate!r}")


@dataclass(frozen=True)
class ValidationConfig:
    """Tolerances and worker count for checksum validation.

    A checkpoint is Exact when ``delta < exact_tolerance``, Approximate when
    ``delta < approximate_tolerance`` and a Mismatch otherwise.
    """
    exact_tolerance: float = 1e-10
    approximate_tolerance: float = 1e-2
    max_workers: int = 1

    def __post_init__(self) -> None:
        if self.exact_tolerance <= 0:
            raise ValueError(f"exact_tolerance must be positive, got {self.exact_tolerance}")
        if self.approximate_tolerance <= self.exact_tolerance:
            raise ValueError(
                "approximate_tolerance must be larger than exact_tolerance, "
                f"got {self.approximate_tolerance} <= {self.exact_tolerance}"
            )
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")
