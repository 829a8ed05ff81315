"""Internal shared types for cross-boundary data contracts.

These types define the data shapes passed between validation, the
model formulas and the orchestration layer. ``Diagnostic`` is
re-exported from ``nppmodel.__init__`` because callers receive it.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Union

import numpy as np
import numpy.typing as npt

Grid = npt.NDArray[np.floating[Any]]
"""One raster band over a fixed extent; NaN or masked cells mean no data."""

GridSequence = Sequence[Grid]
"""Ordered grids paired positionally across bands (list, tuple or 3-D array)."""

Scalar = Union[float, Grid]
"""A physiological constant, or a degenerate uniform grid standing in for one."""


class ValidationMode(enum.Enum):
    """Selects single-frame or batch terminology and checks."""

    SINGLE = "image"
    BATCH = "collection"


@dataclass(frozen=True)
class ValidationResult:
    """Two-case outcome of input validation.

    Args:
        messages: Diagnostic lines, empty when the inputs are valid.

    Example:
        >>> ValidationResult().ok
        True
        >>> ValidationResult(("ERROR: Topt must not be None!",)).message
        'ERROR: Topt must not be None!'
    """

    messages: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        """``True`` when no problem was found."""
        return not self.messages

    @property
    def message(self) -> str:
        """All diagnostic lines joined by newlines (empty when ``ok``)."""
        return "\n".join(self.messages)


@dataclass(frozen=True)
class Diagnostic:
    """Returned by ``compute_*`` in place of a result when inputs are invalid.

    Args:
        message: Human-readable description of every problem found.

    Example:
        >>> diag = Diagnostic("ERROR: LUEmax must not be None!")
        >>> str(diag)
        'ERROR: LUEmax must not be None!'
    """

    message: str

    def __str__(self) -> str:
        return self.message
