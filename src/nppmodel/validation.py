"""Input validation shared by the single-frame and batch entry points.

Validation never raises: every problem found becomes one diagnostic line
in the returned :class:`~nppmodel._types.ValidationResult`.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from nppmodel._types import ValidationMode, ValidationResult

logger = logging.getLogger(__name__)

_RASTER_NAMES: tuple[str, ...] = ("NDVI", "LST", "SOL", "We")
_SIZE_MISMATCH_MESSAGE = (
    "ERROR: NDVI, LST, SOL and We collections don't have the same size!"
)


def _missing_raster_message(name: str, mode: ValidationMode) -> str:
    return f"ERROR: {name} {mode.value} must not be None!"


def _override_with_size_mismatch(messages: list[str]) -> list[str]:
    """Replace every accumulated line with the single size-mismatch line.

    Missing-input lines gathered before the length check are discarded,
    not appended to.
    """
    return [_SIZE_MISMATCH_MESSAGE]


def _sequence_sizes_differ(
    ndvi: Any,
    lst: Any,
    sol: Any,
    we: Any,
) -> bool:
    # Three independent comparisons; together they do not cover every pair.
    ndvi_vs_lst = len(ndvi) != len(lst)
    sol_vs_we = len(sol) != len(we)
    ndvi_vs_we = len(ndvi) != len(we)
    return ndvi_vs_lst or sol_vs_we or ndvi_vs_we


def validate_inputs(
    ndvi: Any,
    lst: Any,
    sol: Any,
    we: Any,
    topt: Any,
    luemax: Any,
    mode: ValidationMode = ValidationMode.SINGLE,
) -> ValidationResult:
    """Check presence and mutual consistency of the six model inputs.

    Each raster input and each scalar constant is checked for ``None``
    independently, producing one line per absent input. In batch mode,
    when all four sequences are present, their lengths are compared;
    any difference replaces the whole diagnostic with a single
    size-mismatch line.

    Args:
        ndvi: NDVI grid, or sequence of grids in batch mode.
        lst: Land surface temperature grid or sequence.
        sol: Solar radiation grid or sequence.
        we: Water-stress index grid or sequence.
        topt: Optimal growth temperature.
        luemax: Maximum light-use efficiency.
        mode: ``ValidationMode.SINGLE`` or ``ValidationMode.BATCH``.

    Returns:
        ``ValidationResult`` whose ``ok`` is ``True`` when nothing is wrong.

    Example:
        >>> result = validate_inputs(None, 1.0, 1.0, 1.0, 21.66, 0.72)
        >>> result.message
        'ERROR: NDVI image must not be None!'
    """
    messages: list[str] = []

    for name, value in zip(_RASTER_NAMES, (ndvi, lst, sol, we)):
        if value is None:
            messages.append(_missing_raster_message(name, mode))

    if topt is None:
        messages.append("ERROR: Topt must not be None!")
    if luemax is None:
        messages.append("ERROR: LUEmax must not be None!")

    rasters_present = all(v is not None for v in (ndvi, lst, sol, we))
    if (
        mode is ValidationMode.BATCH
        and rasters_present
        and _sequence_sizes_differ(ndvi, lst, sol, we)
    ):
        messages = _override_with_size_mismatch(messages)

    result = ValidationResult(tuple(messages))
    if not result.ok:
        logger.warning("Input validation failed:\n%s", result.message)
    return result


def check_grid_shapes(
    ndvi: Any,
    lst: Any,
    sol: Any,
    we: Any,
    *,
    index: int | None = None,
) -> ValidationResult:
    """Check that the four grids of one frame are 2-D and share one shape.

    Only used when ``Config.strict_shapes`` is enabled; by default the
    arithmetic itself decides what happens to misaligned grids.

    Args:
        ndvi: NDVI grid.
        lst: LST grid.
        sol: SOL grid.
        we: We grid.
        index: Frame position, included in messages for batch inputs.

    Returns:
        ``ValidationResult`` describing every shape problem found.
    """
    prefix = "ERROR: " if index is None else f"ERROR: frame {index}: "
    shapes = {
        name: np.shape(grid)
        for name, grid in zip(_RASTER_NAMES, (ndvi, lst, sol, we))
    }

    messages = [
        f"{prefix}{name} grid must be 2-D, got {len(shape)} dimension(s)!"
        for name, shape in shapes.items()
        if len(shape) != 2
    ]
    if len(set(shapes.values())) > 1:
        detail = ", ".join(f"{name}={shape}" for name, shape in shapes.items())
        messages.append(
            f"{prefix}NDVI, LST, SOL and We grids don't have the same shape "
            f"({detail})!"
        )

    result = ValidationResult(tuple(messages))
    if not result.ok:
        logger.warning("Grid shape check failed:\n%s", result.message)
    return result
