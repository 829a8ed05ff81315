"""Single-frame and batch entry points of the NPP engine.

Both entry points validate first and return a :class:`Diagnostic` in
place of a result when inputs are missing or inconsistent. Callers
check ``isinstance(result, Diagnostic)`` before using the output.

Example:
    >>> import numpy as np
    >>> import nppmodel
    >>> grid = np.full((2, 2), 0.5)
    >>> result = nppmodel.compute_single(grid, grid * 40, grid * 40, grid * 2,
    ...                                  topt=21.66, luemax=0.72)
    >>> result.shape
    (2, 2)
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, cast

import numpy as np

from nppmodel._types import (
    Diagnostic,
    Grid,
    GridSequence,
    Scalar,
    ValidationMode,
)
from nppmodel.analysis.npp import compute_npp
from nppmodel.config import Config, get_default_config
from nppmodel.results import NPPResult, NPPSeriesResult, ResultMetadata
from nppmodel.validation import check_grid_shapes, validate_inputs

logger = logging.getLogger(__name__)


def _scalar_value(value: Any) -> float | None:
    """Return *value* as a float if it holds exactly one number."""
    arr = np.asarray(value)
    if arr.size != 1:
        return None
    return float(arr.reshape(-1)[0])


def _compute_frame(
    ndvi: Grid,
    lst: Grid,
    sol: Grid,
    we: Grid,
    topt: Scalar,
    luemax: Scalar,
    config: Config,
    index: int | None = None,
) -> NPPResult:
    """Evaluate the model on one already-validated frame."""
    npp = compute_npp(
        ndvi,
        lst,
        sol,
        we,
        topt,
        luemax,
        clamp_fpar=config.clamp_fpar,
        dtype=config.dtype,
    )
    valid_pixel_count = int(np.ma.masked_invalid(npp).count())
    logger.debug(
        "Computed NPP frame %s: shape=%s, valid_pixels=%d",
        "single" if index is None else index,
        npp.shape,
        valid_pixel_count,
    )
    metadata = ResultMetadata(
        index=index,
        system_index=None if index is None else str(index),
        shape=list(npp.shape),
        dtype=str(npp.dtype),
        topt=_scalar_value(topt),
        luemax=_scalar_value(luemax),
        fpar_clamped=config.clamp_fpar,
        valid_pixel_count=valid_pixel_count,
    )
    return NPPResult(data=npp, index=index, metadata=metadata)


def compute_single(
    ndvi: Grid | None,
    lst: Grid | None,
    sol: Grid | None,
    we: Grid | None,
    topt: Scalar | None,
    luemax: Scalar | None,
    *,
    config: Config | None = None,
) -> NPPResult | Diagnostic:
    """Compute Net Primary Productivity for one set of co-registered grids.

    Args:
        ndvi: NDVI grid.
        lst: Land surface temperature grid in degrees Celsius.
        sol: Incoming solar radiation grid.
        we: Water-stress index grid.
        topt: Optimal growth temperature in degrees Celsius.
        luemax: Maximum light-use efficiency.
        config: Optional configuration override.

    Returns:
        ``NPPResult`` holding the NPP grid, or a ``Diagnostic`` listing
        every missing input when validation fails.

    Example:
        >>> diag = compute_single(None, None, None, None, 21.66, 0.72)
        >>> print(diag)
        ERROR: NDVI image must not be None!
        ERROR: LST image must not be None!
        ERROR: SOL image must not be None!
        ERROR: We image must not be None!
    """
    cfg = config if config is not None else get_default_config()

    validation = validate_inputs(
        ndvi, lst, sol, we, topt, luemax, ValidationMode.SINGLE
    )
    if validation.ok and cfg.strict_shapes:
        validation = check_grid_shapes(ndvi, lst, sol, we)
    if not validation.ok:
        return Diagnostic(validation.message)

    return _compute_frame(ndvi, lst, sol, we, topt, luemax, cfg)


def compute_batch(
    ndvi_seq: GridSequence | None,
    lst_seq: GridSequence | None,
    sol_seq: GridSequence | None,
    we_seq: GridSequence | None,
    topt: Scalar | None,
    luemax: Scalar | None,
    *,
    config: Config | None = None,
) -> NPPSeriesResult | Diagnostic:
    """Compute NPP for every position of four index-aligned grid sequences.

    Position ``i`` of each sequence must describe the same observation
    period; this is not checked. Frame ``i`` of the output is identical
    to ``compute_single`` on the ``i``-th grids.

    Args:
        ndvi_seq: NDVI grids (list, tuple, or array with time on axis 0).
        lst_seq: Land surface temperature grids.
        sol_seq: Solar radiation grids.
        we_seq: Water-stress index grids.
        topt: Optimal growth temperature in degrees Celsius.
        luemax: Maximum light-use efficiency.
        config: Optional configuration override. ``max_workers > 1``
            evaluates frames on a thread pool.

    Returns:
        ``NPPSeriesResult`` with one frame per input position, or a
        ``Diagnostic`` if any input is missing or the sequence lengths
        differ. No frame is computed when a diagnostic is returned.
    """
    cfg = config if config is not None else get_default_config()

    validation = validate_inputs(
        ndvi_seq, lst_seq, sol_seq, we_seq, topt, luemax, ValidationMode.BATCH
    )
    if not validation.ok:
        return Diagnostic(validation.message)

    # All four sequences are present once validation passes.
    ndvi_s, lst_s, sol_s, we_s = cast(
        "tuple[GridSequence, GridSequence, GridSequence, GridSequence]",
        (ndvi_seq, lst_seq, sol_seq, we_seq),
    )

    size = len(ndvi_s)
    frames = [(ndvi_s[i], lst_s[i], sol_s[i], we_s[i]) for i in range(size)]

    if cfg.strict_shapes:
        messages: list[str] = []
        for i, frame in enumerate(frames):
            messages.extend(check_grid_shapes(*frame, index=i).messages)
        if messages:
            return Diagnostic("\n".join(messages))

    workers = min(cfg.max_workers, size) if size else 1
    logger.info("Computing NPP for %d frame(s) with %d worker(s)", size, workers)

    def _run(i: int) -> NPPResult:
        return _compute_frame(*frames[i], topt, luemax, cfg, index=i)

    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(_run, range(size)))
    else:
        results = [_run(i) for i in range(size)]

    logger.info("Computed %d NPP frame(s)", len(results))
    return NPPSeriesResult(frames=results)
