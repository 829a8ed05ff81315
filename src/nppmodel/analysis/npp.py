"""Light-use-efficiency model of Net Primary Productivity.

Pure computation module: no validation, no logging, no state.
Takes arrays (or scalars) in, returns arrays out. Every step uses
operator arithmetic and numpy ufuncs only, so NaN cells and
``numpy.ma`` masked cells propagate to the output unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
import numpy.typing as npt

from nppmodel._types import Grid, Scalar

# PAR is half of total incoming shortwave radiation.
_PAR_FRACTION: float = 0.5

# FPAR = NDVI * slope + intercept
_FPAR_SLOPE: float = 1.2
_FPAR_INTERCEPT: float = -0.14


def _as_float(value: Any, dtype: npt.DTypeLike) -> Grid:
    """Cast *value* to *dtype*, keeping ndarray subclasses (masks survive)."""
    return np.asanyarray(value).astype(dtype, copy=False)


def temperature_ceiling(topt: Scalar) -> Grid:
    """Temperature efficiency ceiling T1 derived from the optimal temperature.

    T1 = 0.8 + 0.02 * Topt - 0.0005 * Topt**2
    """
    return 0.8 + 0.02 * topt - 0.0005 * topt**2


def temperature_stress(lst: Grid, topt: Scalar) -> Grid:
    """Two-sided logistic temperature stress T2, evaluated per pixel.

    The first sigmoid penalises temperatures well below ``topt``; the
    second penalises temperatures well above it:

        T2 = 1 / (1 + exp(0.2 * (Topt - 10 - LST)))
           * 1 / (1 + exp(0.3 * (-Topt - 10 + LST)))

    Parameters:
        lst: Land surface temperature in degrees Celsius.
        topt: Optimal growth temperature in degrees Celsius.

    Returns:
        Factor in ``(0, 1)`` with the shape of *lst*.
    """
    # exp() overflows to inf for extreme temperatures; 1/(1+inf) is 0.
    with np.errstate(over="ignore"):
        low = 1.0 / (1.0 + np.exp(0.2 * (topt - 10.0 - lst)))
        high = 1.0 / (1.0 + np.exp(0.3 * (-topt - 10.0 + lst)))
    return low * high


def photosynthetic_radiation(sol: Grid) -> Grid:
    """PAR as half of incoming solar radiation."""
    return sol * _PAR_FRACTION


def absorbed_fraction(ndvi: Grid, clamp: bool = False) -> Grid:
    """Fraction of PAR absorbed by vegetation (FPAR), linear in NDVI.

    Without *clamp* the result is left as computed, which falls outside
    ``[0, 1]`` for NDVI outside roughly ``[0.117, 0.95]``.

    Parameters:
        ndvi: NDVI grid.
        clamp: Clip the result to ``[0, 1]``. NaN cells stay NaN.

    Returns:
        FPAR grid with the shape of *ndvi*.

    Example:
        >>> round(float(absorbed_fraction(np.float64(0.5))), 2)
        0.46
    """
    fpar = ndvi * _FPAR_SLOPE + _FPAR_INTERCEPT
    if clamp:
        fpar = np.clip(fpar, 0.0, 1.0)
    return fpar


def absorbed_radiation(par: Grid, fpar: Grid) -> Grid:
    """Absorbed PAR (APAR = PAR * FPAR)."""
    return par * fpar


def light_use_efficiency(
    luemax: Scalar,
    t1: Grid,
    t2: Grid,
    we: Grid,
) -> Grid:
    """Realised light-use efficiency (LUE = LUEmax * T1 * T2 * We)."""
    return luemax * t1 * t2 * we


@dataclass(frozen=True)
class NPPComponents:
    """Every intermediate grid of one NPP evaluation.

    Attributes:
        t1: Temperature efficiency ceiling.
        t2: Temperature stress factor.
        par: Photosynthetically active radiation.
        fpar: Fraction of PAR absorbed.
        apar: Absorbed PAR.
        lue: Realised light-use efficiency.
        npp: Net Primary Productivity.
    """

    t1: Grid
    t2: Grid
    par: Grid
    fpar: Grid
    apar: Grid
    lue: Grid
    npp: Grid


def compute_npp_components(
    ndvi: Grid,
    lst: Grid,
    sol: Grid,
    we: Grid,
    topt: Scalar,
    luemax: Scalar,
    *,
    clamp_fpar: bool = False,
    dtype: npt.DTypeLike = np.float64,
) -> NPPComponents:
    """Evaluate the model and keep every intermediate grid.

    Inputs are not validated; see :func:`compute_npp`.
    """
    ndvi_f = _as_float(ndvi, dtype)
    lst_f = _as_float(lst, dtype)
    sol_f = _as_float(sol, dtype)
    we_f = _as_float(we, dtype)
    topt_f = _as_float(topt, dtype)
    luemax_f = _as_float(luemax, dtype)

    # NaN and inf propagate to the output silently.
    with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
        t1 = temperature_ceiling(topt_f)
        t2 = temperature_stress(lst_f, topt_f)
        par = photosynthetic_radiation(sol_f)
        fpar = absorbed_fraction(ndvi_f, clamp=clamp_fpar)
        apar = absorbed_radiation(par, fpar)
        lue = light_use_efficiency(luemax_f, t1, t2, we_f)
        npp = apar * lue

    return NPPComponents(
        t1=t1,
        t2=t2,
        par=par,
        fpar=fpar,
        apar=apar,
        lue=lue,
        npp=npp,
    )


def compute_npp(
    ndvi: Grid,
    lst: Grid,
    sol: Grid,
    we: Grid,
    topt: Scalar,
    luemax: Scalar,
    *,
    clamp_fpar: bool = False,
    dtype: npt.DTypeLike = np.float64,
) -> Grid:
    """Compute Net Primary Productivity for one frame.

    NPP = APAR * LUE, where APAR = 0.5 * SOL * (1.2 * NDVI - 0.14) and
    LUE = LUEmax * T1(Topt) * T2(LST, Topt) * We.

    The four grids must share one shape; this function does not check
    that, nor value ranges. Degenerate inputs surface as NaN or inf in
    the output rather than as errors.

    Parameters:
        ndvi: NDVI grid, shape ``(H, W)``.
        lst: Land surface temperature grid in degrees Celsius.
        sol: Incoming solar radiation grid.
        we: Water-stress index grid, typically in ``[0.5, 1.0]``.
        topt: Optimal growth temperature in degrees Celsius.
        luemax: Maximum light-use efficiency.
        clamp_fpar: Clip FPAR to ``[0, 1]``.
        dtype: Floating-point dtype of the computation and the output.

    Returns:
        NPP grid with the shape of the inputs.

    Example:
        >>> npp = compute_npp(
        ...     np.array([[0.5]]), np.array([[20.0]]), np.array([[20.0]]),
        ...     np.array([[1.0]]), topt=21.66, luemax=0.72,
        ... )
        >>> round(float(npp[0, 0]), 3)
        2.701
    """
    return compute_npp_components(
        ndvi,
        lst,
        sol,
        we,
        topt,
        luemax,
        clamp_fpar=clamp_fpar,
        dtype=dtype,
    ).npp
