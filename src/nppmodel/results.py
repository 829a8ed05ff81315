"""Result object model for NPP outputs."""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import numpy as np
import numpy.typing as npt
from pydantic import BaseModel, Field

if TYPE_CHECKING:
    import pandas as pd

NPP_BAND_NAME = "NPP"


def _valid_values(data: npt.NDArray[np.floating[Any]]) -> npt.NDArray[np.floating[Any]]:
    """Return the 1-D array of cells that are neither masked nor NaN/inf."""
    return np.ma.masked_invalid(data).compressed()


class ResultMetadata(BaseModel):
    """Metadata attached to every NPP grid.

    Uses Pydantic (not dataclass) for JSON serialization at the export
    boundary.

    Attributes:
        band_name: Logical band label of the grid, always ``"NPP"``.
        index: Position of the frame in its batch (``None`` for single frames).
        system_index: ``index`` as a string, for ordering and retrieval.
        shape: Grid shape ``[height, width]``.
        dtype: Numpy dtype name of the grid.
        topt: Optimal growth temperature used (``None`` if not a scalar).
        luemax: Maximum light-use efficiency used (``None`` if not a scalar).
        fpar_clamped: Whether FPAR was clipped to ``[0, 1]``.
        valid_pixel_count: Number of cells that are not NaN, inf or masked.

    Example:
        >>> meta = ResultMetadata(index=2, system_index="2")
        >>> meta.band_name
        'NPP'
    """

    band_name: str = NPP_BAND_NAME
    index: int | None = None
    system_index: str | None = None
    shape: list[int] = Field(default_factory=list)
    dtype: str = ""
    topt: float | None = None
    luemax: float | None = None
    fpar_clamped: bool = False
    valid_pixel_count: int = 0


@dataclass
class NPPResult:
    """One Net Primary Productivity grid.

    Dataclass (not Pydantic) because the numpy array is the payload.

    Attributes:
        data: NPP grid, same shape as the input grids.
        index: Position within a batch, ``None`` for a single-frame call.
        metadata: Pydantic model describing the grid and the constants used.

    Example:
        >>> result = NPPResult(data=np.array([[2.5, np.nan]]))
        >>> result.mean_npp
        2.5
    """

    data: npt.NDArray[np.floating[Any]]
    index: int | None = None
    metadata: ResultMetadata = field(default_factory=ResultMetadata)

    @property
    def shape(self) -> tuple[int, ...]:
        return tuple(self.data.shape)

    @property
    def mean_npp(self) -> float:
        """Spatial mean over valid cells (NaN if there are none)."""
        valid = _valid_values(self.data)
        if valid.size == 0:
            return float("nan")
        return float(valid.mean())

    def __repr__(self) -> str:
        """Return a summary without the raw array."""
        parts = [f"shape={self.shape}"]
        if self.index is not None:
            parts.append(f"index={self.index}")
        mean = self.mean_npp
        parts.append("mean_npp=N/A" if math.isnan(mean) else f"mean_npp={mean:.3f}")
        parts.append(f"valid_pixels={self.metadata.valid_pixel_count}")
        return f"{type(self).__name__}({', '.join(parts)})"

    def _summary_row(self) -> dict[str, Any]:
        valid = _valid_values(self.data)
        row: dict[str, Any] = {
            "index": self.index,
            "system_index": self.metadata.system_index,
            "band_name": self.metadata.band_name,
            "height": self.data.shape[0] if self.data.ndim >= 1 else None,
            "width": self.data.shape[1] if self.data.ndim >= 2 else None,
            "valid_pixel_count": int(valid.size),
            "mean_npp": float(valid.mean()) if valid.size else float("nan"),
            "min_npp": float(valid.min()) if valid.size else float("nan"),
            "max_npp": float(valid.max()) if valid.size else float("nan"),
            "topt": self.metadata.topt,
            "luemax": self.metadata.luemax,
        }
        return row

    def to_dataframe(self) -> pd.DataFrame:
        """Export a one-row summary of the grid to a pandas DataFrame.

        Returns:
            DataFrame with shape, valid pixel count, NPP statistics and
            the constants used.
        """
        import pandas as pd

        return pd.DataFrame([self._summary_row()])


@dataclass
class NPPSeriesResult:
    """NPP grids produced by a batch call, in input order.

    Frame ``i`` was computed from position ``i`` of every input sequence
    and carries ``index == i``.

    Attributes:
        frames: One ``NPPResult`` per input position.

    Example:
        >>> series = NPPSeriesResult(frames=[NPPResult(np.ones((2, 2)), index=0)])
        >>> len(series)
        1
    """

    frames: list[NPPResult] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.frames)

    def __getitem__(self, i: int) -> NPPResult:
        return self.frames[i]

    def __iter__(self) -> Iterator[NPPResult]:
        return iter(self.frames)

    def __repr__(self) -> str:
        shape = self.frames[0].shape if self.frames else ()
        return f"{type(self).__name__}(frames={len(self.frames)}, shape={shape})"

    def to_array(self) -> npt.NDArray[np.floating[Any]]:
        """Stack frames into one ``(frames, height, width)`` array.

        Masked frames produce a masked array.

        Raises:
            ValueError: If the series is empty.
        """
        if not self.frames:
            msg = "Cannot stack an empty NPP series"
            raise ValueError(msg)
        grids = [frame.data for frame in self.frames]
        if any(isinstance(g, np.ma.MaskedArray) for g in grids):
            return np.ma.stack(grids)
        return np.stack(grids)

    def to_dataframe(self) -> pd.DataFrame:
        """Export one summary row per frame, ordered by index."""
        import pandas as pd

        return pd.DataFrame([frame._summary_row() for frame in self.frames])
