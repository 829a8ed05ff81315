"""Tests for the NPP result object model."""

from __future__ import annotations

import math

import numpy as np
import numpy.testing as npt
import pytest

from nppmodel.results import NPPResult, NPPSeriesResult, ResultMetadata


def _frame(value: float, index: int | None = None) -> NPPResult:
    data = np.array([[value, value], [np.nan, value]])
    return NPPResult(
        data=data,
        index=index,
        metadata=ResultMetadata(
            index=index,
            system_index=None if index is None else str(index),
            shape=[2, 2],
            dtype="float64",
            topt=21.66,
            luemax=0.72,
            valid_pixel_count=3,
        ),
    )


@pytest.mark.unit
class TestResultMetadata:
    """Pydantic metadata model."""

    def test_defaults(self) -> None:
        meta = ResultMetadata()
        assert meta.band_name == "NPP"
        assert meta.index is None
        assert meta.shape == []
        assert meta.fpar_clamped is False

    def test_json_round_trip(self) -> None:
        meta = _frame(1.0, index=4).metadata
        restored = ResultMetadata.model_validate_json(meta.model_dump_json())
        assert restored == meta


@pytest.mark.unit
class TestNPPResult:
    """Single NPP grid result."""

    def test_mean_ignores_nan(self) -> None:
        assert _frame(2.5).mean_npp == 2.5

    def test_mean_ignores_masked(self) -> None:
        data = np.ma.masked_array([[1.0, 100.0]], mask=[[False, True]])
        assert NPPResult(data=data).mean_npp == 1.0

    def test_mean_nan_without_valid_cells(self) -> None:
        assert math.isnan(NPPResult(data=np.full((2, 2), np.nan)).mean_npp)

    def test_shape(self) -> None:
        assert _frame(1.0).shape == (2, 2)

    def test_repr_hides_array(self) -> None:
        text = repr(_frame(2.5, index=1))
        assert text.startswith("NPPResult(")
        assert "index=1" in text
        assert "mean_npp=2.500" in text
        assert "[[" not in text

    def test_repr_without_valid_data(self) -> None:
        assert "mean_npp=N/A" in repr(NPPResult(data=np.full((1, 1), np.nan)))

    def test_to_dataframe(self) -> None:
        df = _frame(2.5, index=0).to_dataframe()
        assert len(df) == 1
        row = df.iloc[0]
        assert row["band_name"] == "NPP"
        assert row["height"] == 2
        assert row["width"] == 2
        assert row["valid_pixel_count"] == 3
        assert row["mean_npp"] == pytest.approx(2.5)
        assert row["topt"] == pytest.approx(21.66)


@pytest.mark.unit
class TestNPPSeriesResult:
    """Batch result container."""

    def test_sequence_protocol(self) -> None:
        series = NPPSeriesResult(frames=[_frame(1.0, 0), _frame(2.0, 1)])
        assert len(series) == 2
        assert series[1].index == 1
        assert [f.index for f in series] == [0, 1]

    def test_to_array(self) -> None:
        series = NPPSeriesResult(frames=[_frame(1.0, 0), _frame(2.0, 1)])
        stacked = series.to_array()
        assert stacked.shape == (2, 2, 2)
        npt.assert_array_equal(stacked[1, 0], [2.0, 2.0])

    def test_to_array_empty_raises(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            NPPSeriesResult().to_array()

    def test_to_dataframe_one_row_per_frame(self) -> None:
        series = NPPSeriesResult(frames=[_frame(1.0, 0), _frame(2.0, 1), _frame(3.0, 2)])
        df = series.to_dataframe()
        assert list(df["index"]) == [0, 1, 2]
        assert list(df["system_index"]) == ["0", "1", "2"]
        npt.assert_allclose(df["mean_npp"], [1.0, 2.0, 3.0])

    def test_repr(self) -> None:
        series = NPPSeriesResult(frames=[_frame(1.0, 0)])
        assert repr(series) == "NPPSeriesResult(frames=1, shape=(2, 2))"
