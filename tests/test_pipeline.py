"""End-to-end tests: config file to batch result export."""

from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import numpy.testing as npt
import pytest

import nppmodel


@pytest.mark.integration
def test_config_file_drives_batch(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"max_workers": 2, "dtype": "float32"}))
    cfg = nppmodel.load_config(path)

    rng = np.random.default_rng(11)
    shape = (4, 6, 6)
    ndvi = rng.uniform(0.2, 0.9, shape)
    lst = rng.uniform(15.0, 30.0, shape)
    sol = rng.uniform(300.0, 400.0, shape)
    we = rng.uniform(0.5, 1.0, shape)

    series = nppmodel.compute_batch(ndvi, lst, sol, we, 21.66, 0.72, config=cfg)
    assert isinstance(series, nppmodel.NPPSeriesResult)

    stacked = series.to_array()
    assert stacked.shape == shape
    assert stacked.dtype == np.float32

    expected = nppmodel.compute_npp(ndvi, lst, sol, we, 21.66, 0.72, dtype=np.float32)
    npt.assert_allclose(stacked, expected, rtol=1e-6)

    df = series.to_dataframe()
    assert list(df["index"]) == [0, 1, 2, 3]
    assert (df["valid_pixel_count"] == 36).all()


@pytest.mark.integration
def test_diagnostic_and_result_are_exclusive() -> None:
    grids = [np.ones((2, 2))] * 2
    outcome = nppmodel.compute_batch(grids, grids, grids, grids[:1], 21.66, 0.72)
    assert isinstance(outcome, nppmodel.Diagnostic)
    assert not isinstance(outcome, nppmodel.NPPSeriesResult)

    outcome = nppmodel.compute_batch(grids, grids, grids, grids, 21.66, 0.72)
    assert isinstance(outcome, nppmodel.NPPSeriesResult)
    assert len(outcome) == 2
