"""
Tests for the bundled historical index data.
"""

import logging
from datetime import datetime

import pytest
from pydantic import ValidationError

from networth_forecast.models.historical_data import (
    SP500,
    HistoricalDataError,
    IndexDataPoint,
    IndexDataSet,
    load_bundled_dataset,
    read_index_csv,
)


def _points(*closes):
    return [
        IndexDataPoint(date=datetime(2024, month, 1), close=close)
        for month, close in enumerate(closes, start=1)
    ]


class TestIndexDataSet:
    """Test IndexDataSet validation and derived series."""

    def test_sorts_points(self):
        """Test that points are stored oldest-first."""
        points = _points(100, 110, 121)
        dataset = IndexDataSet(index=SP500, data_points=list(reversed(points)))
        assert [p.close for p in dataset.data_points] == [100, 110, 121]

    def test_returns(self):
        """Test forward monthly returns."""
        dataset = IndexDataSet(index=SP500, data_points=_points(100, 110, 99))
        assert dataset.get_returns() == pytest.approx([0.10, -0.10])

    def test_requires_two_points(self):
        """Test that a single close cannot produce a return."""
        with pytest.raises(ValidationError, match="at least two"):
            IndexDataSet(index=SP500, data_points=_points(100))

    def test_rejects_duplicate_dates(self):
        """Test that two closes on one date are rejected."""
        point = IndexDataPoint(date=datetime(2024, 1, 1), close=100)
        with pytest.raises(ValidationError, match="Duplicate"):
            IndexDataSet(index=SP500, data_points=[point, point])

    def test_warns_on_gap(self, caplog):
        """Test that a multi-month gap is logged."""
        points = [
            IndexDataPoint(date=datetime(2024, 1, 1), close=100),
            IndexDataPoint(date=datetime(2024, 6, 1), close=105),
        ]
        with caplog.at_level(logging.WARNING):
            IndexDataSet(index=SP500, data_points=points)
        assert "Large gap" in caplog.text

    def test_non_positive_close_rejected(self):
        """Test that closes must be positive."""
        with pytest.raises(ValidationError):
            IndexDataPoint(date=datetime(2024, 1, 1), close=0)

    def test_statistics(self):
        """Test summary statistics."""
        dataset = IndexDataSet(index=SP500, data_points=_points(100, 110, 99))
        stats = dataset.get_statistics()
        assert stats["num_observations"] == 2
        assert stats["mean_return"] == pytest.approx(0.0)
        assert stats["total_return"] == pytest.approx(-0.01)


class TestBundledData:
    """Test loading the bundled CSV files."""

    @pytest.mark.parametrize("name", ["sp500", "nasdaq"])
    def test_bundled_datasets_load(self, name):
        """Test that each bundled dataset has twelve monthly closes."""
        dataset = load_bundled_dataset(name)
        assert dataset.index.name == name
        assert len(dataset.data_points) == 12
        assert len(dataset.get_returns()) == 11

    def test_bundled_data_is_chronological(self):
        """Test that bundled closes run oldest-first."""
        dataset = load_bundled_dataset("sp500")
        dates = [p.date for p in dataset.data_points]
        assert dates == sorted(dates)
        assert dataset.data_points[0].close == pytest.approx(6032.38)

    def test_unknown_dataset(self):
        """Test that unknown dataset names are rejected."""
        with pytest.raises(HistoricalDataError, match="No bundled dataset"):
            load_bundled_dataset("dow")

    def test_missing_file(self, tmp_path):
        """Test reading a file that does not exist."""
        with pytest.raises(HistoricalDataError, match="not found"):
            read_index_csv(SP500, tmp_path / "missing.csv")

    def test_malformed_row(self, tmp_path):
        """Test that malformed rows raise HistoricalDataError."""
        csv_path = tmp_path / "bad.csv"
        csv_path.write_text("date,close\n2024-01-01,abc\n")
        with pytest.raises(HistoricalDataError, match="Malformed row"):
            read_index_csv(SP500, csv_path)

    def test_reads_custom_file(self, tmp_path):
        """Test reading a caller-supplied CSV."""
        csv_path = tmp_path / "custom.csv"
        csv_path.write_text("date,close\n2024-01-01,100\n2024-02-01,102\n")
        dataset = read_index_csv(SP500, csv_path)
        assert dataset.get_returns() == pytest.approx([0.02])
