"""
Historical index data bundled with the projection engine.

This module loads the static monthly closing prices for the broad-market
indexes the market data provider blends, validates them, and derives the
monthly return series the provider replays before falling back to its
cyclical extrapolation model.

Bundled CSV files live in ``networth_forecast/data`` with ``date,close``
columns and are stored oldest-first (chronological order).
"""

import csv
import logging
from datetime import datetime
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class HistoricalDataError(Exception):
    """Raised when a bundled index dataset cannot be read."""


class IndexInfo(BaseModel):
    """Represents a market index with metadata."""

    name: str = Field(..., description="Index identifier (e.g., 'sp500')")
    symbol: str = Field(..., description="Ticker symbol for the index")
    filename: str = Field(..., description="Bundled CSV file name")
    description: Optional[str] = Field(None, description="Human-readable description")


class IndexDataPoint(BaseModel):
    """A single monthly close."""

    model_config = ConfigDict(frozen=True)

    date: datetime = Field(..., description="Date of the close")
    close: float = Field(..., gt=0, description="Closing level")


class IndexDataSet(BaseModel):
    """A chronological series of monthly closes for one index."""

    model_config = ConfigDict(frozen=True)

    index: IndexInfo = Field(..., description="Index information")
    data_points: List[IndexDataPoint] = Field(..., description="Monthly closes")

    @field_validator("data_points")
    @classmethod
    def validate_data_points(cls, v: List[IndexDataPoint]) -> List[IndexDataPoint]:
        """Validate that data points are sorted by date and have no gaps."""
        if len(v) < 2:
            raise ValueError("An index dataset needs at least two closes")

        v = sorted(v, key=lambda x: x.date)

        for i in range(1, len(v)):
            prev_date = v[i - 1].date
            curr_date = v[i].date

            if curr_date == prev_date:
                raise ValueError(f"Duplicate close for {curr_date.date()}")

            # Monthly data should never skip more than two months
            if (curr_date - prev_date).days > 62:
                logger.warning(
                    f"Large gap detected between {prev_date.date()} and {curr_date.date()}"
                )

        return v

    def get_returns(self) -> List[float]:
        """Monthly fractional returns, one per close after the first."""
        returns = []
        for i in range(1, len(self.data_points)):
            prev_close = self.data_points[i - 1].close
            curr_close = self.data_points[i].close
            returns.append((curr_close - prev_close) / prev_close)
        return returns

    def get_statistics(self) -> Dict[str, float]:
        """Calculate basic statistics for the dataset."""
        returns_array = np.array(self.get_returns())

        return {
            "mean_return": float(np.mean(returns_array)),
            "volatility": float(np.std(returns_array)),
            "min_return": float(np.min(returns_array)),
            "max_return": float(np.max(returns_array)),
            "total_return": float(
                self.data_points[-1].close / self.data_points[0].close - 1
            ),
            "num_observations": len(returns_array),
        }


SP500 = IndexInfo(
    name="sp500",
    symbol="^GSPC",
    filename="sp500_monthly.csv",
    description="S&P 500 monthly closes",
)

NASDAQ = IndexInfo(
    name="nasdaq",
    symbol="^IXIC",
    filename="nasdaq_monthly.csv",
    description="NASDAQ Composite monthly closes",
)


def read_index_csv(index: IndexInfo, csv_path: Path) -> IndexDataSet:
    """Read a ``date,close`` CSV file into a validated dataset."""
    if not csv_path.exists():
        raise HistoricalDataError(f"Index data file not found: {csv_path}")

    data_points = []
    with open(csv_path, "r", encoding="utf-8", newline="") as f:
        for row in csv.DictReader(f):
            try:
                data_points.append(
                    IndexDataPoint(
                        date=datetime.strptime(row["date"], "%Y-%m-%d"),
                        close=float(row["close"]),
                    )
                )
            except (KeyError, ValueError) as e:
                raise HistoricalDataError(
                    f"Malformed row in {csv_path.name}: {row}"
                ) from e

    return IndexDataSet(index=index, data_points=data_points)


@lru_cache(maxsize=None)
def load_bundled_dataset(name: str) -> IndexDataSet:
    """Load one of the bundled index datasets by name ('sp500' or 'nasdaq')."""
    indexes = {SP500.name: SP500, NASDAQ.name: NASDAQ}
    if name not in indexes:
        raise HistoricalDataError(f"No bundled dataset named {name!r}")

    index = indexes[name]
    dataset = read_index_csv(index, DATA_DIR / index.filename)
    logger.debug(
        f"Loaded {len(dataset.data_points)} closes for {index.name} "
        f"({dataset.data_points[0].date.date()} to {dataset.data_points[-1].date.date()})"
    )
    return dataset
