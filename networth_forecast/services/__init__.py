"""Application services."""

from .forecast_service import ForecastResult, ForecastService

__all__ = ["ForecastResult", "ForecastService"]
