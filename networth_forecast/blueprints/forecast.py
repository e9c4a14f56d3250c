"""
Forecast blueprint.

Accepts a household's financial data plus optional scenario changes and
returns status-quo and what-if net-worth timelines.
"""

from typing import Any

from flask import Blueprint, current_app, jsonify, request

from networth_forecast.config import get_global_settings
from networth_forecast.models.profile import MODEL_VARIANTS, InvalidInputError
from networth_forecast.services.forecast_service import ForecastService

forecast_bp = Blueprint("forecast", __name__, url_prefix="/api")


def _error(message: str, code: str, status: int, details: Any = None) -> Any:
    body = {"error": message, "code": code, "success": False}
    if details is not None:
        body["details"] = details
    return jsonify(body), status


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@forecast_bp.route("/forecast", methods=["POST"])
def create_forecast() -> Any:
    """Run a forecast.

    Request body (JSON):
        financialData: Household profile
        scenarioChanges: Optional list of what-if changes
        months: Optional horizon, clamped to the configured range
        model: Optional model variant
        seed: Optional non-negative integer seed

    Returns:
        JSON response with both timelines, avatar states and insights
    """
    settings = get_global_settings()
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    financial_data = data.get("financialData")
    if not financial_data:
        return _error(
            "Financial data is required", "MISSING_FINANCIAL_DATA", 400
        )

    model = data.get("model") or settings.default_model
    if model not in MODEL_VARIANTS:
        return _error(
            f"Unknown model {model!r}", "INVALID_MODEL", 400, list(MODEL_VARIANTS)
        )

    months = data.get("months")
    if months is None:
        months = settings.default_timeline_months
    elif not _is_int(months):
        return _error("months must be an integer", "INVALID_FINANCIAL_DATA", 400)
    months = min(max(months, 1), settings.max_timeline_months)

    seed = data.get("seed")
    if seed is not None and (not _is_int(seed) or seed < 0):
        return _error(
            "seed must be a non-negative integer", "INVALID_FINANCIAL_DATA", 400
        )

    try:
        result = ForecastService().run_forecast(
            financial_data,
            data.get("scenarioChanges"),
            months=months,
            model=model,
            seed=seed,
        )
    except InvalidInputError as e:
        return _error("Invalid financial data", "INVALID_FINANCIAL_DATA", 400, str(e))
    except Exception as e:
        current_app.logger.error(f"Forecast failed: {str(e)}")
        return _error("Failed to generate forecast", "FORECAST_ERROR", 500, str(e))

    body = result.model_dump(mode="json", by_alias=True)
    body["success"] = True
    return jsonify(body)
