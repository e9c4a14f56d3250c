"""
Pytest configuration and shared fixtures for the net-worth forecast tests.
"""

import os
from unittest.mock import patch

import pytest

from networth_forecast.config import reset_global_settings
from networth_forecast.models.profile import FinancialProfile, MonthlyExpenses


@pytest.fixture
def sample_expenses():
    """Monthly expenses totalling 3000."""
    return MonthlyExpenses(
        housing=1200,
        food=600,
        transportation=350,
        entertainment=400,
        utilities=200,
        other=250,
    )


@pytest.fixture
def sample_profile(sample_expenses):
    """A household earning 4500 a month with 8000 of debt."""
    return FinancialProfile(
        monthly_income=4500,
        monthly_expenses=sample_expenses,
        current_savings=5000,
        current_debt=8000,
    )


@pytest.fixture
def debt_free_profile(sample_expenses):
    """The sample household with no debt."""
    return FinancialProfile(
        monthly_income=4500,
        monthly_expenses=sample_expenses,
        current_savings=5000,
        current_debt=0,
    )


@pytest.fixture
def financial_data():
    """The sample profile as a camelCase request payload."""
    return {
        "monthlyIncome": 4500,
        "monthlyExpenses": {
            "housing": 1200,
            "food": 600,
            "transportation": 350,
            "entertainment": 400,
            "utilities": 200,
            "other": 250,
        },
        "currentSavings": 5000,
        "currentDebt": 8000,
    }


@pytest.fixture
def app():
    """Flask app built from a clean testing environment."""
    from networth_forecast import create_app

    env = {"SECRET_KEY": "test-secret-key-123", "APP_ENV": "testing"}
    with patch.dict(os.environ, env, clear=True):
        reset_global_settings()
        yield create_app()
    reset_global_settings()


@pytest.fixture
def client(app):
    return app.test_client()
