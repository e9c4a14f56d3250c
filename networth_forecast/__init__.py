"""Net-worth forecast Flask application factory."""

from typing import Optional

from flask import Flask

from networth_forecast.config import get_global_settings


def create_app(config_name: Optional[str] = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config_name: Configuration name (development, testing, production);
            overrides APP_ENV when given

    Returns:
        Flask: Configured Flask application instance
    """
    app = Flask(__name__)

    settings = get_global_settings()
    app_env = config_name or settings.app_env
    app.config["SECRET_KEY"] = settings.secret_key
    app.config["ENV"] = settings.flask_env
    app.config["DEBUG"] = app_env == "development"
    app.config["TESTING"] = app_env == "testing"
    app.logger.setLevel(settings.log_level)

    from networth_forecast.blueprints.forecast import forecast_bp
    from networth_forecast.blueprints.health import health_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(forecast_bp)

    return app
