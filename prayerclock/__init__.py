import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration

# Import extensions from the central extensions file
from .extensions import api, cors, limiter
import logging
from flask import Flask

from .services.timetable.models import PRAYER_NAMES
from .services.timetable.errors import UnknownTimezone
from .services.timetable.zones import resolve_timezone

def create_app(config_name):
    """
    Flask Application Factory function.
    """
    app = Flask(__name__,
                instance_relative_config=False)

    # 1. Load Config
    from .config import config_by_name
    config_obj = config_by_name.get(config_name, config_by_name['default'])
    app.config.from_object(config_obj)
    app.logger.info(f"App configured with: {config_obj.__name__}")

    # Flask-Smorest API documentation configuration
    app.config["API_TITLE"] = "PrayerClock API"
    app.config["API_VERSION"] = "v1"
    app.config["OPENAPI_VERSION"] = "3.0.2"
    app.config["OPENAPI_URL_PREFIX"] = "/api/docs"
    app.config["OPENAPI_SWAGGER_UI_PATH"] = "/swagger-ui"
    app.config["OPENAPI_SWAGGER_UI_URL"] = "https://cdn.jsdelivr.net/npm/swagger-ui-dist/"

    # 2. Sentry SDK initialization - for error and performance tracking
    if app.config.get('SENTRY_DSN'):
        sentry_sdk.init(
            dsn=app.config['SENTRY_DSN'],
            integrations=[FlaskIntegration()],
            send_default_pii=False,
            traces_sample_rate=1.0
        )
        app.logger.info("Sentry initialized for error tracking.")

    # 3. Check the reference zone settings; a wrong value must fail loudly, not at request time
    try:
        resolve_timezone(app.config.get('REFERENCE_TIMEZONE'), field="REFERENCE_TIMEZONE")
    except UnknownTimezone as e:
        raise ValueError(f"CRITICAL: REFERENCE_TIMEZONE is unusable. {e.message}") from e
    if app.config.get('DESIGNATED_PRAYER') not in PRAYER_NAMES:
        raise ValueError(f"CRITICAL: DESIGNATED_PRAYER must be one of {', '.join(PRAYER_NAMES)}.")

    # 4. Initialize Extensions
    cors.init_app(app, resources={r"/api/*": {"origins": "*"}})
    limiter.init_app(app)
    api.init_app(app)

    # 5. Register Blueprints in app context
    with app.app_context():
        from .routes.api_routes import api_bp

        api.register_blueprint(api_bp)

        # 6. Set up Logging
        log_level_str = app.config.get('LOG_LEVEL', 'INFO').upper()
        log_level = getattr(logging, log_level_str, logging.INFO)
        app.logger.setLevel(log_level)

        app.logger.info(f"Application initialized with environment: {app.config.get('FLASK_ENV')}, Debug: {app.config.get('DEBUG')}")

    # 7. Finally, return the app
    return app
