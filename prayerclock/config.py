import os
from dotenv import load_dotenv

# Load .env file
dotenv_path = os.path.join(os.path.dirname(os.path.dirname(__file__)), '.env')
if os.path.exists(dotenv_path):
    load_dotenv(dotenv_path)
else:
    print("Warning: .env file not found. Using defaults or environment variables.")

class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'a_default_fallback_secret_key_for_development_only'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', "INFO")

    # Sentry Configuration
    SENTRY_DSN = os.environ.get('SENTRY_DSN')

    # Rate limiting (Flask-Limiter)
    RATELIMIT_ENABLED = True
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', "memory://")
    RATELIMIT_DEFAULT = os.environ.get('RATELIMIT_DEFAULT', "200 per day;50 per hour")

    # Prayer Time API Configuration
    PRAYER_API_ADAPTER = os.environ.get('PRAYER_API_ADAPTER') or "AlAdhanAdapter"
    PRAYER_API_BASE_URL = os.environ.get('PRAYER_API_BASE_URL') or "https://api.aladhan.com/v1"
    PRAYER_API_KEY = os.environ.get('PRAYER_API_KEY')
    PRAYER_API_TIMEOUT = float(os.environ.get('PRAYER_API_TIMEOUT', 10))
    # Independent upstream fetches (e.g. source city + reference city) run in parallel.
    UPSTREAM_MAX_WORKERS = int(os.environ.get('UPSTREAM_MAX_WORKERS', 2))

    # Default Calculation Method (AlAdhan method id, 2 = ISNA)
    DEFAULT_CALCULATION_METHOD_ID = int(os.environ.get('DEFAULT_CALCULATION_METHOD_ID', 2))

    # Reference zone: cities outside it also get the designated prayer on its clock.
    REFERENCE_TIMEZONE = os.environ.get('REFERENCE_TIMEZONE', "Asia/Karachi")
    REFERENCE_LABEL = os.environ.get('REFERENCE_LABEL', "Pakistan")
    DESIGNATED_PRAYER = os.environ.get('DESIGNATED_PRAYER', "Fajr")

class DevelopmentConfig(Config):
    FLASK_ENV = 'development'
    DEBUG = True
    LOG_LEVEL = "DEBUG"

class ProductionConfig(Config):
    FLASK_ENV = 'production'
    DEBUG = False

    # Ensure critical secrets are set in production
    if os.environ.get('FLASK_CONFIG') == 'production' and Config.SECRET_KEY == 'a_default_fallback_secret_key_for_development_only':
        raise ValueError("CRITICAL: SECRET_KEY not found in environment!")

class TestingConfig(Config):
    TESTING = True
    RATELIMIT_ENABLED = False # Disable rate limiting for tests
    SECRET_KEY = 'test-secret-key'
    PRAYER_API_BASE_URL = "https://api.aladhan.test/v1"
    REFERENCE_TIMEZONE = "Asia/Karachi"
    REFERENCE_LABEL = "Pakistan"
    DESIGNATED_PRAYER = "Fajr"
    DEFAULT_CALCULATION_METHOD_ID = 2

config_by_name = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
