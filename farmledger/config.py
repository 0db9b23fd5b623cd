import os
from datetime import timedelta


class Config:
    # Secret key for sessions / JWT - REQUIRED
    SECRET_KEY = os.environ.get("SECRET_KEY")

    # Database connection - REQUIRED
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL")

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JWT Configuration
    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY", SECRET_KEY)
    JWT_TOKEN_LOCATION = ["headers", "cookies"]
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.environ.get("JWT_ACCESS_HOURS", 12)))
    JWT_COOKIE_SECURE = os.environ.get("JWT_COOKIE_SECURE", "True").lower() == "true"
    JWT_COOKIE_CSRF_PROTECT = True

    # Uploaded parchi files
    UPLOAD_FOLDER = os.environ.get("UPLOAD_FOLDER", "uploads")
    PUBLIC_STORAGE_URL = os.environ.get("PUBLIC_STORAGE_URL", "/storage")
    MAX_CONTENT_LENGTH = int(os.environ.get("MAX_UPLOAD_MB", 16)) * 1024 * 1024

    # Sign-up confirmation
    FRONTEND_BASE_URL = os.environ.get("FRONTEND_BASE_URL", "http://127.0.0.1:5000")
    REQUIRE_EMAIL_CONFIRMATION = os.environ.get("REQUIRE_EMAIL_CONFIRMATION", "True").lower() == "true"
    MAIL_SERVER = os.environ.get("MAIL_SERVER", "localhost")
    MAIL_PORT = int(os.environ.get("MAIL_PORT", 25))
    MAIL_USE_TLS = os.environ.get("MAIL_USE_TLS", "False").lower() == "true"
    MAIL_USERNAME = os.environ.get("MAIL_USERNAME")
    MAIL_PASSWORD = os.environ.get("MAIL_PASSWORD")
    MAIL_DEFAULT_SENDER = os.environ.get("MAIL_DEFAULT_SENDER", "no-reply@farmledger.local")
    MAIL_SUPPRESS_SEND = os.environ.get("MAIL_SUPPRESS_SEND", "False").lower() == "true"

    CORS_ALLOWED_ORIGINS = os.environ.get("CORS_ALLOWED_ORIGINS", "")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Flask Configuration
    FLASK_ENV = os.environ.get("FLASK_ENV", "production")
    FLASK_DEBUG = os.environ.get("FLASK_DEBUG", "False").lower() == "true"


class DevelopmentConfig(Config):
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY", SECRET_KEY)
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///farmledger.db")
    JWT_COOKIE_SECURE = False
    REQUIRE_EMAIL_CONFIRMATION = False
    MAIL_SUPPRESS_SEND = True


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    JWT_SECRET_KEY = "test-jwt-secret-with-enough-length-for-hs256"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    JWT_COOKIE_SECURE = False
    JWT_COOKIE_CSRF_PROTECT = False
    MAIL_SUPPRESS_SEND = True
    LOG_LEVEL = "WARNING"


def validate_config(config):
    """Refuse to start a production app without its secrets."""
    if not config.get("SECRET_KEY"):
        raise ValueError("SECRET_KEY environment variable must be set")
    if not config.get("SQLALCHEMY_DATABASE_URI"):
        raise ValueError("DATABASE_URL environment variable must be set")
    if not config.get("JWT_SECRET_KEY"):
        config["JWT_SECRET_KEY"] = config["SECRET_KEY"]
