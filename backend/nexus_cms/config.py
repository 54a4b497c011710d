import os
from dotenv import load_dotenv

load_dotenv()


def _bool(value, default=False):
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JWT
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    JWT_ACCESS_TOKEN_MINUTES = int(os.getenv("JWT_ACCESS_TOKEN_MINUTES", "60"))
    JWT_TOKEN_LOCATION = ["headers"]

    # Public URLs and storage
    APP_URL = os.getenv("APP_URL", "http://localhost:5000").rstrip("/")
    STORAGE_ROOT = os.getenv("STORAGE_ROOT", os.path.join("instance", "storage"))
    PUBLIC_MIRROR_ROOT = os.getenv(
        "PUBLIC_MIRROR_ROOT", os.path.join("instance", "public", "storage")
    )
    MAX_IMAGE_KB = int(os.getenv("MAX_IMAGE_KB", "4096"))
    MAX_DOCUMENT_KB = int(os.getenv("MAX_DOCUMENT_KB", "5120"))
    MAX_CONTENT_LENGTH = 64 * 1024 * 1024

    # Bootstrap principal (used by `flask seed` only)
    SUPER_ADMIN_EMAIL = os.getenv("SUPER_ADMIN_EMAIL", "admin@nexusengineering.com")
    SUPER_ADMIN_PASSWORD = os.getenv("SUPER_ADMIN_PASSWORD")

    # Mail
    MAIL_SERVER = os.getenv("MAIL_SERVER")
    MAIL_PORT = int(os.getenv("MAIL_PORT", "587"))
    MAIL_USERNAME = os.getenv("MAIL_USERNAME")
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD")
    MAIL_FROM = os.getenv("MAIL_FROM", "no-reply@nexusengineering.com")
    MAIL_USE_TLS = _bool(os.getenv("MAIL_USE_TLS"), True)
    APPLICATION_NOTIFY_EMAILS = [
        email.strip()
        for email in os.getenv("APPLICATION_NOTIFY_EMAILS", "").split(",")
        if email.strip()
    ]
    DASHBOARD_URL = os.getenv("DASHBOARD_URL", "http://localhost:3000")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///nexus_dev.db")


class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")


class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "test-secret"
    JWT_SECRET_KEY = "test-jwt-secret-with-enough-length-32b"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    APP_URL = "http://testserver"
    MAIL_SERVER = None
    LOG_LEVEL = "WARNING"


config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
