import os


class Config:
    # Secret key for sessions
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-prod")

    # Database connection
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///rentledger.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    API_PREFIX = "/api"

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Comma-separated list, appended to the local dev origins
    CORS_ALLOWED_ORIGINS = os.getenv("CORS_ALLOWED_ORIGINS", "")


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
