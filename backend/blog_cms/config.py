import os
from dotenv import load_dotenv

load_dotenv()


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    EXPOSE_ERRORS = False

    # Media storage
    STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "local")  # local | s3
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads")
    MEDIA_BASE_URL = os.getenv("MEDIA_BASE_URL", "/uploads")
    S3_ENDPOINT_URL = os.getenv("S3_ENDPOINT_URL")
    S3_REGION = os.getenv("S3_REGION", "auto")
    S3_BUCKET = os.getenv("S3_BUCKET")
    S3_ACCESS_KEY = os.getenv("S3_ACCESS_KEY")
    S3_SECRET_KEY = os.getenv("S3_SECRET_KEY")
    CDN_BASE_URL = os.getenv("CDN_BASE_URL")
    MAX_CONTENT_LENGTH = 10 * 1024 * 1024

    # Blog
    NEWS_CATEGORY_ID = os.getenv(
        "NEWS_CATEGORY_ID", "278942db-b226-4c90-a0bc-79f2e35ead94"
    )
    MAX_BULK_POST_DELETE = 50


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    EXPOSE_ERRORS = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///blog_cms.db")


class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    LOG_LEVEL = "WARNING"


class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")


config_by_name = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}
