import os
from dotenv import load_dotenv
load_dotenv()

class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///reviewdesk.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    # JSON API: forms are validated without CSRF tokens
    WTF_CSRF_ENABLED = False
    BATCH_BADGES_MAX_IDS = int(os.getenv("BATCH_BADGES_MAX_IDS", "100"))
    COMMENT_MAX_LENGTH = int(os.getenv("COMMENT_MAX_LENGTH", "2000"))
    APP_BASE_PATH = os.getenv("APP_BASE_PATH", "/dashboard/applicants")


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    # no queue: fan-out jobs run in-process
    REDIS_URL = None
    LOG_LEVEL = "DEBUG"
