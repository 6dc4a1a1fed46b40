import os
from dotenv import load_dotenv

load_dotenv()


def _database_url() -> str:
    url = os.getenv('DATABASE_URL') or 'sqlite:///opsportal.db'
    # Hosted Postgres providers still hand out the legacy scheme
    if url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ('1', 'true', 'yes')


class Config:
    # Provide a safe development fallback to avoid 500s when SECRET_KEY is missing.
    SECRET_KEY = os.getenv('SECRET_KEY') or 'dev-secret-key-change-me'
    SQLALCHEMY_DATABASE_URI = _database_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {'pool_pre_ping': True}

    # Admin session cookie
    ADMIN_SESSION_COOKIE = os.getenv('ADMIN_SESSION_COOKIE', 'admin_session')
    ADMIN_SESSION_MAX_AGE = int(os.getenv('ADMIN_SESSION_MAX_AGE', 60 * 60 * 24 * 7))
    SESSION_COOKIE_SECURE = _flag('SESSION_COOKIE_SECURE', 'false')
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Strict'

    # Embedded files travel as base64 inside JSON bodies
    MAX_CONTENT_LENGTH = int(os.getenv('MAX_CONTENT_LENGTH', 32 * 1024 * 1024))

    # Reject schedules whose week does not match the server calendar
    ENFORCE_SCHEDULE_WEEK = _flag('ENFORCE_SCHEDULE_WEEK', 'true')

    # Video listing API
    YOUTUBE_API_BASE_URL = os.getenv('YOUTUBE_API_BASE_URL', 'https://www.googleapis.com/youtube/v3')
    YOUTUBE_API_TIMEOUT = float(os.getenv('YOUTUBE_API_TIMEOUT', 20))
    YOUTUBE_MAX_RESULTS = int(os.getenv('YOUTUBE_MAX_RESULTS', 50))

    RATELIMIT_STORAGE_URI = os.getenv('REDIS_URL', 'memory://')
    RATELIMIT_ENABLED = _flag('RATELIMIT_ENABLED', 'true')

    # Development safety net when migrations have not been applied
    AUTO_CREATE_TABLES = _flag('AUTO_CREATE_TABLES', 'false')

    DEFAULT_ADMIN_EMAIL = os.getenv('DEFAULT_ADMIN_EMAIL', 'admin@rsrg.com')
    DEFAULT_ADMIN_PASSWORD = os.getenv('DEFAULT_ADMIN_PASSWORD')


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    RATELIMIT_ENABLED = False
    AUTO_CREATE_TABLES = False
    YOUTUBE_API_BASE_URL = 'https://youtube.test/v3'
