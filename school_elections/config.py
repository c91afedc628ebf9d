# school_elections/config.py

import os


def _database_url():
    url = os.environ.get('DATABASE_URL', 'sqlite:///elections.db')
    # Render/Heroku style URLs use the old scheme name
    if url.startswith('postgres://'):
        url = 'postgresql://' + url[len('postgres://'):]
    return url


def _engine_options(url):
    if url.startswith('postgresql') and os.environ.get('APP_ENV') != 'development':
        return {'connect_args': {'sslmode': 'require'}, 'pool_pre_ping': True}
    return {}


def _optional_float(name):
    value = os.environ.get(name)
    return float(value) if value else None


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'change-me-in-production')

    SQLALCHEMY_DATABASE_URI = _database_url()
    SQLALCHEMY_ENGINE_OPTIONS = _engine_options(SQLALCHEMY_DATABASE_URI)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    ADMIN_CODE = os.environ.get('ADMIN_CODE', 'ADMIN-2025')
    AUDIT_SECRET_KEY = os.environ.get('AUDIT_SECRET_KEY')
    AUDIT_LOG_DIR = os.environ.get('AUDIT_LOG_DIR', 'logs')
    AUDIT_SIGNING_KEY = os.environ.get('AUDIT_SIGNING_KEY')

    # None keeps station keys valid forever
    MESA_SESSION_TTL_HOURS = _optional_float('MESA_SESSION_TTL_HOURS')
    LEDGER_LIMIT = 100

    RATELIMIT_STORAGE_URI = os.environ.get('REDIS_URL', 'memory://')
    RATELIMIT_DEFAULT = os.environ.get('RATELIMIT_DEFAULT', '10000/hour')
    VOTER_RATELIMIT = os.environ.get('VOTER_RATELIMIT', '30/minute')

    PUBLIC_DIR = os.environ.get('PUBLIC_DIR', 'public')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
