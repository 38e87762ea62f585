from dotenv import load_dotenv
import os

load_dotenv()


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev')
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL')

    if not SQLALCHEMY_DATABASE_URI:
        raise ValueError("DATABASE_URL environment variable not set")

    # Heroku-style URLs are rejected by SQLAlchemy 1.4+
    if SQLALCHEMY_DATABASE_URI.startswith('postgres://'):
        SQLALCHEMY_DATABASE_URI = SQLALCHEMY_DATABASE_URI.replace('postgres://', 'postgresql://', 1)

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 300,
    }

    LOGGING_CONFIG = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'default': {
                'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'default',
                'level': os.getenv('LOG_LEVEL', 'INFO'),
            },
        },
        'root': {
            'handlers': ['console'],
            'level': os.getenv('LOG_LEVEL', 'INFO'),
        }
    }

    # Rate limiting (memory:// is per-process, use Redis in production)
    RATELIMIT_STORAGE_URL = os.getenv('RATELIMIT_STORAGE_URL') or os.getenv('REDIS_URL') or 'memory://'

    # Hot topics. Lookback and candidate cap bound the scoring cost per request.
    HOT_TOPICS_LOOKBACK_DAYS = int(os.getenv('HOT_TOPICS_LOOKBACK_DAYS', '45'))
    HOT_TOPICS_MAX_CANDIDATES = int(os.getenv('HOT_TOPICS_MAX_CANDIDATES', '80'))
    HOT_TOPICS_DEFAULT_LIMIT = int(os.getenv('HOT_TOPICS_DEFAULT_LIMIT', '5'))

    # Engagement events
    ENGAGEMENT_RATE_LIMIT = os.getenv('ENGAGEMENT_RATE_LIMIT', '120 per minute')

    # Camara dos Deputados open data API
    CAMARA_API_BASE = os.getenv('CAMARA_API_BASE', 'https://dadosabertos.camara.leg.br/api/v2')
    CAMARA_API_USER_AGENT = os.getenv(
        'CAMARA_API_USER_AGENT',
        'pauta/0.1 (+sync@pauta.local)'
    )
    CAMARA_REQUEST_TIMEOUT = int(os.getenv('CAMARA_REQUEST_TIMEOUT', '15'))  # seconds
    SYNC_WINDOW_DAYS = int(os.getenv('SYNC_WINDOW_DAYS', '10'))

    # Shared secret for the scheduler-triggered sync endpoint
    CRON_SECRET = os.getenv('CRON_SECRET')

    SENTRY_DSN = os.getenv('SENTRY_DSN')


class DevelopmentConfig(Config):
    FLASK_ENV = 'development'
    DEBUG = True
    SQLALCHEMY_ECHO = os.getenv('SQLALCHEMY_ECHO', 'False').lower() == 'true'


class ProductionConfig(Config):
    FLASK_ENV = 'production'
    DEBUG = False
    SESSION_COOKIE_SECURE = True
    PREFERRED_URL_SCHEME = 'https'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 300,
        'pool_size': 5,
        'max_overflow': 10,
        'pool_timeout': 30,
    }


class TestingConfig(Config):
    FLASK_ENV = 'testing'
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {'pool_pre_ping': True}
    RATELIMIT_ENABLED = False
    RATELIMIT_STORAGE_URL = 'memory://'


config_dict = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
}
