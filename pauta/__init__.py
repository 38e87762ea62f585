from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_talisman import Talisman
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from config import config_dict
from logging.config import dictConfig
import os
import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration

# JSON API only, nothing is served from other origins
csp = {
    'default-src': ["'self'"],
    'object-src': ["'none'"],
    'base-uri': ["'self'"],
    'frame-ancestors': ["'none'"],
}


db = SQLAlchemy()
migrate = Migrate()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["1000 per hour"]
)


def create_app(config_name=None):
    env = config_name or os.getenv('FLASK_ENV', 'development')
    config_class = config_dict.get(env, config_dict['development'])

    dictConfig(config_class.LOGGING_CONFIG)

    if env == 'production' and config_class.SENTRY_DSN:
        sentry_sdk.init(
            dsn=config_class.SENTRY_DSN,
            integrations=[FlaskIntegration()],
            traces_sample_rate=float(os.getenv('SENTRY_TRACES_SAMPLE_RATE', '0.2')),
        )

    app = Flask(__name__)
    app.config.from_object(config_class)

    # Flask-Limiter renamed the storage key between major versions
    app.config.setdefault('RATELIMIT_STORAGE_URI', app.config.get('RATELIMIT_STORAGE_URL', 'memory://'))

    Talisman(
        app,
        force_https=env == 'production',
        session_cookie_secure=env == 'production',
        content_security_policy=csp,
    )

    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)

    if app.config['RATELIMIT_STORAGE_URI'].startswith('memory://') and env == 'production':
        app.logger.warning("Rate limiter using memory storage in production - limits are not shared across instances")

    # Models must be imported before create_all()/migrations see the metadata
    from pauta import models  # noqa: F401

    from pauta.api import init_api
    init_api(app)

    from pauta.commands import init_commands
    init_commands(app)

    app.logger.info(f"Pauta app created (env={env})")
    return app
