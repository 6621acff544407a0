"""
EventFinder - Application Factory and Initialization
"""
import logging
import sys

import structlog
from flask import Flask

from eventfinder.constants import BUILD_VERSION
from eventfinder.db import configure_db, init_db
from eventfinder.exceptions import register_exception_handlers
from eventfinder.metrics import init_metrics
from eventfinder.routes.events import create_events_blueprint
from eventfinder.routes.favorites import create_favorites_blueprint
from eventfinder.routes.spotify import create_spotify_blueprint
from eventfinder.routes.web import create_web_blueprint
from eventfinder.services.context import build_context
from eventfinder.settings import load_settings, require_valid_settings
from eventfinder.utils import ColoredFormatter, FilterRemoveDateFromWerkzeugLogs

logger = structlog.get_logger('main')

EXTENSION_KEY = "eventfinder"


def configure_logging(settings):
    """Console logging for stdlib loggers and structlog"""
    log_settings = settings.get('logging', {})
    level = getattr(logging, str(log_settings.get('level', 'INFO')).upper(), logging.INFO)

    formatter = ColoredFormatter(
        '[%(asctime)s.%(msecs)03d] %(levelname)s (%(module)s) %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=[handler], force=True)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if log_settings.get('format') == 'json' else structlog.dev.ConsoleRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Apply filter to hide date from http access logs
    logging.getLogger('werkzeug').addFilter(FilterRemoveDateFromWerkzeugLogs())


def create_app(settings=None, session=None, validate=True):
    """
    Application factory.

    `settings` defaults to load_settings(); `session` replaces the shared
    requests.Session used by the upstream clients. With `validate` on,
    missing credentials raise ConfigurationException before anything binds.
    """
    settings = settings or load_settings()
    if validate:
        require_valid_settings(settings)

    app = Flask(__name__, static_folder=None)
    app.json.sort_keys = False

    # Store connection is made here, before the app can take requests
    configure_db(app, settings['database']['url'])
    init_db(app)

    services = build_context(settings, session=session)
    app.extensions[EXTENSION_KEY] = services

    register_exception_handlers(app)

    app.register_blueprint(create_events_blueprint(services))
    app.register_blueprint(create_spotify_blueprint(services))
    app.register_blueprint(create_favorites_blueprint(services))
    init_metrics(app, services)
    # Catch-all routes last
    app.register_blueprint(create_web_blueprint(services))

    logger.info('Application initialized', version=BUILD_VERSION, static_dir=settings['server']['static_dir'])
    return app


def get_services(app):
    """ServiceContext attached to `app` by create_app()"""
    return app.extensions[EXTENSION_KEY]


def run(host=None, port=None, settings=None):
    """Build the app and serve it with the threaded development server"""
    settings = settings or load_settings()
    configure_logging(settings)
    app = create_app(settings)

    host = host or settings['server']['host']
    port = int(port or settings['server']['port'])
    logger.info(f'Build Version: {BUILD_VERSION}')
    logger.info(f'Starting server on port {port}...')
    app.run(host=host, port=port, threaded=True, debug=False, use_reloader=False)


if __name__ == '__main__':
    from eventfinder.cli import main
    sys.exit(main(['serve']))
