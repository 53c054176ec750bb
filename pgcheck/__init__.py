import os
import logging
from flask import Flask, jsonify

from .config import CheckerConfig, load_config
from .exceptions import PgCheckException, RateLimitExceededError, error_response
from .limits import limiter
from .logging_utils import configure_logging
from .preferences import PreferenceStore
from .service import CheckService

__version__ = '0.4.0'


def create_app(config: CheckerConfig | None = None, service: CheckService | None = None,
               start_scheduler: bool | None = None):
    """Build the Flask app.

    ``config`` / ``service`` can be injected (tests); otherwise they come from
    the environment. The periodic check thread is resumed when the saved
    preference has auto-check on, unless ``start_scheduler`` is False or
    PGCHECK_DISABLE_SCHEDULER=1.
    """
    level_name = configure_logging()
    log = logging.getLogger(__name__)
    log.info('Logging initialized at level %s', level_name)

    config = config or load_config()
    service = service or CheckService.from_config(config)
    prefs = PreferenceStore(config.preferences_path)

    app = Flask(__name__)
    app.config['PGCHECK_VERSION'] = os.environ.get('PGCHECK_VERSION', __version__)
    app.extensions['pgcheck'] = {
        'config': config,
        'service': service,
        'preferences': prefs,
    }

    limiter.init_app(app)

    @app.errorhandler(PgCheckException)
    def _handle_pgcheck_error(err: PgCheckException):
        body, status = error_response(err)
        return jsonify(body), status

    @app.errorhandler(429)
    def _handle_rate_limit(err):
        body, status = error_response(RateLimitExceededError(str(getattr(err, 'description', '') or config.rate_limit)))
        return jsonify(body), status

    from .routes.check import bp as check_bp
    from .routes.system import system_bp
    app.register_blueprint(check_bp)
    app.register_blueprint(system_bp)

    if start_scheduler is None:
        start_scheduler = os.environ.get('PGCHECK_DISABLE_SCHEDULER', '0') != '1'
    if start_scheduler:
        from . import periodic
        periodic.resume_if_enabled(service, prefs, config.check_interval_s)

    log.info('pgcheck app ready primary=%s fallback=%s interval_s=%s',
             config.primary_url, config.fallback_url, config.check_interval_s)
    return app
