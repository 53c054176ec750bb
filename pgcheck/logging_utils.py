import logging
import os
import threading
import time
from logging.handlers import RotatingFileHandler
from typing import Dict, Tuple

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

_SuppressionKey = Tuple[str, str]
_SuppressionState = Dict[str, float | int]

_SUPPRESSION_LOCK = threading.Lock()
_SUPPRESSION_STATE: Dict[_SuppressionKey, _SuppressionState] = {}


def configure_logging(level_name: str | None = None) -> str:
    """Set up root logging from ``PGCHECK_LOG_LEVEL`` / ``PGCHECK_LOG_FILE``.

    Returns the effective level name.
    """
    level_name = (level_name or os.environ.get('PGCHECK_LOG_LEVEL', 'INFO')).upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    log_file = os.environ.get('PGCHECK_LOG_FILE')
    if log_file:
        root = logging.getLogger()
        if not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
            try:
                max_bytes = int(os.environ.get('PGCHECK_LOG_MAX_BYTES', str(1024 * 1024)))
                backup = int(os.environ.get('PGCHECK_LOG_BACKUP_COUNT', '3'))
                fh = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup)
                fh.setLevel(level)
                fh.setFormatter(logging.Formatter(LOG_FORMAT))
                root.addHandler(fh)
                logging.getLogger(__name__).info(
                    'RotatingFileHandler attached path=%s max_bytes=%d backups=%d',
                    log_file, max_bytes, backup)
            except (OSError, ValueError) as err:
                logging.getLogger(__name__).warning('failed attaching RotatingFileHandler for %s: %s', log_file, err)
    logging.getLogger('werkzeug').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    return level_name


def log_suppressed(
    logger: logging.Logger,
    message: str,
    context: str,
    *,
    level: int = logging.WARNING,
    sample: int = 3,
    cooldown: float = 3600.0,
) -> bool:
    """Emit a throttled log entry for a failure that repeats every cycle.

    A site that is down stays down for many check cycles; the first
    ``sample`` occurrences of ``context`` are logged, after that at most one
    entry per ``cooldown`` seconds.

    Returns True when the entry was written.
    """
    now = time.time()
    key: _SuppressionKey = (logger.name, context)
    with _SUPPRESSION_LOCK:
        state = _SUPPRESSION_STATE.setdefault(key, {'count': 0, 'last_emit': 0.0})
        state['count'] = int(state['count']) + 1
        count = int(state['count'])
        last_emit = float(state.get('last_emit', 0.0))
        should_emit = count <= sample or (now - last_emit) >= cooldown
        if should_emit:
            state['last_emit'] = now
    if should_emit:
        logger.log(level, '%s: %s (repeats=%d)', context, message, max(0, count - 1))
    return should_emit


def reset_suppressed(context: str | None = None) -> None:
    """Forget suppression counters, for one context or all of them."""
    with _SUPPRESSION_LOCK:
        if context is None:
            _SUPPRESSION_STATE.clear()
            return
        for key in [k for k in _SUPPRESSION_STATE if k[1] == context]:
            _SUPPRESSION_STATE.pop(key, None)
