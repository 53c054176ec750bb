import threading, time, logging

from .preferences import PreferenceStore
from .service import CheckService

_LOG = logging.getLogger('pgcheck.periodic')

_CHECK_THREAD: threading.Thread | None = None
_CHECK_STOP: threading.Event | None = None
_CHECK_LOCK = threading.Lock()


def _run_check_once(service: CheckService, *, reason: str) -> bool:
    try:
        outcome = service.run_check()
    except Exception:
        _LOG.exception('periodic_check[%s]: check crashed', reason)
        return False
    if outcome.ok:
        _LOG.info('periodic_check[%s]: installed=%s latest=%s update_available=%s',
                  reason, outcome.installed_version, outcome.latest_version, outcome.update_available)
    else:
        _LOG.warning('periodic_check[%s]: failed (%s)', reason, outcome.error)
    return outcome.ok


def _run_check_loop(service: CheckService, prefs: PreferenceStore, interval_s: float, stop: threading.Event):
    """Run a check now, then every ``interval_s`` seconds until ``stop`` is set."""
    while not stop.is_set():
        if prefs.auto_check_enabled:
            started = time.time()
            _run_check_once(service, reason='scheduled')
            _LOG.debug('periodic_check: cycle took %.2fs', time.time() - started)
        else:
            _LOG.info('periodic_check: auto check disabled, skipping cycle')
        if stop.wait(interval_s):
            break
    _LOG.info('periodic_check: loop stopped')


def is_running() -> bool:
    with _CHECK_LOCK:
        return bool(_CHECK_THREAD and _CHECK_THREAD.is_alive())


def start_periodic_checks(service: CheckService, prefs: PreferenceStore, interval_s: float) -> bool:
    """Start the background check thread. Returns False if one is already running."""
    global _CHECK_THREAD, _CHECK_STOP
    with _CHECK_LOCK:
        if _CHECK_THREAD and _CHECK_THREAD.is_alive():
            _LOG.info('periodic check thread already running')
            return False
        stop = threading.Event()
        thread = threading.Thread(
            target=_run_check_loop,
            args=(service, prefs, interval_s, stop),
            daemon=True,
            name='periodic-version-check'
        )
        _CHECK_STOP = stop
        _CHECK_THREAD = thread
        thread.start()
    _LOG.info('periodic check thread started (interval_s=%s)', interval_s)
    return True


def stop_periodic_checks(timeout: float | None = 5.0):
    global _CHECK_THREAD, _CHECK_STOP
    with _CHECK_LOCK:
        thread, stop = _CHECK_THREAD, _CHECK_STOP
        _CHECK_THREAD = None
        _CHECK_STOP = None
    if stop is not None:
        stop.set()
    if thread is not None and thread is not threading.current_thread():
        thread.join(timeout)


def enable_auto_check(service: CheckService, prefs: PreferenceStore, interval_s: float) -> bool:
    prefs.set_auto_check(True)
    return start_periodic_checks(service, prefs, interval_s)


def disable_auto_check(prefs: PreferenceStore):
    prefs.set_auto_check(False)
    stop_periodic_checks()


def resume_if_enabled(service: CheckService, prefs: PreferenceStore, interval_s: float) -> bool:
    """Restart the loop on startup when the saved preference says so."""
    if not prefs.auto_check_enabled:
        _LOG.info('auto check disabled (enable via POST /auto-check)')
        return False
    return start_periodic_checks(service, prefs, interval_s)
