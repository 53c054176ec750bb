from flask import Blueprint, request, jsonify, current_app
import logging

from .. import periodic
from ..exceptions import CheckFailedError, ValidationError
from ..limits import limiter, manual_check_limit

bp = Blueprint('check', __name__)

_LOG = logging.getLogger('pgcheck.routes')


def _ctx():
    return current_app.extensions['pgcheck']


@bp.route('/status', methods=['GET'])
def status():
    ctx = _ctx()
    outcome = ctx['service'].last_outcome
    body = outcome.to_dict() if outcome else {'status': 'never_checked'}
    body['auto_check_enabled'] = ctx['preferences'].auto_check_enabled
    body['scheduler_running'] = periodic.is_running()
    return jsonify(body)


@bp.route('/check', methods=['POST'])
@limiter.limit(manual_check_limit)
def check_now():
    _LOG.info('/check manual trigger from %s', request.remote_addr)
    outcome = _ctx()['service'].run_check()
    if not outcome.ok:
        raise CheckFailedError.from_outcome(outcome)
    return jsonify(outcome.to_dict())


@bp.route('/auto-check', methods=['GET', 'POST'])
def auto_check():
    ctx = _ctx()
    prefs = ctx['preferences']
    if request.method == 'POST':
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get('enabled'), bool):
            raise ValidationError('body must be JSON {"enabled": true|false}')
        if data['enabled']:
            periodic.enable_auto_check(ctx['service'], prefs, ctx['config'].check_interval_s)
        else:
            periodic.disable_auto_check(prefs)
    return jsonify({
        'enabled': prefs.auto_check_enabled,
        'scheduler_running': periodic.is_running(),
        'interval_s': ctx['config'].check_interval_s,
    })


@bp.route('/notify/test', methods=['POST'])
def notify_test():
    sent = _ctx()['service'].notifier.notify_test()
    return jsonify({'sent': bool(sent)}), (200 if sent else 502)
