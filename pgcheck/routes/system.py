import time
from flask import Blueprint, Response, jsonify, current_app

from .. import metrics

system_bp = Blueprint('system', __name__)

_START_TIME = time.time()


@system_bp.route('/health', methods=['GET'])
def health():
    uptime = time.time() - _START_TIME
    return jsonify({'status': 'ok', 'uptime_seconds': round(uptime, 2)})


@system_bp.route('/version', methods=['GET'])
def version():
    config = current_app.extensions['pgcheck']['config']
    return jsonify({
        'version': current_app.config.get('PGCHECK_VERSION'),
        'uptime_seconds': round(time.time() - _START_TIME, 2),
        'primary_url': config.primary_url,
        'fallback_url': config.fallback_url,
    })


@system_bp.route('/metrics', methods=['GET'])
def prometheus_metrics():
    return Response(metrics.get_metrics(), mimetype=metrics.get_content_type())
