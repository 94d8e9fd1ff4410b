import os

from flask import Blueprint, current_app, jsonify, Response

from utils.access import permission_required
from utils.logger import LOG_TYPES, log_path

logs_bp = Blueprint('logs', __name__)


@logs_bp.route('/<log_type>')
@permission_required('/logs', 'read')
def read_log(log_type):
    """Return the raw text of one of the log files."""
    if log_type not in LOG_TYPES:
        return jsonify({'message': 'Log file not found.'}), 404

    path = log_path(current_app.config['LOG_DIR'], log_type)
    if not os.path.exists(path):
        return jsonify({'message': 'Log file not found.'}), 404

    with open(path, 'r', encoding='utf-8') as f:
        return Response(f.read(), mimetype='text/plain')
