"""
Logging setup for the API.

Writes JSON lines to three files in LOG_DIR:
    combined.log    INFO and above
    error.log       ERROR and above
    exceptions.log  unhandled exceptions caught by the app error handler
"""

import json
import logging
import os
import traceback
from datetime import datetime
from logging.handlers import RotatingFileHandler

from flask import has_request_context, request

LOG_TYPES = ('combined', 'error', 'exceptions')
EXCEPTION_LOGGER = 'admin_panel.exceptions'

MAX_BYTES = 5 * 1024 * 1024
BACKUP_COUNT = 14


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with request details when inside a request."""

    def format(self, record):
        log_data = {
            'timestamp': datetime.utcnow().isoformat() + 'Z',
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        if has_request_context():
            log_data['method'] = request.method
            log_data['url'] = request.path
        if record.exc_info and record.exc_info[0]:
            log_data['error'] = str(record.exc_info[1])
            log_data['stack'] = ''.join(traceback.format_exception(*record.exc_info))
        status = getattr(record, 'status', None)
        if status is not None:
            log_data['status'] = status
        return json.dumps(log_data, default=str)


def log_path(log_dir, log_type):
    return os.path.join(log_dir, f'{log_type}.log')


def _file_handler(path, level):
    handler = RotatingFileHandler(path, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding='utf-8')
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter())
    return handler


def configure_logging(app):
    """Attach file handlers to the root logger and the exceptions logger."""
    log_dir = app.config['LOG_DIR']
    os.makedirs(log_dir, exist_ok=True)
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)

    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, '_admin_panel', False):
            root.removeHandler(handler)
            handler.close()

    handlers = [
        _file_handler(log_path(log_dir, 'combined'), logging.INFO),
        _file_handler(log_path(log_dir, 'error'), logging.ERROR),
    ]
    if app.debug:
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s: %(message)s'))
        handlers.append(console)
    for handler in handlers:
        handler._admin_panel = True
        root.addHandler(handler)
    root.setLevel(min(level, logging.INFO))

    exc_logger = logging.getLogger(EXCEPTION_LOGGER)
    for handler in list(exc_logger.handlers):
        exc_logger.removeHandler(handler)
        handler.close()
    exc_logger.addHandler(_file_handler(log_path(log_dir, 'exceptions'), logging.ERROR))

    app.logger.setLevel(level)
    logging.getLogger('werkzeug').setLevel(logging.WARNING)
    app.logger.info('Logging to %s', log_dir)


def log_exception(error, status=500):
    logging.getLogger(EXCEPTION_LOGGER).error(
        'Error occurred', exc_info=(type(error), error, error.__traceback__), extra={'status': status})
