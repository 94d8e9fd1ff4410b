"""Local disk storage for uploaded files.

Files are written under UPLOAD_FOLDER/<folder>/ with a random name and served
back by the ``uploaded_file`` endpoint. The relative path is the public id used
to delete the file later.
"""

import os
import uuid
import logging

from flask import current_app, url_for
from werkzeug.utils import secure_filename

logger = logging.getLogger(__name__)


class UploadError(ValueError):
    """Raised for uploads that cannot be stored (bad name or extension)."""


def allowed_file(filename):
    allowed = current_app.config['ALLOWED_UPLOAD_EXTENSIONS']
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in allowed


def has_file(file):
    return file is not None and file.filename != ''


def check_upload(file):
    """Return the safe filename, or raise UploadError without touching the disk."""
    filename = secure_filename(file.filename or '')
    if not filename or not allowed_file(filename):
        raise UploadError(f'File type not allowed: {file.filename}')
    return filename


def save_upload(file, folder):
    """Store a werkzeug FileStorage and return (url, public_id)."""
    filename = check_upload(file)

    ext = filename.rsplit('.', 1)[1].lower()
    public_id = f'{folder}/{uuid.uuid4().hex}.{ext}'
    target_dir = os.path.join(current_app.config['UPLOAD_FOLDER'], folder)
    os.makedirs(target_dir, exist_ok=True)
    file.save(os.path.join(current_app.config['UPLOAD_FOLDER'], public_id))

    logger.info('Stored upload %s as %s', filename, public_id)
    return url_for('uploaded_file', filename=public_id, _external=True), public_id


def delete_upload(public_id):
    """Remove a stored file. Missing files are logged, not raised."""
    if not public_id:
        return
    path = os.path.join(current_app.config['UPLOAD_FOLDER'], public_id)
    try:
        os.remove(path)
    except FileNotFoundError:
        logger.warning('Stored file already gone: %s', public_id)


def public_id_from_url(url):
    """Recover the public id from a URL produced by save_upload, else None."""
    if not url:
        return None
    marker = '/uploads/'
    if marker not in url:
        return None
    return url.split(marker, 1)[1]


class UploadBatch:
    """Files stored while handling one request, removed together if it fails."""

    def __init__(self, folder):
        self.folder = folder
        self.public_ids = []

    def check(self, files):
        for file in files:
            if has_file(file):
                check_upload(file)

    def save(self, file):
        url, public_id = save_upload(file, self.folder)
        self.public_ids.append(public_id)
        return url, public_id

    def discard(self):
        for public_id in self.public_ids:
            delete_upload(public_id)
        self.public_ids = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None:
            logger.warning('Discarding %d stored upload(s) after %s', len(self.public_ids), exc_type.__name__)
            self.discard()
        return False
