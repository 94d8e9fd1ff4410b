"""Form validation rules shared by the API routes and the admin panel screens."""

import re

# Notifications require an explicit http(s) scheme
STRICT_URL_RE = re.compile(r'^(https?://[^\s/$.?#].[^\s]*)$', re.IGNORECASE)

# Important links accept a bare domain, localhost or an IP, with optional port and path
LOOSE_URL_RE = re.compile(
    r'^(https?://)?'
    r'((([a-z0-9\-]+\.)+[a-z]{2,})|'
    r'localhost|'
    r'\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}|'
    r'\[?[a-f0-9]*:[a-f0-9:%.~+\-]*\]?)'
    r'(:\d+)?(/[-a-z0-9+&@#/%=~_|?.:,]*)*'
    r'$',
    re.IGNORECASE,
)

NOTIFICATION_MESSAGE_MAX = 100
BANNER_NAME_MAX = 100
GALLERY_NAME_MAX = 100
LINK_NAME_MAX = 180
LINK_URL_MAX = 180
FACULTY_NAME_MAX = 150
FACULTY_OTHER_FIELD_MAX = 20
MAX_FACULTY_DOCUMENTS = 10


def is_valid_url(url):
    return bool(url) and STRICT_URL_RE.match(url) is not None


def is_valid_link_url(url):
    return bool(url) and LOOSE_URL_RE.match(url) is not None


def too_long(value, limit):
    return value is not None and len(value) > limit


def parse_position(value):
    """Return the position as an int >= 1, or None if it is not one."""
    try:
        position = int(value)
    except (TypeError, ValueError):
        return None
    return position if position >= 1 else None


def parse_optional_int(value):
    if value in (None, ''):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_bool(value, default=None):
    """Multipart forms carry booleans as 'true'/'false' strings."""
    if value is None or value == '':
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('true', '1', 'yes', 'on')
