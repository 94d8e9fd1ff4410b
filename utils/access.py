"""Request guards: bearer token authentication and per-page permission checks."""

from functools import wraps

from flask import current_app, g, jsonify, request

from models import db, User, Page, Permission
from utils.capabilities import ACTIONS
from utils.tokens import read_token


def _bearer_token():
    header = request.headers.get('Authorization', '')
    if header.lower().startswith('bearer '):
        return header[7:].strip()
    return None


def _authenticate():
    """Return (user, error_response). Exactly one of them is None."""
    token = _bearer_token()
    payload = read_token(token) if token else None
    user_id = payload.get('user_id') if payload else None
    if not user_id:
        return None, (jsonify({'message': 'Unauthorized'}), 401)

    user = db.session.get(User, user_id)
    if not user:
        return None, (jsonify({'message': 'User not found'}), 404)
    return user, None


def user_has_permission(user, page_url, action):
    """Administrators pass unconditionally; everyone else needs the row flag."""
    if user.role and user.role.name == current_app.config['ADMIN_ROLE_NAME']:
        return True

    page = Page.query.filter_by(url=page_url).first()
    if not page:
        return False
    permission = Permission.query.filter_by(role_id=user.role_id, page_id=page.id).first()
    return permission is not None and permission.allows(action)


def login_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        user, error = _authenticate()
        if error:
            return error
        g.current_user = user
        return f(*args, **kwargs)
    return decorated


def permission_required(page_url, action):
    """Allow the view only if the caller's role may perform action on page_url."""
    if action not in ACTIONS:
        raise ValueError(f'Unknown action: {action}')

    def decorator(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            user, error = _authenticate()
            if error:
                return error
            if not user_has_permission(user, page_url, action):
                current_app.logger.warning(
                    'Denied %s on %s for user %s (role %s)', action, page_url, user.id, user.role_id)
                return jsonify({'message': "Forbidden: You don't have access"}), 403
            g.current_user = user
            return f(*args, **kwargs)
        return decorated
    return decorator
