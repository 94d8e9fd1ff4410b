from flask import current_app
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

TOKEN_SALT = 'admin-panel-auth'


def _serializer():
    return URLSafeTimedSerializer(current_app.config['SECRET_KEY'], salt=TOKEN_SALT)


def issue_token(user):
    """Signed bearer token carrying the user id, email and role id."""
    return _serializer().dumps({
        'user_id': user.id,
        'email': user.email,
        'role': user.role_id,
    })


def read_token(token):
    """Return the token payload, or None if it is invalid or expired."""
    try:
        return _serializer().loads(token, max_age=current_app.config['TOKEN_MAX_AGE'])
    except SignatureExpired:
        current_app.logger.info('Rejected expired token')
        return None
    except BadSignature:
        return None
