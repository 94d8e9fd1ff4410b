from flask import Blueprint, jsonify, request, current_app, g
from models import User
from utils.access import login_required
from utils.tokens import issue_token

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/login', methods=['POST'])
def login():
    """Check email/password and hand back a bearer token with the user."""
    data = request.get_json(silent=True) or {}
    email = (data.get('email') or '').strip().lower()
    password = data.get('password') or ''

    if not email or not password:
        return jsonify({'message': 'Email and password are required'}), 400

    user = User.query.filter_by(email=email).first()
    if not user:
        return jsonify({'message': 'User not found'}), 404

    if not user.check_password(password):
        current_app.logger.info('Failed login for %s', email)
        return jsonify({'message': 'Invalid credentials'}), 401

    current_app.logger.info('User %s logged in', user.id)
    return jsonify({
        'success': True,
        'message': 'Login successful',
        'token': issue_token(user),
        'user': user.to_dict(),
    })


@auth_bp.route('/me')
@login_required
def me():
    return jsonify({'user': g.current_user.to_dict()})
