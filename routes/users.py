from flask import Blueprint, jsonify, request
from sqlalchemy.exc import IntegrityError

from models import db, User, Role
from utils.access import permission_required

users_bp = Blueprint('users', __name__)

PAGE = '/users'


@users_bp.route('/users', methods=['POST'])
@permission_required(PAGE, 'create')
def add_user():
    data = request.get_json(silent=True) or {}
    required = ['name', 'email', 'password', 'roleId', 'created_by']
    for field in required:
        if not data.get(field):
            return jsonify({'message': f'{field} is required'}), 400

    if not db.session.get(Role, data['roleId']):
        return jsonify({'message': 'Role not found'}), 400

    user = User(
        name=data['name'].strip(),
        email=data['email'].strip().lower(),
        mobile_no=data.get('mobileNo'),
        role_id=data['roleId'],
        created_by=data['created_by'],
    )
    user.set_password(data['password'])
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify({'message': 'Email already taken'}), 400

    return jsonify({'message': 'User created successfully', 'user': user.to_dict()}), 201


@users_bp.route('/getusers')
@permission_required(PAGE, 'read')
def get_all_users():
    users = User.query.order_by(User.name).all()
    return jsonify([user.to_dict() for user in users])


@users_bp.route('/users/<int:user_id>')
@permission_required(PAGE, 'read')
def get_user(user_id):
    user = db.session.get(User, user_id)
    if not user:
        return jsonify({'message': 'User not found'}), 404
    return jsonify(user.to_dict())


@users_bp.route('/users/<int:user_id>', methods=['PUT'])
@permission_required(PAGE, 'update')
def update_user(user_id):
    user = db.session.get(User, user_id)
    if not user:
        return jsonify({'message': 'User not found'}), 404

    data = request.get_json(silent=True) or {}
    if data.get('roleId') and not db.session.get(Role, data['roleId']):
        return jsonify({'message': 'Role not found'}), 400

    user.name = data.get('name') or user.name
    user.email = (data.get('email') or user.email).strip().lower()
    user.mobile_no = data.get('mobileNo', user.mobile_no)
    user.role_id = data.get('roleId') or user.role_id
    if data.get('password'):
        user.set_password(data['password'])
    user.touch(data.get('modify_by'))
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify({'message': 'Email already taken'}), 400

    return jsonify({'message': 'User updated successfully', 'user': user.to_dict()})


@users_bp.route('/users/<int:user_id>', methods=['DELETE'])
@permission_required(PAGE, 'delete')
def delete_user(user_id):
    user = db.session.get(User, user_id)
    if not user:
        return jsonify({'message': 'User not found'}), 404

    db.session.delete(user)
    db.session.commit()
    return jsonify({'message': 'User deleted successfully'})
