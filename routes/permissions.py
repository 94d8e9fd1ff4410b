from flask import Blueprint, jsonify, request, current_app

from models import db, Role, Page, Permission
from utils.access import permission_required
from utils.capabilities import ACTIONS, FLAG_FOR_ACTION

permissions_bp = Blueprint('permissions', __name__)

PAGE = '/permissions'


@permissions_bp.route('/getrole')
def get_roles():
    roles = Role.query.order_by(Role.id).all()
    return jsonify({'role': [role.to_dict() for role in roles]})


@permissions_bp.route('/permissions')
def get_permissions():
    permissions = Permission.query.order_by(Permission.id).all()
    return jsonify([permission.to_dict() for permission in permissions])


@permissions_bp.route('/save-permissions', methods=['POST'])
@permission_required(PAGE, 'update')
def save_permissions():
    """Upsert one row per (roleId, pageId). All rows are saved or none."""
    data = request.get_json(silent=True) or {}
    rows = data.get('permissions')
    if not isinstance(rows, list):
        return jsonify({'message': 'Invalid permissions format'}), 400

    for row in rows:
        if not isinstance(row, dict):
            db.session.rollback()
            return jsonify({'message': 'Invalid permissions format'}), 400

        role_id, page_id = row.get('roleId'), row.get('pageId')
        if not db.session.get(Role, role_id) or not db.session.get(Page, page_id):
            db.session.rollback()
            return jsonify({'message': f'Unknown role {role_id} or page {page_id}'}), 400

        permission = Permission.query.filter_by(role_id=role_id, page_id=page_id).first()
        if permission is None:
            permission = Permission(role_id=role_id, page_id=page_id,
                                    created_by=row.get('created_by') or 'System')
            db.session.add(permission)
        for action in ACTIONS:
            setattr(permission, 'can_' + action, bool(row.get(FLAG_FOR_ACTION[action])))
        permission.touch(row.get('modify_by') or 'System')

    db.session.commit()
    current_app.logger.info('Saved %d permission rows', len(rows))
    return jsonify({'message': 'Permissions saved successfully!'})
