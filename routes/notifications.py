from flask import Blueprint, jsonify, request, current_app

from models import db, Notification
from utils.access import permission_required
from utils.storage import UploadBatch, UploadError, delete_upload, has_file
from utils.validation import NOTIFICATION_MESSAGE_MAX, is_valid_url, too_long

notifications_bp = Blueprint('notifications', __name__)

PAGE = '/notifications'
UPLOAD_DIR = 'notifications'


@notifications_bp.route('/all-notification')
def get_all_notifications():
    """All notifications, newest first."""
    notifications = Notification.query.order_by(Notification.created_on.desc(), Notification.id.desc()).all()
    return jsonify([n.to_dict() for n in notifications])


@notifications_bp.route('/add-notification', methods=['POST'])
@permission_required(PAGE, 'create')
def add_notification():
    """Add a notification carrying either a URL or an uploaded file."""
    message = (request.form.get('notification_message') or '').strip()
    url = (request.form.get('url') or '').strip()
    created_by = request.form.get('created_by')
    user_id = request.form.get('user_id', type=int)
    file = request.files.get('file')

    if not message or not created_by:
        return jsonify({'message': 'notification_message and created_by are required'}), 400
    if too_long(message, NOTIFICATION_MESSAGE_MAX):
        return jsonify({'message': f'Notification message cannot exceed {NOTIFICATION_MESSAGE_MAX} characters'}), 400

    if bool(url) == has_file(file):
        return jsonify({'message': 'Please provide either a URL or a file, not both!'}), 400
    if url and not is_valid_url(url):
        return jsonify({'message': 'Please provide a valid URL'}), 400

    public_id = None
    try:
        with UploadBatch(UPLOAD_DIR) as uploads:
            if has_file(file):
                url, public_id = uploads.save(file)
            notification = Notification(
                message=message,
                url=url,
                public_id=public_id,
                user_id=user_id,
                created_by=created_by,
            )
            db.session.add(notification)
            db.session.commit()
    except UploadError as e:
        return jsonify({'message': str(e)}), 400

    current_app.logger.info('Notification %s added by %s', notification.id, created_by)
    return jsonify({
        'success': True,
        'message': 'Notification added successfully!',
        'data': notification.to_dict(),
    }), 201


@notifications_bp.route('/edit/<int:notification_id>', methods=['PUT'])
@permission_required(PAGE, 'update')
def edit_notification(notification_id):
    """Edit message and optionally swap in a new URL or file."""
    notification = db.session.get(Notification, notification_id)
    if not notification:
        return jsonify({'message': 'Notification not found'}), 404

    message = (request.form.get('notification_message') or '').strip()
    url = (request.form.get('url') or '').strip()
    modify_by = request.form.get('modify_by')
    file = request.files.get('file')

    if too_long(message, NOTIFICATION_MESSAGE_MAX):
        return jsonify({'message': f'Notification message cannot exceed {NOTIFICATION_MESSAGE_MAX} characters'}), 400
    if url and has_file(file):
        return jsonify({'message': 'Please provide either a URL or a file, not both!'}), 400
    if url and not is_valid_url(url):
        return jsonify({'message': 'Please provide a valid URL'}), 400

    old_public_id = notification.public_id
    try:
        with UploadBatch(UPLOAD_DIR) as uploads:
            if has_file(file):
                notification.url, notification.public_id = uploads.save(file)
            elif url and url != notification.url:
                notification.url, notification.public_id = url, None
            if message:
                notification.message = message
            notification.touch(modify_by)
            db.session.commit()
    except UploadError as e:
        db.session.rollback()
        return jsonify({'message': str(e)}), 400

    if old_public_id and old_public_id != notification.public_id:
        delete_upload(old_public_id)

    return jsonify({
        'success': True,
        'message': 'Notification updated successfully!',
        'data': notification.to_dict(),
    })


@notifications_bp.route('/delete/<int:notification_id>', methods=['DELETE'])
@permission_required(PAGE, 'delete')
def delete_notification(notification_id):
    notification = db.session.get(Notification, notification_id)
    if not notification:
        return jsonify({'message': 'Notification not found'}), 404

    public_id = notification.public_id
    db.session.delete(notification)
    db.session.commit()
    delete_upload(public_id)

    return jsonify({'success': True, 'message': 'Notification deleted successfully!'})
