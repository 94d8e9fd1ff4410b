from flask import Blueprint, jsonify, request

from models import db, Banner
from utils.access import permission_required
from utils.storage import UploadBatch, UploadError, delete_upload, has_file
from utils.validation import BANNER_NAME_MAX, parse_position, too_long

banners_bp = Blueprint('banners', __name__)

PAGE = '/banners'
UPLOAD_DIR = 'banners'


def position_taken(position, exclude_id=None):
    query = Banner.query.filter_by(position=position)
    if exclude_id is not None:
        query = query.filter(Banner.id != exclude_id)
    return query.first() is not None


@banners_bp.route('/banners')
def get_banners():
    banners = Banner.query.order_by(Banner.position).all()
    return jsonify([banner.to_dict() for banner in banners])


@banners_bp.route('/upload', methods=['POST'])
@permission_required(PAGE, 'create')
def upload_banner():
    name = (request.form.get('bannerName') or '').strip()
    created_by = request.form.get('created_by')
    raw_position = request.form.get('bannerPosition')
    file = request.files.get('file')

    if not has_file(file) or not name or not created_by or raw_position is None:
        return jsonify({'message': 'File, banner name, created_by, and banner position are required.'}), 400
    if too_long(name, BANNER_NAME_MAX):
        return jsonify({'message': f'Banner name cannot exceed {BANNER_NAME_MAX} characters.'}), 400
    position = parse_position(raw_position)
    if position is None:
        return jsonify({'message': 'Banner position must be 1 or greater.'}), 400
    if position_taken(position):
        return jsonify({
            'message': f'Banner position {position} is already in use. '
                       'Please delete the existing banner before adding a new one.'
        }), 400

    try:
        with UploadBatch(UPLOAD_DIR) as uploads:
            image_url, public_id = uploads.save(file)
            banner = Banner(name=name, image_url=image_url, public_id=public_id,
                            position=position, created_by=created_by)
            db.session.add(banner)
            db.session.commit()
    except UploadError as e:
        return jsonify({'message': str(e)}), 400

    return jsonify({'message': 'Banner uploaded successfully!', 'banner': banner.to_dict()}), 201


@banners_bp.route('/update/<int:banner_id>', methods=['PUT'])
@permission_required(PAGE, 'update')
def update_banner(banner_id):
    banner = db.session.get(Banner, banner_id)
    if not banner:
        return jsonify({'message': 'Banner not found.'}), 404

    name = (request.form.get('bannerName') or '').strip()
    raw_position = request.form.get('bannerPosition')
    file = request.files.get('file')

    if too_long(name, BANNER_NAME_MAX):
        return jsonify({'message': f'Banner name cannot exceed {BANNER_NAME_MAX} characters.'}), 400
    if raw_position:
        position = parse_position(raw_position)
        if position is None:
            return jsonify({'message': 'Banner position must be 1 or greater.'}), 400
        if position != banner.position and position_taken(position, exclude_id=banner.id):
            return jsonify({
                'message': f'Banner position {position} is already in use. '
                           'Please delete the existing banner before assigning this position.'
            }), 400
        banner.position = position

    old_public_id = None
    try:
        with UploadBatch(UPLOAD_DIR) as uploads:
            if has_file(file):
                old_public_id = banner.public_id
                banner.image_url, banner.public_id = uploads.save(file)
            if name:
                banner.name = name
            banner.touch(request.form.get('modify_by'))
            db.session.commit()
    except UploadError as e:
        db.session.rollback()
        return jsonify({'message': str(e)}), 400
    delete_upload(old_public_id)

    return jsonify({'message': 'Banner updated successfully!', 'banner': banner.to_dict()})


@banners_bp.route('/delete/<int:banner_id>', methods=['DELETE'])
@permission_required(PAGE, 'delete')
def delete_banner(banner_id):
    banner = db.session.get(Banner, banner_id)
    if not banner:
        return jsonify({'message': 'Banner not found.'}), 404

    public_id = banner.public_id
    db.session.delete(banner)
    db.session.commit()
    delete_upload(public_id)

    return jsonify({'message': 'Banner deleted successfully.'})


@banners_bp.route('/toggle-visibility/<int:banner_id>', methods=['PUT'])
@permission_required(PAGE, 'update')
def toggle_banner_visibility(banner_id):
    banner = db.session.get(Banner, banner_id)
    if not banner:
        return jsonify({'message': 'Banner not found.'}), 404

    data = request.get_json(silent=True) or {}
    banner.toggle_visibility(data.get('modify_by'))
    db.session.commit()

    return jsonify({'message': 'Banner visibility updated successfully!', 'banner': banner.to_dict()})


@banners_bp.route('/swap/<int:first_id>/<int:second_id>', methods=['POST'])
@permission_required(PAGE, 'update')
def swap_banners(first_id, second_id):
    """Exchange the positions of two banners."""
    first = db.session.get(Banner, first_id)
    second = db.session.get(Banner, second_id)
    if not first or not second:
        return jsonify({'message': 'One or both banners not found.'}), 404
    if first.id == second.id:
        return jsonify({'message': 'Banner positions swapped successfully.'})

    data = request.get_json(silent=True) or {}
    first_position, second_position = first.position, second.position
    # Park one banner off the unique index while the other moves
    first.position = -first.id
    db.session.flush()
    second.position = first_position
    db.session.flush()
    first.position = second_position
    first.touch(data.get('modify_by'))
    second.touch(data.get('modify_by'))
    db.session.commit()

    return jsonify({'message': 'Banner positions swapped successfully.'})
