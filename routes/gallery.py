from flask import Blueprint, jsonify, request

from models import db, Gallery
from utils.access import permission_required
from utils.storage import UploadBatch, UploadError, delete_upload, has_file
from utils.validation import GALLERY_NAME_MAX, parse_position, too_long

gallery_bp = Blueprint('gallery', __name__)

PAGE = '/gallery'
UPLOAD_DIR = 'galleries'


@gallery_bp.route('')
def get_galleries():
    galleries = Gallery.query.order_by(Gallery.position, Gallery.id).all()
    return jsonify([gallery.to_dict() for gallery in galleries])


@gallery_bp.route('/upload', methods=['POST'])
@permission_required(PAGE, 'create')
def upload_gallery():
    name = (request.form.get('galleryName') or '').strip()
    created_by = request.form.get('created_by')
    raw_position = request.form.get('galleryPosition')
    file = request.files.get('file')

    if not has_file(file) or not name or not created_by or raw_position is None:
        return jsonify({'message': 'File, gallery name, created_by, and gallery position are required.'}), 400
    if too_long(name, GALLERY_NAME_MAX):
        return jsonify({'message': f'Gallery name cannot exceed {GALLERY_NAME_MAX} characters.'}), 400
    position = parse_position(raw_position)
    if position is None:
        return jsonify({'message': 'Gallery position must be 1 or greater.'}), 400

    try:
        with UploadBatch(UPLOAD_DIR) as uploads:
            image_url, public_id = uploads.save(file)
            gallery = Gallery(name=name, image_url=image_url, public_id=public_id,
                              position=position, created_by=created_by)
            db.session.add(gallery)
            db.session.commit()
    except UploadError as e:
        return jsonify({'message': str(e)}), 400

    return jsonify({'message': 'Gallery uploaded successfully!', 'gallery': gallery.to_dict()}), 201


@gallery_bp.route('/update/<int:gallery_id>', methods=['PUT'])
@permission_required(PAGE, 'update')
def update_gallery(gallery_id):
    """Update name/position and optionally replace the image."""
    gallery = db.session.get(Gallery, gallery_id)
    if not gallery:
        return jsonify({'message': 'Gallery not found.'}), 404

    name = (request.form.get('galleryName') or '').strip()
    raw_position = request.form.get('galleryPosition')
    file = request.files.get('file')

    if too_long(name, GALLERY_NAME_MAX):
        return jsonify({'message': f'Gallery name cannot exceed {GALLERY_NAME_MAX} characters.'}), 400
    if raw_position:
        position = parse_position(raw_position)
        if position is None:
            return jsonify({'message': 'Gallery position must be 1 or greater.'}), 400
        gallery.position = position

    old_public_id = None
    try:
        with UploadBatch(UPLOAD_DIR) as uploads:
            if has_file(file):
                old_public_id = gallery.public_id
                gallery.image_url, gallery.public_id = uploads.save(file)
            if name:
                gallery.name = name
            gallery.touch(request.form.get('modify_by'))
            db.session.commit()
    except UploadError as e:
        db.session.rollback()
        return jsonify({'message': str(e)}), 400
    delete_upload(old_public_id)

    return jsonify({'message': 'Gallery updated successfully!', 'gallery': gallery.to_dict()})


@gallery_bp.route('/delete/<int:gallery_id>', methods=['DELETE'])
@permission_required(PAGE, 'delete')
def delete_gallery(gallery_id):
    gallery = db.session.get(Gallery, gallery_id)
    if not gallery:
        return jsonify({'message': 'Gallery not found.'}), 404

    public_id = gallery.public_id
    db.session.delete(gallery)
    db.session.commit()
    delete_upload(public_id)

    return jsonify({'message': 'Gallery deleted successfully.'})


@gallery_bp.route('/toggle-visibility/<int:gallery_id>', methods=['PUT'])
@permission_required(PAGE, 'update')
def toggle_gallery_visibility(gallery_id):
    gallery = db.session.get(Gallery, gallery_id)
    if not gallery:
        return jsonify({'message': 'Gallery not found.'}), 404

    data = request.get_json(silent=True) or {}
    gallery.toggle_visibility(data.get('modify_by'))
    db.session.commit()

    return jsonify({'message': 'Gallery visibility updated successfully!', 'gallery': gallery.to_dict()})
