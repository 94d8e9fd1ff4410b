from flask import Blueprint, jsonify, request

from models import db, ImportantLink
from utils.access import permission_required
from utils.storage import UploadBatch, UploadError, delete_upload, has_file
from utils.validation import LINK_NAME_MAX, LINK_URL_MAX, is_valid_link_url, parse_position, too_long

important_links_bp = Blueprint('important_links', __name__)

PAGE = '/important-links'
UPLOAD_DIR = 'important-links'


def _check_text_fields(logo_name, links_url):
    """Return an error message for over-long or malformed fields, else None."""
    if too_long(logo_name, LINK_NAME_MAX):
        return f'Link name cannot exceed {LINK_NAME_MAX} characters'
    if too_long(links_url, LINK_URL_MAX):
        return f'Link URL cannot exceed {LINK_URL_MAX} characters'
    if links_url and not is_valid_link_url(links_url):
        return 'Please provide a valid URL'
    return None


@important_links_bp.route('/all')
def get_links():
    links = ImportantLink.query.order_by(ImportantLink.position, ImportantLink.id).all()
    return jsonify([link.to_dict() for link in links])


@important_links_bp.route('/upload', methods=['POST'])
@permission_required(PAGE, 'create')
def upload_link():
    logo_name = (request.form.get('logoName') or '').strip()
    links_url = (request.form.get('linksUrl') or '').strip()
    created_by = request.form.get('created_by')
    raw_position = request.form.get('logoPosition')
    file = request.files.get('file')

    if not has_file(file) or not logo_name or not links_url or not created_by or raw_position is None:
        return jsonify({'message': 'File, logo name, links URL, created_by, and logo position are required.'}), 400
    error = _check_text_fields(logo_name, links_url)
    if error:
        return jsonify({'message': error}), 400
    position = parse_position(raw_position)
    if position is None:
        return jsonify({'message': 'Logo position must be 1 or greater.'}), 400

    try:
        with UploadBatch(UPLOAD_DIR) as uploads:
            logo_url, public_id = uploads.save(file)
            link = ImportantLink(logo_name=logo_name, logo_url=logo_url, public_id=public_id,
                                 links_url=links_url, position=position, created_by=created_by)
            db.session.add(link)
            db.session.commit()
    except UploadError as e:
        return jsonify({'message': str(e)}), 400

    return jsonify({'message': 'Important link uploaded successfully!', 'link': link.to_dict()}), 201


@important_links_bp.route('/update/<int:link_id>', methods=['PUT'])
@permission_required(PAGE, 'update')
def update_link(link_id):
    link = db.session.get(ImportantLink, link_id)
    if not link:
        return jsonify({'message': 'Important link not found.'}), 404

    logo_name = (request.form.get('logoName') or '').strip()
    links_url = (request.form.get('linksUrl') or '').strip()
    raw_position = request.form.get('logoPosition')
    file = request.files.get('file')

    error = _check_text_fields(logo_name, links_url)
    if error:
        return jsonify({'message': error}), 400
    if raw_position:
        position = parse_position(raw_position)
        if position is None:
            return jsonify({'message': 'Logo position must be 1 or greater.'}), 400
        link.position = position

    old_public_id = None
    try:
        with UploadBatch(UPLOAD_DIR) as uploads:
            if has_file(file):
                old_public_id = link.public_id
                link.logo_url, link.public_id = uploads.save(file)
            if logo_name:
                link.logo_name = logo_name
            if links_url:
                link.links_url = links_url
            link.touch(request.form.get('modify_by'))
            db.session.commit()
    except UploadError as e:
        db.session.rollback()
        return jsonify({'message': str(e)}), 400
    delete_upload(old_public_id)

    return jsonify({'message': 'Important link updated successfully!', 'link': link.to_dict()})


@important_links_bp.route('/delete/<int:link_id>', methods=['DELETE'])
@permission_required(PAGE, 'delete')
def delete_link(link_id):
    link = db.session.get(ImportantLink, link_id)
    if not link:
        return jsonify({'message': 'Important link not found.'}), 404

    public_id = link.public_id
    db.session.delete(link)
    db.session.commit()
    delete_upload(public_id)

    return jsonify({'message': 'Important link deleted successfully.'})


@important_links_bp.route('/toggle-visibility/<int:link_id>', methods=['PUT'])
@permission_required(PAGE, 'update')
def toggle_link_visibility(link_id):
    link = db.session.get(ImportantLink, link_id)
    if not link:
        return jsonify({'message': 'Important link not found.'}), 404

    data = request.get_json(silent=True) or {}
    link.toggle_visibility(data.get('modify_by'))
    db.session.commit()

    return jsonify({'message': 'Link visibility updated successfully!', 'link': link.to_dict()})
