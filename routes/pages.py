from flask import Blueprint, jsonify, request
from sqlalchemy.exc import IntegrityError

from models import db, Page
from utils.access import permission_required

pages_bp = Blueprint('pages', __name__)

PAGE = '/pages'


def normalize_page_url(value):
    """Pages are stored with exactly one leading slash."""
    return '/' + value.strip().lstrip('/')


@pages_bp.route('/createPage', methods=['POST'])
@permission_required(PAGE, 'create')
def create_page():
    data = request.get_json(silent=True) or {}
    page_name = (data.get('pageName') or '').strip()
    page_url = (data.get('pageUrl') or '').strip()
    created_by = data.get('created_by')

    if not page_name or not page_url or not created_by:
        return jsonify({'message': 'pageName, pageUrl, created_by are required.'}), 400

    page = Page(name=page_name, url=normalize_page_url(page_url), created_by=created_by)
    db.session.add(page)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify({'message': f'Page URL {page.url} already exists.'}), 400

    return jsonify({'message': 'Page created successfully!', 'page': page.to_dict()}), 201


@pages_bp.route('/pages')
def get_pages():
    pages = Page.query.order_by(Page.id).all()
    return jsonify([page.to_dict() for page in pages])


@pages_bp.route('/updatePage/<int:page_id>', methods=['PUT'])
@permission_required(PAGE, 'update')
def update_page(page_id):
    page = db.session.get(Page, page_id)
    if not page:
        return jsonify({'message': 'Page not found.'}), 404

    data = request.get_json(silent=True) or {}
    if data.get('pageName'):
        page.name = data['pageName'].strip()
    if data.get('pageUrl'):
        page.url = normalize_page_url(data['pageUrl'])
    page.touch(data.get('modify_by'))
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify({'message': f'Page URL {page.url} already exists.'}), 400

    return jsonify({'message': 'Page updated successfully!', 'page': page.to_dict()})


@pages_bp.route('/deletePage/<int:page_id>', methods=['DELETE'])
@permission_required(PAGE, 'delete')
def delete_page(page_id):
    page = db.session.get(Page, page_id)
    if not page:
        return jsonify({'message': 'Page not found.'}), 404

    db.session.delete(page)
    db.session.commit()
    return jsonify({'message': 'Page deleted successfully!'})
