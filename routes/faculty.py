from flask import Blueprint, jsonify, request, current_app

from models import db, Faculty
from utils.access import permission_required
from utils.documents import DocumentFormatError, FacultyDocument, parse_documents, parse_titles
from utils.storage import UploadBatch, UploadError, delete_upload, has_file, public_id_from_url
from utils.validation import (
    FACULTY_NAME_MAX, MAX_FACULTY_DOCUMENTS, parse_bool, parse_optional_int, too_long,
)

faculty_bp = Blueprint('faculty', __name__)

PAGE = '/faculty'
UPLOAD_DIR = 'faculties'


def _uploaded_documents():
    return [f for f in request.files.getlist('documents') if has_file(f)]


def _store_documents(uploads, files, titles):
    """Upload each file; titles pair up by index, with a fallback title."""
    documents = []
    for i, file in enumerate(files):
        url, _ = uploads.save(file)
        title = titles[i].strip() if i < len(titles) and titles[i].strip() else f'Untitled Document {i + 1}'
        documents.append(FacultyDocument(title=title, url=url))
    return documents


@faculty_bp.route('')
def get_faculties():
    faculties = Faculty.query.order_by(Faculty.name).all()
    return jsonify([faculty.to_dict() for faculty in faculties])


@faculty_bp.route('/add', methods=['POST'])
@permission_required(PAGE, 'create')
def add_faculty():
    form = request.form
    name = (form.get('faculty_name') or '').strip()
    qualification = (form.get('qualification') or '').strip()
    designation = (form.get('designation') or '').strip()
    created_by = form.get('created_by')

    if not name or not qualification or not designation or not created_by:
        return jsonify({'success': False, 'message': 'Missing required fields'}), 400
    if too_long(name, FACULTY_NAME_MAX):
        return jsonify({'success': False, 'message': f'Faculty name cannot exceed {FACULTY_NAME_MAX} characters'}), 400

    try:
        titles = parse_titles(form.get('documentTitles'))
    except DocumentFormatError as e:
        return jsonify({'success': False, 'message': str(e)}), 400

    files = _uploaded_documents()
    if len(files) > MAX_FACULTY_DOCUMENTS:
        return jsonify({'success': False, 'message': f'At most {MAX_FACULTY_DOCUMENTS} documents are allowed'}), 400

    profile_pic = request.files.get('profilePic')
    try:
        with UploadBatch(UPLOAD_DIR) as uploads:
            uploads.check([profile_pic] + files)
            profile_pic_url = uploads.save(profile_pic)[0] if has_file(profile_pic) else None
            documents = _store_documents(uploads, files, titles)

            faculty = Faculty(
                name=name,
                qualification=qualification,
                designation=designation,
                profile_pic_url=profile_pic_url,
                monthly_salary=parse_optional_int(form.get('monthlySalary')),
                yearly_leave=parse_optional_int(form.get('yearlyLeave')),
                is_visible=parse_bool(form.get('IsVisible'), default=True),
                created_by=created_by,
            )
            faculty.documents = documents
            db.session.add(faculty)
            db.session.commit()
    except UploadError as e:
        return jsonify({'success': False, 'message': str(e)}), 400

    current_app.logger.info('Faculty added: %s', faculty.name)
    return jsonify({'success': True, 'message': 'Faculty added successfully', 'faculty': faculty.to_dict()}), 201


@faculty_bp.route('/update/<int:faculty_id>', methods=['PUT'])
@permission_required(PAGE, 'update')
def update_faculty(faculty_id):
    """
    Update a faculty profile.

    existingDocuments, when sent, is the full list of documents to keep; new
    uploads are appended after it. When it is absent the stored list is kept.
    """
    faculty = db.session.get(Faculty, faculty_id)
    if not faculty:
        return jsonify({'success': False, 'message': 'Faculty not found'}), 404

    form = request.form
    name = (form.get('faculty_name') or '').strip()
    if too_long(name, FACULTY_NAME_MAX):
        return jsonify({'success': False, 'message': f'Faculty name cannot exceed {FACULTY_NAME_MAX} characters'}), 400

    try:
        titles = parse_titles(form.get('documentTitles'))
        if 'existingDocuments' in form:
            documents = parse_documents(form.get('existingDocuments'))
        else:
            documents = faculty.documents
    except DocumentFormatError as e:
        return jsonify({'success': False, 'message': str(e)}), 400

    files = _uploaded_documents()
    if len(documents) + len(files) > MAX_FACULTY_DOCUMENTS:
        return jsonify({'success': False, 'message': f'At most {MAX_FACULTY_DOCUMENTS} documents are allowed'}), 400

    old_pic_url = None
    profile_pic = request.files.get('profilePic')
    try:
        with UploadBatch(UPLOAD_DIR) as uploads:
            uploads.check([profile_pic] + files)
            if has_file(profile_pic):
                old_pic_url = faculty.profile_pic_url
                faculty.profile_pic_url = uploads.save(profile_pic)[0]
            documents = documents + _store_documents(uploads, files, titles)

            faculty.name = name or faculty.name
            faculty.qualification = (form.get('qualification') or '').strip() or faculty.qualification
            faculty.designation = (form.get('designation') or '').strip() or faculty.designation
            salary = parse_optional_int(form.get('monthlySalary'))
            if salary is not None:
                faculty.monthly_salary = salary
            leave = parse_optional_int(form.get('yearlyLeave'))
            if leave is not None:
                faculty.yearly_leave = leave
            faculty.is_visible = parse_bool(form.get('IsVisible'), default=faculty.is_visible)
            faculty.documents = documents
            faculty.touch(form.get('modify_by'))
            db.session.commit()
    except UploadError as e:
        db.session.rollback()
        return jsonify({'success': False, 'message': str(e)}), 400

    if old_pic_url:
        delete_upload(public_id_from_url(old_pic_url))

    current_app.logger.info('Faculty updated: %s', faculty.name)
    return jsonify({'success': True, 'message': 'Faculty updated successfully', 'faculty': faculty.to_dict()})


@faculty_bp.route('/delete/<int:faculty_id>', methods=['DELETE'])
@permission_required(PAGE, 'delete')
def delete_faculty(faculty_id):
    faculty = db.session.get(Faculty, faculty_id)
    if not faculty:
        return jsonify({'success': False, 'message': 'Faculty not found'}), 404

    stored_urls = [faculty.profile_pic_url] + [doc.url for doc in faculty.documents]
    db.session.delete(faculty)
    db.session.commit()
    for url in stored_urls:
        delete_upload(public_id_from_url(url))

    current_app.logger.info('Faculty deleted: %s', faculty_id)
    return jsonify({'success': True, 'message': 'Faculty deleted successfully'})


@faculty_bp.route('/toggle-visibility/<int:faculty_id>', methods=['PUT'])
@permission_required(PAGE, 'update')
def toggle_faculty_visibility(faculty_id):
    faculty = db.session.get(Faculty, faculty_id)
    if not faculty:
        return jsonify({'success': False, 'message': 'Faculty not found'}), 404

    data = request.get_json(silent=True) or {}
    faculty.toggle_visibility(data.get('modify_by'))
    db.session.commit()

    return jsonify({
        'success': True,
        'message': 'Faculty visibility updated successfully',
        'faculty': faculty.to_dict(),
    })


@faculty_bp.route('/<int:faculty_id>/update-document-title', methods=['PUT'])
@permission_required(PAGE, 'update')
def update_document_title(faculty_id):
    faculty = db.session.get(Faculty, faculty_id)
    if not faculty:
        return jsonify({'success': False, 'message': 'Faculty not found'}), 404

    data = request.get_json(silent=True) or {}
    doc_index = data.get('docIndex')
    new_title = (data.get('newTitle') or '').strip()
    if not new_title:
        return jsonify({'success': False, 'message': 'newTitle is required'}), 400

    try:
        documents = faculty.documents
    except DocumentFormatError as e:
        return jsonify({'success': False, 'message': str(e)}), 400
    if not isinstance(doc_index, int) or isinstance(doc_index, bool) or not 0 <= doc_index < len(documents):
        return jsonify({'success': False, 'message': 'Invalid document index'}), 400

    documents[doc_index].title = new_title
    faculty.documents = documents
    faculty.touch(data.get('modify_by'))
    db.session.commit()

    return jsonify({'success': True, 'message': 'Document title updated successfully', 'faculty': faculty.to_dict()})
