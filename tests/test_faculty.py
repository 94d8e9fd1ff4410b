import json
import os

from conftest import API, document, image, stored_files, stored_path
from models import db, Faculty

FORM = 'multipart/form-data'


def add(client, headers, documents=(), titles=None, **fields):
    data = {
        'faculty_name': 'Dr. Rao',
        'qualification': 'M. Pharma',
        'designation': 'Lecturer',
        'created_by': 'Admin',
        'monthlySalary': '50000',
        'yearlyLeave': '12',
    }
    data.update(fields)
    if documents:
        data['documents'] = list(documents)
    if titles is not None:
        data['documentTitles'] = titles if isinstance(titles, str) else json.dumps(titles)
    return client.post(f'{API}/faculty/add', headers=headers, data=data, content_type=FORM)


def stored_documents(faculty):
    return json.loads(faculty['documents']) if faculty['documents'] else []


def test_add_with_documents_and_titles(app, client, admin_headers):
    response = add(client, admin_headers, documents=[document('cv.pdf'), document('award.pdf')],
                   titles=['CV'], profilePic=image())

    assert response.status_code == 201
    faculty = response.get_json()['faculty']
    assert faculty['monthlySalary'] == 50000
    assert faculty['yearlyLeave'] == 12
    assert faculty['IsVisible'] is True
    docs = stored_documents(faculty)
    assert [d['title'] for d in docs] == ['CV', 'Untitled Document 2']
    assert all(os.path.exists(stored_path(app, d['url'])) for d in docs)
    assert os.path.exists(stored_path(app, faculty['profilePicUrl']))


def test_add_without_documents_stores_null(client, admin_headers):
    faculty = add(client, admin_headers).get_json()['faculty']
    assert faculty['documents'] is None
    assert faculty['profilePicUrl'] is None


def test_add_requires_fields(client, admin_headers):
    assert add(client, admin_headers, designation='').status_code == 400
    assert add(client, admin_headers, faculty_name='x' * 151).status_code == 400


def test_add_with_malformed_titles_creates_nothing(app, client, admin_headers):
    response = add(client, admin_headers, documents=[document()], titles='{"not": "a list"')

    assert response.status_code == 400
    with app.app_context():
        assert Faculty.query.count() == 0


def test_add_with_disallowed_document_stores_no_files(app, client, admin_headers):
    response = add(client, admin_headers, documents=[document('good.pdf'), document('bad.exe')],
                   profilePic=image())

    assert response.status_code == 400
    assert stored_files(app) == []
    with app.app_context():
        assert Faculty.query.count() == 0


def test_add_discards_files_when_commit_fails(app, client, admin_headers, monkeypatch):
    def failing_commit():
        raise RuntimeError('database unavailable')

    monkeypatch.setattr(db.session, 'commit', failing_commit)
    response = add(client, admin_headers, documents=[document()], profilePic=image())

    assert response.status_code == 500
    assert stored_files(app) == []


def test_add_rejects_more_than_ten_documents(client, admin_headers):
    response = add(client, admin_headers, documents=[document(f'd{i}.pdf') for i in range(11)])
    assert response.status_code == 400


def test_list_sorted_by_name(client, admin_headers):
    add(client, admin_headers, faculty_name='Zaveri')
    add(client, admin_headers, faculty_name='Ahmed')

    names = [f['faculty_name'] for f in client.get(f'{API}/faculty').get_json()]
    assert names == ['Ahmed', 'Zaveri']


def test_update_without_existing_documents_keeps_stored_list(client, admin_headers):
    created = add(client, admin_headers, documents=[document()], titles=['CV']).get_json()['faculty']

    response = client.put(f"{API}/faculty/update/{created['id']}", headers=admin_headers, data={
        'designation': 'Principal', 'modify_by': 'Admin',
        'documents': [document('new.pdf')], 'documentTitles': json.dumps(['Award']),
    }, content_type=FORM)

    assert response.status_code == 200
    faculty = response.get_json()['faculty']
    assert faculty['designation'] == 'Principal'
    assert faculty['faculty_name'] == 'Dr. Rao'
    assert [d['title'] for d in stored_documents(faculty)] == ['CV', 'Award']


def test_update_with_existing_documents_replaces_list(client, admin_headers):
    created = add(client, admin_headers, documents=[document(), document()], titles=['A', 'B']).get_json()['faculty']
    keep = stored_documents(created)[1:]

    response = client.put(f"{API}/faculty/update/{created['id']}", headers=admin_headers, data={
        'existingDocuments': json.dumps(keep), 'modify_by': 'Admin',
    }, content_type=FORM)

    assert [d['title'] for d in stored_documents(response.get_json()['faculty'])] == ['B']


def test_update_respects_document_cap(client, admin_headers):
    created = add(client, admin_headers, documents=[document(f'd{i}.pdf') for i in range(9)]).get_json()['faculty']

    response = client.put(f"{API}/faculty/update/{created['id']}", headers=admin_headers, data={
        'documents': [document('x.pdf'), document('y.pdf')], 'modify_by': 'Admin',
    }, content_type=FORM)
    assert response.status_code == 400


def test_update_profile_pic_deletes_old_file(app, client, admin_headers):
    created = add(client, admin_headers, profilePic=image('old.png')).get_json()['faculty']
    old_path = stored_path(app, created['profilePicUrl'])

    response = client.put(f"{API}/faculty/update/{created['id']}", headers=admin_headers,
                          data={'profilePic': image('new.png'), 'modify_by': 'Admin'}, content_type=FORM)

    assert response.status_code == 200
    assert not os.path.exists(old_path)


def test_update_with_disallowed_document_keeps_profile(app, client, admin_headers):
    created = add(client, admin_headers, profilePic=image('old.png')).get_json()['faculty']
    before = stored_files(app)

    response = client.put(f"{API}/faculty/update/{created['id']}", headers=admin_headers, data={
        'profilePic': image('new.png'), 'documents': [document('ok.pdf'), document('bad.exe')],
        'modify_by': 'Admin',
    }, content_type=FORM)

    assert response.status_code == 400
    assert stored_files(app) == before
    listed = client.get(f'{API}/faculty').get_json()[0]
    assert listed['profilePicUrl'] == created['profilePicUrl']
    assert listed['documents'] is None


def test_update_document_title(client, admin_headers):
    created = add(client, admin_headers, documents=[document(), document()], titles=['A', 'B']).get_json()['faculty']
    path = f"{API}/faculty/{created['id']}/update-document-title"

    response = client.put(path, headers=admin_headers, json={'docIndex': 1, 'newTitle': 'Thesis', 'modify_by': 'Admin'})

    assert response.status_code == 200
    docs = stored_documents(response.get_json()['faculty'])
    assert [d['title'] for d in docs] == ['A', 'Thesis']
    assert docs[1]['url'] == stored_documents(created)[1]['url']


def test_update_document_title_rejects_bad_input(client, admin_headers):
    created = add(client, admin_headers, documents=[document()]).get_json()['faculty']
    path = f"{API}/faculty/{created['id']}/update-document-title"

    assert client.put(path, headers=admin_headers, json={'docIndex': 1, 'newTitle': 'X'}).status_code == 400
    assert client.put(path, headers=admin_headers, json={'docIndex': -1, 'newTitle': 'X'}).status_code == 400
    assert client.put(path, headers=admin_headers, json={'docIndex': '0', 'newTitle': 'X'}).status_code == 400
    assert client.put(path, headers=admin_headers, json={'docIndex': 0, 'newTitle': '  '}).status_code == 400


def test_delete_removes_files(app, client, admin_headers):
    created = add(client, admin_headers, documents=[document()], profilePic=image()).get_json()['faculty']
    paths = [stored_path(app, created['profilePicUrl'])] + [
        stored_path(app, d['url']) for d in stored_documents(created)]

    assert client.delete(f"{API}/faculty/delete/{created['id']}", headers=admin_headers).status_code == 200
    assert not any(os.path.exists(p) for p in paths)


def test_toggle_visibility(client, admin_headers):
    created = add(client, admin_headers).get_json()['faculty']

    response = client.put(f"{API}/faculty/toggle-visibility/{created['id']}", headers=admin_headers,
                          json={'modify_by': 'Admin'})

    assert response.get_json()['faculty']['IsVisible'] is False
    assert client.get(f'{API}/faculty').get_json()[0]['IsVisible'] is False
