import os

from conftest import API, image, stored_files, stored_path
from models import db

FORM = 'multipart/form-data'


def upload(client, headers, name='Campus', position='1', **extra):
    data = {'galleryName': name, 'galleryPosition': position, 'created_by': 'Admin', 'file': image()}
    data.update(extra)
    data = {key: value for key, value in data.items() if value is not None}
    return client.post(f'{API}/gallery/upload', headers=headers, data=data, content_type=FORM)


def test_upload_and_list_by_position(client, admin_headers):
    upload(client, admin_headers, name='Second', position='2')
    response = upload(client, admin_headers, name='First', position='1')

    assert response.status_code == 201
    assert response.get_json()['gallery']['IsVisible'] is True
    names = [g['galleryName'] for g in client.get(f'{API}/gallery').get_json()]
    assert names == ['First', 'Second']


def test_upload_validation(client, admin_headers):
    assert upload(client, admin_headers, name='x' * 101).status_code == 400
    assert upload(client, admin_headers, position='0').status_code == 400
    assert upload(client, admin_headers, position='abc').status_code == 400
    assert upload(client, admin_headers, file=None).status_code == 400
    assert upload(client, admin_headers, name='x' * 100).status_code == 201


def test_update_replaces_image(app, client, admin_headers):
    created = upload(client, admin_headers).get_json()['gallery']
    old_path = stored_path(app, created['galleryUrl'])

    response = client.put(f"{API}/gallery/update/{created['id']}", headers=admin_headers, data={
        'galleryName': 'Library', 'galleryPosition': '3', 'modify_by': 'Admin', 'file': image('library.png'),
    }, content_type=FORM)

    assert response.status_code == 200
    gallery = response.get_json()['gallery']
    assert gallery['galleryName'] == 'Library'
    assert gallery['galleryPosition'] == 3
    assert not os.path.exists(old_path)


def test_update_without_file_keeps_image(client, admin_headers):
    created = upload(client, admin_headers).get_json()['gallery']

    response = client.put(f"{API}/gallery/update/{created['id']}", headers=admin_headers,
                          data={'galleryName': 'Renamed', 'modify_by': 'Admin'}, content_type=FORM)

    assert response.get_json()['gallery']['galleryUrl'] == created['galleryUrl']
    assert response.get_json()['gallery']['galleryPosition'] == 1


def test_toggle_visibility_keeps_record(client, admin_headers):
    created = upload(client, admin_headers).get_json()['gallery']

    response = client.put(f"{API}/gallery/toggle-visibility/{created['id']}", headers=admin_headers,
                          json={'modify_by': 'Admin'})

    assert response.status_code == 200
    listed = client.get(f'{API}/gallery').get_json()
    assert len(listed) == 1
    assert listed[0]['IsVisible'] is False
    assert listed[0]['modify_by'] == 'Admin'


def test_delete(app, client, admin_headers):
    created = upload(client, admin_headers).get_json()['gallery']
    path = stored_path(app, created['galleryUrl'])

    assert client.delete(f"{API}/gallery/delete/{created['id']}", headers=admin_headers).status_code == 200
    assert not os.path.exists(path)
    assert client.delete(f"{API}/gallery/delete/{created['id']}", headers=admin_headers).status_code == 404


def test_upload_discards_image_when_commit_fails(app, client, admin_headers, monkeypatch):
    def failing_commit():
        raise RuntimeError('database unavailable')

    monkeypatch.setattr(db.session, 'commit', failing_commit)

    assert upload(client, admin_headers).status_code == 500
    assert stored_files(app) == []


def test_update_with_disallowed_file_keeps_image(app, client, admin_headers):
    created = upload(client, admin_headers).get_json()['gallery']

    response = client.put(f"{API}/gallery/update/{created['id']}", headers=admin_headers, data={
        'galleryName': 'Renamed', 'modify_by': 'Admin', 'file': image('script.exe'),
    }, content_type=FORM)

    assert response.status_code == 400
    listed = client.get(f'{API}/gallery').get_json()[0]
    assert listed['galleryName'] == 'Campus'
    assert os.path.exists(stored_path(app, listed['galleryUrl']))
    assert len(stored_files(app)) == 1
