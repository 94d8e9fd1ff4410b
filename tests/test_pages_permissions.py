from conftest import API, image
from data.seed_data import PAGES


def page_id(client, url):
    return next(p['pageId'] for p in client.get(f'{API}/pages').get_json() if p['pageUrl'] == url)


def test_seeded_pages_and_roles(client):
    pages = client.get(f'{API}/pages').get_json()
    assert [p['pageUrl'] for p in pages] == [url for _, url in PAGES]

    roles = client.get(f'{API}/getrole').get_json()['role']
    assert roles == [
        {'role_id': 1, 'name': 'Admin'},
        {'role_id': 2, 'name': 'Administrator'},
        {'role_id': 3, 'name': 'Registered'},
    ]


def test_create_page_normalizes_url(client, admin_headers):
    response = client.post(f'{API}/createPage', headers=admin_headers,
                           json={'pageName': 'Events', 'pageUrl': '//events', 'created_by': 'Admin'})

    assert response.status_code == 201
    assert response.get_json()['page']['pageUrl'] == '/events'


def test_create_page_duplicate_url(client, admin_headers):
    response = client.post(f'{API}/createPage', headers=admin_headers,
                           json={'pageName': 'Gallery again', 'pageUrl': 'gallery', 'created_by': 'Admin'})
    assert response.status_code == 400


def test_create_page_requires_fields(client, admin_headers):
    response = client.post(f'{API}/createPage', headers=admin_headers, json={'pageName': 'Events'})
    assert response.status_code == 400


def test_update_and_delete_page(client, admin_headers):
    created = client.post(f'{API}/createPage', headers=admin_headers,
                          json={'pageName': 'Events', 'pageUrl': '/events', 'created_by': 'Admin'}).get_json()
    pid = created['page']['pageId']

    response = client.put(f'{API}/updatePage/{pid}', headers=admin_headers,
                          json={'pageName': 'News', 'pageUrl': 'news', 'modify_by': 'Admin'})
    assert response.status_code == 200
    assert response.get_json()['page']['pageUrl'] == '/news'

    assert client.delete(f'{API}/deletePage/{pid}', headers=admin_headers).status_code == 200
    assert client.delete(f'{API}/deletePage/{pid}', headers=admin_headers).status_code == 404


def test_page_writes_need_permission(client, editor_headers):
    response = client.post(f'{API}/createPage', headers=editor_headers,
                           json={'pageName': 'Events', 'pageUrl': '/events', 'created_by': 'Editor'})
    assert response.status_code == 403


def test_save_permissions_upserts(client, admin_headers):
    banners = page_id(client, '/banners')
    gallery = page_id(client, '/gallery')
    rows = [
        {'roleId': 3, 'pageId': banners, 'canCreate': True, 'canRead': True,
         'canUpdate': False, 'canDelete': False, 'created_by': 'Admin', 'modify_by': 'Admin'},
        {'roleId': 3, 'pageId': gallery, 'canCreate': False, 'canRead': True,
         'canUpdate': False, 'canDelete': False, 'created_by': 'Admin', 'modify_by': 'Admin'},
    ]
    response = client.post(f'{API}/save-permissions', headers=admin_headers, json={'permissions': rows})
    assert response.status_code == 200

    saved = {(p['roleId'], p['pageId']): p for p in client.get(f'{API}/permissions').get_json()}
    assert len(saved) == 2
    assert saved[(3, banners)]['canCreate'] is True
    assert saved[(3, gallery)]['canCreate'] is False


def test_saved_permissions_take_effect(client, admin_headers, editor_headers):
    banners = page_id(client, '/banners')
    client.post(f'{API}/save-permissions', headers=admin_headers, json={'permissions': [
        {'roleId': 3, 'pageId': banners, 'canCreate': True},
    ]})

    response = client.post(f'{API}/banner/upload', headers=editor_headers, data={
        'bannerName': 'Welcome', 'bannerPosition': '1', 'created_by': 'Editor', 'file': image(),
    }, content_type='multipart/form-data')
    assert response.status_code == 201


def test_save_permissions_rejects_bad_format(client, admin_headers):
    response = client.post(f'{API}/save-permissions', headers=admin_headers, json={'permissions': 'all'})
    assert response.status_code == 400


def test_save_permissions_is_all_or_nothing(client, admin_headers):
    banners = page_id(client, '/banners')
    response = client.post(f'{API}/save-permissions', headers=admin_headers, json={'permissions': [
        {'roleId': 3, 'pageId': banners, 'canCreate': True},
        {'roleId': 99, 'pageId': banners, 'canCreate': True},
    ]})

    assert response.status_code == 400
    assert len(client.get(f'{API}/permissions').get_json()) == 1


def test_save_permissions_needs_update_on_permissions_page(client, editor_headers):
    response = client.post(f'{API}/save-permissions', headers=editor_headers, json={'permissions': []})
    assert response.status_code == 403
