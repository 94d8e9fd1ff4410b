"""Seed script: roles, back-office pages and a first administrator account."""

import os

from models import db, Role, Page, User

ROLES = ['Admin', 'Administrator', 'Registered']

PAGES = [
    ('Notifications', '/notifications'),
    ('Banners', '/banners'),
    ('Gallery', '/gallery'),
    ('Important Links', '/important-links'),
    ('Faculty', '/faculty'),
    ('Users', '/users'),
    ('Pages', '/pages'),
    ('Permissions', '/permissions'),
    ('Logs', '/logs'),
]


def seed_database(admin_email=None, admin_password=None, admin_name='Administrator'):
    """Insert whatever is missing. Existing rows are left alone."""
    for name in ROLES:
        if not Role.query.filter_by(name=name).first():
            db.session.add(Role(name=name))
    db.session.flush()

    for page_name, page_url in PAGES:
        if not Page.query.filter_by(url=page_url).first():
            db.session.add(Page(name=page_name, url=page_url, created_by='System'))

    admin_email = admin_email or os.environ.get('ADMIN_EMAIL')
    admin_password = admin_password or os.environ.get('ADMIN_PASSWORD')
    if admin_email and admin_password and not User.query.filter_by(email=admin_email.lower()).first():
        role = Role.query.filter_by(name='Administrator').first()
        user = User(name=admin_name, email=admin_email.lower(), role_id=role.id, created_by='System')
        user.set_password(admin_password)
        db.session.add(user)

    db.session.commit()
    print(f'Seeded {len(ROLES)} roles and {len(PAGES)} pages.')


if __name__ == '__main__':
    from app import create_app

    with create_app().app_context():
        seed_database()
