from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

def init_app(app):
    db.init_app(app)
    # Import models to register them with SQLAlchemy
    from .user import User, Role
    from .page import Page, Permission
    from .notification import Notification
    from .banner import Banner
    from .gallery import Gallery
    from .important_link import ImportantLink
    from .faculty import Faculty
