from .database import db
from .user import User, Role
from .page import Page, Permission
from .notification import Notification
from .banner import Banner
from .gallery import Gallery
from .important_link import ImportantLink
from .faculty import Faculty

__all__ = ['db', 'User', 'Role', 'Page', 'Permission', 'Notification', 'Banner',
           'Gallery', 'ImportantLink', 'Faculty']
