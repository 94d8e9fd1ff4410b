from .auth import auth_bp
from .users import users_bp
from .pages import pages_bp
from .permissions import permissions_bp
from .logs import logs_bp
from .notifications import notifications_bp
from .banners import banners_bp
from .gallery import gallery_bp
from .important_links import important_links_bp
from .faculty import faculty_bp

__all__ = ['auth_bp', 'users_bp', 'pages_bp', 'permissions_bp', 'logs_bp', 'notifications_bp',
           'banners_bp', 'gallery_bp', 'important_links_bp', 'faculty_bp']
