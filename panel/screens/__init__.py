from panel.screens.banners import BannerScreen
from panel.screens.faculty import FacultyScreen
from panel.screens.gallery import GalleryScreen
from panel.screens.important_links import ImportantLinkScreen
from panel.screens.notifications import NotificationScreen

__all__ = ['BannerScreen', 'FacultyScreen', 'GalleryScreen', 'ImportantLinkScreen', 'NotificationScreen']
