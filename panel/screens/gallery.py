from panel.screens.base import PositionedImageScreen
from utils.validation import GALLERY_NAME_MAX


class GalleryScreen(PositionedImageScreen):
    label = 'gallery'
    name_field = 'galleryName'
    position_field = 'galleryPosition'
    name_max = GALLERY_NAME_MAX
