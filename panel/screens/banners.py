from panel.screens.base import PositionedImageScreen
from utils.validation import BANNER_NAME_MAX


class BannerScreen(PositionedImageScreen):
    label = 'banner'
    name_field = 'bannerName'
    position_field = 'bannerPosition'
    name_max = BANNER_NAME_MAX

    def swap(self, first_id, second_id):
        """Exchange the display positions of two banners."""
        if not self.allowed('update'):
            return False
        return self.run(self.repository.swap, first_id, second_id, self.actor)
