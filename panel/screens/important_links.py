from panel.screens.base import Screen, VisibilityToggle
from utils.validation import LINK_NAME_MAX, LINK_URL_MAX, is_valid_link_url, parse_position, too_long


class ImportantLinkScreen(VisibilityToggle, Screen):

    def __init__(self, repository, notifier, user, capabilities):
        super().__init__(repository, notifier, user, capabilities)
        self.reset_form()

    def reset_form(self):
        self.link_name = ''
        self.links_url = ''
        self.is_valid_url = True
        self.position = ''
        self.logo = None
        self.editing_id = None

    def set_links_url(self, value):
        self.links_url = (value or '').strip()
        self.is_valid_url = not self.links_url or is_valid_link_url(self.links_url)

    @property
    def can_submit(self):
        return not self.is_uploading and self.is_valid_url

    def open_add_modal(self):
        if not self.allowed('create'):
            return False
        self.reset_form()
        self.add_modal_open = True
        return True

    def close_add_modal(self):
        self.add_modal_open = False
        self.reset_form()

    def open_edit_modal(self, link):
        if not self.allowed('update'):
            return False
        self.reset_form()
        self.editing_id = link.id
        self.link_name = link.logo_name
        self.set_links_url(link.links_url)
        self.position = str(link.position)
        self.edit_modal_open = True
        return True

    def close_edit_modal(self):
        self.edit_modal_open = False
        self.reset_form()

    def _check_fields(self):
        if not self.link_name.strip() or not self.links_url or not str(self.position).strip():
            self.notifier.error('Please provide link name, URL, and logo position')
            return False
        if too_long(self.link_name.strip(), LINK_NAME_MAX):
            self.notifier.error(f'Link name cannot exceed {LINK_NAME_MAX} characters')
            return False
        if too_long(self.links_url, LINK_URL_MAX):
            self.notifier.error(f'Link URL cannot exceed {LINK_URL_MAX} characters')
            return False
        if not is_valid_link_url(self.links_url):
            self.notifier.error('Please provide a valid URL')
            return False
        if parse_position(self.position) is None:
            self.notifier.error('Position must be 1 or greater')
            return False
        return True

    def _fields(self):
        return {
            'logoName': self.link_name.strip(),
            'linksUrl': self.links_url,
            'logoPosition': str(self.position).strip(),
        }

    def submit_add(self):
        if not self.allowed('create') or not self._check_fields():
            return False
        if self.logo is None:
            self.notifier.error('Please select a logo')
            return False
        fields = dict(self._fields(), created_by=self.actor)
        if not self.run(self.repository.create, fields, [('file', self.logo)]):
            return False
        self.close_add_modal()
        return True

    def submit_edit(self):
        if self.editing_id is None or not self.allowed('update'):
            return False
        if not self._check_fields():
            return False
        fields = dict(self._fields(), modify_by=self.actor)
        files = [('file', self.logo)] if self.logo else []
        if not self.run(self.repository.update, self.editing_id, fields, files):
            return False
        self.close_edit_modal()
        return True
