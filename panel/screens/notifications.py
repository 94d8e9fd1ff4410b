from panel.screens.base import Screen
from utils.validation import NOTIFICATION_MESSAGE_MAX, is_valid_url, too_long

INPUT_TYPES = ('select', 'url', 'file')


class NotificationScreen(Screen):
    """Add/edit/delete notifications that point either at a URL or an uploaded file."""

    def __init__(self, repository, notifier, user, capabilities):
        super().__init__(repository, notifier, user, capabilities)
        self.query = ''
        self.reset_form()

    def reset_form(self):
        self.message = ''
        self.input_type = 'select'
        self.url = ''
        self.is_valid_url = True
        self.file = None
        self.editing_id = None

    @property
    def visible_items(self):
        return self.repository.search(self.query)

    def set_input_type(self, input_type):
        if input_type not in INPUT_TYPES:
            raise ValueError(f'Unknown input type: {input_type}')
        self.input_type = input_type
        self.url = ''
        self.is_valid_url = True
        self.file = None

    def set_url(self, value):
        self.url = (value or '').strip()
        self.is_valid_url = not self.url or is_valid_url(self.url)

    @property
    def can_submit(self):
        if self.is_uploading:
            return False
        if self.input_type == 'url':
            return bool(self.url) and self.is_valid_url
        return True

    def open_add_modal(self):
        if not self.allowed('create'):
            return False
        self.reset_form()
        self.add_modal_open = True
        return True

    def close_add_modal(self):
        self.add_modal_open = False
        self.reset_form()

    def open_edit_modal(self, notification):
        if not self.allowed('update'):
            return False
        self.reset_form()
        self.editing_id = notification.id
        self.message = notification.message
        if notification.is_file:
            self.input_type = 'file'
        elif notification.url:
            self.input_type = 'url'
            self.set_url(notification.url)
        self.edit_modal_open = True
        return True

    def close_edit_modal(self):
        self.edit_modal_open = False
        self.reset_form()

    def _check_message(self):
        if not self.message.strip():
            self.notifier.error('Please enter a notification message')
            return False
        if too_long(self.message.strip(), NOTIFICATION_MESSAGE_MAX):
            self.notifier.error(f'Notification message cannot exceed {NOTIFICATION_MESSAGE_MAX} characters')
            return False
        return True

    def _check_url(self):
        if self.input_type == 'url' and not (self.url and self.is_valid_url):
            self.notifier.error('Please enter a valid URL')
            return False
        return True

    def submit_add(self):
        if not self.allowed('create') or not self._check_message():
            return False
        if self.user is None:
            self.notifier.error('User data is missing. Please log in again.')
            return False
        if self.input_type == 'select':
            self.notifier.error('Please choose a URL or a file')
            return False
        if not self._check_url():
            return False
        if self.input_type == 'file' and self.file is None:
            self.notifier.error('Please select a file.')
            return False

        fields = {
            'notification_message': self.message.strip(),
            'user_id': self.user.id,
            'created_by': self.actor,
        }
        files = []
        if self.input_type == 'url':
            fields['url'] = self.url
        else:
            files.append(('file', self.file))
        if not self.run(self.repository.create, fields, files):
            return False
        self.close_add_modal()
        return True

    def submit_edit(self):
        if self.editing_id is None or not self.allowed('update'):
            return False
        if not self._check_message() or not self._check_url():
            return False

        fields = {'notification_message': self.message.strip(), 'modify_by': self.actor}
        files = []
        if self.input_type == 'url':
            fields['url'] = self.url
        elif self.file is not None:
            files.append(('file', self.file))
        if not self.run(self.repository.update, self.editing_id, fields, files):
            return False
        self.close_edit_modal()
        return True
