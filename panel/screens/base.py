from contextlib import contextmanager

from panel.repositories import RepositoryError
from utils.validation import parse_position, too_long


class Screen:
    """Form and modal state for one resource page, driving its repository."""

    def __init__(self, repository, notifier, user, capabilities):
        self.repository = repository
        self.notifier = notifier
        self.user = user
        self.capabilities = capabilities
        self.is_uploading = False
        self.add_modal_open = False
        self.edit_modal_open = False
        self.delete_modal_open = False
        self.editing_id = None
        self.pending_delete_id = None

    @property
    def actor(self):
        return self.user.name if self.user else 'admin'

    @property
    def items(self):
        return self.repository.items

    def allowed(self, action):
        if self.capabilities.allows(action):
            return True
        self.notifier.error('Access Denied')
        return False

    @contextmanager
    def busy(self):
        self.is_uploading = True
        try:
            yield
        finally:
            self.is_uploading = False

    def run(self, call, *args, **kwargs):
        """Run a repository call under the busy flag; False if it failed."""
        with self.busy():
            try:
                call(*args, **kwargs)
            except RepositoryError:
                return False
        return True

    def refresh(self):
        return self.repository.fetch_all()

    def open_delete_modal(self, record_id):
        if not self.allowed('delete'):
            return False
        self.pending_delete_id = record_id
        self.delete_modal_open = True
        return True

    def close_delete_modal(self):
        self.delete_modal_open = False
        self.pending_delete_id = None

    def confirm_delete(self):
        if self.pending_delete_id is None or not self.allowed('delete'):
            return False
        if not self.run(self.repository.delete, self.pending_delete_id):
            return False
        self.close_delete_modal()
        return True


class VisibilityToggle:
    """Screen actions for resources whose repository can toggle IsVisible."""

    def toggle_visibility(self, record):
        if not self.allowed('update'):
            return False
        return self.run(self.repository.toggle_visibility, record.id, self.actor)


class PositionedImageScreen(VisibilityToggle, Screen):
    """Shared form for image records with a name and a display position."""

    label = 'item'
    name_field = None
    position_field = None
    name_max = 100

    def __init__(self, repository, notifier, user, capabilities):
        super().__init__(repository, notifier, user, capabilities)
        self.reset_form()

    def reset_form(self):
        self.name = ''
        self.position = ''
        self.file = None
        self.editing_id = None

    def open_add_modal(self):
        if not self.allowed('create'):
            return False
        self.reset_form()
        self.add_modal_open = True
        return True

    def close_add_modal(self):
        self.add_modal_open = False
        self.reset_form()

    def open_edit_modal(self, record):
        if not self.allowed('update'):
            return False
        self.editing_id = record.id
        self.name = record.name
        self.position = str(record.position)
        self.file = None
        self.edit_modal_open = True
        return True

    def close_edit_modal(self):
        self.edit_modal_open = False
        self.reset_form()

    def _check_name_and_position(self):
        if too_long(self.name, self.name_max):
            self.notifier.error(f'{self.label.capitalize()} name cannot exceed {self.name_max} characters')
            return False
        if parse_position(self.position) is None:
            self.notifier.error('Position must be 1 or greater')
            return False
        return True

    def submit_add(self):
        if not self.allowed('create'):
            return False
        if not self.file or not self.name.strip() or not str(self.position).strip():
            self.notifier.error(f'Please provide file, {self.label} name, and position')
            return False
        if not self._check_name_and_position():
            return False

        fields = {
            self.name_field: self.name.strip(),
            self.position_field: str(self.position).strip(),
            'created_by': self.actor,
        }
        if not self.run(self.repository.create, fields, [('file', self.file)]):
            return False
        self.close_add_modal()
        return True

    def submit_edit(self):
        if self.editing_id is None or not self.allowed('update'):
            return False
        if not self.name.strip() or not str(self.position).strip():
            self.notifier.error(f'Please provide {self.label} name and position')
            return False
        if not self._check_name_and_position():
            return False

        fields = {
            self.name_field: self.name.strip(),
            self.position_field: str(self.position).strip(),
            'modify_by': self.actor,
        }
        files = [('file', self.file)] if self.file else []
        if not self.run(self.repository.update, self.editing_id, fields, files):
            return False
        self.close_edit_modal()
        return True
