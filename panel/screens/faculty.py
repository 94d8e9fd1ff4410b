import json

from panel.screens.base import Screen, VisibilityToggle
from utils.validation import (
    FACULTY_NAME_MAX, FACULTY_OTHER_FIELD_MAX, MAX_FACULTY_DOCUMENTS, too_long,
)

OTHER = 'Other'
QUALIFICATIONS = ('M. Pharma', 'B. Pharma', OTHER)
DESIGNATIONS = ('Principal', 'Lecturer', 'Chairman', OTHER)


class FacultyScreen(VisibilityToggle, Screen):
    """
    Faculty profiles: the add/edit form, staged documents and the detail views.

    Documents are staged locally as (title, Upload) pairs and only sent on
    submit. Hidden faculty cannot be edited or deleted until made visible.
    """

    def __init__(self, repository, notifier, user, capabilities):
        super().__init__(repository, notifier, user, capabilities)
        self.query = ''
        self.detail = None
        self.preview_url = None
        self.reset_form()

    def reset_form(self):
        self.name = ''
        self.qualification = ''
        self.other_qualification = ''
        self.designation = ''
        self.other_designation = ''
        self.monthly_salary = ''
        self.yearly_leave = ''
        self.profile_pic = None
        self.staged_documents = []
        self.existing_documents = []
        self.editing_id = None

    @property
    def visible_items(self):
        query = self.query.strip().lower()
        return [f for f in self.items if query in f.name.lower()]

    @property
    def document_count(self):
        return len(self.existing_documents) + len(self.staged_documents)

    def stage_documents(self, uploads, titles=None):
        """Stage new documents; all or nothing when the cap would be exceeded."""
        uploads = list(uploads)
        if self.document_count + len(uploads) > MAX_FACULTY_DOCUMENTS:
            self.notifier.error(f'You can upload at most {MAX_FACULTY_DOCUMENTS} documents')
            return False
        titles = list(titles or [])
        for i, upload in enumerate(uploads):
            title = titles[i] if i < len(titles) else upload.filename
            self.staged_documents.append((title, upload))
        return True

    def remove_staged_document(self, index):
        del self.staged_documents[index]

    def remove_existing_document(self, index):
        del self.existing_documents[index]

    def open_add_modal(self):
        if not self.allowed('create'):
            return False
        self.reset_form()
        self.add_modal_open = True
        return True

    def close_add_modal(self):
        self.add_modal_open = False
        self.reset_form()

    def handle_edit_faculty(self, faculty):
        if not self.allowed('update'):
            return False
        if not faculty.is_visible:
            self.notifier.warning('This faculty is hidden. Make it visible before editing.')
            return False
        self.reset_form()
        self.editing_id = faculty.id
        self.name = faculty.name
        self._prefill_choice('qualification', faculty.qualification, QUALIFICATIONS)
        self._prefill_choice('designation', faculty.designation, DESIGNATIONS)
        self.monthly_salary = '' if faculty.monthly_salary is None else str(faculty.monthly_salary)
        self.yearly_leave = '' if faculty.yearly_leave is None else str(faculty.yearly_leave)
        self.existing_documents = list(faculty.documents)
        self.edit_modal_open = True
        return True

    def _prefill_choice(self, field, value, choices):
        if value in choices:
            setattr(self, field, value)
        else:
            setattr(self, field, OTHER)
            setattr(self, f'other_{field}', value)

    def close_edit_modal(self):
        self.edit_modal_open = False
        self.reset_form()

    def handle_open_delete_modal(self, faculty):
        if not faculty.is_visible:
            self.notifier.warning('This faculty is hidden. Make it visible before deleting.')
            return False
        return self.open_delete_modal(faculty.id)

    def open_detail(self, faculty):
        self.detail = faculty

    def close_detail(self):
        self.detail = None
        self.preview_url = None

    def open_document_preview(self, document):
        self.preview_url = document.url

    def close_document_preview(self):
        self.preview_url = None

    def _resolved(self, field):
        value = getattr(self, field)
        if value == OTHER:
            return getattr(self, f'other_{field}').strip()
        return value.strip()

    def _check_fields(self):
        if not self.name.strip() or not self._resolved('qualification') or not self._resolved('designation'):
            self.notifier.error('Please fill in all fields')
            return False
        if too_long(self.name.strip(), FACULTY_NAME_MAX):
            self.notifier.error(f'Faculty name cannot exceed {FACULTY_NAME_MAX} characters')
            return False
        if too_long(self.other_qualification.strip(), FACULTY_OTHER_FIELD_MAX):
            self.notifier.error(f'Other qualification cannot exceed {FACULTY_OTHER_FIELD_MAX} characters')
            return False
        if too_long(self.other_designation.strip(), FACULTY_OTHER_FIELD_MAX):
            self.notifier.error(f'Other designation cannot exceed {FACULTY_OTHER_FIELD_MAX} characters')
            return False
        return True

    def _payload(self):
        fields = {
            'faculty_name': self.name.strip(),
            'qualification': self._resolved('qualification'),
            'designation': self._resolved('designation'),
            'monthlySalary': str(self.monthly_salary).strip() or None,
            'yearlyLeave': str(self.yearly_leave).strip() or None,
            'documentTitles': json.dumps([title for title, _ in self.staged_documents]),
        }
        files = [('documents', upload) for _, upload in self.staged_documents]
        if self.profile_pic is not None:
            files.append(('profilePic', self.profile_pic))
        return fields, files

    def submit_add(self):
        if not self.allowed('create') or not self._check_fields():
            return False
        fields, files = self._payload()
        fields.update(created_by=self.actor, IsVisible='true')
        if not self.run(self.repository.create, fields, files):
            return False
        self.close_add_modal()
        return True

    def submit_edit(self):
        if self.editing_id is None or not self.allowed('update'):
            return False
        if not self._check_fields():
            return False
        fields, files = self._payload()
        fields['existingDocuments'] = json.dumps([doc.model_dump() for doc in self.existing_documents])
        fields['modify_by'] = self.actor
        if not self.run(self.repository.update, self.editing_id, fields, files):
            return False
        self.close_edit_modal()
        return True

    def update_document_title(self, faculty, doc_index, new_title):
        if not self.allowed('update'):
            return False
        new_title = (new_title or '').strip()
        if not new_title:
            self.notifier.error('Document title cannot be empty')
            return False
        return self.run(self.repository.update_document_title, faculty.id, doc_index, new_title, self.actor)
