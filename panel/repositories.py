"""
One repository per resource type.

A repository owns the cached list of records for its resource and the
create/update/delete/toggle operations against the API. The list is only ever
replaced by a fresh fetch after a successful call, never patched in place.
"""

import logging

from panel.http import ApiError
from panel.records import (
    Banner, Faculty, GalleryItem, ImportantLink, Notification, RecordError,
)

logger = logging.getLogger(__name__)


class RepositoryError(Exception):
    """A repository operation failed; the user has already been notified."""


class ResourceRepository:
    record_type = None
    noun = 'record'

    list_path = None
    create_path = None
    update_path = None
    delete_path = None

    def __init__(self, client, notifier):
        self.client = client
        self.notifier = notifier
        self.items = []

    def _fail(self, action, error):
        message = f'Error {action} {self.noun}'
        logger.error('%s: %s', message, error)
        self.notifier.error(message)
        raise RepositoryError(message) from error

    def _succeed(self, body, default):
        message = body.get('message') if isinstance(body, dict) else None
        self.notifier.success(message or default)
        self.fetch_all()
        return body

    def fetch_all(self):
        """Replace items with the server's list. On failure items stay as they were."""
        try:
            body = self.client.get(self.list_path)
            if not isinstance(body, list):
                raise RecordError(f'Expected a list of {self.noun} records')
            items = [self.record_type.parse(item) for item in body]
        except (ApiError, RecordError) as e:
            logger.error('Error fetching %s: %s', self.noun, e)
            self.notifier.error(f'Error fetching {self.noun}')
            return self.items
        self.items = items
        return self.items

    def create(self, fields, files=()):
        try:
            body = self.client.post(self.create_path, data=fields, files=list(files))
        except ApiError as e:
            self._fail('adding', e)
        return self._succeed(body, f'{self.noun.capitalize()} added successfully!')

    def update(self, record_id, fields, files=()):
        try:
            body = self.client.put(self.update_path.format(id=record_id), data=fields, files=list(files))
        except ApiError as e:
            self._fail('updating', e)
        return self._succeed(body, f'{self.noun.capitalize()} updated successfully!')

    def delete(self, record_id):
        try:
            body = self.client.delete(self.delete_path.format(id=record_id))
        except ApiError as e:
            self._fail('deleting', e)
        return self._succeed(body, f'{self.noun.capitalize()} deleted successfully!')

    def get(self, record_id):
        for item in self.items:
            if item.id == record_id:
                return item
        return None


class VisibilityMixin:
    """For resources with an IsVisible flag the server can flip."""

    toggle_path = None

    def toggle_visibility(self, record_id, actor):
        try:
            body = self.client.put(self.toggle_path.format(id=record_id), json={'modify_by': actor})
        except ApiError as e:
            self._fail('updating visibility of', e)
        return self._succeed(body, f'{self.noun.capitalize()} visibility updated successfully!')


class NotificationRepository(ResourceRepository):
    record_type = Notification
    noun = 'notification'
    list_path = '/notifications/all-notification'
    create_path = '/notifications/add-notification'
    update_path = '/notifications/edit/{id}'
    delete_path = '/notifications/delete/{id}'

    def search(self, query):
        query = (query or '').strip().lower()
        if not query:
            return list(self.items)
        return [n for n in self.items if query in n.message.lower()]


class BannerRepository(VisibilityMixin, ResourceRepository):
    record_type = Banner
    noun = 'banner'
    list_path = '/banner/banners'
    create_path = '/banner/upload'
    update_path = '/banner/update/{id}'
    delete_path = '/banner/delete/{id}'
    toggle_path = '/banner/toggle-visibility/{id}'

    def swap(self, first_id, second_id, actor=None):
        try:
            body = self.client.post(f'/banner/swap/{first_id}/{second_id}', json={'modify_by': actor})
        except ApiError as e:
            self._fail('swapping position of', e)
        return self._succeed(body, 'Banner position swapped successfully!')


class GalleryRepository(VisibilityMixin, ResourceRepository):
    record_type = GalleryItem
    noun = 'gallery'
    list_path = '/gallery'
    create_path = '/gallery/upload'
    update_path = '/gallery/update/{id}'
    delete_path = '/gallery/delete/{id}'
    toggle_path = '/gallery/toggle-visibility/{id}'


class ImportantLinkRepository(VisibilityMixin, ResourceRepository):
    record_type = ImportantLink
    noun = 'link'
    list_path = '/important-links/all'
    create_path = '/important-links/upload'
    update_path = '/important-links/update/{id}'
    delete_path = '/important-links/delete/{id}'
    toggle_path = '/important-links/toggle-visibility/{id}'


class FacultyRepository(VisibilityMixin, ResourceRepository):
    record_type = Faculty
    noun = 'faculty'
    list_path = '/faculty'
    create_path = '/faculty/add'
    update_path = '/faculty/update/{id}'
    delete_path = '/faculty/delete/{id}'
    toggle_path = '/faculty/toggle-visibility/{id}'

    def update_document_title(self, record_id, doc_index, new_title, actor=None):
        try:
            body = self.client.put(
                f'/faculty/{record_id}/update-document-title',
                json={'docIndex': doc_index, 'newTitle': new_title, 'modify_by': actor},
            )
        except ApiError as e:
            self._fail('updating document title of', e)
        return self._succeed(body, 'Document title updated successfully!')
