"""Client-side permission lookup and the role/page permission editor."""

import logging

from panel import config
from panel.http import ApiError
from panel.records import Page, PermissionRow, RecordError, Role
from utils.capabilities import (
    ACTION_FOR_LABEL, ACTIONS, FLAG_FOR_ACTION, LABEL_FOR_ACTION, resolve_capabilities,
)

logger = logging.getLogger(__name__)

ALL_LABELS = frozenset(LABEL_FOR_ACTION.values())


def page_url_for_path(path):
    """'/admin/gallery' -> '/gallery'; pages are matched on the last path segment."""
    segment = (path or '').rstrip('/').split('/')[-1]
    return f'/{segment}'


class PermissionResolver:
    """Answers what a role may do on a page, from tables fetched once."""

    def __init__(self, roles, pages, permissions, privileged_role_id=None):
        self.roles = list(roles)
        self.pages = list(pages)
        self.permissions = list(permissions)
        self.privileged_role_id = (config.PRIVILEGED_ROLE_ID
                                   if privileged_role_id is None else privileged_role_id)

    def page_id_for(self, path):
        url = page_url_for_path(path)
        for page in self.pages:
            if page.url == url:
                return page.id
        return None

    def row_for(self, role_id, page_id):
        if page_id is None:
            return None
        for row in self.permissions:
            if row.page_id == page_id and row.role_id == role_id:
                return row
        return None

    def resolve(self, role_id, path):
        row = self.row_for(role_id, self.page_id_for(path))
        return resolve_capabilities(
            row.flags() if row is not None else None,
            privileged=role_id == self.privileged_role_id,
        )


class PermissionsRepository:
    """Roles, pages and permission rows, plus the editor's pending selection."""

    def __init__(self, client, notifier):
        self.client = client
        self.notifier = notifier
        self.roles = []
        self.pages = []
        self.permissions = []
        # role_id -> page_id -> set of labels ('Add', 'View', 'Edit', 'Delete')
        self.selected_actions = {}

    def fetch_roles(self):
        try:
            body = self.client.get('/getrole')
            roles = body.get('role', []) if isinstance(body, dict) else None
            if not isinstance(roles, list):
                raise RecordError('Expected an object with a role list')
            self.roles = [Role.parse(r) for r in roles]
        except (ApiError, RecordError) as e:
            logger.error('Error fetching roles: %s', e)
            self.notifier.error('Error fetching roles')

    def fetch_pages(self):
        try:
            self.pages = [Page.parse(p) for p in self.client.get('/pages')]
        except (ApiError, RecordError) as e:
            logger.error('Error fetching pages: %s', e)
            self.notifier.error('Error fetching pages')

    def fetch_permissions(self):
        try:
            self.permissions = [PermissionRow.parse(p) for p in self.client.get('/permissions')]
        except (ApiError, RecordError) as e:
            logger.error('Error fetching permissions: %s', e)
            self.notifier.error('Error fetching permissions')
            return
        self.selected_actions = {}
        for row in self.permissions:
            flags = row.flags()
            labels = {LABEL_FOR_ACTION[a] for a in ACTIONS if flags[FLAG_FOR_ACTION[a]]}
            self.selected_actions.setdefault(row.role_id, {})[row.page_id] = labels

    def fetch_all(self):
        self.fetch_roles()
        self.fetch_pages()
        self.fetch_permissions()

    def resolver(self, privileged_role_id=None):
        return PermissionResolver(self.roles, self.pages, self.permissions, privileged_role_id)

    def handle_action_change(self, role_id, page_id, action):
        """'selectall', 'deselect', or a label to toggle."""
        labels = self.selected_actions.setdefault(role_id, {}).setdefault(page_id, set())
        if action == 'selectall':
            labels.update(ALL_LABELS)
        elif action == 'deselect':
            labels.clear()
        elif action in ALL_LABELS:
            labels.symmetric_difference_update({action})
        else:
            raise ValueError(f'Unknown permission action: {action}')

    def pending_rows(self, actor):
        rows = []
        for role_id, pages in self.selected_actions.items():
            for page_id, labels in pages.items():
                row = {'roleId': role_id, 'pageId': page_id, 'created_by': actor, 'modify_by': actor}
                for label, action in ACTION_FOR_LABEL.items():
                    row[FLAG_FOR_ACTION[action]] = label in labels
                rows.append(row)
        return rows

    def save_permissions(self, actor):
        try:
            self.client.post('/save-permissions', json={'permissions': self.pending_rows(actor)})
        except ApiError as e:
            logger.error('Error saving permissions: %s', e)
            self.notifier.error('Error saving permissions')
            return False
        self.notifier.success('Permissions saved successfully!')
        self.fetch_permissions()
        return True
