"""Permission row shape shared by the API and the admin panel.

A permission row grants a role some subset of create/read/update/delete on one
page. Rows carry the four actions as boolean flags.
"""

from collections import namedtuple

ACTIONS = ('create', 'read', 'update', 'delete')

FLAG_FOR_ACTION = {
    'create': 'canCreate',
    'read': 'canRead',
    'update': 'canUpdate',
    'delete': 'canDelete',
}

# Labels used by the permission editor
LABEL_FOR_ACTION = {
    'create': 'Add',
    'read': 'View',
    'update': 'Edit',
    'delete': 'Delete',
}
ACTION_FOR_LABEL = {label: action for action, label in LABEL_FOR_ACTION.items()}


class Capabilities(namedtuple('Capabilities', ['can_create', 'can_read', 'can_update', 'can_delete'])):
    __slots__ = ()

    @classmethod
    def all(cls):
        return cls(True, True, True, True)

    @classmethod
    def none(cls):
        return cls(False, False, False, False)

    @classmethod
    def from_row(cls, row):
        """Build from a row mapping (``canCreate`` etc.); missing flags are False."""
        return cls(*(bool(row.get(FLAG_FOR_ACTION[action])) for action in ACTIONS))

    def allows(self, action):
        return getattr(self, 'can_' + action)


def resolve_capabilities(row, privileged=False):
    """Privileged roles get everything; otherwise the row decides, and no row denies."""
    if privileged:
        return Capabilities.all()
    if row is None:
        return Capabilities.none()
    return Capabilities.from_row(row)
