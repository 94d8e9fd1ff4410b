from datetime import datetime
from .database import db


def isoformat(value):
    return value.isoformat() if value else None


class AuditMixin:
    """created_* is written once on insert, modify_* on every later write."""

    created_by = db.Column(db.String(100), nullable=False)
    created_on = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    modify_by = db.Column(db.String(100), nullable=True)
    modify_on = db.Column(db.DateTime, nullable=True)

    def touch(self, actor):
        self.modify_by = actor
        self.modify_on = datetime.utcnow()

    def audit_dict(self):
        return {
            'created_by': self.created_by,
            'created_on': isoformat(self.created_on),
            'modify_by': self.modify_by,
            'modify_on': isoformat(self.modify_on),
        }


class VisibilityMixin:
    """Soft publish flag. Hidden records stay in the table."""

    is_visible = db.Column('IsVisible', db.Boolean, default=True, nullable=False)

    def toggle_visibility(self, actor):
        self.is_visible = not self.is_visible
        self.touch(actor)
