from .database import db
from .mixins import AuditMixin
from utils.capabilities import FLAG_FOR_ACTION


class Page(AuditMixin, db.Model):
    """A back-office page, identified by its URL path."""
    __tablename__ = 'pages'

    id = db.Column('pageId', db.Integer, primary_key=True)
    name = db.Column('pageName', db.String(100), nullable=False)
    url = db.Column('pageUrl', db.String(100), unique=True, nullable=False)

    permissions = db.relationship('Permission', backref='page', lazy='dynamic',
                                  cascade='all, delete-orphan')

    def __repr__(self):
        return f'<Page {self.url}>'

    def to_dict(self):
        data = {
            'pageId': self.id,
            'pageName': self.name,
            'pageUrl': self.url,
        }
        data.update(self.audit_dict())
        return data


class Permission(AuditMixin, db.Model):
    """Which actions a role may perform on a page."""
    __tablename__ = 'permissions'
    __table_args__ = (db.UniqueConstraint('roleId', 'pageId', name='uq_permission_role_page'),)

    id = db.Column('permissionId', db.Integer, primary_key=True)
    role_id = db.Column('roleId', db.Integer, db.ForeignKey('roles.role_id'), nullable=False)
    page_id = db.Column('pageId', db.Integer, db.ForeignKey('pages.pageId'), nullable=False)
    can_create = db.Column('canCreate', db.Boolean, default=False, nullable=False)
    can_read = db.Column('canRead', db.Boolean, default=False, nullable=False)
    can_update = db.Column('canUpdate', db.Boolean, default=False, nullable=False)
    can_delete = db.Column('canDelete', db.Boolean, default=False, nullable=False)

    def __repr__(self):
        return f'<Permission role={self.role_id} page={self.page_id}>'

    def allows(self, action):
        return bool(self.to_dict()[FLAG_FOR_ACTION[action]])

    def to_dict(self):
        data = {
            'permissionId': self.id,
            'roleId': self.role_id,
            'pageId': self.page_id,
            'canCreate': bool(self.can_create),
            'canRead': bool(self.can_read),
            'canUpdate': bool(self.can_update),
            'canDelete': bool(self.can_delete),
        }
        data.update(self.audit_dict())
        return data
