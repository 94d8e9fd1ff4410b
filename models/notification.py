from .database import db
from .mixins import AuditMixin


class Notification(AuditMixin, db.Model):
    """Site notification pointing either at an external URL or an uploaded file."""

    __tablename__ = 'notifications'

    id = db.Column('notification_id', db.Integer, primary_key=True)
    message = db.Column('notification_message', db.String(100), nullable=False)
    url = db.Column('notification_url', db.String(500), nullable=True)
    public_id = db.Column(db.String(255), nullable=True)  # storage key when url is an upload
    user_id = db.Column('userId', db.Integer, db.ForeignKey('users.user_id'), nullable=True)

    def __repr__(self):
        return f'<Notification {self.id}>'

    def to_dict(self):
        data = {
            'notification_id': self.id,
            'notification_message': self.message,
            'notification_url': self.url,
            'public_id': self.public_id,
            'userId': self.user_id,
        }
        data.update(self.audit_dict())
        return data
