from werkzeug.security import generate_password_hash, check_password_hash
from .database import db
from .mixins import AuditMixin


class Role(db.Model):
    """Role a user is assigned; permissions are granted per role and page."""
    __tablename__ = 'roles'

    id = db.Column('role_id', db.Integer, primary_key=True)
    name = db.Column(db.String(50), unique=True, nullable=False)

    users = db.relationship('User', backref='role', lazy='dynamic')

    def __repr__(self):
        return f'<Role {self.name}>'

    def to_dict(self):
        return {
            'role_id': self.id,
            'name': self.name,
        }


class User(AuditMixin, db.Model):
    """Back-office user."""
    __tablename__ = 'users'

    id = db.Column('user_id', db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(100), unique=True, nullable=False, index=True)
    mobile_no = db.Column(db.String(20))
    password_hash = db.Column(db.String(256), nullable=False)
    role_id = db.Column(db.Integer, db.ForeignKey('roles.role_id'), nullable=False)

    notifications = db.relationship('Notification', backref='user', lazy='dynamic')

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def __repr__(self):
        return f'<User {self.email}>'

    def to_dict(self):
        data = {
            'user_id': self.id,
            'name': self.name,
            'email': self.email,
            'mobileNo': self.mobile_no,
            'roleId': self.role_id,
        }
        data.update(self.audit_dict())
        return data
