from .database import db
from .mixins import AuditMixin, VisibilityMixin


class Banner(AuditMixin, VisibilityMixin, db.Model):
    """Home page banner image. Each position holds at most one banner."""

    __tablename__ = 'banners'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column('bannerName', db.String(100), nullable=False)
    image_url = db.Column('bannerUrl', db.String(500), nullable=False)
    public_id = db.Column('publicId', db.String(255), nullable=True)
    position = db.Column('bannerPosition', db.Integer, unique=True, nullable=False)

    def __repr__(self):
        return f'<Banner {self.name} @{self.position}>'

    def to_dict(self):
        data = {
            'id': self.id,
            'bannerName': self.name,
            'bannerUrl': self.image_url,
            'publicId': self.public_id,
            'bannerPosition': self.position,
            'IsVisible': self.is_visible,
        }
        data.update(self.audit_dict())
        return data
