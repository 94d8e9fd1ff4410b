from .database import db
from .mixins import AuditMixin, VisibilityMixin


class Gallery(AuditMixin, VisibilityMixin, db.Model):
    """Photo gallery item, ordered by position."""

    __tablename__ = 'galleries'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column('galleryName', db.String(100), nullable=False)
    image_url = db.Column('galleryUrl', db.String(500), nullable=False)
    public_id = db.Column('publicId', db.String(255), nullable=True)
    position = db.Column('galleryPosition', db.Integer, nullable=False)  # not unique

    def __repr__(self):
        return f'<Gallery {self.name}>'

    def to_dict(self):
        data = {
            'id': self.id,
            'galleryName': self.name,
            'galleryUrl': self.image_url,
            'publicId': self.public_id,
            'galleryPosition': self.position,
            'IsVisible': self.is_visible,
        }
        data.update(self.audit_dict())
        return data
