from .database import db
from .mixins import AuditMixin, VisibilityMixin


class ImportantLink(AuditMixin, VisibilityMixin, db.Model):
    """Logo linking to an external site."""

    __tablename__ = 'important_links'

    id = db.Column(db.Integer, primary_key=True)
    logo_name = db.Column('logoName', db.String(180), nullable=False)
    logo_url = db.Column('LOGOUrl', db.String(500), nullable=False)
    public_id = db.Column('publicId', db.String(255), nullable=True)
    links_url = db.Column('linksUrl', db.String(180), nullable=False)
    position = db.Column('logoPosition', db.Integer, nullable=False)

    def __repr__(self):
        return f'<ImportantLink {self.logo_name}>'

    def to_dict(self):
        data = {
            'id': self.id,
            'logoName': self.logo_name,
            'LOGOUrl': self.logo_url,
            'publicId': self.public_id,
            'linksUrl': self.links_url,
            'logoPosition': self.position,
            'IsVisible': self.is_visible,
        }
        data.update(self.audit_dict())
        return data
