from .database import db
from .mixins import AuditMixin, VisibilityMixin
from utils.documents import parse_documents, dump_documents


class Faculty(AuditMixin, VisibilityMixin, db.Model):
    """Faculty profile shown on the public site."""

    __tablename__ = 'faculties'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column('faculty_name', db.String(150), nullable=False)
    qualification = db.Column(db.String(100), nullable=False)
    designation = db.Column(db.String(100), nullable=False)
    profile_pic_url = db.Column('profilePicUrl', db.String(500), nullable=True)
    # JSON list of {"title", "url"}; NULL when there are no documents
    documents_json = db.Column('documents', db.Text, nullable=True)
    monthly_salary = db.Column('monthlySalary', db.Integer, nullable=True)
    yearly_leave = db.Column('yearlyLeave', db.Integer, nullable=True)

    def __repr__(self):
        return f'<Faculty {self.name}>'

    @property
    def documents(self):
        return parse_documents(self.documents_json)

    @documents.setter
    def documents(self, documents):
        self.documents_json = dump_documents(documents)

    def to_dict(self):
        data = {
            'id': self.id,
            'faculty_name': self.name,
            'qualification': self.qualification,
            'designation': self.designation,
            'profilePicUrl': self.profile_pic_url,
            'documents': self.documents_json,
            'monthlySalary': self.monthly_salary,
            'yearlyLeave': self.yearly_leave,
            'IsVisible': self.is_visible,
        }
        data.update(self.audit_dict())
        return data
