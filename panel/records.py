"""Record types returned by the admin API, parsed and validated at the boundary."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from utils.documents import FacultyDocument, parse_documents


class RecordError(ValueError):
    """A response did not match the expected record shape."""


class Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    created_by: Optional[str] = None
    created_on: Optional[datetime] = None
    modify_by: Optional[str] = None
    modify_on: Optional[datetime] = None

    @classmethod
    def parse(cls, data):
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise RecordError(f'Malformed {cls.__name__} record: {e.error_count()} error(s)') from e


class Notification(Record):
    id: int = Field(alias='notification_id')
    message: str = Field(alias='notification_message')
    url: Optional[str] = Field(default=None, alias='notification_url')
    public_id: Optional[str] = None
    user_id: Optional[int] = Field(default=None, alias='userId')

    @property
    def is_file(self):
        return self.public_id is not None


class Banner(Record):
    id: int
    name: str = Field(alias='bannerName')
    image_url: str = Field(alias='bannerUrl')
    position: int = Field(alias='bannerPosition')
    is_visible: bool = Field(default=True, alias='IsVisible')


class GalleryItem(Record):
    id: int
    name: str = Field(alias='galleryName')
    image_url: str = Field(alias='galleryUrl')
    position: int = Field(alias='galleryPosition')
    is_visible: bool = Field(default=True, alias='IsVisible')


class ImportantLink(Record):
    id: int
    logo_name: str = Field(alias='logoName')
    logo_url: str = Field(alias='LOGOUrl')
    links_url: str = Field(alias='linksUrl')
    position: int = Field(alias='logoPosition')
    is_visible: bool = Field(default=True, alias='IsVisible')


class Faculty(Record):
    id: int
    name: str = Field(alias='faculty_name')
    qualification: str
    designation: str
    profile_pic_url: Optional[str] = Field(default=None, alias='profilePicUrl')
    documents: List[FacultyDocument] = Field(default_factory=list)
    monthly_salary: Optional[int] = Field(default=None, alias='monthlySalary')
    yearly_leave: Optional[int] = Field(default=None, alias='yearlyLeave')
    is_visible: bool = Field(default=True, alias='IsVisible')

    @field_validator('documents', mode='before')
    @classmethod
    def _decode_documents(cls, value):
        # The API sends the stored JSON string as-is
        if value is None or isinstance(value, str):
            return parse_documents(value)
        return value


class Role(Record):
    id: int = Field(alias='role_id')
    name: str


class Page(Record):
    id: int = Field(alias='pageId')
    name: str = Field(alias='pageName')
    url: str = Field(alias='pageUrl')


class PermissionRow(Record):
    role_id: int = Field(alias='roleId')
    page_id: int = Field(alias='pageId')
    can_create: bool = Field(default=False, alias='canCreate')
    can_read: bool = Field(default=False, alias='canRead')
    can_update: bool = Field(default=False, alias='canUpdate')
    can_delete: bool = Field(default=False, alias='canDelete')

    def flags(self):
        return self.model_dump(by_alias=True, include={'can_create', 'can_read', 'can_update', 'can_delete'})


class User(Record):
    id: int = Field(alias='user_id')
    name: str
    email: str
    mobile_no: Optional[str] = Field(default=None, alias='mobileNo')
    role_id: int = Field(alias='roleId')
