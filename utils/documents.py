"""Faculty document lists, stored as a JSON string of {title, url} objects."""

import json
from typing import List, Optional

from pydantic import BaseModel, Field, TypeAdapter, ValidationError


class DocumentFormatError(ValueError):
    """Raised when a documents or titles payload is not the expected JSON shape."""


class FacultyDocument(BaseModel):
    title: str = Field(min_length=1)
    url: str = Field(min_length=1)


_documents_adapter = TypeAdapter(List[FacultyDocument])
_titles_adapter = TypeAdapter(List[str])


def _load(raw, adapter, what):
    if raw is None or raw == '':
        return []
    try:
        return adapter.validate_json(raw)
    except ValidationError as e:
        raise DocumentFormatError(f'Malformed {what}: {e.error_count()} error(s)') from e


def parse_documents(raw) -> List[FacultyDocument]:
    return _load(raw, _documents_adapter, 'documents')


def parse_titles(raw) -> List[str]:
    return _load(raw, _titles_adapter, 'document titles')


def dump_documents(documents) -> Optional[str]:
    if not documents:
        return None
    return json.dumps([
        doc.model_dump() if isinstance(doc, FacultyDocument) else {'title': doc['title'], 'url': doc['url']}
        for doc in documents
    ])
