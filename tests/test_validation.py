import pytest

from utils.capabilities import Capabilities, resolve_capabilities
from utils.documents import DocumentFormatError, dump_documents, parse_documents, parse_titles
from utils.validation import (
    is_valid_link_url, is_valid_url, parse_bool, parse_optional_int, parse_position, too_long,
)


@pytest.mark.parametrize('url, valid', [
    ('https://example.com/notice.pdf', True),
    ('http://example.com', True),
    ('example.com', False),
    ('ftp://example.com', False),
    ('https://exa mple.com', False),
    ('', False),
])
def test_strict_url(url, valid):
    assert is_valid_url(url) is valid


@pytest.mark.parametrize('url, valid', [
    ('example.com', True),
    ('https://sub.example.co.in/path?q=1', True),
    ('localhost:3000', True),
    ('10.0.0.1:8080/app', True),
    ('[::1]:8080', True),
    ('just words', False),
    ('', False),
])
def test_loose_url(url, valid):
    assert is_valid_link_url(url) is valid


def test_parse_position():
    assert parse_position('3') == 3
    assert parse_position(1) == 1
    assert parse_position('0') is None
    assert parse_position('-1') is None
    assert parse_position('two') is None
    assert parse_position(None) is None


def test_parse_helpers():
    assert parse_optional_int('') is None
    assert parse_optional_int('12') == 12
    assert parse_optional_int('x') is None
    assert parse_bool('false', default=True) is False
    assert parse_bool('true') is True
    assert parse_bool(None, default=True) is True
    assert too_long('x' * 101, 100)
    assert not too_long('x' * 100, 100)
    assert not too_long(None, 100)


def test_resolve_capabilities():
    row = {'canCreate': True, 'canRead': True, 'canUpdate': False}
    assert resolve_capabilities(row) == Capabilities(True, True, False, False)
    assert resolve_capabilities(None) == Capabilities.none()
    assert resolve_capabilities(None, privileged=True) == Capabilities.all()
    assert resolve_capabilities(row, privileged=True).allows('delete')


def test_documents_round_trip_and_errors():
    docs = parse_documents('[{"title": "CV", "url": "http://x/cv.pdf"}]')
    assert docs[0].title == 'CV'
    assert parse_documents(dump_documents(docs)) == docs
    assert parse_documents(None) == []
    assert dump_documents([]) is None
    assert parse_titles('["a", "b"]') == ['a', 'b']

    with pytest.raises(DocumentFormatError):
        parse_documents('[{"title": ""}]')
    with pytest.raises(DocumentFormatError):
        parse_titles('not json')
