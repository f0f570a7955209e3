"""
Unit tests for ETag helpers.
"""

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from app.exceptions.base import PreconditionFailedError
from app.shared.etag import (
    entity_etag,
    ensure_if_match,
    etag_matches,
    is_create_only,
    timestamp_ms,
)

UPDATED = datetime(2021, 12, 1, 12, 0, 0, 123456)


class TestTimestamps:
    def test_naive_datetime_is_utc(self):
        assert timestamp_ms(datetime(1970, 1, 1, 0, 0, 1)) == 1000

    def test_milliseconds_truncated(self):
        assert timestamp_ms(UPDATED) == 1638360000123

    def test_aware_datetime_converted(self):
        aware = UPDATED.replace(tzinfo=timezone.utc)
        assert timestamp_ms(aware) == timestamp_ms(UPDATED)

    def test_entity_etag_is_quoted(self):
        entity = SimpleNamespace(id="x", updated_at=UPDATED)
        assert entity_etag(entity) == '"1638360000123"'


class TestEtagMatches:
    current = '"1638360000123"'

    @pytest.mark.parametrize(
        "header",
        [None, "", '"1638360000123"', 'W/"1638360000123"', "*", '"1", "1638360000123"'],
    )
    def test_matching_headers(self, header):
        assert etag_matches(header, self.current) is True

    @pytest.mark.parametrize("header", ['"1"', '"1638360000124"', 'W/"2", "3"'])
    def test_mismatching_headers(self, header):
        assert etag_matches(header, self.current) is False


class TestCreateOnly:
    def test_star_marks_create_only(self):
        assert is_create_only("*") is True
        assert is_create_only(" * ") is True

    def test_other_values(self):
        assert is_create_only(None) is False
        assert is_create_only('"123"') is False


class TestEnsureIfMatch:
    def test_stale_etag_raises_with_current_etag(self):
        entity = SimpleNamespace(id="abc", updated_at=UPDATED)

        with pytest.raises(PreconditionFailedError) as exc_info:
            ensure_if_match(entity, '"1"', "Note")

        assert exc_info.value.status_code == 412
        assert exc_info.value.headers == {"ETag": '"1638360000123"'}
        assert "Note with ID abc" in exc_info.value.message

    def test_disabled_enforcement(self, legacy_if_match):
        entity = SimpleNamespace(id="abc", updated_at=UPDATED)

        ensure_if_match(entity, '"1"', "Note")
