"""
Unit tests for cursor pagination utilities.
"""

import uuid

import pytest
from pydantic import ValidationError
from sqlalchemy.future import select

from app.core.config import settings
from app.shared.pagination import CursorPage, CursorParams, ordered_newest_first, paginate, parse_limit
from models import Project


class TestParseLimit:
    def test_default_when_missing(self):
        assert parse_limit(None) == settings.default_page_limit
        assert parse_limit("") == settings.default_page_limit

    def test_value_within_range(self):
        assert parse_limit("7") == 7

    def test_clamped_to_maximum(self):
        assert parse_limit("500") == settings.max_page_limit

    def test_zero_raised_to_one(self):
        assert parse_limit("0") == 1


class TestCursorParams:
    def test_default_values(self):
        params = CursorParams()

        assert params.limit == settings.default_page_limit
        assert params.cursor is None

    def test_rejects_non_positive_limit(self):
        with pytest.raises(ValidationError):
            CursorParams(limit=0)


class TestCursorPage:
    def test_next_cursor_omitted_when_none(self):
        page = CursorPage[int](data=[1, 2], has_more=False)

        assert page.model_dump(by_alias=True) == {"data": [1, 2], "hasMore": False}

    def test_next_cursor_present_when_more(self):
        cursor = uuid.uuid4()
        page = CursorPage[int](data=[1], has_more=True, next_cursor=cursor)

        dumped = page.model_dump(mode="json", by_alias=True)

        assert dumped == {"data": [1], "hasMore": True, "nextCursor": str(cursor)}


class TestPaginate:
    @pytest.mark.asyncio
    async def test_walks_all_pages_without_overlap(self, test_db, many_projects):
        query = ordered_newest_first(select(Project), Project)
        seen = []
        cursor = None

        while True:
            page = await paginate(test_db, query, Project, CursorParams(limit=4, cursor=cursor))
            assert len(page["items"]) <= 4
            seen.extend(p.id for p in page["items"])
            if not page["has_more"]:
                assert page["next_cursor"] is None
                break
            assert page["next_cursor"] == page["items"][-1].id
            cursor = page["next_cursor"]

        assert seen == [p.id for p in many_projects]

    @pytest.mark.asyncio
    async def test_exact_fit_has_no_more(self, test_db, many_projects):
        query = ordered_newest_first(select(Project), Project)

        page = await paginate(test_db, query, Project, CursorParams(limit=15))

        assert len(page["items"]) == 15
        assert page["has_more"] is False

    @pytest.mark.asyncio
    async def test_unknown_cursor_is_ignored(self, test_db, many_projects):
        query = ordered_newest_first(select(Project), Project)

        page = await paginate(test_db, query, Project, CursorParams(limit=3, cursor=uuid.uuid4()))

        assert [p.id for p in page["items"]] == [p.id for p in many_projects[:3]]
        assert page["has_more"] is True

    @pytest.mark.asyncio
    async def test_empty_table(self, test_db):
        query = ordered_newest_first(select(Project), Project)

        page = await paginate(test_db, query, Project, CursorParams(limit=10))

        assert page == {"items": [], "has_more": False, "next_cursor": None}
