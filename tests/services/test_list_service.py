# tests/services/test_list_service.py
"""Tests for ListService (against the in-memory store)."""

import pytest

from leadgen.exceptions import ValidationError
from leadgen.services.list_service import ListService

pytestmark = pytest.mark.integration


class TestCreate:

    @pytest.mark.asyncio
    async def test_create_and_fetch(self, repo):
        service = ListService(repo)

        list_id = await service.create("  Q3 Targets ", "Fintech CTOs")
        view = await service.get_by_id(list_id)

        assert view.list_id == list_id
        assert view.name == "Q3 Targets"
        assert view.description == "Fintech CTOs"
        assert view.lead_count == 0
        assert view.created_utc is not None

    @pytest.mark.asyncio
    async def test_blank_name_rejected(self, repo):
        with pytest.raises(ValidationError):
            await ListService(repo).create("   ")

    @pytest.mark.asyncio
    async def test_unknown_or_blank_id(self, repo):
        service = ListService(repo)
        assert await service.get_by_id("missing") is None
        assert await service.get_by_id("") is None


class TestMembership:

    @pytest.mark.asyncio
    async def test_add_is_idempotent(self, repo):
        service = ListService(repo)
        list_id = await service.create("Targets")

        await service.add_leads(list_id, ["a", "b"])
        await service.add_leads(list_id, ["b", "c", "a"])

        stored = await repo.get_list_by_id(list_id)
        assert stored.lead_ids == ["a", "b", "c"]
        assert (await service.get_by_id(list_id)).lead_count == 3

    @pytest.mark.asyncio
    async def test_remove_absent_is_noop(self, repo):
        service = ListService(repo)
        list_id = await service.create("Targets")
        await service.add_leads(list_id, ["a", "b"])

        await service.remove_leads(list_id, ["zzz"])
        assert (await repo.get_list_by_id(list_id)).lead_ids == ["a", "b"]

        await service.remove_leads(list_id, ["a"])
        assert (await repo.get_list_by_id(list_id)).lead_ids == ["b"]

    @pytest.mark.asyncio
    async def test_missing_list_is_noop(self, repo):
        service = ListService(repo)
        await service.add_leads("missing", ["a"])
        await service.remove_leads("missing", ["a"])
        assert await repo.get_list_by_id("missing") is None

    @pytest.mark.asyncio
    async def test_blank_list_id_rejected(self, repo):
        service = ListService(repo)
        with pytest.raises(ValidationError):
            await service.add_leads(" ", ["a"])
        with pytest.raises(ValidationError):
            await service.remove_leads("", ["a"])


class TestPaging:

    @pytest.mark.asyncio
    async def test_lists_are_paged(self, repo):
        service = ListService(repo)
        for i in range(3):
            await service.create(f"List {i}")

        page = await service.get_paged(1, 2)

        assert page.total == 3
        assert len(page.items) == 2
        assert page.page_size == 2

        rest = await service.get_paged(2, 2)
        assert len(rest.items) == 1
