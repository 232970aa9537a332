"""Integration tests for Categories API."""

import pytest
from httpx import AsyncClient

from domain.entities.category import DEFAULT_CATEGORIES

pytestmark = pytest.mark.asyncio

BASE = "/api/v1/categories"


class TestListCategories:
    async def test_seeds_defaults_on_first_read(self, api_client: AsyncClient):
        response = await api_client.get(BASE)

        assert response.status_code == 200
        body = response.json()
        assert body["data"] == list(DEFAULT_CATEGORIES)
        assert body["meta"]["total"] == 12

    async def test_repeated_reads_do_not_duplicate(self, api_client: AsyncClient):
        await api_client.get(BASE)

        response = await api_client.get(BASE)

        assert len(response.json()["data"]) == len(set(response.json()["data"])) == 12


class TestCreateCategory:
    async def test_requires_auth(self, api_client: AsyncClient):
        response = await api_client.post(BASE, json={"name": "Knitting"})

        assert response.status_code == 401

    async def test_adds_category(self, api_client: AsyncClient, auth_headers):
        await api_client.get(BASE)

        response = await api_client.post(BASE, json={"name": "  Knitting "}, headers=auth_headers)

        assert response.status_code == 201
        assert response.json()["data"]["name"] == "Knitting"
        names = (await api_client.get(BASE)).json()["data"]
        assert names[-1] == "Knitting"

    async def test_duplicate_rejected(self, api_client: AsyncClient, auth_headers):
        await api_client.get(BASE)

        response = await api_client.post(BASE, json={"name": "Fishing"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error_code"] == "DUPLICATE_CATEGORY"

    async def test_blank_name_rejected(self, api_client: AsyncClient, auth_headers):
        response = await api_client.post(BASE, json={"name": "   "}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_add_before_first_read_keeps_defaults(
        self, api_client: AsyncClient, auth_headers
    ):
        await api_client.post(BASE, json={"name": "Knitting"}, headers=auth_headers)

        names = (await api_client.get(BASE)).json()["data"]

        assert names == [*DEFAULT_CATEGORIES, "Knitting"]

    async def test_default_is_duplicate_before_first_read(
        self, api_client: AsyncClient, auth_headers
    ):
        response = await api_client.post(BASE, json={"name": "Fishing"}, headers=auth_headers)

        assert response.status_code == 400

    async def test_new_category_usable_for_groups(self, api_client: AsyncClient, auth_headers):
        from tests.conftest import group_payload

        await api_client.post(BASE, json={"name": "Knitting"}, headers=auth_headers)

        response = await api_client.post(
            "/api/v1/groups", json=group_payload(category="Knitting"), headers=auth_headers
        )

        assert response.status_code == 201
