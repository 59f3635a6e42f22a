"""HTTP tests for the users and roles listing routes."""

from __future__ import annotations

from urllib.parse import parse_qs, urlsplit
from uuid import uuid4

import pytest

from admin_service.core.pagination import CursorCodec

PROBLEM_JSON = "application/problem+json"
codec = CursorCodec()


# ──────────────────────────────────────────────────────────────
# GET /users
# ──────────────────────────────────────────────────────────────


class TestListUsers:
    """Tests for GET /api/v1/users."""

    async def test_first_page(self, client, users):
        response = await client.get("/api/v1/users", params={"limit": 3})

        assert response.status_code == 200
        body = response.json()
        assert [item["email"] for item in body["items"]] == [
            "frances@example.com",
            "donald@example.com",
            "barbara@example.com",
        ]
        paginator = body["paginator"]
        assert paginator["size"] == 3
        assert paginator["limit"] == 3
        assert "prev_token" not in paginator
        assert "prev_page" not in paginator
        assert codec.decode(paginator["next_token"]).order_key == 50

    async def test_default_limit(self, client, users):
        body = (await client.get("/api/v1/users")).json()

        assert body["paginator"]["limit"] == 10
        assert body["paginator"]["size"] == 7
        assert set(body["paginator"]) == {"size", "limit"}

    async def test_items_never_expose_password_hash(self, client, users):
        body = (await client.get("/api/v1/users", params={"limit": 1})).json()

        assert set(body["items"][0]) == {
            "id",
            "first_name",
            "last_name",
            "email",
            "disabled",
            "created_at",
            "updated_at",
        }

    async def test_partial_response(self, client, users):
        response = await client.get("/api/v1/users", params={"fields": "id,email", "limit": 2})

        items = response.json()["items"]
        assert all(set(item) == {"id", "email"} for item in items)

    async def test_follow_next_page_link(self, client, users):
        params = {"limit": 2, "filter": "disabled=0", "sort": "first_name ASC"}
        first = (await client.get("/api/v1/users", params=params)).json()

        next_page = urlsplit(first["paginator"]["next_page"])
        query = parse_qs(next_page.query)
        assert next_page.path == "/api/v1/users"
        assert query["filter"] == ["disabled=0"]
        assert query["sort"] == ["first_name ASC"]
        assert query["limit"] == ["2"]

        second = (await client.get(first["paginator"]["next_page"])).json()

        assert [item["first_name"] for item in first["items"]] == ["Barbara", "Frances"]
        assert [item["first_name"] for item in second["items"]] == ["Ada", "Alan"]
        assert "next_token" not in second["paginator"]
        assert "prev_page" in second["paginator"]

    async def test_both_tokens_is_not_an_error(self, client, users):
        first = (await client.get("/api/v1/users", params={"limit": 2})).json()
        second = (
            await client.get(
                "/api/v1/users", params={"limit": 2, "next_token": first["paginator"]["next_token"]}
            )
        ).json()

        both = await client.get(
            "/api/v1/users",
            params={
                "limit": 2,
                "next_token": second["paginator"]["next_token"],
                "prev_token": second["paginator"]["prev_token"],
            },
        )
        only_next = await client.get(
            "/api/v1/users",
            params={"limit": 2, "next_token": second["paginator"]["next_token"]},
        )

        assert both.status_code == 200
        assert both.json()["items"] == only_next.json()["items"]


# ──────────────────────────────────────────────────────────────
# Problem details
# ──────────────────────────────────────────────────────────────


class TestListingErrors:
    """Invalid listing parameters map to 400 problem details."""

    @pytest.mark.parametrize(
        ("params", "problem_type", "field"),
        [
            ({"limit": 0}, "invalid-limit", "limit"),
            ({"limit": 1001}, "invalid-limit", "limit"),
            ({"filter": "password_hash='x'"}, "invalid-filter", "filter"),
            ({"filter": "email='a' AND"}, "invalid-filter", "filter"),
            ({"filter": "disabled='maybe'"}, "invalid-filter", "filter"),
            ({"sort": "email"}, "invalid-sort", "sort"),
            ({"fields": "password_hash"}, "invalid-fields", "fields"),
            ({"next_token": "garbage"}, "invalid-next-token", "next_token"),
            ({"prev_token": "garbage"}, "invalid-prev-token", "prev_token"),
        ],
    )
    async def test_bad_request(self, client, params, problem_type, field):
        response = await client.get("/api/v1/users", params=params)

        assert response.status_code == 400
        assert response.headers["content-type"].startswith(PROBLEM_JSON)
        body = response.json()
        assert body["type"] == problem_type
        assert body["status"] == 400
        assert body["title"] == "Bad Request"
        assert body["field"] == field
        assert body["instance"] == "/api/v1/users"

    async def test_ignored_prev_token_still_validated(self, client, users):
        response = await client.get(
            "/api/v1/users",
            params={"next_token": codec.encode(users[0].id, 70), "prev_token": "garbage"},
        )

        assert response.status_code == 400
        assert response.json()["type"] == "invalid-prev-token"

    async def test_non_integer_limit_is_validation_error(self, client):
        response = await client.get("/api/v1/users", params={"limit": "many"})

        assert response.status_code == 422
        assert response.json()["type"] == "validation-error"


# ──────────────────────────────────────────────────────────────
# GET by id and roles
# ──────────────────────────────────────────────────────────────


class TestGetOne:
    """Tests for single-entity routes."""

    async def test_get_user(self, client, users):
        response = await client.get(f"/api/v1/users/{users[0].id}")

        assert response.status_code == 200
        assert response.json()["email"] == "frances@example.com"

    async def test_get_user_not_found(self, client):
        user_id = uuid4()

        response = await client.get(f"/api/v1/users/{user_id}")

        assert response.status_code == 404
        body = response.json()
        assert body["type"] == "user-not-found"
        assert body["user_id"] == str(user_id)

    async def test_get_role_not_found(self, client):
        response = await client.get(f"/api/v1/roles/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["type"] == "role-not-found"


class TestListRoles:
    """Tests for GET /api/v1/roles."""

    async def test_list_and_filter(self, client, roles):
        response = await client.get(
            "/api/v1/roles", params={"filter": "auto_assign=1 OR system=1", "fields": "name"}
        )

        assert response.status_code == 200
        assert response.json()["items"] == [{"name": "viewer"}, {"name": "admin"}]

    async def test_description_is_not_filterable(self, client, roles):
        response = await client.get("/api/v1/roles", params={"filter": "description='x'"})

        assert response.status_code == 400
        assert response.json()["type"] == "invalid-filter"
