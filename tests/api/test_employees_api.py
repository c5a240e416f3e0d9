"""
Tests for the employee endpoints.
"""

import json

import pytest


class TestListEmployees:
    """Tests for GET /api/v1/employees."""

    @pytest.mark.asyncio
    async def test_default_listing(self, client, staff):
        """Listing with no parameters returns the first page and the total count."""
        response = await client.get("/api/v1/employees")

        assert response.status_code == 200
        body = response.json()
        assert body["meta"] == {"totalRowCount": 3}
        assert [e["first_name"] for e in body["data"]] == ["Alice", "Bob", "Carla"]
        assert body["data"][0]["roles"] == [
            {"id": staff.cashier.id, "name": "Cashier"},
            {"id": staff.cook.id, "name": "Cook"},
        ]

    @pytest.mark.asyncio
    async def test_query_parameters(self, client, staff):
        """Global filter, sorting and paging parameters reach the query engine."""
        response = await client.get(
            "/api/v1/employees",
            params={
                "start": 1,
                "size": 1,
                "globalFilter": "o",
                "sorting": json.dumps([{"id": "LastName", "desc": True}]),
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["meta"]["totalRowCount"] == 2
        assert [e["last_name"] for e in body["data"]] == ["Jones"]

    @pytest.mark.asyncio
    async def test_filters(self, client, staff):
        """Custom filters narrow the employee listing."""
        response = await client.get(
            "/api/v1/employees",
            params={"filters": json.dumps([{"id": "FirstName", "value": "Bob"}])},
        )
        assert [e["id"] for e in response.json()["data"]] == [staff.bob.id]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "params",
        [
            {"filters": "not json"},
            {"sorting": "[{]"},
            {"filters": json.dumps([{"id": "Id", "value": "abc"}])},
            {"start": -1},
            {"size": -5},
        ],
    )
    async def test_bad_query_is_400(self, client, staff, params):
        """Malformed or invalid listing parameters return 400."""
        response = await client.get("/api/v1/employees", params=params)
        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["is_success"] is False
        assert detail["message"] == "Invalid listing query."

    @pytest.mark.asyncio
    async def test_dropdown(self, client, staff):
        """Dropdown returns id and names of every employee."""
        response = await client.get("/api/v1/employees/dropdown")
        assert response.status_code == 200
        assert response.json()[1] == {"id": staff.bob.id, "first_name": "Bob", "last_name": "Jones"}


class TestEmployeeCrud:
    """Tests for single-employee endpoints."""

    @pytest.mark.asyncio
    async def test_get(self, client, staff):
        """Getting an employee includes their roles."""
        response = await client.get(f"/api/v1/employees/{staff.alice.id}")
        assert response.status_code == 200
        assert response.json()["last_name"] == "Smith"

    @pytest.mark.asyncio
    async def test_get_missing_is_404(self, client, staff):
        """Getting an unknown employee returns 404."""
        response = await client.get("/api/v1/employees/999")
        assert response.status_code == 404
        assert response.json()["detail"]["errors"] == ["Employee not found."]

    @pytest.mark.asyncio
    async def test_create(self, client, staff):
        """Creating an employee returns 201 with the attached roles."""
        response = await client.post(
            "/api/v1/employees",
            json={"first_name": "Dan", "last_name": "Brown", "role_ids": [staff.cook.id]},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["is_success"] is True
        assert body["errors"] == []
        assert body["data"]["roles"] == [{"id": staff.cook.id, "name": "Cook"}]
        assert "failure_kind" not in body

    @pytest.mark.asyncio
    async def test_create_invalid_body_is_422(self, client, staff):
        """An invalid employee body is rejected with 422."""
        response = await client.post("/api/v1/employees", json={"first_name": "Dan"})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_update(self, client, staff):
        """Updating an employee changes their names."""
        response = await client.put(
            f"/api/v1/employees/{staff.bob.id}", json={"first_name": "Robert"}
        )
        assert response.status_code == 200
        assert response.json()["data"]["first_name"] == "Robert"

    @pytest.mark.asyncio
    async def test_delete(self, client, staff):
        """Deleting an employee without shifts succeeds."""
        response = await client.delete(f"/api/v1/employees/{staff.carla.id}")
        assert response.status_code == 200
        assert response.json()["message"] == "Employee deleted successfully."

        response = await client.delete(f"/api/v1/employees/{staff.carla.id}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_with_shifts_is_400(self, client, staff):
        """Deleting an employee who still has shifts returns 400."""
        response = await client.delete(f"/api/v1/employees/{staff.alice.id}")
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_add_roles(self, client, staff):
        """Adding roles grants the new roles to the employee."""
        response = await client.post(
            f"/api/v1/employees/{staff.carla.id}/roles",
            json=[staff.manager.id],
        )
        assert response.status_code == 200
        assert [r["name"] for r in response.json()["data"]["roles"]] == ["Manager"]

    @pytest.mark.asyncio
    async def test_add_unknown_role_is_404(self, client, staff):
        """Adding a role that does not exist returns 404."""
        response = await client.post(f"/api/v1/employees/{staff.carla.id}/roles", json=[999])
        assert response.status_code == 404
        assert response.json()["detail"]["errors"] == ["One or more roles not found."]

    @pytest.mark.asyncio
    async def test_add_no_roles_is_422(self, client, staff):
        """An empty role id list is rejected with 422."""
        response = await client.post(f"/api/v1/employees/{staff.carla.id}/roles", json=[])
        assert response.status_code == 422
