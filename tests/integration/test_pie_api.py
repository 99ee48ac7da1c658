"""
Integration tests for the pie API.

Tests the full stack - routes, service, in-memory repository and error
pipeline - through the application built by create_app().
"""

import pytest
from fastapi.testclient import TestClient

from src.adapters.repository import InMemoryPieRepository
from src.api.main import create_app
from src.config.settings import Settings

NOT_FOUND_TWO = {
    "status": 404,
    "statusText": "Not Found",
    "message": "The pie '2' could not be found.",
    "error": {"code": "NOT_FOUND", "message": "The pie '2' could not be found."},
}


class TestSingleApplePie:
    """Repository seeded with exactly one pie: {id: 1, name: Apple}."""

    @pytest.fixture
    def seed_pies(self) -> list[dict]:
        return [{"id": 1, "name": "Apple"}]

    def test_get_existing_pie(self, client: TestClient) -> None:
        response = client.get("/api/1")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == 200
        assert body["data"] == {"id": 1, "name": "Apple"}

    def test_get_missing_pie(self, client: TestClient) -> None:
        response = client.get("/api/2")

        assert response.status_code == 404
        assert response.json() == NOT_FOUND_TWO


class TestRead:
    """GET /api/, /api/{id}, /api/search."""

    @pytest.mark.parametrize("pie_id", ["1", "2", "3"])
    def test_get_returns_requested_id(self, client: TestClient, pie_id: str) -> None:
        response = client.get(f"/api/{pie_id}")

        assert response.status_code == 200
        assert str(response.json()["data"]["id"]) == pie_id

    def test_list_all(self, client: TestClient, seed_pies: list[dict]) -> None:
        response = client.get("/api/")

        assert response.status_code == 200
        assert response.json()["data"] == seed_pies

    def test_search_without_params_equals_list(self, client: TestClient) -> None:
        assert client.get("/api/search").json()["data"] == client.get("/api/").json()["data"]

    def test_search_by_name_is_case_insensitive_substring(self, client: TestClient) -> None:
        response = client.get("/api/search", params={"name": "apple"})

        names = [pie["name"] for pie in response.json()["data"]]
        assert names == ["Apple", "Apple Crumble"]

    def test_search_by_name_only_returns_matches(self, client: TestClient) -> None:
        pies = client.get("/api/search", params={"name": "Apple"}).json()["data"]
        assert all("apple" in pie["name"].lower() for pie in pies)
        assert "Cherry" not in [pie["name"] for pie in pies]

    def test_search_by_id(self, client: TestClient) -> None:
        pies = client.get("/api/search", params={"id": "2"}).json()["data"]
        assert pies == [{"id": 2, "name": "Cherry", "crust": "lattice"}]

    def test_search_no_match_is_empty_200(self, client: TestClient) -> None:
        response = client.get("/api/search", params={"id": "1", "name": "Cherry"})

        assert response.status_code == 200
        assert response.json()["data"] == []


class TestCreate:
    """POST /api/."""

    def test_create_assigns_new_id(self, client: TestClient, seed_pies: list[dict]) -> None:
        submitted = {"name": "Peach", "crust": "double", "servings": 8}

        response = client.post("/api/", json=submitted)

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == 201
        assert body["message"] == "New pie added."
        assert "messages" not in body
        data = body["data"]
        assert {k: data[k] for k in submitted} == submitted
        assert data["id"] not in {pie["id"] for pie in seed_pies}

    def test_created_pie_is_readable(self, client: TestClient) -> None:
        created = client.post("/api/", json={"name": "Peach"}).json()["data"]

        response = client.get(f"/api/{created['id']}")

        assert response.json()["data"] == created

    def test_client_id_not_used(self, client: TestClient) -> None:
        data = client.post("/api/", json={"id": 1, "name": "Impostor"}).json()["data"]

        assert data["id"] != 1
        assert client.get("/api/1").json()["data"]["name"] == "Apple"


class TestUpdate:
    """PUT and PATCH /api/{id}."""

    def test_put_then_get_reflects_update(self, client: TestClient) -> None:
        response = client.put("/api/2", json={"name": "Sour Cherry", "crust": "crumb"})
        assert response.status_code == 200
        assert response.json()["message"] == "Pie '2' updated."

        data = client.get("/api/2").json()["data"]
        assert data == {"id": 2, "name": "Sour Cherry", "crust": "crumb"}

    def test_patch_merges_fields(self, client: TestClient) -> None:
        response = client.patch("/api/1", json={"crust": "lattice"})

        assert response.status_code == 200
        assert response.json()["message"] == "Pie '1' patched."
        assert response.json()["data"] == {"id": 1, "name": "Apple", "crust": "lattice"}

    def test_update_cannot_change_id(self, client: TestClient) -> None:
        client.put("/api/1", json={"id": 42})

        assert client.get("/api/1").status_code == 200
        assert client.get("/api/42").status_code == 404

    @pytest.mark.parametrize("method", ["PUT", "PATCH"])
    def test_update_missing_returns_404(self, client: TestClient, method: str) -> None:
        response = client.request(method, "/api/99", json={"name": "x"})

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"


class TestDelete:
    """DELETE /api/{id}."""

    def test_delete_then_get_is_404(self, client: TestClient) -> None:
        response = client.delete("/api/3")

        assert response.status_code == 200
        assert response.json()["data"] == "Pie '3' deleted."
        assert client.get("/api/3").status_code == 404

    def test_second_delete_is_404(self, client: TestClient) -> None:
        assert client.delete("/api/1").status_code == 200

        response = client.delete("/api/1")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"


class TestNotFoundEverywhere:
    """Absent ids give 404 NOT_FOUND on every id route."""

    @pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE"])
    @pytest.mark.parametrize("pie_id", ["0", "99", "apple"])
    def test_absent_id(self, client: TestClient, method: str, pie_id: str) -> None:
        kwargs = {"json": {"name": "x"}} if method in ("PUT", "PATCH") else {}

        response = client.request(method, f"/api/{pie_id}", **kwargs)

        assert response.status_code == 404
        body = response.json()
        assert body["status"] == 404
        assert body["error"] == {"code": "NOT_FOUND", "message": f"The pie '{pie_id}' could not be found."}


class TestFileBackedStorage:
    """The same API over JsonFilePieRepository selected by settings."""

    def test_data_file_setting(self, tmp_path) -> None:
        settings = Settings(data_file=str(tmp_path / "pies.json"), error_log_file=str(tmp_path / "errors.log"))
        app = create_app(settings=settings)
        client = TestClient(app)

        created = client.post("/api/", json={"name": "Peach"}).json()["data"]

        assert created == {"id": 1, "name": "Peach"}
        assert (tmp_path / "pies.json").exists()
        # A second app over the same file sees the write
        other = TestClient(create_app(settings=settings))
        assert other.get("/api/1").json()["data"] == created

    def test_in_memory_by_default(self, settings: Settings) -> None:
        app = create_app(settings=settings)
        assert isinstance(app.state.repository, InMemoryPieRepository)


class TestHealth:
    """GET /health."""

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
