# test/test_api.py
import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from sift import FilterModel, SqlBuffer, TypeMismatchError, apply_filters
from sift.api import configure_error_handlers, filter_dependency


@pytest.fixture
def client(user_shape) -> TestClient:
    app = FastAPI()
    configure_error_handlers(app)
    user_filters = filter_dependency(user_shape)

    @app.get("/users")
    def list_users(filters: FilterModel = Depends(user_filters)):
        buffer = apply_filters(filters, SqlBuffer())
        return {"sql": buffer.sql, "params": buffer.params}

    @app.get("/explode")
    def explode():
        raise TypeMismatchError("age", "x", "int")

    return TestClient(app)


class TestFilterDependency:
    def test_parses_query_string(self, client):
        response = client.get("/users?name[sw]=Ali&age[gte]=18&limit=10&order_by[desc]=age")
        assert response.status_code == 200
        assert response.json() == {
            "sql": " AND name LIKE ? AND age >= ? ORDER BY age DESC LIMIT 10",
            "params": ["Ali%", 18],
        }

    def test_repeated_keys_are_preserved(self, client):
        response = client.get("/users", params=[("age[gt]", "1"), ("age[gt]", "2")])
        assert response.json()["params"] == [1, 2]

    def test_unknown_fields_are_ignored(self, client):
        response = client.get("/users?bogus_field=x&utm_source=mail")
        assert response.status_code == 200
        assert response.json() == {"sql": "", "params": []}

    def test_type_mismatch_is_bad_request(self, client):
        response = client.get("/users?age[gte]=notanumber")
        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["code"] == "type_mismatch"
        assert detail["field"] == "age"
        assert detail["raw"] == "notanumber"

    def test_not_configured_sort_is_bad_request(self, client):
        response = client.get("/users?order_by[asc]=unmapped_field")
        assert response.status_code == 400
        assert response.json()["detail"] == {
            "code": "not_configured",
            "field": "unmapped_field",
            "message": "Field 'unmapped_field' is not configured for filtering",
        }

    def test_rejected_bracketed_value_with_debug_logging(self, client, debug_logging):
        response = client.get("/users", params={"age": "1[/bold red]"})
        assert response.status_code == 400
        assert response.json()["detail"]["raw"] == "1[/bold red]"

    def test_accepted_bracketed_value_with_debug_logging(self, client, debug_logging):
        response = client.get("/users", params={"name[co]": "[/green]"})
        assert response.status_code == 200
        assert response.json()["params"] == ["%[/green]%"]

    def test_malformed_key_is_bad_request(self, client):
        response = client.get("/users", params={"age[gte": "1"})
        assert response.status_code == 400
        assert response.json()["detail"]["key"] == "age[gte"


class TestErrorHandlers:
    def test_filter_error_in_route_becomes_400(self, client):
        response = client.get("/explode")
        assert response.status_code == 400
        body = response.json()
        assert body["error"] is True
        assert body["detail"]["code"] == "type_mismatch"
