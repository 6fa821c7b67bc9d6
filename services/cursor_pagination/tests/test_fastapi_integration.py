"""
Tests for the FastAPI integration and the 400 error rendering.
"""

import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient

from services.cursor_pagination.fastapi_integration import (
    CursorPagination,
    page_request_dependency,
    request_base_url,
)
from services.cursor_pagination.http_errors import register_pagination_exception_handlers
from services.cursor_pagination.schemas import PageRequest
from services.cursor_pagination.scope import InMemoryScope

RECORDS = [{"id": i, "name": f"record-{i}"} for i in range(1, 11)]


def create_app() -> FastAPI:
    app = FastAPI()
    register_pagination_exception_handlers(app)
    pagination = CursorPagination()

    @app.get("/records")
    async def list_records(
        request: Request,
        page_request: PageRequest = Depends(page_request_dependency),
    ):
        result = pagination.paginate(page_request, InMemoryScope(RECORDS), "id")
        return pagination.response(result, request, status="Success")

    @app.get("/base-url")
    async def base_url(request: Request):
        return {"base_url": request_base_url(request)}

    return app


@pytest.fixture
def client():
    return TestClient(create_app())


class TestRecordsEndpoint:
    def test_without_page_params_returns_everything(self, client):
        response = client.get("/records", params={"filter": "all"})

        assert response.status_code == 200
        body = response.json()
        assert body == {"status": "Success", "results": RECORDS}

    def test_first_page(self, client):
        response = client.get("/records", params={"page[size]": "3"})

        assert response.status_code == 200
        body = response.json()
        assert [row["id"] for row in body["results"]] == [1, 2, 3]
        assert body["meta"] == {
            "page": {"cursor": {"before": 1, "after": 3}, "total": 10, "pages": 4}
        }
        assert body["links"]["next"] == (
            "http://testserver/records?page%5Bafter%5D=3&page%5Bsize%5D=3"
        )
        assert body["links"]["prev"] == (
            "http://testserver/records?page%5Bbefore%5D=1&page%5Bsize%5D=3"
        )

    def test_following_next_link(self, client):
        first = client.get("/records", params={"page[size]": "3", "q": "x"}).json()

        second = client.get(first["links"]["next"])

        assert second.status_code == 200
        body = second.json()
        assert [row["id"] for row in body["results"]] == [4, 5, 6]
        assert body["links"]["next"] == (
            "http://testserver/records?page%5Bafter%5D=6&page%5Bsize%5D=3&q=x"
        )

    def test_repeated_params_survive_in_links(self, client):
        response = client.get(
            "/records",
            params=[
                ("tag[]", "a"),
                ("tag[]", "b"),
                ("q", "x"),
                ("q", "y"),
                ("page[size]", "3"),
            ],
        )

        links = response.json()["links"]
        for link in (links["next"], links["prev"]):
            assert "tag%5B%5D=a" in link
            assert "tag%5B%5D=b" in link
            assert "q=x&q=y" in link
        assert links["next"] == (
            "http://testserver/records?page%5Bafter%5D=3&page%5Bsize%5D=3"
            "&q=x&q=y&tag%5B%5D=a&tag%5B%5D=b"
        )

    def test_before_page(self, client):
        response = client.get("/records", params={"page[size]": "3", "page[before]": "8"})

        assert [row["id"] for row in response.json()["results"]] == [5, 6, 7]

    def test_range_pagination_rejected(self, client):
        response = client.get(
            "/records",
            params={"page[size]": "10", "page[before]": "5", "page[after]": "1"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["status"] == "Error"
        assert len(body["errors"]) == 1
        assert body["errors"][0]["title"] == "Range Pagination Not Supported."

    def test_invalid_size_rejected(self, client):
        response = client.get("/records", params={"page[size]": "abc"})

        assert response.status_code == 400
        assert response.json()["errors"] == [
            {
                "title": "Invalid Parameter.",
                "detail": (
                    "page[size] is required and must be a positive integer; got abc"
                ),
                "source": {"parameter": "page[size]"},
            }
        ]

    def test_base_url_strips_query(self, client):
        response = client.get("/base-url", params={"a": "1"})

        assert response.json() == {"base_url": "http://testserver/base-url"}


class TestCursorPaginationFacade:
    def test_validate_reads_flat_query_params(self):
        page_request, errors = CursorPagination().validate(
            {"page[size]": "5", "page[after]": "2"}
        )

        assert errors == []
        assert page_request == PageRequest(size=5, after="2")

    def test_validate_without_page_params(self):
        page_request, errors = CursorPagination().validate({"q": "x"})

        assert errors == []
        assert page_request.size == 0
