"""
Tests for translating domain errors into HTTP responses.
"""

from jobly.core.errors import (
    InvalidFilterError,
    InvalidRangeError,
    NoFieldsError,
    NotFoundError,
)
from jobly.core.filters import build_filter_query


class TestExceptionHandlers:
    """Domain errors become JSON error envelopes with the right status"""

    def test_invalid_filter_is_400(self, client):
        @client.app.get("/companies")
        def list_companies():
            build_filter_query("company", {"badfilter": "shouldntwork"})

        response = client.get("/companies")

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["status"] == 400
        assert "badfilter" in error["message"]

    def test_range_and_no_fields_are_400(self, client):
        @client.app.get("/range")
        def bad_range():
            raise InvalidRangeError("minEmployees", 50, "maxEmployees", 10)

        @client.app.patch("/empty")
        def empty_update():
            raise NoFieldsError()

        assert client.get("/range").status_code == 400
        assert client.patch("/empty").json() == {"error": {"message": "No data", "status": 400}}

    def test_not_found_is_404(self, client):
        @client.app.get("/companies/nope")
        def get_company():
            raise NotFoundError("No company: nope")

        response = client.get("/companies/nope")

        assert response.status_code == 404
        assert response.json() == {"error": {"message": "No company: nope", "status": 404}}

    def test_unhandled_is_500(self, client):
        @client.app.get("/boom")
        def boom():
            raise RuntimeError("database went away")

        response = client.get("/boom")

        assert response.status_code == 500
        assert response.json()["error"]["message"] == "Internal server error"

    def test_invalid_filter_error_lists_allowed_keys(self):
        error = InvalidFilterError("badKey", ("title", "minSalary", "hasEquity"))

        assert error.message == (
            "badKey is not a valid filter field. "
            "Please select filter of title, minSalary, or hasEquity."
        )
