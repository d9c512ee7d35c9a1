from __future__ import annotations

import json

from app.errors import ApiError, error_response


def test_errors_accumulate_in_order():
    error = ApiError.bad_request("cannot parse time string: x")
    error.append_error("page_size must be 1 or greater, got 0")
    assert error.to_dict() == {
        "status_code": 400,
        "errors": ["cannot parse time string: x", "page_size must be 1 or greater, got 0"],
    }
    assert str(error) == "Err 400 cannot parse time string: x; page_size must be 1 or greater, got 0"


def test_response_status_mirrors_body():
    response = error_response(ApiError.internal("database request failed"))
    assert response.status_code == 500
    assert json.loads(response.body) == {"status_code": 500, "errors": ["database request failed"]}


def test_package_factory_builds_app():
    import app

    api = app.create_app()
    assert api.title == "BGPKIT Data API"
    assert api.version == app.__version__
