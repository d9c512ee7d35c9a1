from __future__ import annotations

import pytest

from app.errors import ApiError
from app.utils.envelope import assemble
from app.utils.pagination import PageRequest, normalize_page, snapshot_page


def test_defaults_apply_when_missing():
    assert normalize_page(None, None, default_size=10, max_size=1000) == PageRequest(0, 10)


def test_page_size_is_clamped_to_ceiling():
    assert normalize_page(3, 5000, default_size=10, max_size=1000) == PageRequest(3, 1000)


@pytest.mark.parametrize("page", [0, 1, 7, 250])
@pytest.mark.parametrize("page_size", [1, 10, 999, 1000, 1001, 50000])
def test_bounds_hold_for_any_request(page, page_size):
    request = normalize_page(page, page_size, default_size=10, max_size=1000)
    assert request.page_size <= 1000
    assert request.offset == page * request.page_size
    assert request.high - request.offset + 1 == request.page_size


def test_zero_page_size_is_rejected():
    with pytest.raises(ApiError) as ctx:
        normalize_page(0, 0, default_size=10, max_size=1000)
    assert ctx.value.status_code == 400


def test_negative_page_is_rejected():
    with pytest.raises(ApiError):
        normalize_page(-1, 10, default_size=10, max_size=1000)


def test_snapshot_page_covers_whole_snapshot():
    request = snapshot_page()
    assert (request.page, request.page_size) == (0, 10000)
    assert (request.offset, request.high) == (0, 9999)


def test_envelope_counts_current_page_only():
    envelope = assemble(PageRequest(2, 10), [{"asn": 1}, {"asn": 2}])
    assert envelope == {"page": 2, "page_size": 10, "count": 2, "data": [{"asn": 1}, {"asn": 2}]}
    assert assemble(PageRequest(0, 10), [])["count"] == 0
