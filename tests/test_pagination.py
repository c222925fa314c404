import math
import re

import pytest
from pydantic import ValidationError as PydanticValidationError

from mhsurvey.services.base import PaginationParams, generate_id, paginate


def test_paginate_defaults():
    page = paginate(list(range(25)))

    assert page.page == 1
    assert page.limit == 10
    assert page.data == list(range(10))
    assert page.total == 25
    assert page.total_pages == 3


@pytest.mark.parametrize("total,limit", [(0, 10), (1, 10), (10, 10), (11, 10), (25, 7), (3, 1)])
def test_paginate_bounds(total, limit):
    items = list(range(total))
    for page_no in range(1, 5):
        page = paginate(items, PaginationParams(page=page_no, limit=limit))
        assert len(page.data) <= limit
        assert page.total == total
        assert page.total_pages == math.ceil(total / limit)


def test_paginate_last_page_is_partial():
    page = paginate(list(range(25)), PaginationParams(page=3, limit=10))
    assert page.data == [20, 21, 22, 23, 24]


def test_paginate_beyond_range_is_empty():
    page = paginate(list(range(5)), PaginationParams(page=4, limit=10))
    assert page.data == []
    assert page.total == 5
    assert page.total_pages == 1


def test_paginate_keeps_insertion_order():
    items = ["c", "a", "b"]
    assert paginate(items).data == ["c", "a", "b"]


@pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"page": -1, "limit": 5}])
def test_pagination_params_reject_non_positive(params):
    with pytest.raises(PydanticValidationError):
        PaginationParams(**params)


def test_page_serializes_camel_case():
    dumped = paginate([1, 2]).model_dump(by_alias=True)
    assert set(dumped) == {"data", "total", "page", "limit", "totalPages"}


def test_generate_id_format():
    ids = {generate_id() for _ in range(50)}
    assert len(ids) == 50
    for value in ids:
        assert re.fullmatch(r"\d{13}-[a-z0-9]{9}", value)
