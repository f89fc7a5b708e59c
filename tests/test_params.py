"""Tests for parameter bag helpers."""

import pytest

from wgapi.errors import InvalidArgument
from wgapi.params import (
    DEFAULT_LIMIT,
    clamp_limit,
    encode_params,
    join_values,
    optional_params,
    require_ids,
    require_text,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (1, 1),
        (50, 50),
        (100, 100),
        (101, DEFAULT_LIMIT),
        (500, DEFAULT_LIMIT),
        (0, DEFAULT_LIMIT),
        (-5, DEFAULT_LIMIT),
        ("10", DEFAULT_LIMIT),
        (10.0, DEFAULT_LIMIT),
        (True, DEFAULT_LIMIT),
        (None, DEFAULT_LIMIT),
    ],
)
def test_clamp_limit(value, expected):
    assert clamp_limit(value) == expected


def test_join_values():
    assert join_values([None]) == ""
    assert join_values(["name", None, "tag"]) == "name,tag"
    assert join_values(["name", "tag"]) == "name,tag"
    assert join_values((1, 2)) == "1,2"
    assert join_values("name") == "name"
    assert join_values(None) is None


def test_optional_params_drops_unset_values():
    bag = optional_params(order_by="", fields=[], access_token=None, tier=0, nation="usa")
    assert bag == {"tier": 0, "nation": "usa"}
    assert optional_params(fields=[None], extra=(None, None)) == {}


def test_require_text():
    assert require_text("search", "wot") == "wot"
    for bad in ("", None, 5):
        with pytest.raises(InvalidArgument, match="search"):
            require_text("search", bad)


def test_require_ids():
    assert require_ids("clan_id", 7) == 7
    assert require_ids("clan_id", "7") == "7"
    assert require_ids("clan_id", [7, 8]) == "7,8"
    for bad in (None, "", [], (), [None], True, {"id": 1}):
        with pytest.raises(InvalidArgument):
            require_ids("clan_id", bad)


def test_encode_params_form_rules():
    encoded = encode_params({"search": "Red Army", "fields": ["name", "tag"], "q": "a&b=c"})
    assert encoded == "search=Red+Army&fields=name%2Ctag&q=a%26b%3Dc"


def test_encode_params_skips_none():
    assert encode_params({"search": "wot", "order_by": None, "fields": [None]}) == "search=wot&fields="
