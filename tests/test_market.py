"""Tests for mocked grocery ordering."""

import pytest

from fridgelens.market import MOCK_STORES, ORDER_MESSAGE, place_order, stores_for


def test_no_stores_without_missing_items():
    assert stores_for([]) == []
    assert stores_for(()) == []


def test_stores_offered_for_missing_items():
    stores = stores_for(["domates"])
    assert [s.name for s in stores] == ["Hızlı Market", "Taze Yöresel"]


def test_place_order():
    confirmation = place_order(MOCK_STORES[0], ["domates", "biber"])
    assert confirmation.store.name == "Hızlı Market"
    assert confirmation.items == ("domates", "biber")
    assert confirmation.message == ORDER_MESSAGE


def test_place_order_requires_items():
    with pytest.raises(ValueError):
        place_order(MOCK_STORES[1], [])
