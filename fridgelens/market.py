"""Mocked grocery ordering for a recipe's missing ingredients."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class MarketStore:
    name: str
    distance: str
    delivery_time: str
    price: str


@dataclass(frozen=True)
class OrderConfirmation:
    store: MarketStore
    items: tuple[str, ...]
    message: str


MOCK_STORES: tuple[MarketStore, ...] = (
    MarketStore("Hızlı Market", "0.5 km", "10-15 dk", "₺₺"),
    MarketStore("Taze Yöresel", "1.2 km", "20-30 dk", "₺₺₺"),
)

ORDER_MESSAGE = "Sipariş oluşturuldu! 15 dk içinde kapında."


def stores_for(missing_ingredients: Sequence[str]) -> list[MarketStore]:
    """Stores offered for the missing items; none when nothing is missing."""
    if not missing_ingredients:
        return []
    return list(MOCK_STORES)


def place_order(store: MarketStore, items: Sequence[str]) -> OrderConfirmation:
    """Pretend to order ``items`` from ``store``."""
    if not items:
        raise ValueError("Sipariş için eksik malzeme yok.")
    return OrderConfirmation(store=store, items=tuple(items), message=ORDER_MESSAGE)
