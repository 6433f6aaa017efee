# This file loads the static list of properties the front desk can switch between.
# It exists so room inventory is configured in YAML instead of being hard-coded in pages.
# The loader validates ids and room counts up front so pricing never divides by a bad inventory.
# The first hotel in the file is the default selection after login.

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml


def _load_yaml(path: str | Path) -> dict[str, Any]:
    with open(path, encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config at {path} must be a mapping, got: {type(loaded).__name__}")
    return dict(loaded)


@dataclass(frozen=True)
class Hotel:
    id: str
    name: str
    rooms: int


class HotelDirectory:
    def __init__(self, hotels: list[Hotel]) -> None:
        if not hotels:
            raise ValueError("Hotel directory must list at least one hotel")
        seen: set[str] = set()
        for hotel in hotels:
            if hotel.id in seen:
                raise ValueError(f"Duplicate hotel id in directory: {hotel.id!r}")
            if hotel.rooms <= 0:
                raise ValueError(f"Hotel {hotel.id!r} must have a positive room count, got {hotel.rooms}")
            seen.add(hotel.id)
        self.hotels = list(hotels)

    def get(self, hotel_id: str) -> Hotel | None:
        for hotel in self.hotels:
            if hotel.id == hotel_id:
                return hotel
        return None

    def default_hotel_id(self) -> str:
        return self.hotels[0].id

    def ids(self) -> list[str]:
        return [hotel.id for hotel in self.hotels]


def parse_hotel_directory(cfg: dict[str, Any]) -> HotelDirectory:
    raw_hotels = cfg.get("hotels", [])
    if not isinstance(raw_hotels, list):
        raise ValueError("hotels must be a list of {id, name, rooms} mappings")

    hotels: list[Hotel] = []
    for raw in raw_hotels:
        if not isinstance(raw, dict) or "id" not in raw:
            raise ValueError(f"Invalid hotel entry: {raw!r}")
        hotels.append(
            Hotel(
                id=str(raw["id"]),
                name=str(raw.get("name", raw["id"])),
                rooms=int(raw.get("rooms", 0)),
            )
        )
    return HotelDirectory(hotels)


def load_hotel_directory(config_path: str | Path = "configs/hotels.yaml") -> HotelDirectory:
    return parse_hotel_directory(_load_yaml(config_path))
