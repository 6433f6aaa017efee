# This test file checks hotel directory loading and validation.
# It exists so a malformed hotels.yaml fails at startup instead of inside a price calculation.

from __future__ import annotations

from pathlib import Path

import pytest

from dayuse_pricing.pricing.hotel_directory import load_hotel_directory, parse_hotel_directory

ROOT_DIR = Path(__file__).resolve().parents[2]


def test_bundled_directory_lists_three_hotels() -> None:
    directory = load_hotel_directory(ROOT_DIR / "configs" / "hotels.yaml")

    assert directory.ids() == ["hotel_a", "hotel_b", "hotel_c"]
    assert directory.default_hotel_id() == "hotel_a"
    assert directory.get("hotel_b").rooms == 45
    assert directory.get("missing") is None


@pytest.mark.parametrize(
    "cfg, message",
    [
        ({"hotels": []}, "at least one hotel"),
        ({"hotels": [{"id": "a", "rooms": 5}, {"id": "a", "rooms": 6}]}, "Duplicate hotel id"),
        ({"hotels": [{"id": "a", "rooms": 0}]}, "positive room count"),
        ({"hotels": {"id": "a"}}, "must be a list"),
    ],
)
def test_invalid_directories_are_rejected(cfg: dict, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        parse_hotel_directory(cfg)


def test_non_mapping_yaml_is_rejected(tmp_path: Path) -> None:
    config_path = tmp_path / "hotels.yaml"
    config_path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ValueError, match="must be a mapping"):
        load_hotel_directory(config_path)
