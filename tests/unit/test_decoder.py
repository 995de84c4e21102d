"""Tests for restaurant row decoding."""

import json
from decimal import Decimal

import pytest

from src.search.decoder import RowDecodeError, RowMode, decode_restaurant


def base_values(**overrides):
    values = {
        "id": 42,
        "restaurant_name": "Trattoria Roma",
        "city": "Mumbai",
        "area": "Bandra West",
        "cost_for_two": 1800,
        "rating": Decimal("4.4"),
        "latitude": 19.06,
        "longitude": 72.83,
        "image_url": "https://img.example.com/42.jpg",
        "effective_discount": 0.25,
        "free": False,
        "offer": "Flat 25% off",
        "percentage": "25",
    }
    values.update(overrides)
    return list(values.values())


CUISINES = json.dumps([{"id": 1, "cuisine_name": "Italian"}, {"id": 5, "cuisine_name": "Pizza"}])
MEAL_TYPES = json.dumps([{"id": 3, "meal_type": "Dinner"}])


class TestDecodeRestaurant:
    """Tests for decode_restaurant."""

    def test_with_distance(self):
        row = tuple(base_values() + [1523.7, CUISINES, MEAL_TYPES])

        restaurant = decode_restaurant(row, RowMode.WITH_DISTANCE)

        assert restaurant.id == 42
        assert restaurant.restaurant_name == "Trattoria Roma"
        assert restaurant.rating == pytest.approx(4.4)
        assert restaurant.distance == pytest.approx(1523.7)
        assert [c.cuisine_name for c in restaurant.cuisines] == ["Italian", "Pizza"]
        assert restaurant.meal_types[0].meal_type == "Dinner"

    def test_null_distance(self):
        row = tuple(base_values() + [None, "[]", "[]"])

        restaurant = decode_restaurant(row, RowMode.WITH_DISTANCE)

        assert restaurant.distance is None
        assert restaurant.cuisines == []
        assert restaurant.meal_types == []

    def test_bare(self):
        row = tuple(base_values() + [CUISINES, MEAL_TYPES])

        restaurant = decode_restaurant(row, RowMode.BARE)

        assert restaurant.distance is None
        assert len(restaurant.cuisines) == 2

    def test_column_count_must_match_mode(self):
        bare_row = tuple(base_values() + [CUISINES, MEAL_TYPES])

        with pytest.raises(RowDecodeError):
            decode_restaurant(bare_row, RowMode.WITH_DISTANCE)

        with pytest.raises(RowDecodeError):
            decode_restaurant(bare_row + ("extra",), RowMode.BARE)

    def test_bad_aggregate_leaves_field_empty(self):
        """Test a broken aggregate does not fail the row."""
        row = tuple(base_values() + [10.0, "not json", json.dumps([{"id": "x"}])])

        restaurant = decode_restaurant(row, RowMode.WITH_DISTANCE)

        assert restaurant.id == 42
        assert restaurant.cuisines == []
        assert restaurant.meal_types == []

    def test_decoded_aggregate_accepted(self):
        row = tuple(base_values() + [[{"id": 2, "cuisine_name": "Thai"}], None])

        restaurant = decode_restaurant(row, RowMode.BARE)

        assert restaurant.cuisines[0].id == 2
        assert restaurant.meal_types == []

    def test_nullable_columns(self):
        row = tuple(base_values(area=None, image_url=None, offer=None, latitude=None) + ["[]", "[]"])

        restaurant = decode_restaurant(row, RowMode.BARE)

        assert restaurant.area is None
        assert restaurant.image_url is None
        assert restaurant.latitude == 0.0

    def test_invalid_scalar_raises(self):
        row = tuple(base_values(id=None) + ["[]", "[]"])

        with pytest.raises(RowDecodeError):
            decode_restaurant(row, RowMode.BARE)

    def test_mode_fields(self):
        assert RowMode.WITH_DISTANCE.fields[13] == "distance"
        assert len(RowMode.WITH_DISTANCE.fields) == 16
        assert len(RowMode.BARE.fields) == 15
