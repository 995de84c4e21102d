"""Tests for catalog model serialization."""

from src.models import City, Cuisine, MealType, Restaurant


class TestIdSerialization:
    """Ids are integers in Python and strings in JSON."""

    def test_restaurant_ids_are_json_strings(self):
        restaurant = Restaurant(
            id=42,
            restaurant_name="Spice Route",
            city="bengaluru",
            cuisines=[Cuisine(id=2, cuisine_name="Thai")],
            meal_types=[MealType(id=3, meal_type="Dinner")],
        )

        data = restaurant.model_dump(mode="json")

        assert restaurant.id == 42
        assert data["id"] == "42"
        assert data["cuisines"] == [{"id": "2", "cuisine_name": "Thai"}]
        assert data["meal_types"] == [{"id": "3", "meal_type": "Dinner"}]

    def test_python_dump_keeps_integers(self):
        assert Cuisine(id=5, cuisine_name="Thai").model_dump() == {"id": 5, "cuisine_name": "Thai"}

    def test_city_id(self):
        city = City(id=7, city_name="goa")

        assert '"id":"7"' in city.model_dump_json()

    def test_string_ids_accepted(self):
        assert MealType.model_validate({"id": "9", "meal_type": "Lunch"}).id == 9
