"""Catalog entities returned by the search API."""

from typing import Annotated

from pydantic import BaseModel, Field, PlainSerializer


# Ids go over the wire as JSON strings; in Python they stay integers
StringId = Annotated[int, PlainSerializer(str, return_type=str, when_used="json")]


class Cuisine(BaseModel):
    """Culinary category attached to a restaurant."""

    id: StringId
    cuisine_name: str


class MealType(BaseModel):
    """Meal category (e.g. Breakfast, Dinner) attached to a restaurant."""

    id: StringId
    meal_type: str


class City(BaseModel):
    """Supported city with its resolved coordinates."""

    id: StringId
    city_name: str
    latitude: float = 0.0
    longitude: float = 0.0
    geo_status: str = "PENDING"


class Restaurant(BaseModel):
    """A dining establishment with its embedded cuisines and meal types."""

    id: StringId
    restaurant_name: str
    city: str
    area: str | None = None
    cost_for_two: int = 0
    rating: float = 0.0
    latitude: float = 0.0
    longitude: float = 0.0
    image_url: str | None = None
    effective_discount: float = 0.0
    free: bool = False
    offer: str | None = None
    percentage: str | None = None

    # Populated only when the search has a geographic center
    distance: float | None = None

    cuisines: list[Cuisine] = Field(default_factory=list)
    meal_types: list[MealType] = Field(default_factory=list)
