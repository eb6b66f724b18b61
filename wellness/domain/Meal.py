"""Meal domain entity: name, description, calories, ingredients and ordered instructions."""
from typing import List, Optional


class Meal:
    def __init__(self, name: str = "", description: str = "", calories: int = 0,
                 ingredients: Optional[List[str]] = None, instructions: Optional[List[str]] = None):
        self.name = name
        self.description = description
        self.calories = calories
        self.ingredients = ingredients[:] if ingredients else []
        self.instructions = instructions[:] if instructions else []

    def __str__(self) -> str:
        return f"{self.name} - {self.calories} kcal - {len(self.ingredients)} ingredients"

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, Meal):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        try:
            calories = int(d.get("calories", 0) or 0)
        except (TypeError, ValueError):
            calories = 0
        return Meal(
            name=str(d.get("name", "")),
            description=str(d.get("description", "")),
            calories=calories,
            ingredients=[str(i) for i in d.get("ingredients", []) or []],
            instructions=[str(s) for s in d.get("instructions", []) or []],
        )

    def to_dict(self):
        return {
            "name": self.name,
            "description": self.description,
            "calories": self.calories,
            "ingredients": list(self.ingredients),
            "instructions": list(self.instructions),
        }
