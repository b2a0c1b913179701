"""Payload models for each kind of diary entry."""

from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class EntryType(str, Enum):
    """The seven kinds of diary entry."""
    FOOD = "food"
    DRINK = "drink"
    SUPPLEMENT = "supplement"
    EXERCISE = "exercise"
    WELLNESS = "wellness"
    SYMPTOM = "symptom"
    BOWEL_MOVEMENT = "bowel_movement"


class SymptomType(str, Enum):
    """Common symptom types for quick selection."""
    PAIN = "pain"
    BLOATING = "bloating"
    GAS = "gas"
    URGENCY = "urgency"
    FATIGUE = "fatigue"
    OTHER = "other"


class MealType(str, Enum):
    """Meal types."""
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class WellnessType(str, Enum):
    """What a wellness rating is about."""
    SLEEP = "sleep"
    STRESS = "stress"
    ENERGY = "energy"
    MOOD = "mood"


BRISTOL_STOOL_CHART = {
    1: "Separate hard lumps (very constipated)",
    2: "Lumpy and sausage-like (slightly constipated)",
    3: "Sausage shape with cracks on surface (normal)",
    4: "Smooth, soft sausage or snake (normal)",
    5: "Soft blobs with clear-cut edges (lacking fiber)",
    6: "Mushy consistency with ragged edges (mild diarrhea)",
    7: "Liquid consistency with no solid pieces (severe diarrhea)",
}


class _Payload(BaseModel):
    # Payloads are read-only once they reach analysis
    model_config = ConfigDict(frozen=True)


class Ingredient(_Payload):
    """One ingredient of a composed meal."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str = ""
    portion: str = ""
    brand_name: Optional[str] = None


class FoodEntry(_Payload):
    """
    Food consumption.

    Either the legacy single-item form (``food_item``) or a meal made of
    ``ingredients``. The ingredient list wins when both are present.
    """

    food_item: Optional[str] = None
    meal_label: Optional[str] = None
    ingredients: list[Ingredient] = Field(default_factory=list)
    portion: Optional[str] = None
    meal_type: Optional[MealType] = None
    brand_name: Optional[str] = None
    custom_food: bool = False

    @property
    def item_names(self) -> list[str]:
        """Distinct names counted as exposures: the ingredients, else the food item."""
        if self.ingredients:
            return list(dict.fromkeys(i.name for i in self.ingredients if i.name))
        if self.food_item:
            return [self.food_item]
        return []

    @property
    def display_name(self) -> str:
        """Single name for the whole entry."""
        if self.ingredients:
            return self.meal_label or self.ingredients[0].name
        return self.food_item or "Unknown Food"


class DrinkEntry(_Payload):
    """A drink."""

    drink_item: Optional[str] = None
    amount: Optional[str] = None
    brand_name: Optional[str] = None
    custom_drink: bool = False

    @property
    def item_names(self) -> list[str]:
        return [self.drink_item] if self.drink_item else []

    @property
    def display_name(self) -> str:
        return self.drink_item or "Unknown Drink"


class SupplementEntry(_Payload):
    supplement_name: Optional[str] = None
    dose: Optional[str] = None


class ExerciseEntry(_Payload):
    activity_type: Optional[str] = None
    duration: Optional[int] = None  # minutes


class WellnessEntry(_Payload):
    """A 1-10 self rating of sleep, stress, energy or mood."""

    type: Optional[WellnessType] = None
    rating: Optional[int] = None
    duration: Optional[int] = None
    notes: Optional[str] = None


class SymptomEntry(_Payload):
    """A symptom episode."""

    symptom_type: Optional[str] = None  # usually a SymptomType value
    severity: Optional[int] = None  # 1-10 scale
    duration: Optional[int] = None  # minutes
    custom_symptom: Optional[str] = None  # For SymptomType.OTHER

    @property
    def display_type(self) -> str:
        """Human-readable symptom type."""
        if self.symptom_type == SymptomType.OTHER and self.custom_symptom:
            return self.custom_symptom
        return (self.symptom_type or "unknown").replace("_", " ").title()


class BowelMovementEntry(_Payload):
    bristol_type: Optional[int] = None  # 1-7, see BRISTOL_STOOL_CHART
    notes: Optional[str] = None

    @property
    def description(self) -> Optional[str]:
        return BRISTOL_STOOL_CHART.get(self.bristol_type)
