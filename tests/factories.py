"""
Entry factories for tests.

Timestamps passed in may be naive; the models read them as local time.
"""

from datetime import datetime
from typing import Optional

from symptom_diary.models import (
    BowelMovementDiaryEntry,
    BowelMovementEntry,
    DrinkDiaryEntry,
    DrinkEntry,
    FoodDiaryEntry,
    FoodEntry,
    Ingredient,
    SymptomDiaryEntry,
    SymptomEntry,
)
from symptom_diary.services import CorrelationService

# Frozen "current time" for analysis tests
NOW = datetime(2024, 1, 10, 12, 0).astimezone()


def frozen_service(now: datetime = NOW) -> CorrelationService:
    return CorrelationService(clock=lambda: now)


def _ids(entry_id: Optional[str]) -> dict:
    return {"id": entry_id} if entry_id else {}


def create_food(
    timestamp: datetime,
    food_item: Optional[str] = None,
    ingredients: Optional[list[str]] = None,
    meal_label: Optional[str] = None,
    portion: Optional[str] = "1 serving",
    meal_type: Optional[str] = "lunch",
    user_id: str = "user1",
    entry_id: Optional[str] = None,
) -> FoodDiaryEntry:
    return FoodDiaryEntry(
        user_id=user_id,
        timestamp=timestamp,
        data=FoodEntry(
            food_item=food_item,
            meal_label=meal_label,
            ingredients=[Ingredient(name=n, portion="1 serving") for n in ingredients or []],
            portion=portion,
            meal_type=meal_type,
        ),
        **_ids(entry_id),
    )


def create_drink(
    timestamp: datetime,
    drink_item: Optional[str],
    amount: Optional[str] = "1 glass",
    user_id: str = "user1",
    entry_id: Optional[str] = None,
) -> DrinkDiaryEntry:
    return DrinkDiaryEntry(
        user_id=user_id,
        timestamp=timestamp,
        data=DrinkEntry(drink_item=drink_item, amount=amount),
        **_ids(entry_id),
    )


def create_symptom(
    timestamp: datetime,
    symptom_type: Optional[str] = "bloating",
    severity: Optional[int] = 6,
    custom_symptom: Optional[str] = None,
    user_id: str = "user1",
    entry_id: Optional[str] = None,
) -> SymptomDiaryEntry:
    return SymptomDiaryEntry(
        user_id=user_id,
        timestamp=timestamp,
        data=SymptomEntry(
            symptom_type=symptom_type,
            severity=severity,
            custom_symptom=custom_symptom,
        ),
        **_ids(entry_id),
    )


def create_bowel_movement(
    timestamp: datetime,
    bristol_type: Optional[int] = 4,
    user_id: str = "user1",
) -> BowelMovementDiaryEntry:
    return BowelMovementDiaryEntry(
        user_id=user_id,
        timestamp=timestamp,
        data=BowelMovementEntry(bristol_type=bristol_type),
    )
