"""Data models for the diary application."""

from .entry import (
    BowelMovementDiaryEntry,
    DiaryEntry,
    DrinkDiaryEntry,
    ExerciseDiaryEntry,
    FoodDiaryEntry,
    SupplementDiaryEntry,
    SymptomDiaryEntry,
    WellnessDiaryEntry,
    parse_entries,
    parse_entries_json,
    parse_entry,
)
from .health import (
    BowelMovementEntry,
    DrinkEntry,
    EntryType,
    ExerciseEntry,
    FoodEntry,
    Ingredient,
    SupplementEntry,
    SymptomEntry,
    SymptomType,
    WellnessEntry,
)

__all__ = [
    "DiaryEntry",
    "FoodDiaryEntry",
    "DrinkDiaryEntry",
    "SupplementDiaryEntry",
    "ExerciseDiaryEntry",
    "WellnessDiaryEntry",
    "SymptomDiaryEntry",
    "BowelMovementDiaryEntry",
    "parse_entry",
    "parse_entries",
    "parse_entries_json",
    "EntryType",
    "SymptomType",
    "FoodEntry",
    "Ingredient",
    "DrinkEntry",
    "SupplementEntry",
    "ExerciseEntry",
    "WellnessEntry",
    "SymptomEntry",
    "BowelMovementEntry",
]
