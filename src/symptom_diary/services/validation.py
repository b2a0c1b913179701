"""Validation rules applied to diary entries before they are stored."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from ..models.entry import (
    BowelMovementDiaryEntry,
    DiaryEntry,
    DrinkDiaryEntry,
    ExerciseDiaryEntry,
    FoodDiaryEntry,
    SupplementDiaryEntry,
    SymptomDiaryEntry,
    WellnessDiaryEntry,
)
from ..models.health import (
    BowelMovementEntry,
    DrinkEntry,
    ExerciseEntry,
    FoodEntry,
    SupplementEntry,
    SymptomEntry,
    SymptomType,
    WellnessEntry,
)


@dataclass
class ValidationResult:
    is_valid: bool
    errors: list[str] = field(default_factory=list)


class EntryValidationError(ValueError):
    """Raised when an entry fails validation at a storage or API boundary."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


def _blank(value: Optional[str]) -> bool:
    return value is None or value.strip() == ""


def _in_range(value: Optional[int], low: int, high: int) -> bool:
    return value is not None and low <= value <= high


def _result(errors: list[str]) -> ValidationResult:
    return ValidationResult(is_valid=not errors, errors=errors)


class EntryValidator:
    """
    Checks required fields and value ranges for each kind of entry.

    The correlation engine trusts its input; these rules are what keep
    malformed entries out of the store in the first place.
    """

    MAX_AGE_YEARS = 2
    MAX_FUTURE = timedelta(days=1)

    @staticmethod
    def validate_food(data: FoodEntry) -> ValidationResult:
        errors = []

        if data.ingredients:
            if any(_blank(i.name) for i in data.ingredients):
                errors.append("Ingredient name is required")
            if any(_blank(i.portion) for i in data.ingredients):
                errors.append("Ingredient portion is required")
        else:
            if _blank(data.food_item):
                errors.append("Food item is required")
            if _blank(data.portion):
                errors.append("Portion size is required")

        if data.meal_type is None:
            errors.append("Meal type is required")

        return _result(errors)

    @staticmethod
    def validate_drink(data: DrinkEntry) -> ValidationResult:
        errors = []
        if _blank(data.drink_item):
            errors.append("Drink item is required")
        if _blank(data.amount):
            errors.append("Amount is required")
        return _result(errors)

    @staticmethod
    def validate_symptom(data: SymptomEntry) -> ValidationResult:
        errors = []

        if _blank(data.symptom_type):
            errors.append("Symptom type is required")
        elif data.symptom_type == SymptomType.OTHER and _blank(data.custom_symptom):
            errors.append("Custom symptom description is required")

        if not _in_range(data.severity, 1, 10):
            errors.append("Severity must be between 1 and 10")

        return _result(errors)

    @staticmethod
    def validate_supplement(data: SupplementEntry) -> ValidationResult:
        errors = []
        if _blank(data.supplement_name):
            errors.append("Supplement name is required")
        if _blank(data.dose):
            errors.append("Dose is required")
        return _result(errors)

    @staticmethod
    def validate_exercise(data: ExerciseEntry) -> ValidationResult:
        errors = []
        if _blank(data.activity_type):
            errors.append("Activity type is required")
        if data.duration is None or data.duration < 1:
            errors.append("Duration must be at least 1 minute")
        return _result(errors)

    @staticmethod
    def validate_wellness(data: WellnessEntry) -> ValidationResult:
        errors = []
        if data.type is None:
            errors.append("Wellness type is required")
        if not _in_range(data.rating, 1, 10):
            errors.append("Rating must be between 1 and 10")
        return _result(errors)

    @staticmethod
    def validate_bowel_movement(data: BowelMovementEntry) -> ValidationResult:
        if not _in_range(data.bristol_type, 1, 7):
            return _result(["Bristol stool type is required (1-7)"])
        return _result([])

    @classmethod
    def is_within_reasonable_timeframe(
        cls,
        timestamp: datetime,
        now: Optional[datetime] = None,
    ) -> bool:
        """True if the timestamp is at most two years old and one day ahead."""
        now = now or datetime.now().astimezone()
        try:
            earliest = now.replace(year=now.year - cls.MAX_AGE_YEARS)
        except ValueError:
            # Feb 29 two years back
            earliest = now.replace(year=now.year - cls.MAX_AGE_YEARS, day=28)
        return earliest <= timestamp <= now + cls.MAX_FUTURE

    @classmethod
    def validate_entry(
        cls,
        entry: DiaryEntry,
        now: Optional[datetime] = None,
    ) -> ValidationResult:
        """Validate an entry's payload and timestamp."""
        if isinstance(entry, FoodDiaryEntry):
            result = cls.validate_food(entry.data)
        elif isinstance(entry, DrinkDiaryEntry):
            result = cls.validate_drink(entry.data)
        elif isinstance(entry, SymptomDiaryEntry):
            result = cls.validate_symptom(entry.data)
        elif isinstance(entry, SupplementDiaryEntry):
            result = cls.validate_supplement(entry.data)
        elif isinstance(entry, ExerciseDiaryEntry):
            result = cls.validate_exercise(entry.data)
        elif isinstance(entry, WellnessDiaryEntry):
            result = cls.validate_wellness(entry.data)
        elif isinstance(entry, BowelMovementDiaryEntry):
            result = cls.validate_bowel_movement(entry.data)
        else:
            return _result(["Invalid entry type"])

        errors = list(result.errors)
        now = now or datetime.now().astimezone()
        if not cls.is_within_reasonable_timeframe(entry.timestamp, now):
            if entry.timestamp > now:
                errors.append("Date and time cannot be more than 1 day in the future")
            else:
                errors.append("Date and time must be within the last 2 years")

        return _result(errors)

    @staticmethod
    def sanitize_string(value: str) -> str:
        """Trim whitespace and drop angle brackets."""
        return value.strip().replace("<", "").replace(">", "")
