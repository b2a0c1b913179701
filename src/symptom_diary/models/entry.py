"""Diary entry model: a timestamped, typed payload."""

from datetime import datetime
from typing import Annotated, Literal, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from .health import (
    BowelMovementEntry,
    DrinkEntry,
    ExerciseEntry,
    FoodEntry,
    SupplementEntry,
    SymptomEntry,
    WellnessEntry,
)


class BaseDiaryEntry(BaseModel):
    """Fields shared by every diary entry."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str
    timestamp: datetime

    @field_validator("timestamp")
    @classmethod
    def _assume_local_time(cls, value: datetime) -> datetime:
        # Naive timestamps are local wall-clock time
        if value.tzinfo is None:
            return value.astimezone()
        return value

    @property
    def local_timestamp(self) -> datetime:
        """Timestamp converted to the machine's local timezone."""
        return self.timestamp.astimezone()

    def describe(self) -> str:
        """Short one-line description used in reports."""
        return "Unknown entry"


class FoodDiaryEntry(BaseDiaryEntry):
    type: Literal["food"] = "food"
    data: FoodEntry

    def describe(self) -> str:
        portion = self.data.portion or ", ".join(
            i.portion for i in self.data.ingredients if i.portion
        )
        return f"{self.data.display_name} ({portion})"


class DrinkDiaryEntry(BaseDiaryEntry):
    type: Literal["drink"] = "drink"
    data: DrinkEntry

    def describe(self) -> str:
        return f"{self.data.display_name} ({self.data.amount or ''})"


class SupplementDiaryEntry(BaseDiaryEntry):
    type: Literal["supplement"] = "supplement"
    data: SupplementEntry

    def describe(self) -> str:
        return f"{self.data.supplement_name} ({self.data.dose})"


class ExerciseDiaryEntry(BaseDiaryEntry):
    type: Literal["exercise"] = "exercise"
    data: ExerciseEntry

    def describe(self) -> str:
        return f"{self.data.activity_type} ({self.data.duration} min)"


class WellnessDiaryEntry(BaseDiaryEntry):
    type: Literal["wellness"] = "wellness"
    data: WellnessEntry

    def describe(self) -> str:
        kind = self.data.type.value if self.data.type else "wellness"
        return f"{kind} ({self.data.rating}/10)"


class SymptomDiaryEntry(BaseDiaryEntry):
    type: Literal["symptom"] = "symptom"
    data: SymptomEntry

    def describe(self) -> str:
        return f"{self.data.symptom_type} ({self.data.severity}/10)"


class BowelMovementDiaryEntry(BaseDiaryEntry):
    type: Literal["bowel_movement"] = "bowel_movement"
    data: BowelMovementEntry

    def describe(self) -> str:
        return f"Bristol type {self.data.bristol_type}"


DiaryEntry = Annotated[
    Union[
        FoodDiaryEntry,
        DrinkDiaryEntry,
        SupplementDiaryEntry,
        ExerciseDiaryEntry,
        WellnessDiaryEntry,
        SymptomDiaryEntry,
        BowelMovementDiaryEntry,
    ],
    Field(discriminator="type"),
]

# Food and drink are the only entries that count as exposures
ConsumptionEntry = Union[FoodDiaryEntry, DrinkDiaryEntry]

_entry_adapter = TypeAdapter(DiaryEntry)
_entries_adapter = TypeAdapter(list[DiaryEntry])


def parse_entry(data: dict) -> DiaryEntry:
    """Validate a raw dict into the matching diary entry class."""
    return _entry_adapter.validate_python(data)


def parse_entries(data: list[dict]) -> list[DiaryEntry]:
    return _entries_adapter.validate_python(data)


def parse_entries_json(raw: str | bytes) -> list[DiaryEntry]:
    """Parse a JSON array of diary entries."""
    return _entries_adapter.validate_json(raw)
