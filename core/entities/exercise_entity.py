from datetime import datetime, timedelta
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, AliasChoices, model_validator


class ExerciseCategory(str, Enum):
    RUNNING = "RUNNING"
    SWIMMING = "SWIMMING"
    STRENGTH_TRAINING = "STRENGTH_TRAINING"
    CIRCUIT_TRAINING = "CIRCUIT_TRAINING"


class ExerciseEntity(BaseModel):
    """
    Exercise entity representing one logged activity of a user.
    The finish time is always derived from the start time and duration.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = Field(
        default=None, description="Auto-assigned identifier of the exercise"
    )
    user_id: int = Field(
        ...,
        alias="userId",
        validation_alias=AliasChoices("userId", "user_id"),
        serialization_alias="userId",
        description="Owner of the exercise",
    )
    description: str = Field(..., description="Free text alphanumeric description")
    category: ExerciseCategory = Field(
        ...,
        alias="type",
        validation_alias=AliasChoices("type", "category"),
        serialization_alias="type",
        description="Exercise category",
    )
    start_time: datetime = Field(
        ...,
        alias="startTime",
        validation_alias=AliasChoices("startTime", "start_time"),
        serialization_alias="startTime",
        description="When the exercise started (UTC)",
    )
    duration: int = Field(..., description="Duration of the exercise in seconds")
    calories: int = Field(..., description="Calories burnt during the exercise")
    finish_time: Optional[datetime] = Field(
        default=None,
        alias="finishTime",
        validation_alias=AliasChoices("finishTime", "finish_time"),
        serialization_alias="finishTime",
        description="start_time + duration, stored redundantly",
    )

    @model_validator(mode="after")
    def derive_finish_time(self) -> "ExerciseEntity":
        self.finish_time = self.start_time + timedelta(seconds=self.duration)
        return self
