from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, AliasChoices

from core.entities import ExerciseCategory


class ExerciseCreate(BaseModel):
    """
    Request body of exercise creation. Presence and format of every field
    are checked by the use case so each rejection carries one error kind.
    """
    model_config = ConfigDict(extra="forbid")
    userId: Optional[int] = Field(default=None, title="User ID")
    description: Optional[str] = Field(default=None, title="Description")
    type: Optional[str] = Field(default=None, title="Exercise Type")
    startTime: Optional[str] = Field(default=None, title="Start Time (ISO-8601)")
    duration: Optional[int] = Field(default=None, title="Duration in seconds")
    calories: Optional[int] = Field(default=None, title="Calories")


class ExerciseUpdate(BaseModel):
    """Request body of exercise update. userId and type are rejected when sent."""
    model_config = ConfigDict(extra="forbid")
    userId: Optional[int] = Field(default=None, title="User ID")
    description: Optional[str] = Field(default=None, title="Description")
    type: Optional[str] = Field(default=None, title="Exercise Type")
    startTime: Optional[str] = Field(default=None, title="Start Time (ISO-8601)")
    duration: Optional[int] = Field(default=None, title="Duration in seconds")
    calories: Optional[int] = Field(default=None, title="Calories")


class ExerciseResponse(BaseModel):
    id: int = Field(title="Exercise ID")
    userId: int = Field(alias="user_id", serialization_alias="userId", validation_alias=AliasChoices('userId', 'user_id'), title="User ID")
    description: str = Field(title="Description")
    type: ExerciseCategory = Field(alias="category", serialization_alias="type", validation_alias=AliasChoices('type', 'category'), title="Exercise Type")
    startTime: datetime = Field(alias="start_time", serialization_alias="startTime", validation_alias=AliasChoices('startTime', 'start_time'), title="Start Time")
    finishTime: datetime = Field(alias="finish_time", serialization_alias="finishTime", validation_alias=AliasChoices('finishTime', 'finish_time'), title="Finish Time")
    duration: int = Field(title="Duration in seconds")
    calories: int = Field(title="Calories")


class ExerciseEnvelope(BaseModel):
    exercise: ExerciseResponse
