from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, AliasChoices


class RankingEntry(BaseModel):
    userId: int = Field(alias="user_id", serialization_alias="userId", validation_alias=AliasChoices('userId', 'user_id'), title="User ID")
    totalScore: float = Field(alias="total_score", serialization_alias="totalScore", validation_alias=AliasChoices('totalScore', 'total_score'), title="Total Score")
    lastActivity: Optional[datetime] = Field(default=None, alias="last_activity_at", serialization_alias="lastActivity", validation_alias=AliasChoices('lastActivity', 'last_activity_at'), title="Last Activity")


class RankingResponse(BaseModel):
    """Leaderboard ordered by score, then by most recent activity"""
    ranking: List[RankingEntry] = Field(default_factory=list)
