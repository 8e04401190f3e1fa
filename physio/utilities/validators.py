"""
Input validation schemas using Pydantic for better data integrity.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional

from physio.domain.ExercisePlan import ExercisePlan


class ExerciseInput(BaseModel):
    """Schema for a single exercise inside a weekly plan."""
    name: str = Field(..., min_length=1, max_length=200)
    sets: str = Field("", max_length=50)
    reps: str = Field("", max_length=50)
    notes: str = Field("", max_length=2000)

    @field_validator('sets', 'reps', mode='before')
    @classmethod
    def coerce_to_text(cls, v):
        """AI output sometimes sends numbers for sets/reps."""
        return str(v) if isinstance(v, (int, float)) else v

    @field_validator('name')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        return v.strip()


class WeeklyPlanInput(BaseModel):
    week: int
    focus: str = Field("", max_length=300)
    exercises: List[ExerciseInput] = Field(default_factory=list)


class ExercisePlanInput(BaseModel):
    """Schema for an exercise plan; week contiguity is checked by the program logic."""
    model_config = ConfigDict(populate_by_name=True)

    plan_title: str = Field(..., alias='planTitle', min_length=1, max_length=300)
    duration_weeks: int = Field(..., alias='durationWeeks')
    weekly_plans: List[WeeklyPlanInput] = Field(..., alias='weeklyPlans')

    def to_plan(self) -> ExercisePlan:
        return ExercisePlan.from_dict(self.model_dump(by_alias=True))


class AcceptPlanInput(BaseModel):
    plan: ExercisePlanInput
    sessions_per_week: Optional[int] = Field(None, ge=1, le=14)


class LogSessionInput(BaseModel):
    """Optional de-duplication token: the completed count the client last saw."""
    expected_completed_sessions: Optional[int] = Field(None, ge=0)


class UserCreateInput(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., pattern=r'^[^@\s]+@[^@\s]+\.[^@\s]+$', max_length=254)

    @field_validator('name', 'email')
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip()


class MessageInput(BaseModel):
    text: str = Field(..., min_length=1, max_length=2000)

    @field_validator('text')
    @classmethod
    def validate_text(cls, v):
        if not v.strip():
            raise ValueError('Message cannot be empty')
        return v.strip()


class AnnouncementInput(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=5000)


class JournalInput(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    publisher: str = Field(..., min_length=1, max_length=200)
    year: int = Field(..., ge=1800, le=2100)
    link: str = Field(..., pattern=r'^https?://')


class PlanRequestInput(BaseModel):
    """Patient details sent to the Plan Source."""
    condition: str = Field(..., min_length=3, max_length=1000)
    goals: str = Field("", max_length=1000)
    age: Optional[str] = None
    weight: Optional[str] = None
    height: Optional[str] = None

    @field_validator('condition', 'goals')
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip()
