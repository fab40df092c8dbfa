from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class MealPlan(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    status: str = "active"
    duration_days: int = 0
    family_size: int = 1
    goals: List[str] = Field(default_factory=list)
    dietary_restrictions: List[str] = Field(default_factory=list)
    target_calories_per_day: Optional[int] = None
    cooking_time_available: Optional[int] = None
    budget_per_week: Optional[float] = None
    generation_time_seconds: Optional[float] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return str(v)


class MealPlanListResponse(BaseModel):
    meal_plans: List[MealPlan] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    pages: int = 1
