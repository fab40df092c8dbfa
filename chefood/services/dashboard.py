from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field

from chefood.models.recipe_models import SavedRecipe

# Minutes assumed for a recipe that carries no prep/cook time
DEFAULT_RECIPE_MINUTES = 30


class DashboardStats(BaseModel):
    total_recipes: int = 0
    saved_recipes: int = 0
    favorite_recipes: int = 0
    total_meal_plans: int = 0
    total_cooking_time: int = Field(default=0, description="Minutes.")
    weekly_streak: int = 0
    cuisine_types: List[str] = Field(default_factory=list)


def _as_utc(dt: datetime) -> datetime:
    return dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt


def compute_dashboard_stats(
    recipes: List[SavedRecipe],
    total_meal_plans: int = 0,
    now: Optional[datetime] = None,
) -> DashboardStats:
    """
    Summary numbers for the dashboard header.

    - favorite_recipes counts AI-generated recipes,
    - the streak is days since the first save (inclusive), capped by the
      number of recipes.
    """
    now = _as_utc(now or datetime.now(timezone.utc))

    cuisine_types: List[str] = []
    for r in recipes:
        if r.cuisine_type and r.cuisine_type not in cuisine_types:
            cuisine_types.append(r.cuisine_type)

    total_minutes = 0
    for r in recipes:
        minutes = max(r.prep_time, 0) + max(r.cook_time, 0)
        total_minutes += minutes if minutes > 0 else DEFAULT_RECIPE_MINUTES

    ai_generated = sum(1 for r in recipes if r.ai_generated)

    save_dates = sorted(_as_utc(r.saved_at) for r in recipes if r.saved_at is not None)
    days_since_first = (now - save_dates[0]).days if save_dates else 0

    return DashboardStats(
        total_recipes=len(recipes),
        saved_recipes=len(recipes),
        favorite_recipes=ai_generated,
        total_meal_plans=max(0, total_meal_plans),
        total_cooking_time=total_minutes,
        weekly_streak=max(0, min(days_since_first + 1, len(recipes))),
        cuisine_types=cuisine_types,
    )


def format_cooking_time(minutes: int) -> str:
    if minutes <= 0:
        return "0h"
    if minutes >= 60:
        return f"{minutes // 60}h {minutes % 60}m"
    return f"{minutes}m"
