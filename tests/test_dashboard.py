# tests/test_dashboard.py
from datetime import datetime, timezone

from chefood.models.recipe_models import SavedRecipe
from chefood.services.dashboard import compute_dashboard_stats, format_cooking_time


def test_stats_for_saved_recipes(saved_recipes):
    saved_recipes.append(
        SavedRecipe(
            id="3",
            title="Ramen",
            cuisine_type="Middle Eastern",
            ai_generated=True,
            saved_at=datetime(2024, 1, 5),
        )
    )

    stats = compute_dashboard_stats(
        saved_recipes, total_meal_plans=2, now=datetime(2024, 1, 10, tzinfo=timezone.utc)
    )

    assert stats.total_recipes == 3
    assert stats.saved_recipes == 3
    assert stats.favorite_recipes == 1
    assert stats.total_meal_plans == 2
    # 10 + 25, then two recipes without times at 30 minutes each
    assert stats.total_cooking_time == 95
    # nine days since the first save, capped by the number of recipes
    assert stats.weekly_streak == 3
    assert stats.cuisine_types == ["Middle Eastern", "American"]


def test_streak_counts_days_since_first_save(saved_recipes):
    stats = compute_dashboard_stats(saved_recipes, now=datetime(2024, 1, 1, 18, tzinfo=timezone.utc))

    assert stats.weekly_streak == 1


def test_stats_for_no_recipes():
    stats = compute_dashboard_stats([], total_meal_plans=-1)

    assert stats.total_recipes == 0
    assert stats.total_cooking_time == 0
    assert stats.weekly_streak == 0
    assert stats.total_meal_plans == 0
    assert stats.cuisine_types == []


def test_format_cooking_time():
    assert format_cooking_time(0) == "0h"
    assert format_cooking_time(45) == "45m"
    assert format_cooking_time(60) == "1h 0m"
    assert format_cooking_time(125) == "2h 5m"
