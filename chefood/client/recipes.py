import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import ValidationError

from chefood.client.errors import ApiError
from chefood.client.http import ApiClient, unwrap
from chefood.models.recipe_models import (
    BackendHealth,
    CompleteRecipe,
    DeleteImpact,
    DeleteRecipeResponse,
    GenerateRecipeResponse,
    PageMeta,
    Recipe,
    RecipePage,
    RecipeRequest,
    SavedRecipe,
)
from chefood.services.prompt_builder import build_recipe_prompt

logger = logging.getLogger(__name__)

CORS_FALLBACK_MESSAGE = (
    "AI service is available but requires backend integration for CORS support. "
    "Please contact the development team to enable the AI recipe generation feature."
)


def _as_list(body: Any) -> List[Any]:
    """Recipe lists arrive bare, enveloped in "data", or under "recipes"."""
    if isinstance(body, list):
        return body
    if isinstance(body, dict):
        for key in ("data", "recipes"):
            if isinstance(body.get(key), list):
                return body[key]
    return []


class RecipeAPI:
    def __init__(self, client: ApiClient) -> None:
        self.client = client

    async def generate_recipe(self, req: RecipeRequest) -> GenerateRecipeResponse:
        """
        Ask the backend's cached AI endpoint for a recipe.

        Failures are reported in the response (success=False) instead of
        raised so the generator form can show them inline.
        """
        payload = {
            "prompt": build_recipe_prompt(req),
            "include_images": req.include_images,
            "generate_ingredient_images": req.generate_ingredient_images,
        }
        try:
            body = await self.client.post("/api/v1/ai/recipe/generate-optimized", json=payload)
        except ApiError as e:
            logger.error("Error generating recipe: %r", e)
            if e.status_code == 422:
                return GenerateRecipeResponse(
                    success=False, error=CORS_FALLBACK_MESSAGE, fallback_used=True
                )
            return GenerateRecipeResponse(success=False, error=e.detail)

        return GenerateRecipeResponse.model_validate(body)

    async def get_recipes(
        self,
        *,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        search: Optional[str] = None,
        cuisine_type: Optional[str] = None,
        difficulty: Optional[str] = None,
        meal_type: Optional[str] = None,
        dietary_restrictions: Optional[List[str]] = None,
        max_cooking_time: Optional[int] = None,
        tags: Optional[List[str]] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> List[Recipe]:
        params = {
            "page": page,
            "limit": limit,
            "search": search,
            "cuisine_type": cuisine_type,
            "difficulty": difficulty,
            "meal_type": meal_type,
            "dietary_restrictions": dietary_restrictions,
            "max_cooking_time": max_cooking_time,
            "tags": tags,
            "sort_by": sort_by,
            "sort_order": sort_order,
        }
        body = await self.client.get(
            "/api/v1/recipes", params={k: v for k, v in params.items() if v is not None}
        )
        return [Recipe.model_validate(r) for r in _as_list(body)]

    async def get_recipe(self, recipe_id: str) -> Recipe:
        body = await self.client.get(f"/api/v1/recipes/{recipe_id}")
        return Recipe.model_validate(unwrap(body))

    async def get_complete_recipe(self, recipe_id: str) -> CompleteRecipe:
        body = await self.client.get(f"/api/v1/recipes/{recipe_id}/complete")
        return CompleteRecipe.model_validate(unwrap(body))

    async def save_recipe(self, recipe: Recipe, personal_notes: Optional[str] = None) -> SavedRecipe:
        # The backend names differ from the client model (prep_time_minutes,
        # difficulty_level); meal_type/ai_generated/fallback_used are not accepted.
        lists = recipe.model_dump(mode="json", include={"ingredients", "instructions"})
        payload = {
            "title": recipe.title,
            "description": recipe.description,
            "ingredients": lists["ingredients"],
            "instructions": lists["instructions"],
            "prep_time_minutes": recipe.prep_time,
            "cook_time_minutes": recipe.cook_time,
            "servings": recipe.servings,
            "cuisine_type": recipe.cuisine_type,
            "dietary_restrictions": recipe.tags,
            "difficulty_level": recipe.difficulty,
            "image_url": recipe.image_url,
            "ingredient_images": recipe.ingredient_images,
        }
        body = await self.client.post("/api/v1/recipes", json=payload)

        saved = SavedRecipe.model_validate(unwrap(body))
        saved.saved_at = saved.created_at or datetime.now(timezone.utc)
        saved.personal_notes = personal_notes
        saved.times_cooked = 0
        return saved

    async def get_saved_recipes(
        self,
        *,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
        cuisine_type: Optional[str] = None,
    ) -> RecipePage:
        """
        Fetch one page of the user's saved recipes.

        A failing backend yields an empty page with status "error" rather
        than an exception.
        """
        params: dict = {"skip": (page - 1) * limit, "limit": limit}
        if search:
            params["search"] = search
        if cuisine_type:
            params["cuisine_type"] = cuisine_type

        try:
            body = await self.client.get("/api/v1/recipes", params=params)
        except ApiError as e:
            logger.warning("get_saved_recipes: API error: %r", e)
            return RecipePage(data=[], status="error", meta=PageMeta(limit=limit))

        now = datetime.now(timezone.utc)
        recipes: List[SavedRecipe] = []
        for raw in _as_list(body):
            try:
                saved = SavedRecipe.model_validate(raw)
            except ValidationError as e:
                logger.warning("get_saved_recipes: malformed recipe in response: %s", e)
                return RecipePage(data=[], status="error", meta=PageMeta(limit=limit))
            if saved.saved_at is None:
                saved.saved_at = saved.created_at or now
            recipes.append(saved)

        return RecipePage(
            data=recipes,
            status="success",
            meta=PageMeta(
                total=len(recipes),
                page=page,
                limit=limit,
                has_next=len(recipes) == limit,
                has_prev=page > 1,
            ),
        )

    async def update_saved_recipe(
        self,
        recipe_id: str,
        *,
        personal_notes: Optional[str] = None,
        modifications: Optional[List[str]] = None,
        rating: Optional[int] = None,
    ) -> SavedRecipe:
        updates = {
            "personal_notes": personal_notes,
            "modifications": modifications,
            "rating": rating,
        }
        body = await self.client.put(
            f"/api/v1/recipes/{recipe_id}",
            json={k: v for k, v in updates.items() if v is not None},
        )
        return SavedRecipe.model_validate(unwrap(body))

    async def delete_saved_recipe(self, recipe_id: str) -> DeleteRecipeResponse:
        """
        Delete a saved recipe and remove it from any meal plan using it.

        Falls back to the plain recipe delete when the meal-plan aware
        endpoint fails; an error from the fallback propagates.
        """
        logger.info("Deleting recipe %s with meal plan updates", recipe_id)
        try:
            body = await self.client.delete(
                f"/api/v1/meal-plans/recipes/{recipe_id}/with-meal-plan-updates"
            )
        except ApiError as enhanced_error:
            logger.warning(
                "Enhanced deletion failed, falling back to standard deletion: %r", enhanced_error
            )
        else:
            try:
                result = DeleteRecipeResponse.model_validate(body if isinstance(body, dict) else {})
            except ValidationError as e:
                logger.warning("Unexpected delete response for recipe %s: %s", recipe_id, e)
                result = DeleteRecipeResponse()
            impact = result.impact_summary
            if impact and impact.removed_meals_count > 0:
                logger.info(
                    "Deletion impact: %d meals removed from %d meal plans",
                    impact.removed_meals_count,
                    impact.meal_plans_updated,
                )
            return result

        try:
            await self.client.delete(f"/api/v1/recipes/{recipe_id}")
        except ApiError as e:
            logger.error("Delete API call failed for recipe %s: %r", recipe_id, e)
            raise

        logger.info("Recipe %s deleted (standard method)", recipe_id)
        return DeleteRecipeResponse(impact_summary=DeleteImpact())

    async def delete_recipe(self, recipe_id: str) -> None:
        await self.client.delete(f"/api/v1/recipes/{recipe_id}")

    async def favorite_recipe(self, recipe_id: str) -> None:
        await self.client.post(f"/api/v1/recipes/{recipe_id}/favorite")

    async def unfavorite_recipe(self, recipe_id: str) -> None:
        await self.client.delete(f"/api/v1/recipes/{recipe_id}/favorite")

    async def rate_recipe(self, recipe_id: str, rating: int) -> None:
        if not 1 <= rating <= 5:
            raise ValueError(f"Rating must be between 1 and 5, got {rating}")
        await self.client.post(f"/api/v1/recipes/{recipe_id}/rate", json={"rating": rating})

    async def mark_as_cooked(self, recipe_id: str) -> None:
        await self.client.post(f"/api/v1/recipes/saved/{recipe_id}/cooked")

    async def check_health(self) -> BackendHealth:
        try:
            body = await self.client.get("/health")
        except ApiError as e:
            logger.error("Backend health check failed: %r", e)
            return BackendHealth(status="error", ai_connected=False)

        status = body.get("status") if isinstance(body, dict) else None
        return BackendHealth(status=status or "healthy", ai_connected=True)
