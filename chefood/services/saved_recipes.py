"""
Client-side cache of the user's saved recipes.

Deletes are optimistic: the recipe disappears from the local list at once,
and is put back only if the backend reports a real failure.
"""
import asyncio
import logging
from datetime import datetime, timezone
from typing import List, Optional

from chefood.client.errors import ApiError, is_bad_request, is_not_found
from chefood.client.recipes import RecipeAPI
from chefood.client.session import TokenSession
from chefood.models.recipe_models import MutationResult, Recipe, SavedRecipe

logger = logging.getLogger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _saved_at_key(recipe: SavedRecipe) -> datetime:
    saved_at = recipe.saved_at
    if saved_at is None:
        return _EPOCH
    if saved_at.tzinfo is None:
        return saved_at.replace(tzinfo=timezone.utc)
    return saved_at


class SavedRecipesStore:
    def __init__(self, recipe_api: RecipeAPI, session: TokenSession, page_size: int = 100) -> None:
        self.recipe_api = recipe_api
        self.session = session
        self.page_size = page_size
        self.recipes: List[SavedRecipe] = []
        self.loading = False
        self.error: Optional[str] = None

    async def refresh(self) -> None:
        """Replace the local list with the backend's."""
        if not self.session.is_authenticated():
            logger.info("User not authenticated, skipping recipe fetch")
            self.recipes = []
            return

        self.loading = True
        self.error = None
        try:
            page = await self.recipe_api.get_saved_recipes(limit=self.page_size)
        finally:
            self.loading = False

        if page.status == "error":
            self.error = "Failed to load recipes"
            self.recipes = []
            return

        logger.info("Fetched %d saved recipes", len(page.data))
        self.recipes = list(page.data)

    def find(self, recipe_id: str) -> Optional[SavedRecipe]:
        recipe_id = str(recipe_id)
        return next((r for r in self.recipes if r.id == recipe_id), None)

    # Titles are the only key an unsaved (generated) recipe has
    def is_recipe_saved(self, title: str) -> bool:
        return any(r.title == title for r in self.recipes)

    def get_saved_recipe(self, title: str) -> Optional[SavedRecipe]:
        return next((r for r in self.recipes if r.title == title), None)

    async def save_recipe(self, recipe: Recipe, personal_notes: Optional[str] = None) -> MutationResult:
        if self.is_recipe_saved(recipe.title):
            logger.info("Recipe already saved: %s", recipe.title)
            return MutationResult(success=False, error="Recipe already saved")

        try:
            saved = await self.recipe_api.save_recipe(recipe, personal_notes)
        except ApiError as e:
            logger.error("Failed to save recipe %r: %r", recipe.title, e)
            self.error = "Failed to save recipe"
            return MutationResult(success=False, error=self.error)

        logger.info("Recipe saved to backend: %s (id=%s)", saved.title, saved.id)
        await self.refresh()
        return MutationResult(success=True)

    async def remove_recipe(self, recipe_id: str) -> MutationResult:
        """
        Optimistically delete a saved recipe.

        404 and 400 from the backend keep the local removal; any other
        failure puts the recipe back (newest save first) unless an entry
        with the same id already reappeared, e.g. through a refresh.
        """
        recipe_id = str(recipe_id)
        removed = self.find(recipe_id)
        if removed is None:
            logger.warning("Recipe not found in local state: %s", recipe_id)
            return MutationResult(success=False, error=f"Recipe {recipe_id} not found")

        self.recipes = [r for r in self.recipes if r.id != recipe_id]

        try:
            await self.recipe_api.delete_saved_recipe(recipe_id)
        except ApiError as e:
            if is_not_found(e):
                logger.info("Recipe %s already gone on backend, keeping local removal", recipe_id)
                return MutationResult(success=True)
            if is_bad_request(e):
                logger.info("Backend rejected recipe id %s, keeping local removal", recipe_id)
                return MutationResult(success=True)

            logger.warning("Rolling back deletion of recipe %s: %r", recipe_id, e)
            if not any(r.id == recipe_id for r in self.recipes):
                self.recipes = sorted([*self.recipes, removed], key=_saved_at_key, reverse=True)

            self.error = f"Failed to remove recipe: {e.detail or 'Unknown error occurred'}"
            return MutationResult(success=False, error=self.error)

        logger.info("Recipe %s removed from backend", recipe_id)
        return MutationResult(success=True)

    async def clear_all(self) -> MutationResult:
        ids = [r.id for r in self.recipes if r.id is not None]
        try:
            await asyncio.gather(*(self.recipe_api.delete_recipe(i) for i in ids))
        except ApiError as e:
            logger.error("Failed to clear all recipes: %r", e)
            self.error = "Failed to clear recipes"
            return MutationResult(success=False, error=self.error)

        await self.refresh()
        return MutationResult(success=True)
