from datetime import datetime
from typing import Dict, List, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class IngredientItem(BaseModel):
    """Structured ingredient as returned by the backend or the AI service."""
    model_config = ConfigDict(extra="allow")

    name: str = Field(default="", description="Canonical ingredient name, e.g. 'chicken breast'.")
    item: Optional[str] = Field(default=None, description="AI-generated recipes use 'item' instead of 'name'.")
    amount: Union[str, float, None] = None
    quantity: Optional[float] = None
    unit: Optional[str] = None
    preparation_notes: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or self.item or ""


class InstructionStep(BaseModel):
    step_number: int
    instruction: str
    time_minutes: Optional[int] = None


class Nutrition(BaseModel):
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    fiber: Optional[float] = None
    sugar: Optional[float] = None
    sodium: Optional[float] = None
    cholesterol: Optional[float] = None


class Recipe(BaseModel):
    """
    Recipe as the client sees it.

    The backend is inconsistent about field names (prep_time vs
    prep_time_minutes, difficulty vs difficulty_level) and id types; both
    spellings are accepted and ids are always kept as strings.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    title: str
    description: str = ""
    ingredients: List[Union[str, IngredientItem]] = Field(default_factory=list)
    instructions: List[Union[str, InstructionStep]] = Field(default_factory=list)
    prep_time: int = Field(
        default=0,
        validation_alias=AliasChoices("prep_time", "prep_time_minutes"),
        description="Minutes.",
    )
    cook_time: int = Field(
        default=0,
        validation_alias=AliasChoices("cook_time", "cook_time_minutes"),
        description="Minutes.",
    )
    servings: int = 1
    difficulty: str = Field(
        default="",
        validation_alias=AliasChoices("difficulty", "difficulty_level"),
    )
    cuisine_type: str = ""
    meal_type: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    nutrition: Optional[Nutrition] = None
    ai_generated: bool = False
    fallback_used: bool = False
    image_url: Optional[str] = None
    ingredient_images: Dict[str, str] = Field(default_factory=dict)
    chef_tips: Union[List[str], str, None] = None
    created_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        if v is None:
            return None
        return str(v)

    @field_validator("instructions", mode="before")
    @classmethod
    def split_instruction_text(cls, v):
        # Some endpoints return the instructions as a single block of text
        if isinstance(v, str):
            return [line.strip() for line in v.splitlines() if line.strip()]
        return v

    @field_validator("prep_time", "cook_time", "servings", mode="before")
    @classmethod
    def none_to_zero(cls, v):
        return 0 if v is None else v

    @field_validator("ingredient_images", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return {} if v is None else v


class SavedRecipe(Recipe):
    """A recipe persisted to the user's personal collection."""
    saved_at: Optional[datetime] = None
    personal_notes: Optional[str] = None
    modifications: List[str] = Field(default_factory=list)
    times_cooked: int = 0
    last_cooked: Optional[datetime] = None


class CompleteRecipe(Recipe):
    """Full recipe detail, including the AI extras shown on the recipe page."""
    total_time_minutes: Optional[int] = None
    calories_per_serving: Optional[float] = None
    wine_pairing: Optional[str] = None
    nutrition_highlights: Optional[str] = None
    nutrition_info: Optional[dict] = None


class UserPreferences(BaseModel):
    spice_level: Optional[Literal["mild", "medium", "hot"]] = None
    cooking_method: List[str] = Field(default_factory=list)
    allergens_to_avoid: List[str] = Field(default_factory=list)


class RecipeRequest(BaseModel):
    """Structured request that is turned into a natural language prompt."""
    ingredients: List[str] = Field(default_factory=list)
    dietary_restrictions: List[str] = Field(default_factory=list)
    cuisine_type: Optional[str] = None
    cooking_time: Optional[int] = Field(default=None, description="Minutes.")
    servings: Optional[int] = None
    difficulty: Optional[Literal["easy", "medium", "hard"]] = None
    meal_type: Optional[Literal["breakfast", "lunch", "dinner", "snack", "dessert"]] = None
    description: Optional[str] = None
    user_preferences: Optional[UserPreferences] = None
    include_images: bool = False
    generate_ingredient_images: bool = False


class GenerateRecipeResponse(BaseModel):
    success: bool
    recipe: Optional[Recipe] = None
    error: Optional[str] = None
    ai_generated: bool = False
    fallback_used: bool = False


class DeleteImpact(BaseModel):
    affected_meal_plans: List[Union[str, int]] = Field(default_factory=list)
    removed_meals_count: int = 0
    meal_plans_updated: int = 0


class DeleteRecipeResponse(BaseModel):
    message: str = "Recipe deleted successfully"
    impact_summary: Optional[DeleteImpact] = None


class PageMeta(BaseModel):
    total: int = 0
    page: int = 1
    limit: int = 10
    has_next: bool = False
    has_prev: bool = False


class RecipePage(BaseModel):
    data: List[SavedRecipe]
    status: Literal["success", "error"]
    meta: PageMeta


class MutationResult(BaseModel):
    """Outcome of a store mutation; the caller decides how to notify the user."""
    success: bool
    error: Optional[str] = None


class BackendHealth(BaseModel):
    status: str
    ai_connected: bool
