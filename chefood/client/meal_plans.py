from chefood.client.http import ApiClient
from chefood.models.meal_plan_models import MealPlan, MealPlanListResponse


class MealPlanAPI:
    def __init__(self, client: ApiClient) -> None:
        self.client = client

    async def get_meal_plans(self) -> MealPlanListResponse:
        body = await self.client.get("/api/v1/meal-plans/")
        return MealPlanListResponse.model_validate(body or {})

    async def get_meal_plan(self, plan_id: str) -> MealPlan:
        # temp- ids belong to plans still being generated and do not exist yet
        if plan_id.startswith("temp-"):
            raise ValueError(
                "Cannot fetch temporary meal plan. Please wait for meal plan generation to complete."
            )
        body = await self.client.get(f"/api/v1/meal-plans/{plan_id}")
        return MealPlan.model_validate(body)

    async def delete_meal_plan(self, plan_id: str) -> dict:
        return await self.client.delete(f"/api/v1/meal-plans/{plan_id}") or {}

    async def restore_meal_plan(self, plan_id: str) -> dict:
        return await self.client.post(f"/api/v1/meal-plans/{plan_id}/restore") or {}
