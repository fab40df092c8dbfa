# tests/test_saved_recipes.py
import httpx
import pytest

from chefood.client.recipes import RecipeAPI
from chefood.client.session import TokenSession
from chefood.client.storage import MemoryStorage
from chefood.models.recipe_models import Recipe, SavedRecipe
from chefood.services.saved_recipes import SavedRecipesStore

ENHANCED_DELETE = "/api/v1/meal-plans/recipes/{}/with-meal-plan-updates"
PLAIN_DELETE = "/api/v1/recipes/{}"


def _store(client, recipes=None) -> SavedRecipesStore:
    store = SavedRecipesStore(RecipeAPI(client), client.session)
    store.recipes = list(recipes or [])
    return store


def _ids(store: SavedRecipesStore):
    return [r.id for r in store.recipes]


def _failing(status_code: int, detail: str = "boom"):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json={"detail": detail})
    return handler


@pytest.mark.asyncio
async def test_remove_recipe_success_keeps_it_removed(make_client, saved_recipes):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "DELETE"
        assert request.url.path == ENHANCED_DELETE.format("1")
        return httpx.Response(200, json={"message": "Recipe deleted successfully"})

    client = make_client(handler)
    store = _store(client, saved_recipes)

    result = await store.remove_recipe("1")

    assert result.success is True
    assert result.error is None
    assert store.recipes == [saved_recipes[0]]
    assert len(client.sent) == 1


@pytest.mark.asyncio
async def test_remove_recipe_network_error_rolls_back_newest_first(make_client):
    """
    Recipes saved 2024-01-01 (id 1) and 2024-01-02 (id 2); deleting id 1
    while the backend is unreachable ends with [2, 1].
    """
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    recipes = [
        SavedRecipe.model_validate({"id": 1, "title": "A", "saved_at": "2024-01-01T00:00:00"}),
        SavedRecipe.model_validate({"id": 2, "title": "B", "saved_at": "2024-01-02T00:00:00"}),
    ]
    client = make_client(handler)
    store = _store(client, recipes)

    result = await store.remove_recipe(1)

    assert result.success is False
    assert result.error.startswith("Failed to remove recipe: Connection error")
    assert store.error == result.error
    assert _ids(store) == ["2", "1"]
    # reinserted exactly once, fields untouched
    assert store.find("1") == recipes[0]


@pytest.mark.asyncio
async def test_remove_recipe_rollback_restores_sort_order_for_newest(make_client, saved_recipes):
    client = make_client(_failing(500))
    store = _store(client, saved_recipes)

    await store.remove_recipe("2")

    assert _ids(store) == ["2", "1"]


@pytest.mark.asyncio
async def test_remove_recipe_server_error_reports_detail(make_client, saved_recipes):
    client = make_client(_failing(500, "database is down"))
    store = _store(client, saved_recipes)

    result = await store.remove_recipe("1")

    assert result.success is False
    assert result.error == "Failed to remove recipe: database is down"
    # enhanced endpoint first, then the plain delete
    assert [r.url.path for r in client.sent] == [
        ENHANCED_DELETE.format("1"),
        PLAIN_DELETE.format("1"),
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [404, 400])
async def test_remove_recipe_not_found_or_bad_request_counts_as_success(
    make_client, saved_recipes, status_code
):
    client = make_client(_failing(status_code))
    store = _store(client, saved_recipes)

    result = await store.remove_recipe("1")

    assert result.success is True
    assert _ids(store) == ["2"]
    assert store.error is None


@pytest.mark.asyncio
async def test_remove_recipe_unknown_id_fails_without_request(make_client, saved_recipes):
    client = make_client(_failing(500))
    store = _store(client, saved_recipes)

    result = await store.remove_recipe("999")

    assert result.success is False
    assert "999" in result.error
    assert _ids(store) == ["2", "1"]
    assert client.sent == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="Deleted"),
        httpx.Response(200, json={"message": None}),
        httpx.Response(200, json=["unexpected"]),
    ],
)
async def test_remove_recipe_tolerates_odd_success_body(make_client, saved_recipes, response):
    client = make_client(lambda request: response)
    store = _store(client, saved_recipes)

    result = await store.remove_recipe("1")

    assert result.success is True
    assert _ids(store) == ["2"]
    assert len(client.sent) == 1


@pytest.mark.asyncio
async def test_remove_recipe_accepts_numeric_id(make_client, saved_recipes):
    client = make_client(lambda request: httpx.Response(204))
    store = _store(client, saved_recipes)

    result = await store.remove_recipe(1)

    assert result.success is True
    assert _ids(store) == ["2"]


@pytest.mark.asyncio
async def test_rollback_does_not_duplicate_recipe_that_reappeared(make_client, saved_recipes):
    store = None
    reappeared = saved_recipes[1].model_copy()

    def handler(request: httpx.Request) -> httpx.Response:
        # a refresh landed while the delete was in flight
        if not any(r.id == "1" for r in store.recipes):
            store.recipes = [*store.recipes, reappeared]
        return httpx.Response(500, json={"detail": "boom"})

    client = make_client(handler)
    store = _store(client, saved_recipes)

    result = await store.remove_recipe("1")

    assert result.success is False
    assert _ids(store).count("1") == 1


@pytest.mark.asyncio
async def test_refresh_loads_saved_recipes(make_client):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/v1/recipes"
        assert request.url.params["skip"] == "0"
        assert request.url.params["limit"] == "100"
        return httpx.Response(200, json=[
            {"id": 5, "title": "Ramen", "created_at": "2024-03-01T12:00:00Z"},
            {"id": 6, "title": "Tacos", "prep_time_minutes": 15},
        ])

    store = _store(make_client(handler))
    await store.refresh()

    assert _ids(store) == ["5", "6"]
    assert store.recipes[0].saved_at is not None
    assert store.recipes[1].prep_time == 15
    assert store.loading is False
    assert store.error is None


@pytest.mark.asyncio
async def test_refresh_when_logged_out_clears_without_request(make_client, saved_recipes):
    client = make_client(_failing(500), session=TokenSession(MemoryStorage()))
    store = _store(client, saved_recipes)

    await store.refresh()

    assert store.recipes == []
    assert client.sent == []


@pytest.mark.asyncio
async def test_refresh_error_sets_error(make_client, saved_recipes):
    store = _store(make_client(_failing(500)), saved_recipes)

    await store.refresh()

    assert store.recipes == []
    assert store.error == "Failed to load recipes"


@pytest.mark.asyncio
async def test_refresh_with_malformed_record_sets_error(make_client, saved_recipes):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{"id": 5, "title": "Ramen"}, {"id": 6}])

    store = _store(make_client(handler), saved_recipes)

    await store.refresh()

    assert store.recipes == []
    assert store.error == "Failed to load recipes"


@pytest.mark.asyncio
async def test_save_recipe_posts_and_refreshes(make_client):
    saved = {"id": 7, "title": "Risotto", "created_at": "2024-02-01T10:00:00Z"}

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            return httpx.Response(201, json=saved)
        return httpx.Response(200, json={"data": [saved]})

    client = make_client(handler)
    store = _store(client)

    result = await store.save_recipe(Recipe(title="Risotto"))

    assert result.success is True
    assert _ids(store) == ["7"]
    assert store.is_recipe_saved("Risotto")
    assert store.get_saved_recipe("Risotto").id == "7"
    assert [r.method for r in client.sent] == ["POST", "GET"]


@pytest.mark.asyncio
async def test_save_recipe_rejects_duplicate_title(make_client, saved_recipes):
    client = make_client(_failing(500))
    store = _store(client, saved_recipes)

    result = await store.save_recipe(Recipe(title="Pancakes"))

    assert result.success is False
    assert result.error == "Recipe already saved"
    assert client.sent == []


@pytest.mark.asyncio
async def test_save_recipe_failure(make_client):
    store = _store(make_client(_failing(500)))

    result = await store.save_recipe(Recipe(title="Risotto"))

    assert result.success is False
    assert store.error == "Failed to save recipe"


@pytest.mark.asyncio
async def test_clear_all_deletes_every_recipe(make_client, saved_recipes):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "DELETE":
            return httpx.Response(204)
        return httpx.Response(200, json=[])

    client = make_client(handler)
    store = _store(client, saved_recipes)

    result = await store.clear_all()

    assert result.success is True
    assert store.recipes == []
    deleted = sorted(r.url.path for r in client.sent if r.method == "DELETE")
    assert deleted == [PLAIN_DELETE.format("1"), PLAIN_DELETE.format("2")]


def test_find_uses_string_ids(saved_recipes):
    store = SavedRecipesStore(recipe_api=None, session=None)
    store.recipes = saved_recipes

    assert store.find(2).title == "Shakshuka"
    assert store.find("3") is None
    assert isinstance(store.find("1"), SavedRecipe)
