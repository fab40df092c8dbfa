from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from chefood.models.recipe_models import RecipeRequest

_prompts_env = Environment(
    loader=FileSystemLoader(str(Path(__file__).resolve().parents[1] / "prompts")),
    autoescape=False,
)


def build_recipe_prompt(req: RecipeRequest) -> str:
    """
    Turn a structured RecipeRequest into the one-line natural language prompt
    the AI endpoint expects, e.g.
    "Pasta night for dinner in Italian style for 4 people".

    The template emits one clause per line; empty clauses are dropped and the
    rest joined with single spaces.
    """
    template = _prompts_env.get_template("recipe_prompt.jinja")
    rendered = template.render(**req.model_dump())
    return " ".join(line.strip() for line in rendered.splitlines() if line.strip())
