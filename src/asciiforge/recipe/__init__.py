"""Recipe documents and the interpreter that executes them."""

from asciiforge.recipe.executor import ExecutionResult, RecipeExecutor, execute_recipe
from asciiforge.recipe.models import (
    Recipe,
    ShapeRecipe,
    parse_recipe,
    parse_shape_recipe,
)

__all__ = [
    "ExecutionResult",
    "Recipe",
    "RecipeExecutor",
    "ShapeRecipe",
    "execute_recipe",
    "parse_recipe",
    "parse_shape_recipe",
]
