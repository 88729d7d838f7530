"""Common data schemas shared by the offer, shopping and tracking modules."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class UserContext(BaseModel):
    """Acting user for a single operation.

    Passed explicitly into every service call; there is no process-wide session.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    household_id: str | None = None

    @property
    def household_key(self) -> str:
        """Household the user acts for; a user without one is its own household."""
        return self.household_id or self.user_id


class RecipeIngredient(BaseModel):
    """Ingredient line as produced by the meal-plan generator."""

    name: str
    amount: str = ""
    unit: str | None = None


class MealRecipe(BaseModel):
    """Recipe within a generated meal plan."""

    id: str
    title: str
    meal_type: Literal["breakfast", "lunch", "dinner"] | None = None
    ingredients: list[RecipeIngredient] = Field(default_factory=list)
    calories: float | None = None


class MacroTargets(BaseModel):
    """Daily macro targets returned alongside a plan."""

    calories: float
    protein: float
    carbs: float
    fat: float


class MealPlanResult(BaseModel):
    """Output of the external meal-plan generator.

    mealcart only reads the recipes' ingredient lists from it.
    """

    recipes: list[MealRecipe] = Field(default_factory=list)
    recipes_needed: int = 0
    macro_targets: MacroTargets | None = None
    duration_days: int = 7


class InventoryItem(BaseModel):
    """Household stock used to reduce what goes on a shopping list."""

    ingredient_name: str
    quantity: float = 0.0
    unit: str = ""
    is_depleted: bool = False
