"""Nutrition models."""
from pydantic import BaseModel, Field, ConfigDict


class NutritionTotals(BaseModel):
    """Macro totals for a day next to the day's targets."""

    model_config = ConfigDict(populate_by_name=True)

    calories: float
    protein: float
    carbs: float
    fat: float
    calorie_goal: float = Field(serialization_alias="calorieGoal")
    protein_grams: float = Field(serialization_alias="proteinGoal")
    carbs_grams: float = Field(serialization_alias="carbsGoal")
    fat_grams: float = Field(serialization_alias="fatGoal")
    calories_percent: int = Field(serialization_alias="caloriesPercent")
    protein_percent: int = Field(serialization_alias="proteinPercent")
    carbs_percent: int = Field(serialization_alias="carbsPercent")
    fat_percent: int = Field(serialization_alias="fatPercent")
    calories_remaining: float = Field(serialization_alias="caloriesRemaining")
    adherence: int


class DailyNutrition(BaseModel):
    """One day of intake."""

    model_config = ConfigDict(populate_by_name=True)

    date: str
    calories: float
    protein: float
    carbs: float
    fat: float
    total_meals: int = Field(serialization_alias="totalMeals")
    completed_meals: int = Field(serialization_alias="completedMeals")
    adherence: int


class NutritionAverages(BaseModel):
    calories: float
    protein: float
    carbs: float
    fat: float
    adherence: float


class NutritionHistory(BaseModel):
    """Daily intake over a window with its averages."""

    days: list[DailyNutrition]
    averages: NutritionAverages
