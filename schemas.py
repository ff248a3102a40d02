from enum import Enum

from pydantic import BaseModel, ConfigDict


class BmiCategory(str, Enum):
    """WHO BMI categories for adults."""
    UNDERWEIGHT = "Underweight"
    NORMAL_WEIGHT = "Normal weight"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"


class BmiRequest(BaseModel):
    """Weight in kilograms and height in meters (SI units only)."""
    # Strict: JSON numbers only, no "70" strings or booleans
    model_config = ConfigDict(strict=True, frozen=True)

    weight_kg: float
    height_m: float


class BmiResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    bmi: float
    category: BmiCategory
