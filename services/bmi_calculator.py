"""
BMI Calculation Service

BMI = weight_kg / (height_m)²

Categories follow the WHO adult ranges:
- Underweight: BMI < 18.5
- Normal weight: 18.5 <= BMI < 25
- Overweight: 25 <= BMI < 30
- Obese: BMI >= 30

Everything here is pure apart from logging, so it is safe to call from
any number of request threads at once.
"""
import logging
import math
from typing import Optional

from core.exceptions import BmiValidationError, INVALID_MEASUREMENTS, BMI_OUT_OF_RANGE
from schemas import BmiCategory, BmiRequest, BmiResponse

logger = logging.getLogger(__name__)

UNDERWEIGHT_BELOW = 18.5
OVERWEIGHT_FROM = 25.0
OBESE_FROM = 30.0


def validate_measurements(weight_kg: float, height_m: float) -> Optional[str]:
    """
    Check weight and height before calculating.
    
    Returns:
        None when both values are positive finite numbers,
        otherwise the reason the request is rejected.
        There is no upper bound.
    """
    for value in (weight_kg, height_m):
        if not math.isfinite(value) or value <= 0:
            return INVALID_MEASUREMENTS
    return None


def calculate_bmi(weight_kg: float, height_m: float) -> float:
    """
    Calculate BMI from weight (kg) and height (m).
    
    No rounding and no input checks; callers must run
    validate_measurements() first. A zero height raises
    ZeroDivisionError, non-finite inputs give inf/nan.
    
    Examples:
        >>> calculate_bmi(70.0, 1.75)
        22.857142857142858
    """
    return weight_kg / (height_m * height_m)


def categorize_bmi(bmi: float) -> BmiCategory:
    """
    Map a BMI value to its WHO category.
    
    Lower bounds are inclusive: 18.5 is Normal weight, 25.0 is
    Overweight, 30.0 is Obese.
    
    Raises:
        ValueError: if bmi is NaN
    """
    if math.isnan(bmi):
        raise ValueError("Cannot categorize a NaN BMI")
    if bmi < UNDERWEIGHT_BELOW:
        return BmiCategory.UNDERWEIGHT
    if bmi < OVERWEIGHT_FROM:
        return BmiCategory.NORMAL_WEIGHT
    if bmi < OBESE_FROM:
        return BmiCategory.OVERWEIGHT
    return BmiCategory.OBESE


def _reject(request: BmiRequest, reason: str) -> BmiValidationError:
    logger.warning(
        f"Invalid input: {reason}",
        extra={
            "extra_fields": {
                "event": "bmi.validation.failed",
                "weight_kg": request.weight_kg,
                "height_m": request.height_m,
                "reason": reason,
            }
        }
    )
    return BmiValidationError(reason)


def handle_bmi_request(request: BmiRequest) -> BmiResponse:
    """
    Validate, calculate and categorize one BMI request.
    
    Raises:
        BmiValidationError: if the inputs are rejected, or the result
            overflows to a non-finite BMI
    """
    logger.debug(
        f"BMI calculation requested: weight={request.weight_kg}kg, height={request.height_m}m",
        extra={
            "extra_fields": {
                "event": "bmi.calculation.started",
                "weight_kg": request.weight_kg,
                "height_m": request.height_m,
            }
        }
    )
    
    reason = validate_measurements(request.weight_kg, request.height_m)
    if reason is not None:
        raise _reject(request, reason)
    
    try:
        bmi = calculate_bmi(request.weight_kg, request.height_m)
    except ZeroDivisionError:
        # height_m squared underflowed to 0.0
        raise _reject(request, BMI_OUT_OF_RANGE)
    # e.g. 1e308 kg at 1e-10 m
    if not math.isfinite(bmi):
        raise _reject(request, BMI_OUT_OF_RANGE)
    
    category = categorize_bmi(bmi)
    
    logger.info(
        f"BMI calculated: {bmi}, category: {category.value}",
        extra={
            "extra_fields": {
                "event": "bmi.calculation.success",
                "weight_kg": request.weight_kg,
                "height_m": request.height_m,
                "bmi": bmi,
                "category": category.value,
            }
        }
    )
    
    return BmiResponse(bmi=bmi, category=category)
