"""
BMI Calculator API Endpoint

Free calculator - no authentication required.
Weight in kilograms, height in meters.
"""
from fastapi import APIRouter

from schemas import BmiRequest, BmiResponse
from services.bmi_calculator import handle_bmi_request

router = APIRouter(prefix="/api", tags=["BMI"])


@router.post("/calculate", response_model=BmiResponse)
def calculate(request: BmiRequest):
    """
    Calculate BMI and its WHO category.
    
    Returns 400 with a plain-text message if weight or height is
    not a positive finite number, or if the body is malformed.
    """
    return handle_bmi_request(request)
