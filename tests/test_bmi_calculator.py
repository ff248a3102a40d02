"""
Tests for BMI Calculation Service

Covers the formula, WHO category boundaries, input validation and the
request handler's outcomes and log events.
"""
import logging
import math

import pytest

from core.exceptions import BmiValidationError, INVALID_MEASUREMENTS, BMI_OUT_OF_RANGE
from schemas import BmiCategory, BmiRequest
from services.bmi_calculator import (
    calculate_bmi,
    categorize_bmi,
    handle_bmi_request,
    validate_measurements,
)


class TestBMICalculation:
    """Test BMI calculation from weight and height"""
    
    def test_standard_bmi_calculation(self):
        """70kg, 1.75m - exact double, no rounding"""
        assert calculate_bmi(70.0, 1.75) == 22.857142857142858
    
    @pytest.mark.parametrize("weight, height", [
        (60.0, 1.60),
        (95.5, 1.82),
        (0.1, 2.5),
        (300.0, 0.5),
    ])
    def test_matches_formula(self, weight, height):
        assert calculate_bmi(weight, height) == weight / (height * height)
    
    def test_taller_means_lower_bmi(self):
        assert calculate_bmi(70.0, 1.90) < calculate_bmi(70.0, 1.60)
    
    def test_zero_height_is_not_guarded(self):
        """Validation happens upstream; the formula itself doesn't check"""
        with pytest.raises(ZeroDivisionError):
            calculate_bmi(70.0, 0.0)
    
    def test_non_finite_input_propagates(self):
        assert math.isinf(calculate_bmi(math.inf, 1.75))
        assert math.isnan(calculate_bmi(math.nan, 1.75))


class TestBMICategories:
    """Test WHO category ranges"""
    
    @pytest.mark.parametrize("bmi, expected", [
        (10.0, BmiCategory.UNDERWEIGHT),
        (18.4999, BmiCategory.UNDERWEIGHT),
        (18.5, BmiCategory.NORMAL_WEIGHT),
        (22.0, BmiCategory.NORMAL_WEIGHT),
        (24.999, BmiCategory.NORMAL_WEIGHT),
        (25.0, BmiCategory.OVERWEIGHT),
        (27.0, BmiCategory.OVERWEIGHT),
        (29.999, BmiCategory.OVERWEIGHT),
        (30.0, BmiCategory.OBESE),
        (45.0, BmiCategory.OBESE),
    ])
    def test_ranges(self, bmi, expected):
        assert categorize_bmi(bmi) == expected
    
    def test_category_labels(self):
        assert categorize_bmi(17.0) == "Underweight"
        assert categorize_bmi(22.0) == "Normal weight"
        assert categorize_bmi(27.0) == "Overweight"
        assert categorize_bmi(32.0) == "Obese"
    
    def test_total_over_real_line(self):
        assert categorize_bmi(-5.0) == BmiCategory.UNDERWEIGHT
        assert categorize_bmi(-math.inf) == BmiCategory.UNDERWEIGHT
        assert categorize_bmi(math.inf) == BmiCategory.OBESE
    
    def test_nan_rejected(self):
        with pytest.raises(ValueError):
            categorize_bmi(math.nan)


class TestBMIValidation:
    """Test the guard that runs before calculation"""
    
    @pytest.mark.parametrize("weight, height", [
        (0.0, 1.75),
        (-5.0, 1.75),
        (70.0, 0.0),
        (70.0, -1.75),
        (math.nan, 1.75),
        (70.0, math.nan),
        (math.inf, 1.75),
        (70.0, -math.inf),
    ])
    def test_rejects(self, weight, height):
        assert validate_measurements(weight, height) == INVALID_MEASUREMENTS
    
    def test_accepts_typical_values(self):
        assert validate_measurements(70.0, 1.75) is None
    
    def test_no_upper_bound(self):
        assert validate_measurements(1e300, 1e-300) is None
        assert validate_measurements(5e-324, 1e300) is None


class TestBMIRequestHandler:
    """Test validate -> calculate -> categorize orchestration"""
    
    def test_success(self):
        result = handle_bmi_request(BmiRequest(weight_kg=70.0, height_m=1.75))
        assert result.bmi == 22.857142857142858
        assert result.category == BmiCategory.NORMAL_WEIGHT
    
    def test_invalid_raises_with_message(self):
        with pytest.raises(BmiValidationError) as exc_info:
            handle_bmi_request(BmiRequest(weight_kg=-1.0, height_m=1.75))
        assert exc_info.value.detail == INVALID_MEASUREMENTS
        assert exc_info.value.status_code == 400
    
    def test_overflowing_bmi_rejected(self):
        with pytest.raises(BmiValidationError) as exc_info:
            handle_bmi_request(BmiRequest(weight_kg=1e308, height_m=1e-10))
        assert exc_info.value.detail == BMI_OUT_OF_RANGE
    
    def test_underflowing_height_rejected(self):
        """height² rounds to 0.0 even though height itself is positive"""
        with pytest.raises(BmiValidationError) as exc_info:
            handle_bmi_request(BmiRequest(weight_kg=70.0, height_m=1e-200))
        assert exc_info.value.detail == BMI_OUT_OF_RANGE
    
    def test_idempotent(self):
        request = BmiRequest(weight_kg=82.3, height_m=1.81)
        assert handle_bmi_request(request) == handle_bmi_request(request)
    
    def test_success_event_logged(self, caplog):
        caplog.set_level(logging.INFO, logger="services.bmi_calculator")
        handle_bmi_request(BmiRequest(weight_kg=70.0, height_m=1.75))
        
        events = [r.extra_fields for r in caplog.records if hasattr(r, "extra_fields")]
        success = [e for e in events if e["event"] == "bmi.calculation.success"]
        assert len(success) == 1
        assert success[0]["bmi"] == 22.857142857142858
        assert success[0]["category"] == "Normal weight"
        assert success[0]["weight_kg"] == 70.0
        assert success[0]["height_m"] == 1.75
    
    def test_failure_event_logged_as_warning(self, caplog):
        caplog.set_level(logging.INFO, logger="services.bmi_calculator")
        with pytest.raises(BmiValidationError):
            handle_bmi_request(BmiRequest(weight_kg=0.0, height_m=1.75))
        
        failed = [r for r in caplog.records if getattr(r, "extra_fields", {}).get("event") == "bmi.validation.failed"]
        assert len(failed) == 1
        assert failed[0].levelno == logging.WARNING
        assert failed[0].extra_fields["reason"] == INVALID_MEASUREMENTS
        assert not any(
            getattr(r, "extra_fields", {}).get("event") == "bmi.calculation.success"
            for r in caplog.records
        )
