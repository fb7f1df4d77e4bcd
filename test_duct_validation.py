#!/usr/bin/env python3
"""
Tests for duct sizing input validation and the debug logger
"""

import logging
import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from calculations import (
    DuctInputValidator, DuctSizingError, ValidationResult, CalculationResult, ResultStatus,
    debug_logger, solve_round_duct, search_rectangular_equivalents,
    DuctSizingCalculator, SizingRequest,
)
from calculations.hvac_constants import (
    get_velocity_limits, inwg_to_pa, pa_to_inwg, circular_area_from_diameter,
    rectangular_area_from_dimensions, is_standard_insulation,
)


@pytest.fixture
def validator():
    return DuctInputValidator()


def test_valid_inputs_have_no_messages(validator):
    result = validator.validate_inputs(1000, 1.0, friction_rate=0.08, velocity=1500)
    assert result.is_valid
    assert result.errors == []
    assert result.warnings == []


def test_errors_are_collected(validator):
    result = validator.validate_inputs(0, -1.0, friction_rate=0, velocity=float('nan'))

    assert not result.is_valid
    assert len(result.errors) == 4, f"Expected four errors, got {result.errors}"


def test_bool_is_not_a_number(validator):
    assert not validator.validate_cfm(True).is_valid
    assert not validator.validate_target_area('1.0').is_valid


def test_out_of_range_values_only_warn(validator):
    result = validator.validate_inputs(50, 0.75, friction_rate=0.8, velocity=6000)

    assert result.is_valid
    assert len(result.warnings) == 3


def test_non_standard_insulation_warns(validator):
    result = validator.validate_insulation(0.75)
    assert result.is_valid and not result.warnings

    result = validator.validate_insulation(0.6)
    assert result.is_valid
    assert 'not a standard liner' in result.warnings[0]


def test_non_standard_insulation_still_solves():
    result = solve_round_duct(1000, 'friction', 0.08, insulation=0.6)
    assert result.interior_diameter == pytest.approx(result.nominal_size - 1.2)


def test_require_valid_raises_with_all_errors(validator):
    result = validator.validate_inputs(-1, friction_rate=-1)
    with pytest.raises(DuctSizingError) as exc_info:
        validator.require_valid(result)
    assert exc_info.value.errors == result.errors
    assert isinstance(exc_info.value, ValueError)


def test_validation_result_merge():
    first = ValidationResult()
    first.add_warning("low airflow")
    second = ValidationResult()
    second.add_error("bad velocity")
    first.merge(second)

    assert not first.is_valid
    assert first.errors == ["bad velocity"]
    assert first.warnings == ["low airflow"]


def test_calculation_result_states():
    ok = CalculationResult.success(42, warnings=["w"])
    assert ok.is_success and ok.warnings == ["w"]

    failed = CalculationResult.validation_failed("bad")
    assert not failed.is_success
    assert failed.status is ResultStatus.VALIDATION_FAILED
    assert failed.error_message == "bad"


def test_unit_helpers():
    assert pa_to_inwg(inwg_to_pa(0.08)) == pytest.approx(0.08)
    assert inwg_to_pa(1.0) == pytest.approx(249.089)
    assert circular_area_from_diameter(24) == pytest.approx(3.14159, abs=1e-4)
    assert rectangular_area_from_dimensions(12, 6) == pytest.approx(0.5)
    assert is_standard_insulation(1.0) and not is_standard_insulation(0.6)


def test_velocity_limits_by_system_type():
    assert get_velocity_limits('supply')['max'] == 2500
    assert get_velocity_limits('Exhaust')['max'] == 3000
    assert get_velocity_limits('unknown') == get_velocity_limits('supply')


@pytest.fixture
def debug_enabled(monkeypatch):
    monkeypatch.setenv('DUCT_DEBUG_EXPORT', '1')
    monkeypatch.setenv('DUCT_DEBUG_LEVEL', 'DEBUG')
    monkeypatch.delenv('DUCT_DEBUG_FILE', raising=False)
    debug_logger.reload()
    yield debug_logger
    monkeypatch.delenv('DUCT_DEBUG_EXPORT')
    debug_logger.reload()


def test_debug_logger_records_calculations(debug_enabled, caplog):
    caplog.set_level(logging.DEBUG, logger='duct_debug')
    solve_round_duct(1000, 'friction', 0.08)

    records = [r for r in caplog.records if r.name == 'duct_debug']
    assert records, "Debug logging should emit records when enabled"
    assert any(r.component == 'RoundDuctSolver' for r in records)
    assert any('"nominal_size_in":7' in r.getMessage() for r in records)


def test_debug_logger_warns_on_empty_search(debug_enabled, caplog):
    caplog.set_level(logging.DEBUG, logger='duct_debug')
    search_rectangular_equivalents(0.01, 100)

    warnings = [r for r in caplog.records if r.name == 'duct_debug' and r.levelno == logging.WARNING]
    assert any('No rectangular candidate' in r.getMessage() for r in warnings)


def test_debug_logger_silent_by_default(monkeypatch, caplog):
    monkeypatch.delenv('DUCT_DEBUG_EXPORT', raising=False)
    debug_logger.reload()
    caplog.set_level(logging.DEBUG, logger='duct_debug')
    solve_round_duct(1000, 'friction', 0.08)

    assert not [r for r in caplog.records if r.name == 'duct_debug']


def test_debug_data_formatting():
    text = debug_logger._format_debug_data({'velocity_fpm': 3742.129, 'raw_diameter_in': 6.08612, 'count': 3})
    assert text == '{"velocity_fpm":3742.1,"raw_diameter_in":6.086,"count":3}'


def test_numpy_scalars_are_numbers(validator):
    result = validator.validate_inputs(np.int64(1000), np.float64(0.75),
                                       friction_rate=np.float32(0.08), velocity=np.int32(1500))
    assert result.is_valid, f"Unexpected errors: {result.errors}"
    assert result.warnings == []

    assert validator.validate_target_area(np.float32(0.267)).is_valid
    assert not validator.validate_cfm(np.float64('nan')).is_valid
    assert not validator.validate_cfm(np.bool_(True)).is_valid


def test_velocity_limit_validation(validator):
    assert validator.validate_velocity_limit(None).is_valid
    assert validator.validate_velocity_limit(1200).is_valid
    assert not validator.validate_velocity_limit(0).is_valid
    assert not validator.validate_velocity_limit(-100).is_valid


def test_debug_logger_records_rejected_sizing(debug_enabled, caplog):
    caplog.set_level(logging.DEBUG, logger='duct_debug')
    result = DuctSizingCalculator().calculate(SizingRequest(cfm=-1, friction_rate=0.08))

    assert not result.is_success
    errors = [r for r in caplog.records if r.name == 'duct_debug' and r.levelno == logging.ERROR]
    assert errors, "A rejected request should be logged at error level"
    assert errors[0].component == 'DuctSizingCalculator'
    assert 'Airflow must be a positive number' in errors[0].getMessage()
