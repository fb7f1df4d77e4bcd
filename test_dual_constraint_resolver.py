#!/usr/bin/env python3
"""
Tests for worst-case (governing constraint) sizing
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from calculations import (
    DualConstraintResolver, resolve_worst_case, preset_constraints,
    DuctSizingError, GoverningConstraint, PressurePreset,
)


def test_low_pressure_preset_is_velocity_governed():
    result = DualConstraintResolver().resolve_preset(1000, PressurePreset.LOW)

    assert result.by_friction.nominal_size == 7
    assert result.by_velocity.raw_diameter == pytest.approx(15.14, abs=0.01)
    assert result.by_velocity.nominal_size == 16
    assert result.recommended.nominal_size == 16
    assert result.governed_by is GoverningConstraint.VELOCITY
    assert result.recommended is result.by_velocity


def test_medium_pressure_preset():
    result = DualConstraintResolver().resolve_preset(1000, 'medium')

    assert result.by_friction.target_value == 0.15
    assert result.by_velocity.target_value == 1500
    assert result.by_friction.nominal_size == 6
    assert result.recommended.nominal_size == 12
    assert result.governed_by is GoverningConstraint.VELOCITY


def test_friction_governed():
    """0.01 in.wg/100ft needs 10", 2500 FPM only 9"."""
    result = resolve_worst_case(1000, 0.01, 2500)

    assert result.by_friction.nominal_size == 10
    assert result.by_velocity.nominal_size == 9
    assert result.governed_by is GoverningConstraint.FRICTION
    assert result.recommended is result.by_friction


def test_equal_sizes_are_tagged_equal():
    result = resolve_worst_case(1000, 0.01, 2000)

    assert result.by_friction.nominal_size == result.by_velocity.nominal_size == 10
    assert result.governed_by is GoverningConstraint.EQUAL
    assert result.recommended.nominal_size == 10


def test_worst_case_dominance():
    resolver = DualConstraintResolver()
    for cfm in (150, 900, 3200, 12000, 60000):
        for friction_rate, velocity in ((0.05, 700), (0.08, 1500), (0.2, 2500), (0.4, 4000)):
            result = resolver.resolve(cfm, friction_rate, velocity, insulation=0.75)
            recommended = result.recommended.nominal_size
            assert recommended >= result.by_friction.nominal_size
            assert recommended >= result.by_velocity.nominal_size
            if result.governed_by is GoverningConstraint.FRICTION:
                assert recommended == result.by_friction.nominal_size
            elif result.governed_by is GoverningConstraint.VELOCITY:
                assert recommended == result.by_velocity.nominal_size
            else:
                assert result.by_friction.nominal_size == result.by_velocity.nominal_size == recommended
            # Both limits hold on the recommended duct
            assert result.recommended.friction_rate <= friction_rate
            assert result.recommended.velocity <= velocity


def test_custom_preset_needs_both_values():
    assert preset_constraints('custom', 0.1, 1200) == (0.1, 1200)
    with pytest.raises(DuctSizingError):
        preset_constraints(PressurePreset.CUSTOM, 0.1)
    with pytest.raises(DuctSizingError):
        preset_constraints('high')


def test_named_preset_ignores_explicit_values():
    assert preset_constraints('low', 0.3, 3000) == (0.08, 800.0)


def test_resolver_propagates_validation_errors():
    with pytest.raises(DuctSizingError):
        resolve_worst_case(1000, 0.08, 0)
    with pytest.raises(DuctSizingError):
        resolve_worst_case(-1, 0.08, 800)


def test_resolver_is_deterministic():
    assert resolve_worst_case(2200, 0.1, 1100, 1.0) == resolve_worst_case(2200, 0.1, 1100, 1.0)
