"""
Worst-case (governing constraint) round duct sizing

Sizes the duct once by friction rate and once by velocity, then keeps the
larger nominal size so both limits hold at the same time.
"""

from typing import Optional, Tuple, Union

from .hvac_constants import PRESSURE_PRESETS
from .round_duct_solver import RoundDuctSolver
from .result_types import (
    DuctSizingError, GoverningConstraint, PressurePreset, WorstCaseResult,
)
from .debug_logger import debug_logger


def preset_constraints(preset: Union[PressurePreset, str],
                       friction_rate: Optional[float] = None,
                       velocity: Optional[float] = None) -> Tuple[float, float]:
    """
    Resolve a preset id to a (friction_rate, velocity) pair.

    Named presets ignore the explicit values; CUSTOM requires both.
    """
    try:
        preset = PressurePreset(preset)
    except ValueError:
        raise DuctSizingError(f"Unknown pressure preset: {preset!r}")

    if preset is PressurePreset.CUSTOM:
        if friction_rate is None or velocity is None:
            raise DuctSizingError("Custom preset requires both a friction rate and a velocity")
        return friction_rate, velocity
    return PRESSURE_PRESETS[preset.value]


class DualConstraintResolver:
    """Selects the governing round size from friction and velocity sizing"""

    COMPONENT = 'DualConstraintResolver'

    def __init__(self, solver: RoundDuctSolver = None):
        self.solver = solver or RoundDuctSolver()

    def resolve(self, cfm: float, friction_rate: float, velocity: float,
                insulation: float = 0.0) -> WorstCaseResult:
        """
        Size by both constraints and return the governing result.

        Args:
            cfm: Airflow in CFM
            friction_rate: Maximum friction rate in in.wg/100ft
            velocity: Maximum velocity in FPM
            insulation: Internal liner thickness in inches

        Returns:
            WorstCaseResult whose recommended size is the larger of the two
        """
        debug_logger.log_calculation_start(self.COMPONENT, 'worst_case', {
            'airflow_cfm': cfm, 'friction_rate_inwg': friction_rate, 'velocity_fpm': velocity,
        })

        by_friction = self.solver.solve_by_friction(cfm, friction_rate, insulation)
        by_velocity = self.solver.solve_by_velocity(cfm, velocity, insulation)

        if by_friction.nominal_size > by_velocity.nominal_size:
            governed_by = GoverningConstraint.FRICTION
            recommended = by_friction
        elif by_velocity.nominal_size > by_friction.nominal_size:
            governed_by = GoverningConstraint.VELOCITY
            recommended = by_velocity
        else:
            governed_by = GoverningConstraint.EQUAL
            recommended = by_friction

        debug_logger.log_calculation_end(self.COMPONENT, 'worst_case', True, {
            'friction_size_in': by_friction.nominal_size,
            'velocity_size_in': by_velocity.nominal_size,
            'governed_by': governed_by,
        })

        return WorstCaseResult(
            recommended=recommended,
            by_friction=by_friction,
            by_velocity=by_velocity,
            governed_by=governed_by,
        )

    def resolve_preset(self, cfm: float, preset: Union[PressurePreset, str] = PressurePreset.LOW,
                       insulation: float = 0.0, friction_rate: Optional[float] = None,
                       velocity: Optional[float] = None) -> WorstCaseResult:
        """Resolve with a named pressure preset, or CUSTOM with explicit values"""
        friction_rate, velocity = preset_constraints(preset, friction_rate, velocity)
        return self.resolve(cfm, friction_rate, velocity, insulation)


def resolve_worst_case(cfm: float, friction_rate: float, velocity: float,
                       insulation: float = 0.0) -> WorstCaseResult:
    """Worst-case sizing with the standard round catalog."""
    return DualConstraintResolver().resolve(cfm, friction_rate, velocity, insulation)
