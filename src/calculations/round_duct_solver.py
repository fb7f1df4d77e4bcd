"""
Round Duct Sizing Calculations
Based on the SMACNA equal-friction duct sizing relationships

This module implements:
1. Friction-driven raw diameter: D = 0.109 * CFM^0.5 * f^-0.225
2. Velocity-driven raw diameter: D = 24 * sqrt(CFM / (v * pi))
3. Selection of the smallest standard round size that fits the raw
   diameter plus the internal liner allowance
4. Performance of the selected duct (area, velocity, friction rate)
"""

import math
from typing import Sequence, Tuple, Union

from .hvac_constants import (
    STANDARD_ROUND_SIZES_IN, FRICTION_DIAMETER_COEFFICIENT,
    FRICTION_CFM_EXPONENT, FRICTION_RATE_EXPONENT, PI,
    circular_area_from_diameter,
)
from .duct_validation import DuctInputValidator, interior_dimension
from .result_types import DuctSizingError, RoundDuctResult, SizingMode
from .debug_logger import debug_logger


def friction_diameter(cfm: float, friction_rate: float) -> float:
    """Raw round diameter (in) that carries cfm at the given friction rate (in.wg/100ft)."""
    return (FRICTION_DIAMETER_COEFFICIENT
            * cfm ** FRICTION_CFM_EXPONENT
            * friction_rate ** FRICTION_RATE_EXPONENT)


def velocity_diameter(cfm: float, velocity: float) -> float:
    """Raw round diameter (in) that carries cfm at the given velocity (FPM)."""
    return 24.0 * math.sqrt(cfm / (velocity * PI))


def friction_rate_for_diameter(cfm: float, diameter_in: float) -> float:
    """
    Friction rate (in.wg/100ft) of a round duct of the given interior diameter.

    Inverse of friction_diameter(): f = (0.109 * CFM^0.5 / D)^(1/0.225)
    """
    return ((FRICTION_DIAMETER_COEFFICIENT * cfm ** FRICTION_CFM_EXPONENT / diameter_in)
            ** (1.0 / -FRICTION_RATE_EXPONENT))


def select_nominal_round_size(effective_diameter: float,
                              catalog: Sequence[float] = STANDARD_ROUND_SIZES_IN) -> Tuple[float, bool]:
    """
    Smallest catalog size >= effective_diameter.

    Returns (size, is_standard). Past the end of the catalog the size is the
    ceiling of the effective diameter and is_standard is False.
    """
    for size in catalog:
        if size >= effective_diameter:
            return float(size), True
    return float(math.ceil(effective_diameter)), False


class RoundDuctSolver:
    """
    Sizes a round duct for one airflow and one constraint.

    The solver is stateless; the catalog is read-only.
    """

    COMPONENT = 'RoundDuctSolver'

    def __init__(self, catalog: Sequence[float] = STANDARD_ROUND_SIZES_IN):
        self.catalog = tuple(sorted(catalog))
        self.validator = DuctInputValidator()

    def solve(self, cfm: float, mode: Union[SizingMode, str], target: float,
              insulation: float = 0.0) -> RoundDuctResult:
        """
        Size a round duct.

        Args:
            cfm: Airflow in CFM
            mode: SizingMode.FRICTION or SizingMode.VELOCITY
            target: Friction rate (in.wg/100ft) or velocity (FPM) for the mode
            insulation: Internal liner thickness in inches

        Returns:
            RoundDuctResult

        Raises:
            DuctSizingError: on non-positive airflow or target, negative
                insulation, or an unsupported mode
        """
        mode = self._coerce_mode(mode)
        if mode is SizingMode.FRICTION:
            validation = self.validator.validate_inputs(cfm, insulation, friction_rate=target)
        else:
            validation = self.validator.validate_inputs(cfm, insulation, velocity=target)
        self.validator.require_valid(validation)
        cfm, target, insulation = float(cfm), float(target), float(insulation)

        if mode is SizingMode.FRICTION:
            raw_diameter = friction_diameter(cfm, target)
        else:
            raw_diameter = velocity_diameter(cfm, target)

        effective_diameter = raw_diameter + 2.0 * insulation
        nominal_size, is_standard = select_nominal_round_size(effective_diameter, self.catalog)
        interior_diameter = interior_dimension(nominal_size, insulation)

        area = circular_area_from_diameter(interior_diameter)
        velocity = cfm / area
        friction_rate = friction_rate_for_diameter(cfm, interior_diameter)

        if not is_standard:
            debug_logger.warning(self.COMPONENT, "Diameter exceeds round catalog, using non-standard size", {
                'effective_diameter_in': effective_diameter,
                'largest_catalog_in': float(self.catalog[-1]),
                'nominal_size_in': nominal_size,
            })

        result = RoundDuctResult(
            cfm=float(cfm),
            mode=mode,
            target_value=float(target),
            insulation_thickness=float(insulation),
            raw_diameter=raw_diameter,
            effective_diameter=effective_diameter,
            nominal_size=nominal_size,
            interior_diameter=interior_diameter,
            area=area,
            velocity=velocity,
            friction_rate=friction_rate,
            is_standard_size=is_standard,
        )

        debug_logger.debug(self.COMPONENT, "Sized round duct", {
            'mode': mode,
            'airflow_cfm': float(cfm),
            'raw_diameter_in': raw_diameter,
            'nominal_size_in': nominal_size,
            'interior_diameter_in': interior_diameter,
            'velocity_fpm': velocity,
            'friction_rate_inwg': friction_rate,
        })
        return result

    def solve_by_friction(self, cfm: float, friction_rate: float, insulation: float = 0.0) -> RoundDuctResult:
        return self.solve(cfm, SizingMode.FRICTION, friction_rate, insulation)

    def solve_by_velocity(self, cfm: float, velocity: float, insulation: float = 0.0) -> RoundDuctResult:
        return self.solve(cfm, SizingMode.VELOCITY, velocity, insulation)

    @staticmethod
    def _coerce_mode(mode) -> SizingMode:
        try:
            mode = SizingMode(mode)
        except ValueError:
            raise DuctSizingError(f"Unknown sizing mode: {mode!r}")
        if mode is SizingMode.WORST_CASE:
            raise DuctSizingError("Worst-case sizing needs both constraints; use DualConstraintResolver")
        return mode


def solve_round_duct(cfm: float, mode: Union[SizingMode, str], target: float,
                     insulation: float = 0.0) -> RoundDuctResult:
    """Size a round duct with the standard catalog (see RoundDuctSolver.solve)."""
    return RoundDuctSolver().solve(cfm, mode, target, insulation)
