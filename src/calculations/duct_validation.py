"""
Duct Sizing Validation - Input checks shared by the solver, resolver and search
"""

import math
import numbers
from typing import Optional

from .hvac_constants import (
    INSULATION_OPTIONS_IN, MIN_PRACTICAL_CFM, MAX_PRACTICAL_CFM,
    MIN_PRACTICAL_FRICTION_INWG, MAX_PRACTICAL_FRICTION_INWG,
    MIN_PRACTICAL_VELOCITY_FPM, MAX_PRACTICAL_VELOCITY_FPM,
    is_practical_cfm, is_practical_friction_rate, is_practical_velocity,
    is_standard_insulation,
)
from .result_types import DuctSizingError, ValidationResult
from .debug_logger import debug_logger


def _as_finite_real(value) -> Optional[float]:
    """float(value) for finite real numbers (numpy scalars included), None otherwise"""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return None
    value = float(value)
    return value if math.isfinite(value) else None


def _is_positive_number(value) -> bool:
    number = _as_finite_real(value)
    return number is not None and number > 0


def interior_dimension(nominal_in: float, insulation_in: float) -> float:
    """
    Interior dimension left after lining both sides of a nominal dimension.

    Raises DuctSizingError when the liner consumes the whole dimension.
    """
    interior = nominal_in - 2.0 * insulation_in
    if interior <= 0:
        raise DuctSizingError(
            f'Insulation {insulation_in}" leaves no interior on a {nominal_in}" duct '
            f'(interior {interior:g}")'
        )
    return interior


class DuctInputValidator:
    """Validation for duct sizing inputs"""

    COMPONENT = 'DuctInputValidator'

    def validate_cfm(self, cfm) -> ValidationResult:
        result = ValidationResult()
        if not _is_positive_number(cfm):
            result.add_error(f"Airflow must be a positive number of CFM (got {cfm!r})")
        elif not is_practical_cfm(cfm):
            result.add_warning(
                f"Airflow {float(cfm):g} CFM is outside the practical range "
                f"{MIN_PRACTICAL_CFM:g}-{MAX_PRACTICAL_CFM:g} CFM"
            )
        return result

    def validate_friction_rate(self, friction_rate) -> ValidationResult:
        result = ValidationResult()
        if not _is_positive_number(friction_rate):
            result.add_error(f"Friction rate must be a positive in.wg/100ft value (got {friction_rate!r})")
        elif not is_practical_friction_rate(friction_rate):
            result.add_warning(
                f"Friction rate {float(friction_rate):g} in.wg/100ft is outside the practical range "
                f"{MIN_PRACTICAL_FRICTION_INWG:g}-{MAX_PRACTICAL_FRICTION_INWG:g}"
            )
        return result

    def validate_velocity(self, velocity) -> ValidationResult:
        result = ValidationResult()
        if not _is_positive_number(velocity):
            result.add_error(f"Velocity must be a positive FPM value (got {velocity!r})")
        elif not is_practical_velocity(velocity):
            result.add_warning(
                f"Velocity {float(velocity):g} FPM is outside the practical range "
                f"{MIN_PRACTICAL_VELOCITY_FPM:g}-{MAX_PRACTICAL_VELOCITY_FPM:g} FPM"
            )
        return result

    def validate_insulation(self, insulation) -> ValidationResult:
        result = ValidationResult()
        thickness = _as_finite_real(insulation)
        if thickness is None or thickness < 0:
            result.add_error(f"Insulation thickness must be zero or a positive number of inches (got {insulation!r})")
        elif not is_standard_insulation(thickness):
            options = ', '.join(f'{t:g}"' for t in INSULATION_OPTIONS_IN)
            result.add_warning(f'Insulation {thickness:g}" is not a standard liner ({options})')
        return result

    def validate_target_area(self, target_area) -> ValidationResult:
        result = ValidationResult()
        if not _is_positive_number(target_area):
            result.add_error(f"Target area must be a positive number of square feet (got {target_area!r})")
        return result

    def validate_velocity_limit(self, velocity_limit) -> ValidationResult:
        """An explicit velocity limit is optional, but must be positive when given"""
        result = ValidationResult()
        if velocity_limit is not None and not _is_positive_number(velocity_limit):
            result.add_error(f"Velocity limit must be a positive FPM value (got {velocity_limit!r})")
        return result

    def validate_target_diameter(self, target_diameter) -> ValidationResult:
        result = ValidationResult()
        if not _is_positive_number(target_diameter):
            result.add_error(f"Target diameter must be a positive number of inches (got {target_diameter!r})")
        return result

    def validate_inputs(self, cfm, insulation=0.0, friction_rate: Optional[float] = None,
                        velocity: Optional[float] = None) -> ValidationResult:
        """Validate a full set of sizing inputs; constraints left as None are skipped"""
        result = self.validate_cfm(cfm)
        result.merge(self.validate_insulation(insulation))
        if friction_rate is not None:
            result.merge(self.validate_friction_rate(friction_rate))
        if velocity is not None:
            result.merge(self.validate_velocity(velocity))

        debug_logger.log_validation_result(self.COMPONENT, result.is_valid, result.errors, result.warnings)
        return result

    @staticmethod
    def require_valid(result: ValidationResult) -> ValidationResult:
        """Raise DuctSizingError carrying every error if the result is invalid"""
        if not result.is_valid:
            raise DuctSizingError('; '.join(result.errors), errors=list(result.errors))
        return result
