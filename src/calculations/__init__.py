"""
Duct sizing calculation engines: round duct solver, worst-case resolver and
rectangular equivalent search
"""

from .result_types import (
    DuctSizingError, SizingMode, GoverningConstraint, PressurePreset, SelectionPolicy,
    ResultStatus, RoundDuctResult, WorstCaseResult, RectDuctCandidate,
    RectangularSearchResult, CalculationResult, ValidationResult,
)
from .duct_validation import DuctInputValidator, interior_dimension
from .round_duct_solver import (
    RoundDuctSolver, solve_round_duct, friction_diameter, velocity_diameter,
    friction_rate_for_diameter, select_nominal_round_size,
)
from .dual_constraint_resolver import DualConstraintResolver, resolve_worst_case, preset_constraints
from .rectangular_equivalent_search import (
    RectangularEquivalentSearch, search_rectangular_equivalents, equivalent_diameter,
    candidates_to_dataframe,
)
from .duct_sizing_calculator import DuctSizingCalculator, SizingRequest, DuctSizingReport, size_duct
from .debug_logger import debug_logger

__all__ = [
    # Core calculators
    'RoundDuctSolver',
    'DualConstraintResolver',
    'RectangularEquivalentSearch',
    'DuctSizingCalculator',
    'solve_round_duct',
    'resolve_worst_case',
    'search_rectangular_equivalents',
    'size_duct',
    # Formulas
    'friction_diameter',
    'velocity_diameter',
    'friction_rate_for_diameter',
    'select_nominal_round_size',
    'equivalent_diameter',
    'interior_dimension',
    'preset_constraints',
    'candidates_to_dataframe',
    # Types
    'SizingRequest',
    'DuctSizingReport',
    'DuctSizingError',
    'SizingMode',
    'GoverningConstraint',
    'PressurePreset',
    'SelectionPolicy',
    'ResultStatus',
    'RoundDuctResult',
    'WorstCaseResult',
    'RectDuctCandidate',
    'RectangularSearchResult',
    'CalculationResult',
    'ValidationResult',
    'DuctInputValidator',
    'debug_logger',
]
