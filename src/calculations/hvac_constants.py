"""
Duct Sizing Constants - Centralized definition of all magic numbers
Standard size catalogs, SMACNA coefficients and sizing limits used across
the duct sizing calculation system
"""

import math
from typing import Dict, Tuple

# =============================================================================
# STANDARD SIZE CATALOGS
# =============================================================================

# Standard round duct nominal diameters (inches)
STANDARD_ROUND_SIZES_IN: Tuple[int, ...] = (
    4, 5, 6, 7, 8, 9, 10, 12, 14, 16, 18, 20, 22, 24,
    26, 28, 30, 32, 34, 36, 38, 40, 42, 44, 46, 48,
)

# Standard rectangular duct nominal sides (inches)
STANDARD_RECT_SIZES_IN: Tuple[int, ...] = (
    4, 6, 8, 10, 12, 14, 16, 18, 20, 22, 24, 26, 28, 30,
    32, 34, 36, 38, 40, 42, 44, 46, 48, 52, 56, 60,
)

# =============================================================================
# SMACNA EQUAL-FRICTION COEFFICIENTS
# =============================================================================

# D = 0.109 * CFM^0.5 * f^-0.225  (D in inches, f in in.wg/100ft)
FRICTION_DIAMETER_COEFFICIENT: float = 0.109
FRICTION_CFM_EXPONENT: float = 0.5
FRICTION_RATE_EXPONENT: float = -0.225

# De = 1.30 * (a*b)^0.625 / (a+b)^0.25
EQUIVALENT_DIAMETER_COEFFICIENT: float = 1.30
EQUIVALENT_DIAMETER_AREA_EXPONENT: float = 0.625
EQUIVALENT_DIAMETER_PERIMETER_EXPONENT: float = 0.25

# =============================================================================
# INSULATION (INTERNAL LINER) CONSTANTS
# =============================================================================

# Standard liner thicknesses (inches), applied on both sides of a dimension
INSULATION_OPTIONS_IN: Tuple[float, ...] = (0.0, 0.75, 1.0)
DEFAULT_INSULATION_IN: float = 0.0

INSULATION_LABELS: Dict[float, str] = {
    0.0: 'None',
    0.75: '3/4" (0.75")',
    1.0: '1" (1.0")',
}

# =============================================================================
# PRESSURE CLASS PRESETS
# =============================================================================

# Preset id -> (friction rate in.wg/100ft, velocity FPM)
PRESSURE_PRESETS: Dict[str, Tuple[float, float]] = {
    'low': (0.08, 800.0),
    'medium': (0.15, 1500.0),
}

DEFAULT_FRICTION_RATE_INWG: float = 0.08
DEFAULT_VELOCITY_FPM: float = 1500.0

# =============================================================================
# RECTANGULAR SEARCH CONSTANTS
# =============================================================================

# Area ratio bands (candidate area / target area)
NARROW_TOLERANCE_BAND: Tuple[float, float] = (0.70, 1.30)
SPREAD_TOLERANCE_BAND: Tuple[float, float] = (0.50, 1.50)

# Maximum candidates returned by either policy
MAX_RECT_CANDIDATES: int = 12

# Spread policy: candidates kept below the closest match
SPREAD_WINDOW_BELOW: int = 6

# Fixed aspect ratios for the aspect-ratio equivalent table (label, width/height)
STANDARD_ASPECT_RATIOS: Tuple[Tuple[str, float], ...] = (
    ('1:1', 1.0),
    ('2:1', 2.0),
    ('3:1', 3.0),
    ('4:1', 4.0),
    ('1.5:1', 1.5),
    ('2.5:1', 2.5),
)

# =============================================================================
# PRACTICAL INPUT BOUNDS (warnings only)
# =============================================================================

MIN_PRACTICAL_CFM: float = 100.0
MAX_PRACTICAL_CFM: float = 100000.0
MIN_PRACTICAL_FRICTION_INWG: float = 0.01
MAX_PRACTICAL_FRICTION_INWG: float = 0.5
MIN_PRACTICAL_VELOCITY_FPM: float = 500.0
MAX_PRACTICAL_VELOCITY_FPM: float = 5000.0

# =============================================================================
# VELOCITY LIMITS BY SYSTEM TYPE
# =============================================================================

VELOCITY_LIMITS = {
    'supply': {
        'recommended': 2000.0,
        'max': 2500.0,
        'noise': 'Above 2000 fpm may cause noise issues',
    },
    'return': {
        'recommended': 1500.0,
        'max': 2000.0,
        'noise': 'Above 1500 fpm may cause noise issues',
    },
    'exhaust': {
        'recommended': 2000.0,
        'max': 3000.0,
        'noise': 'Higher velocities acceptable in non-occupied areas',
    },
    'outside_air': {
        'recommended': 1500.0,
        'max': 2000.0,
        'noise': 'Lower velocities for intake louvers',
    },
}

DEFAULT_SYSTEM_TYPE: str = 'supply'

# =============================================================================
# MATHEMATICAL CONSTANTS
# =============================================================================

PI: float = math.pi

# Conversion factors
SQUARE_INCHES_PER_SQUARE_FOOT: float = 144.0
PASCALS_PER_INWG: float = 249.089

# =============================================================================
# DEBUG AND LOGGING CONSTANTS
# =============================================================================

DEBUG_DECIMAL_PLACES: int = 3

# =============================================================================
# UNIT CONVERSION HELPERS
# =============================================================================

def square_inches_to_square_feet(sq_in: float) -> float:
    """Convert square inches to square feet"""
    return sq_in / SQUARE_INCHES_PER_SQUARE_FOOT

def circular_area_from_diameter(diameter_in: float) -> float:
    """Calculate circular area from diameter in inches, return square feet"""
    # pi * (D/24)^2 == pi * (radius in feet)^2
    return PI * (diameter_in / 24.0) ** 2

def rectangular_area_from_dimensions(width_in: float, height_in: float) -> float:
    """Calculate rectangular area from dimensions in inches, return square feet"""
    return square_inches_to_square_feet(width_in * height_in)

def inwg_to_pa(inwg: float) -> float:
    """Convert pressure from inches of water gauge to Pascals"""
    return inwg * PASCALS_PER_INWG

def pa_to_inwg(pa: float) -> float:
    """Convert pressure from Pascals to inches of water gauge"""
    return pa / PASCALS_PER_INWG

# =============================================================================
# VALIDATION HELPERS
# =============================================================================

def is_standard_insulation(thickness_in: float) -> bool:
    """Check if a liner thickness is one of the standard options"""
    return any(math.isclose(thickness_in, option) for option in INSULATION_OPTIONS_IN)

def is_practical_cfm(cfm: float) -> bool:
    """Check if airflow is within the practical design range"""
    return MIN_PRACTICAL_CFM <= cfm <= MAX_PRACTICAL_CFM

def is_practical_friction_rate(friction_rate: float) -> bool:
    """Check if friction rate is within the practical design range"""
    return MIN_PRACTICAL_FRICTION_INWG <= friction_rate <= MAX_PRACTICAL_FRICTION_INWG

def is_practical_velocity(velocity_fpm: float) -> bool:
    """Check if velocity is within the practical design range"""
    return MIN_PRACTICAL_VELOCITY_FPM <= velocity_fpm <= MAX_PRACTICAL_VELOCITY_FPM

def get_velocity_limits(system_type: str = None) -> Dict[str, object]:
    """Get velocity limits for a system type, falling back to supply"""
    key = (system_type or DEFAULT_SYSTEM_TYPE).lower()
    return VELOCITY_LIMITS.get(key, VELOCITY_LIMITS[DEFAULT_SYSTEM_TYPE])
