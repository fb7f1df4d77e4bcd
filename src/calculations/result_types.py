"""
Standardized result types for duct sizing calculations
Ensures consistent return patterns across the calculation system
"""

from typing import Generic, TypeVar, Optional, List, Iterator
from dataclasses import dataclass, field
from enum import Enum

T = TypeVar('T')


class DuctSizingError(ValueError):
    """Raised when sizing inputs are invalid (non-positive airflow, constraint or interior size)"""

    def __init__(self, message: str, errors: List[str] = None):
        super().__init__(message)
        self.errors = errors or [message]


class SizingMode(Enum):
    """Which constraint drives the round duct size"""
    FRICTION = "friction"
    VELOCITY = "velocity"
    WORST_CASE = "worst_case"

    @classmethod
    def _missing_(cls, value):
        # "worst-case" is accepted as a spelling of "worst_case"
        if isinstance(value, str):
            normalized = value.strip().lower().replace("-", "_")
            for member in cls:
                if member.value == normalized:
                    return member
        return None


class GoverningConstraint(Enum):
    """Side of a worst-case comparison that produced the recommended size"""
    FRICTION = "friction"
    VELOCITY = "velocity"
    EQUAL = "equal"


class PressurePreset(Enum):
    """Named friction/velocity pairs for worst-case sizing"""
    LOW = "low"
    MEDIUM = "medium"
    CUSTOM = "custom"


class SelectionPolicy(Enum):
    """Rectangular equivalent selection policy"""
    NARROW = "narrow"
    SPREAD = "spread"


class ResultStatus(Enum):
    """Enumeration of possible result statuses"""
    SUCCESS = "success"
    VALIDATION_FAILED = "validation_failed"


@dataclass(frozen=True)
class RoundDuctResult:
    """Standard round duct selected for one airflow and one constraint"""
    cfm: float
    mode: SizingMode
    target_value: float
    insulation_thickness: float
    raw_diameter: float
    effective_diameter: float
    nominal_size: float
    interior_diameter: float
    area: float
    velocity: float
    friction_rate: float
    is_standard_size: bool = True

    @property
    def insulation_note(self) -> str:
        """Short note on how the liner reduces the interior diameter"""
        if self.insulation_thickness <= 0:
            return ''
        return (f'({self.insulation_thickness}" insulation reduces ID to '
                f'{self.interior_diameter:.1f}")')


@dataclass(frozen=True)
class WorstCaseResult:
    """Governing (larger) round size from independent friction and velocity sizing"""
    recommended: RoundDuctResult
    by_friction: RoundDuctResult
    by_velocity: RoundDuctResult
    governed_by: GoverningConstraint


@dataclass(frozen=True)
class RectDuctCandidate:
    """Standard rectangular duct with roughly the capacity of a target round duct"""
    width: float
    height: float
    interior_width: float
    interior_height: float
    area: float
    equivalent_diameter: float
    velocity: float
    friction_rate: float
    aspect_ratio: str

    @property
    def size_label(self) -> str:
        return f'{self.width:g}" x {self.height:g}"'


@dataclass(frozen=True)
class RectangularSearchResult:
    """
    Ordered rectangular candidates from one search call

    An empty result is a valid outcome meaning no standard rectangular duct
    falls within the policy's tolerance band.
    """
    target_area: float
    policy: SelectionPolicy
    tolerance_band: tuple
    candidates: tuple = ()

    @property
    def is_empty(self) -> bool:
        return len(self.candidates) == 0

    def __len__(self) -> int:
        return len(self.candidates)

    def __iter__(self) -> Iterator[RectDuctCandidate]:
        return iter(self.candidates)

    def __getitem__(self, index):
        return self.candidates[index]


@dataclass
class CalculationResult(Generic[T]):
    """
    Standardized result wrapper for duct sizing operations

    Provides consistent return types across all calculation methods
    """
    status: ResultStatus
    data: Optional[T] = None
    error_message: Optional[str] = None
    warnings: List[str] = None
    metadata: Optional[dict] = None

    def __post_init__(self):
        if self.warnings is None:
            self.warnings = []
        if self.metadata is None:
            self.metadata = {}

    @property
    def is_success(self) -> bool:
        """Check if the operation was successful"""
        return self.status == ResultStatus.SUCCESS

    @classmethod
    def success(cls, data: T, warnings: List[str] = None, metadata: dict = None) -> 'CalculationResult[T]':
        """Create a successful result"""
        return cls(
            status=ResultStatus.SUCCESS,
            data=data,
            warnings=warnings or [],
            metadata=metadata or {}
        )

    @classmethod
    def validation_failed(cls, error_message: str, warnings: List[str] = None, metadata: dict = None) -> 'CalculationResult[T]':
        """Create a validation failed result"""
        return cls(
            status=ResultStatus.VALIDATION_FAILED,
            error_message=error_message,
            warnings=warnings or [],
            metadata=metadata or {}
        )


@dataclass
class ValidationResult:
    """Result of validation operations"""
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, error: str) -> None:
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)

    def merge(self, other: 'ValidationResult') -> None:
        """Merge another validation result into this one"""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        if not other.is_valid:
            self.is_valid = False
