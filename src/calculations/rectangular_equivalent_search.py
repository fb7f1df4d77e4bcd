"""
Rectangular Duct Equivalent Search
Based on the SMACNA equivalent diameter relationship

This module implements:
1. Enumeration of standard rectangular sizes (height <= width)
2. Tolerance-band filtering against a target round duct area
3. Two selection policies: closest matches (narrow) or a browsable
   window of smaller and larger sizes around the closest match (spread)
4. Fixed aspect-ratio equivalents of a target round diameter
"""

import math
from typing import List, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from .hvac_constants import (
    STANDARD_RECT_SIZES_IN, STANDARD_ASPECT_RATIOS,
    EQUIVALENT_DIAMETER_COEFFICIENT, EQUIVALENT_DIAMETER_AREA_EXPONENT,
    EQUIVALENT_DIAMETER_PERIMETER_EXPONENT, NARROW_TOLERANCE_BAND,
    SPREAD_TOLERANCE_BAND, MAX_RECT_CANDIDATES, SPREAD_WINDOW_BELOW,
    SQUARE_INCHES_PER_SQUARE_FOOT,
)
from .round_duct_solver import friction_rate_for_diameter
from .duct_validation import DuctInputValidator, interior_dimension
from .result_types import (
    DuctSizingError, RectDuctCandidate, RectangularSearchResult, SelectionPolicy,
)
from .debug_logger import debug_logger


def equivalent_diameter(width_in: float, height_in: float) -> float:
    """
    Round diameter with the same friction and capacity as a rectangular duct.

    De = 1.30 * (a*b)^0.625 / (a+b)^0.25
    """
    return (EQUIVALENT_DIAMETER_COEFFICIENT
            * (width_in * height_in) ** EQUIVALENT_DIAMETER_AREA_EXPONENT
            / (width_in + height_in) ** EQUIVALENT_DIAMETER_PERIMETER_EXPONENT)


def format_aspect_ratio(width: float, height: float) -> str:
    """Width:height ratio to one decimal place, e.g. '2.5:1'"""
    return f"{width / height:.1f}:1"


def tolerance_band_for(policy: SelectionPolicy) -> Tuple[float, float]:
    if policy is SelectionPolicy.SPREAD:
        return SPREAD_TOLERANCE_BAND
    return NARROW_TOLERANCE_BAND


def _round_up_to_catalog(value: float, catalog: Sequence[float]) -> float:
    for size in catalog:
        if size >= value:
            return float(size)
    # Beyond the catalog: next even inch
    return float(math.ceil(value / 2.0) * 2)


class RectangularEquivalentSearch:
    """Finds standard rectangular ducts equivalent to a round duct"""

    COMPONENT = 'RectangularEquivalentSearch'

    def __init__(self, catalog: Sequence[float] = STANDARD_RECT_SIZES_IN,
                 max_candidates: int = MAX_RECT_CANDIDATES,
                 window_below: int = SPREAD_WINDOW_BELOW):
        self.catalog = tuple(sorted(catalog))
        self.max_candidates = max_candidates
        self.window_below = window_below
        self.validator = DuctInputValidator()

    def enumerate_pairs(self, insulation: float = 0.0) -> Tuple[np.ndarray, np.ndarray]:
        """
        Nominal (width, height) pairs with height <= width whose interior
        survives the liner, ordered by width then height.
        """
        sizes = np.asarray(self.catalog, dtype=float)
        width_grid, height_grid = np.meshgrid(sizes, sizes, indexing='ij')
        mask = height_grid <= width_grid
        widths = width_grid[mask]
        heights = height_grid[mask]

        lined = (widths - 2.0 * insulation > 0) & (heights - 2.0 * insulation > 0)
        return widths[lined], heights[lined]

    def search(self, target_area: float, cfm: float, insulation: float = 0.0,
               policy: Union[SelectionPolicy, str] = SelectionPolicy.NARROW) -> RectangularSearchResult:
        """
        Search the rectangular catalog for sizes close to a target area.

        Args:
            target_area: Target free area in square feet
            cfm: Airflow in CFM
            insulation: Internal liner thickness in inches
            policy: SelectionPolicy.NARROW or SelectionPolicy.SPREAD

        Returns:
            RectangularSearchResult, empty when nothing is within the band
        """
        try:
            policy = SelectionPolicy(policy)
        except ValueError:
            raise DuctSizingError(f"Unknown selection policy: {policy!r}")

        validation = self.validator.validate_target_area(target_area)
        validation.merge(self.validator.validate_inputs(cfm, insulation))
        self.validator.require_valid(validation)
        target_area, cfm, insulation = float(target_area), float(cfm), float(insulation)

        band = tolerance_band_for(policy)
        widths, heights = self.enumerate_pairs(insulation)
        interior_widths = widths - 2.0 * insulation
        interior_heights = heights - 2.0 * insulation
        areas = interior_widths * interior_heights / SQUARE_INCHES_PER_SQUARE_FOOT

        ratios = areas / target_area
        in_band = np.flatnonzero((ratios >= band[0]) & (ratios <= band[1]))

        if policy is SelectionPolicy.NARROW:
            selected = self._select_closest(in_band, areas, target_area)
        else:
            selected = self._select_spread(in_band, areas, target_area)

        candidates = tuple(
            self._build_candidate(widths[i], heights[i], insulation, cfm)
            for i in selected
        )

        debug_logger.log_candidate_search(
            self.COMPONENT, policy.value, float(target_area),
            enumerated=int(widths.size), in_band=int(in_band.size), returned=len(candidates),
        )

        return RectangularSearchResult(
            target_area=float(target_area),
            policy=policy,
            tolerance_band=band,
            candidates=candidates,
        )

    def _select_closest(self, in_band: np.ndarray, areas: np.ndarray, target_area: float) -> np.ndarray:
        distance = np.abs(areas[in_band] - target_area)
        order = np.argsort(distance, kind='stable')
        return in_band[order][:self.max_candidates]

    def _select_spread(self, in_band: np.ndarray, areas: np.ndarray, target_area: float) -> np.ndarray:
        if in_band.size == 0:
            return in_band
        by_area = in_band[np.argsort(areas[in_band], kind='stable')]
        closest = int(np.argmin(np.abs(areas[by_area] - target_area)))
        start = max(0, closest - self.window_below)
        end = min(by_area.size, start + self.max_candidates)
        return by_area[start:end]

    def _build_candidate(self, width: float, height: float, insulation: float, cfm: float) -> RectDuctCandidate:
        width = float(width)
        height = float(height)
        interior_width = interior_dimension(width, insulation)
        interior_height = interior_dimension(height, insulation)
        area = interior_width * interior_height / SQUARE_INCHES_PER_SQUARE_FOOT
        de = equivalent_diameter(interior_width, interior_height)
        return RectDuctCandidate(
            width=width,
            height=height,
            interior_width=interior_width,
            interior_height=interior_height,
            area=area,
            equivalent_diameter=de,
            velocity=cfm / area,
            friction_rate=friction_rate_for_diameter(cfm, de),
            aspect_ratio=format_aspect_ratio(width, height),
        )

    def aspect_ratio_equivalents(self, target_diameter: float, cfm: float, insulation: float = 0.0,
                                 aspect_ratios: Sequence[Tuple[str, float]] = STANDARD_ASPECT_RATIOS
                                 ) -> List[RectDuctCandidate]:
        """
        Rectangular sizes at fixed aspect ratios equivalent to a round diameter.

        For each ratio r the interior height giving an equivalent diameter of
        target_diameter is h = De * (r+1)^0.25 / (1.30 * r^0.625); both sides
        get the liner allowance and are rounded up to the catalog.

        Returns:
            Candidates sorted by ascending velocity, one per distinct size
        """
        validation = self.validator.validate_inputs(cfm, insulation)
        validation.merge(self.validator.validate_target_diameter(target_diameter))
        self.validator.require_valid(validation)
        target_diameter, cfm, insulation = float(target_diameter), float(cfm), float(insulation)

        candidates = []
        seen = set()
        for _label, ratio in aspect_ratios:
            height = (target_diameter * (ratio + 1.0) ** EQUIVALENT_DIAMETER_PERIMETER_EXPONENT
                      / (EQUIVALENT_DIAMETER_COEFFICIENT * ratio ** EQUIVALENT_DIAMETER_AREA_EXPONENT))
            width = height * ratio

            nominal_width = _round_up_to_catalog(width + 2.0 * insulation, self.catalog)
            nominal_height = _round_up_to_catalog(height + 2.0 * insulation, self.catalog)
            if (nominal_width, nominal_height) in seen:
                continue
            seen.add((nominal_width, nominal_height))
            candidates.append(self._build_candidate(nominal_width, nominal_height, insulation, cfm))

        return sorted(candidates, key=lambda c: c.velocity)


def search_rectangular_equivalents(target_area: float, cfm: float, insulation: float = 0.0,
                                   policy: Union[SelectionPolicy, str] = SelectionPolicy.NARROW
                                   ) -> RectangularSearchResult:
    """Rectangular search with the standard catalog (see RectangularEquivalentSearch.search)."""
    return RectangularEquivalentSearch().search(target_area, cfm, insulation, policy)


def candidates_to_dataframe(candidates) -> pd.DataFrame:
    """
    Tabulate rectangular candidates.

    Args:
        candidates: RectangularSearchResult or iterable of RectDuctCandidate

    Returns:
        DataFrame with one row per candidate, in the given order
    """
    columns = [
        'Size', 'Width (in)', 'Height (in)', 'Interior W (in)', 'Interior H (in)',
        'Area (sq ft)', 'Equiv. Dia (in)', 'Velocity (FPM)',
        'Friction (in.wg/100ft)', 'Aspect Ratio',
    ]
    rows = [
        {
            'Size': c.size_label,
            'Width (in)': c.width,
            'Height (in)': c.height,
            'Interior W (in)': c.interior_width,
            'Interior H (in)': c.interior_height,
            'Area (sq ft)': c.area,
            'Equiv. Dia (in)': c.equivalent_diameter,
            'Velocity (FPM)': c.velocity,
            'Friction (in.wg/100ft)': c.friction_rate,
            'Aspect Ratio': c.aspect_ratio,
        }
        for c in candidates
    ]
    return pd.DataFrame(rows, columns=columns)
