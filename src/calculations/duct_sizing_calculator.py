"""
Duct Sizing Calculator
Runs the round duct solver (or the worst-case resolver) and the rectangular
equivalent search for one duct segment, and checks the result against the
system's velocity limits.
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional, Union

import matplotlib.pyplot as plt
import seaborn as sns

from .hvac_constants import (
    DEFAULT_INSULATION_IN, DEFAULT_SYSTEM_TYPE, INSULATION_LABELS,
    get_velocity_limits,
)
from .round_duct_solver import RoundDuctSolver
from .dual_constraint_resolver import DualConstraintResolver, preset_constraints
from .rectangular_equivalent_search import RectangularEquivalentSearch, candidates_to_dataframe
from .duct_validation import DuctInputValidator
from .result_types import (
    CalculationResult, DuctSizingError, PressurePreset, RectDuctCandidate,
    RectangularSearchResult, RoundDuctResult, SelectionPolicy, SizingMode,
    WorstCaseResult,
)
from .debug_logger import debug_logger


@dataclass
class SizingRequest:
    """Inputs for sizing one duct segment"""
    cfm: float
    mode: SizingMode = SizingMode.FRICTION
    friction_rate: Optional[float] = None
    velocity: Optional[float] = None
    preset: Optional[PressurePreset] = None
    insulation: float = DEFAULT_INSULATION_IN
    selection_policy: SelectionPolicy = SelectionPolicy.NARROW
    system_type: str = DEFAULT_SYSTEM_TYPE
    velocity_limit: Optional[float] = None


@dataclass
class DuctSizingReport:
    """Round size, worst-case comparison and rectangular options for one segment"""
    request: SizingRequest
    round_result: RoundDuctResult
    rectangular: RectangularSearchResult
    worst_case: Optional[WorstCaseResult] = None
    aspect_equivalents: List[RectDuctCandidate] = field(default_factory=list)
    velocity_limit: float = 0.0
    warnings: List[str] = field(default_factory=list)

    @property
    def velocity_ok(self) -> bool:
        return self.round_result.velocity <= self.velocity_limit

    def candidate_velocity_ok(self, candidate: RectDuctCandidate) -> bool:
        return candidate.velocity <= self.velocity_limit


class DuctSizingCalculator:
    """
    Sizes a duct segment from airflow and friction/velocity constraints.

    Validation failures come back as CalculationResult.validation_failed
    rather than exceptions.
    """

    COMPONENT = 'DuctSizingCalculator'

    def __init__(self):
        self.solver = RoundDuctSolver()
        self.resolver = DualConstraintResolver(self.solver)
        self.rect_search = RectangularEquivalentSearch()
        self.validator = DuctInputValidator()

    def calculate(self, request: SizingRequest) -> CalculationResult:
        debug_logger.log_calculation_start(self.COMPONENT, 'duct_sizing', {
            'mode': request.mode, 'airflow_cfm': request.cfm,
        })
        try:
            report = self._build_report(request)
        except DuctSizingError as e:
            debug_logger.error(self.COMPONENT, "Duct sizing rejected", error=e, data={'errors': list(e.errors)})
            debug_logger.log_calculation_end(self.COMPONENT, 'duct_sizing', False)
            return CalculationResult.validation_failed(str(e), metadata={'errors': list(e.errors)})

        debug_logger.log_calculation_end(self.COMPONENT, 'duct_sizing', True, {
            'nominal_size_in': report.round_result.nominal_size,
            'rect_candidates': len(report.rectangular),
        })
        return CalculationResult.success(
            report,
            warnings=list(report.warnings),
            metadata={'mode': report.request.mode.value, 'policy': report.request.selection_policy.value},
        )

    def _build_report(self, request: SizingRequest) -> DuctSizingReport:
        try:
            mode = SizingMode(request.mode)
            policy = SelectionPolicy(request.selection_policy)
        except ValueError as e:
            raise DuctSizingError(str(e))
        request = replace(request, mode=mode, selection_policy=policy)

        friction_rate, velocity = self._resolve_constraints(request, mode)
        validation = self.validator.validate_inputs(
            request.cfm, request.insulation, friction_rate=friction_rate, velocity=velocity
        )
        validation.merge(self.validator.validate_velocity_limit(request.velocity_limit))
        self.validator.require_valid(validation)
        warnings = list(validation.warnings)

        worst_case = None
        if mode is SizingMode.WORST_CASE:
            worst_case = self.resolver.resolve(request.cfm, friction_rate, velocity, request.insulation)
            round_result = worst_case.recommended
        elif mode is SizingMode.FRICTION:
            round_result = self.solver.solve_by_friction(request.cfm, friction_rate, request.insulation)
        else:
            round_result = self.solver.solve_by_velocity(request.cfm, velocity, request.insulation)

        if not round_result.is_standard_size:
            warnings.append(
                f'Non-standard size: {round_result.effective_diameter:.1f}" exceeds the largest '
                f'standard round duct, using {round_result.nominal_size:g}"'
            )

        rectangular = self.rect_search.search(
            round_result.area, request.cfm, request.insulation, policy
        )
        if rectangular.is_empty:
            warnings.append("No suitable rectangular alternative within tolerance")

        aspect_equivalents = self.rect_search.aspect_ratio_equivalents(
            round_result.raw_diameter, request.cfm, request.insulation
        )

        limits = get_velocity_limits(request.system_type)
        velocity_limit = request.velocity_limit if request.velocity_limit is not None else limits['max']
        warnings.extend(self._velocity_warnings(round_result.velocity, limits, request.velocity_limit))
        warnings.extend(
            f"Rectangular {c.size_label} velocity {round(c.velocity)} fpm exceeds limit {velocity_limit:g} fpm"
            for c in rectangular if c.velocity > velocity_limit
        )

        return DuctSizingReport(
            request=request,
            round_result=round_result,
            rectangular=rectangular,
            worst_case=worst_case,
            aspect_equivalents=aspect_equivalents,
            velocity_limit=velocity_limit,
            warnings=warnings,
        )

    @staticmethod
    def _resolve_constraints(request: SizingRequest, mode: SizingMode):
        if mode is SizingMode.FRICTION:
            if request.friction_rate is None:
                raise DuctSizingError("Friction sizing requires a friction rate")
            return request.friction_rate, None
        if mode is SizingMode.VELOCITY:
            if request.velocity is None:
                raise DuctSizingError("Velocity sizing requires a velocity")
            return None, request.velocity
        return preset_constraints(
            request.preset or PressurePreset.CUSTOM, request.friction_rate, request.velocity
        )

    @staticmethod
    def _velocity_warnings(velocity: float, limits: dict, velocity_limit: Optional[float]) -> List[str]:
        warnings = []
        if velocity_limit is not None and velocity > velocity_limit:
            warnings.append(f"Velocity {round(velocity)} fpm exceeds limit {velocity_limit:g} fpm")
        if velocity > limits['max']:
            warnings.append(f"Velocity {round(velocity)} fpm exceeds maximum {limits['max']:g} fpm")
        elif velocity > limits['recommended']:
            warnings.append(
                f"Velocity {round(velocity)} fpm exceeds recommended {limits['recommended']:g} fpm - {limits['noise']}"
            )
        return warnings

    def generate_report(self, report: DuctSizingReport) -> str:
        """
        Generate a formatted text report for a sizing result.

        Args:
            report: DuctSizingReport from calculate()

        Returns:
            Formatted report string
        """
        request = report.request
        rnd = report.round_result
        lines = []
        lines.append("=" * 60)
        lines.append("DUCT SIZING CALCULATION")
        lines.append("SMACNA Equal-Friction Method")
        lines.append("=" * 60)
        lines.append("")

        lines.append("INPUT PARAMETERS:")
        lines.append(f"  Airflow: {request.cfm:g} CFM")
        lines.append(f"  Sizing Mode: {SizingMode(request.mode).value}")
        if request.friction_rate is not None or report.worst_case:
            friction = report.worst_case.by_friction.target_value if report.worst_case else request.friction_rate
            lines.append(f"  Friction Rate: {friction:g} in.wg/100ft")
        if request.velocity is not None or report.worst_case:
            velocity = report.worst_case.by_velocity.target_value if report.worst_case else request.velocity
            lines.append(f"  Velocity: {velocity:g} FPM")
        insulation_label = INSULATION_LABELS.get(float(request.insulation), f'{request.insulation:g}"')
        lines.append(f"  Internal Insulation: {insulation_label}")
        lines.append("")

        lines.append("ROUND DUCT:")
        lines.append("-" * 40)
        size_note = "" if rnd.is_standard_size else " (non-standard)"
        lines.append(f"  Nominal Diameter: {rnd.nominal_size:g}\"{size_note}")
        lines.append(f"  Calculated Diameter: {rnd.raw_diameter:.1f}\"")
        if rnd.insulation_note:
            lines.append(f"  {rnd.insulation_note}")
        lines.append(f"  Area: {rnd.area:.3f} sq ft")
        lines.append(f"  Velocity: {rnd.velocity:,.0f} FPM")
        lines.append(f"  Friction Rate: {rnd.friction_rate:.3f} in.wg/100ft")
        lines.append("")

        if report.worst_case:
            wc = report.worst_case
            lines.append("WORST CASE COMPARISON:")
            lines.append("-" * 40)
            lines.append(f"  By Friction: {wc.by_friction.nominal_size:g}\"")
            lines.append(f"  By Velocity: {wc.by_velocity.nominal_size:g}\"")
            lines.append(f"  Governed By: {wc.governed_by.value}")
            lines.append("")

        lines.append(f"RECTANGULAR EQUIVALENTS ({report.rectangular.policy.value}):")
        lines.append("-" * 40)
        if report.rectangular.is_empty:
            lines.append("  No suitable rectangular alternative")
        for c in report.rectangular:
            flag = "" if report.candidate_velocity_ok(c) else "  !"
            lines.append(
                f"  {c.size_label:<12} {c.aspect_ratio:>6}  De {c.equivalent_diameter:5.1f}\"  "
                f"{c.area:6.3f} sq ft  {c.velocity:7,.0f} FPM{flag}"
            )
        lines.append("")

        if report.warnings:
            lines.append("WARNINGS:")
            lines.append("-" * 40)
            for warning in report.warnings:
                lines.append(f"  • {warning}")
            lines.append("")

        return "\n".join(lines)

    def plot_rectangular_candidates(self, report: DuctSizingReport, save_path: Optional[str] = None):
        """
        Plot candidate area against velocity with the target area marked.

        Args:
            report: DuctSizingReport from calculate()
            save_path: Optional path to save the plot

        Returns:
            matplotlib Figure
        """
        df = candidates_to_dataframe(report.rectangular)

        with plt.style.context('seaborn-v0_8'):
            fig, ax = plt.subplots(figsize=(10, 6))
            if not df.empty:
                sns.scatterplot(data=df, x='Area (sq ft)', y='Velocity (FPM)',
                                hue='Aspect Ratio', palette='husl', s=80, ax=ax)
                for _, row in df.iterrows():
                    ax.annotate(row['Size'], (row['Area (sq ft)'], row['Velocity (FPM)']),
                                xytext=(4, 4), textcoords='offset points', fontsize=8)
            ax.axvline(report.rectangular.target_area, color='red', linestyle='--', label='Target area')
            ax.axhline(report.velocity_limit, color='gray', linestyle=':', label='Velocity limit')
            ax.set_xlabel('Free Area (sq ft)')
            ax.set_ylabel('Velocity (FPM)')
            ax.set_title(f'Rectangular Equivalents for {report.round_result.nominal_size:g}" Round '
                         f'({report.request.cfm:g} CFM)')
            ax.legend()
            fig.tight_layout()

            if save_path:
                fig.savefig(save_path, dpi=300, bbox_inches='tight')
        return fig


def size_duct(cfm: float, mode: Union[SizingMode, str] = SizingMode.FRICTION, **kwargs) -> DuctSizingReport:
    """
    Size a duct segment, raising DuctSizingError on invalid input.

    Keyword arguments are SizingRequest fields.
    """
    result = DuctSizingCalculator().calculate(SizingRequest(cfm=cfm, mode=mode, **kwargs))
    if not result.is_success:
        raise DuctSizingError(result.error_message, errors=result.metadata.get('errors'))
    return result.data
