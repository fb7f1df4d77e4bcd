#!/usr/bin/env python3
"""
Duct Sizing Calculator - Command line entry point
Sizes one duct segment and prints the round size and rectangular options
"""

import sys
import os
import argparse

# Add src directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from calculations import (
    DuctSizingCalculator, DuctSizingError, SizingRequest, SizingMode, PressurePreset, SelectionPolicy,
)
from calculations.hvac_constants import INSULATION_OPTIONS_IN, VELOCITY_LIMITS
from utils.settings_manager import SettingsManager


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="SMACNA duct sizing calculator")
    parser.add_argument("cfm", type=float, help="Airflow (CFM)")
    parser.add_argument("--mode", choices=[m.value for m in SizingMode], default=SizingMode.FRICTION.value)
    parser.add_argument("--friction", type=float, help="Friction rate (in.wg/100ft)")
    parser.add_argument("--velocity", type=float, help="Velocity (FPM)")
    parser.add_argument("--preset", choices=[p.value for p in PressurePreset],
                        help="Pressure preset for worst-case mode")
    parser.add_argument("--insulation", type=float, choices=INSULATION_OPTIONS_IN,
                        help="Internal liner thickness (in)")
    parser.add_argument("--policy", choices=[p.value for p in SelectionPolicy],
                        help="Rectangular selection policy")
    parser.add_argument("--system-type", choices=sorted(VELOCITY_LIMITS), help="Velocity limit set")
    parser.add_argument("--velocity-limit", type=float, help="Explicit velocity limit (FPM)")
    parser.add_argument("--settings", help="INI file holding sizing defaults")
    parser.add_argument("--export", help="Write an Excel workbook to this path")
    parser.add_argument("--plot", help="Save a candidate plot to this path")
    return parser


def build_request(args, settings: SettingsManager) -> SizingRequest:
    mode = SizingMode(args.mode)
    friction_rate = args.friction
    velocity = args.velocity
    if mode is SizingMode.FRICTION and friction_rate is None:
        friction_rate = settings.get_friction_rate()
    if mode is SizingMode.VELOCITY and velocity is None:
        velocity = settings.get_velocity()

    preset = None
    if mode is SizingMode.WORST_CASE:
        explicit = friction_rate is not None or velocity is not None
        preset = PressurePreset(args.preset) if args.preset else None
        if preset not in (None, PressurePreset.CUSTOM) and explicit:
            raise DuctSizingError(
                f"--preset {preset.value} sets both constraints; use --preset custom with --friction/--velocity"
            )
        if preset is PressurePreset.CUSTOM or (preset is None and explicit):
            # A single explicit constraint is paired with the stored default for the other
            preset = PressurePreset.CUSTOM
            if friction_rate is None:
                friction_rate = settings.get_friction_rate()
            if velocity is None:
                velocity = settings.get_velocity()
        elif preset is None:
            preset = settings.get_pressure_preset()

    return SizingRequest(
        cfm=args.cfm,
        mode=mode,
        friction_rate=friction_rate,
        velocity=velocity,
        preset=preset,
        insulation=args.insulation if args.insulation is not None else settings.get_insulation(),
        selection_policy=SelectionPolicy(args.policy) if args.policy else settings.get_selection_policy(),
        system_type=args.system_type or settings.get_system_type(),
        velocity_limit=args.velocity_limit,
    )


def main(argv=None):
    """Application entry point"""
    args = build_parser().parse_args(argv)
    settings = SettingsManager(args.settings)

    try:
        request = build_request(args, settings)
    except DuctSizingError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 2

    calculator = DuctSizingCalculator()
    result = calculator.calculate(request)
    if not result.is_success:
        print(f"Invalid input: {result.error_message}", file=sys.stderr)
        return 2

    report = result.data
    print(calculator.generate_report(report))

    if args.export:
        from data.excel_exporter import DuctSizingExcelExporter
        DuctSizingExcelExporter().export_report(report, args.export)
        print(f"Exported workbook to {args.export}")
    if args.plot:
        calculator.plot_rectangular_candidates(report, save_path=args.plot)
        print(f"Saved plot to {args.plot}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
