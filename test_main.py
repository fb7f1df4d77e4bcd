#!/usr/bin/env python3
"""
Test of the command line entry point
"""

import os
import sys

import pytest

os.environ.setdefault("MPLBACKEND", "Agg")

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src'))

import main
from utils.settings_manager import SettingsManager


@pytest.fixture
def settings_file(tmp_path):
    return str(tmp_path / "cli.ini")


def test_friction_sizing(settings_file, capsys):
    code = main.main(["1000", "--friction", "0.08", "--settings", settings_file])
    out = capsys.readouterr().out

    assert code == 0
    assert 'Nominal Diameter: 7"' in out
    assert '10" x 4"' in out


def test_invalid_airflow_returns_error(settings_file, capsys):
    code = main.main(["0", "--friction", "0.08", "--settings", settings_file])

    assert code == 2
    assert "Invalid input" in capsys.readouterr().err


def test_worst_case_low_preset(settings_file, capsys):
    code = main.main(["1000", "--mode", "worst_case", "--preset", "low", "--settings", settings_file])
    out = capsys.readouterr().out

    assert code == 0
    assert 'Nominal Diameter: 16"' in out
    assert "Governed By: velocity" in out


def test_stored_defaults_fill_missing_values(settings_file, capsys):
    SettingsManager(settings_file).set_defaults(velocity=1500, insulation=1.0, selection_policy='spread')
    code = main.main(["100", "--mode", "velocity", "--settings", settings_file])
    out = capsys.readouterr().out

    assert code == 0
    assert 'Nominal Diameter: 6"' in out
    assert 'insulation reduces ID to 4.0"' in out
    assert "RECTANGULAR EQUIVALENTS (spread):" in out


def test_build_request_custom_worst_case(settings_file):
    args = main.build_parser().parse_args(
        ["1000", "--mode", "worst_case", "--friction", "0.01", "--velocity", "2500"])
    request = main.build_request(args, SettingsManager(settings_file))

    assert request.preset.value == 'custom'
    assert request.friction_rate == 0.01 and request.velocity == 2500


def test_export_and_plot(settings_file, tmp_path, capsys):
    workbook = tmp_path / "out.xlsx"
    plot = tmp_path / "out.png"
    code = main.main(["1000", "--friction", "0.08", "--settings", settings_file,
                      "--export", str(workbook), "--plot", str(plot)])

    assert code == 0
    assert workbook.exists()
    assert plot.exists()
    assert "Exported workbook" in capsys.readouterr().out


def test_worst_case_single_constraint_uses_stored_default(settings_file, capsys):
    SettingsManager(settings_file).set_defaults(velocity=1500)
    args = main.build_parser().parse_args(["1000", "--mode", "worst_case", "--friction", "0.01"])
    request = main.build_request(args, SettingsManager(settings_file))

    assert request.preset.value == 'custom'
    assert request.friction_rate == 0.01
    assert request.velocity == 1500, "Missing velocity should come from the stored default"

    code = main.main(["1000", "--mode", "worst_case", "--friction", "0.01", "--settings", settings_file])
    out = capsys.readouterr().out
    assert code == 0
    assert 'By Friction: 10"' in out
    assert "Velocity: 1500 FPM" in out


def test_named_preset_with_explicit_constraint_is_rejected(settings_file, capsys):
    code = main.main(["1000", "--mode", "worst_case", "--preset", "low", "--friction", "0.01",
                      "--settings", settings_file])

    assert code == 2
    assert "--preset low" in capsys.readouterr().err
