#!/usr/bin/env python3
"""
Test Excel export of duct sizing reports
"""

import os
import sys

import openpyxl

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src'))

from calculations import size_duct, PressurePreset, RectangularSearchResult
from data.excel_exporter import DuctSizingExcelExporter, ExportOptions


def _summary_values(ws):
    return {row[0]: row[1] for row in ws.iter_rows(min_row=3, max_col=2, values_only=True) if row[0]}


def test_export_friction_report(tmp_path):
    report = size_duct(1000, 'friction', friction_rate=0.08)
    path = str(tmp_path / "sizing.xlsx")

    assert DuctSizingExcelExporter().export_report(report, path) == path
    assert os.path.exists(path), "Workbook should be written"

    wb = openpyxl.load_workbook(path)
    assert wb.sheetnames == ["Summary", "Rectangular Options", "Aspect Ratio Sizes"]

    summary = wb["Summary"]
    assert summary['A1'].value == "Duct Sizing Summary"
    values = _summary_values(summary)
    assert values["Nominal Diameter (in)"] == 7
    assert values["Velocity OK"] == "No"
    assert "Governed By" not in values
    assert "Warnings" in values

    rect = wb["Rectangular Options"]
    assert rect['A1'].value == 'Size'
    assert rect['A2'].value == '10" x 4"'
    assert rect['B2'].value == 10
    assert rect.max_row == len(report.rectangular) + 1


def test_export_worst_case_report(tmp_path):
    report = size_duct(1000, 'worst_case', preset=PressurePreset.LOW)
    path = str(tmp_path / "worst_case.xlsx")
    DuctSizingExcelExporter().export_report(report, path)

    values = _summary_values(openpyxl.load_workbook(path)["Summary"])
    assert values["Governed By"] == 'velocity'
    assert values["Size by Friction (in)"] == 7
    assert values["Size by Velocity (in)"] == 16


def test_export_options_limit_sheets(tmp_path):
    report = size_duct(1000, 'friction', friction_rate=0.08)
    path = str(tmp_path / "summary_only.xlsx")
    options = ExportOptions(include_rectangular=False, include_aspect_ratio_table=False, include_warnings=False)
    DuctSizingExcelExporter().export_report(report, path, options)

    wb = openpyxl.load_workbook(path)
    assert wb.sheetnames == ["Summary"]
    assert "Warnings" not in _summary_values(wb["Summary"])


def test_export_empty_candidates(tmp_path):
    report = size_duct(1000, 'friction', friction_rate=0.08)
    report.rectangular = RectangularSearchResult(
        target_area=report.rectangular.target_area,
        policy=report.rectangular.policy,
        tolerance_band=report.rectangular.tolerance_band,
    )
    path = str(tmp_path / "empty.xlsx")
    DuctSizingExcelExporter().export_report(report, path)

    assert openpyxl.load_workbook(path)["Rectangular Options"]['A1'].value == "No suitable rectangular alternative"


def test_export_summary():
    report = size_duct(1000, 'friction', friction_rate=0.08)
    summary = DuctSizingExcelExporter().get_export_summary(report)

    assert summary['nominal_size_in'] == 7
    assert summary['rectangular_options'] == 5
    assert summary['has_worst_case'] is False
