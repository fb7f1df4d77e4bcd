"""
Excel Export functionality for duct sizing results
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict

import openpyxl
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side
from openpyxl.utils import get_column_letter
from openpyxl.utils.dataframe import dataframe_to_rows

from calculations import DuctSizingReport, candidates_to_dataframe


@dataclass
class ExportOptions:
    """Options for Excel export"""
    include_worst_case: bool = True
    include_rectangular: bool = True
    include_aspect_ratio_table: bool = True
    include_warnings: bool = True


class DuctSizingExcelExporter:
    """Excel export for duct sizing reports"""

    def __init__(self):
        """Initialize the Excel exporter"""
        # Styling
        self.header_font = Font(bold=True, size=12, color="FFFFFF")
        self.header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
        self.subheader_font = Font(bold=True, size=11)
        self.subheader_fill = PatternFill(start_color="D9E2F3", end_color="D9E2F3", fill_type="solid")
        self.warning_font = Font(color="C00000")
        self.border = Border(
            left=Side(style='thin'), right=Side(style='thin'),
            top=Side(style='thin'), bottom=Side(style='thin')
        )

    def export_report(self, report: DuctSizingReport, export_path: str, options: ExportOptions = None) -> str:
        """
        Export a duct sizing report to Excel

        Args:
            report: DuctSizingReport to export
            export_path: Path for Excel file output
            options: Export options

        Returns:
            The path written
        """
        if options is None:
            options = ExportOptions()

        wb = openpyxl.Workbook()
        wb.remove(wb.active)

        self.create_summary_sheet(wb, report, options)
        if options.include_rectangular:
            self.create_candidates_sheet(wb, "Rectangular Options", report.rectangular,
                                         "No suitable rectangular alternative")
        if options.include_aspect_ratio_table:
            self.create_candidates_sheet(wb, "Aspect Ratio Sizes", report.aspect_equivalents,
                                         "No aspect ratio sizes")

        wb.save(export_path)
        return export_path

    def create_summary_sheet(self, wb, report: DuctSizingReport, options: ExportOptions):
        """Create sizing summary sheet"""
        ws = wb.create_sheet("Summary", 0)
        request = report.request
        rnd = report.round_result

        ws['A1'] = "Duct Sizing Summary"
        ws.merge_cells('A1:B1')
        self.apply_header_style(ws, 'A1:B1')
        ws['A2'] = "Generated"
        ws['B2'] = datetime.now().strftime("%Y-%m-%d %H:%M")

        row = 4
        row = self._write_section(ws, row, "Inputs", [
            ("Airflow (CFM)", request.cfm),
            ("Sizing Mode", request.mode.value),
            ("Friction Rate (in.wg/100ft)", request.friction_rate if request.friction_rate is not None
             else (report.worst_case.by_friction.target_value if report.worst_case else None)),
            ("Velocity (FPM)", request.velocity if request.velocity is not None
             else (report.worst_case.by_velocity.target_value if report.worst_case else None)),
            ("Insulation (in)", request.insulation),
            ("Selection Policy", request.selection_policy.value),
            ("System Type", request.system_type),
        ])

        row = self._write_section(ws, row, "Round Duct", [
            ("Nominal Diameter (in)", rnd.nominal_size),
            ("Standard Size", "Yes" if rnd.is_standard_size else "No (non-standard)"),
            ("Calculated Diameter (in)", round(rnd.raw_diameter, 2)),
            ("Interior Diameter (in)", rnd.interior_diameter),
            ("Area (sq ft)", round(rnd.area, 3)),
            ("Velocity (FPM)", round(rnd.velocity)),
            ("Friction Rate (in.wg/100ft)", round(rnd.friction_rate, 4)),
            ("Velocity OK", "Yes" if report.velocity_ok else "No"),
        ])

        if options.include_worst_case and report.worst_case:
            wc = report.worst_case
            row = self._write_section(ws, row, "Worst Case", [
                ("Size by Friction (in)", wc.by_friction.nominal_size),
                ("Size by Velocity (in)", wc.by_velocity.nominal_size),
                ("Governed By", wc.governed_by.value),
            ])

        if options.include_warnings and report.warnings:
            ws.cell(row=row, column=1, value="Warnings")
            self.apply_subheader_style(ws, f'A{row}:B{row}')
            row += 1
            for warning in report.warnings:
                cell = ws.cell(row=row, column=1, value=warning)
                cell.font = self.warning_font
                row += 1

        self.auto_size_columns(ws)

    def create_candidates_sheet(self, wb, title: str, candidates, empty_message: str):
        """Create a sheet tabulating rectangular candidates"""
        ws = wb.create_sheet(title)
        df = candidates_to_dataframe(candidates)

        if df.empty:
            ws['A1'] = empty_message
            return

        for r_idx, values in enumerate(dataframe_to_rows(df, index=False, header=True), 1):
            for c_idx, value in enumerate(values, 1):
                if isinstance(value, float):
                    value = round(value, 3)
                ws.cell(row=r_idx, column=c_idx, value=value)

        last_col = get_column_letter(len(df.columns))
        self.apply_header_style(ws, f'A1:{last_col}1')
        self.auto_size_columns(ws)

    def _write_section(self, ws, row: int, title: str, items) -> int:
        ws.cell(row=row, column=1, value=title)
        self.apply_subheader_style(ws, f'A{row}:B{row}')
        row += 1
        for label, value in items:
            if value is None:
                continue
            ws.cell(row=row, column=1, value=label)
            ws.cell(row=row, column=2, value=value)
            row += 1
        return row + 1

    def apply_header_style(self, ws, range_str):
        """Apply header styling to a range"""
        for row in ws[range_str]:
            for cell in row:
                cell.font = self.header_font
                cell.fill = self.header_fill
                cell.alignment = Alignment(horizontal='center', vertical='center')
                cell.border = self.border

    def apply_subheader_style(self, ws, range_str):
        """Apply subheader styling to a range"""
        for row in ws[range_str]:
            for cell in row:
                cell.font = self.subheader_font
                cell.fill = self.subheader_fill
                cell.alignment = Alignment(horizontal='left', vertical='center')
                cell.border = self.border

    def auto_size_columns(self, ws):
        """Auto-size all columns in worksheet"""
        for column in ws.columns:
            column_letter = get_column_letter(column[0].column)
            max_length = max((len(str(cell.value)) for cell in column if cell.value is not None), default=0)
            ws.column_dimensions[column_letter].width = min(max_length + 2, 60)

    def get_export_summary(self, report: DuctSizingReport) -> Dict[str, Any]:
        """Summary of what would be exported"""
        return {
            'nominal_size_in': report.round_result.nominal_size,
            'rectangular_options': len(report.rectangular),
            'aspect_ratio_sizes': len(report.aspect_equivalents),
            'has_worst_case': report.worst_case is not None,
            'warnings': len(report.warnings),
        }
