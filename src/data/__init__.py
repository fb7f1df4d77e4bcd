"""
Export of duct sizing results
"""

from .excel_exporter import DuctSizingExcelExporter, ExportOptions

__all__ = [
    'DuctSizingExcelExporter',
    'ExportOptions',
]
