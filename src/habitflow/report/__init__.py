"""Report module for HabitFlow.

Lays out multi-page habit reports and exports them as PDF.
"""

from .canvas import DrawingSurface, PDFCanvas, TextAlign
from .export import export_filename, export_report, preset_range
from .layout import ReportLayout, month_chunks
from .mock import RecordingCanvas

__all__ = [
    "DrawingSurface",
    "PDFCanvas",
    "RecordingCanvas",
    "ReportLayout",
    "TextAlign",
    "export_filename",
    "export_report",
    "month_chunks",
    "preset_range",
]
