"""PDF export of a habit report for a date range."""

import logging
from datetime import date
from pathlib import Path

from habitflow.habits.dates import first_of_month_before, to_date_key
from habitflow.habits.models import HabitState

from .canvas import PDFCanvas
from .layout import ReportLayout

logger = logging.getLogger(__name__)


def export_filename(start: date, end: date) -> str:
    """File name embedding both date keys of the range."""
    return f"HabitFlow_Export_{to_date_key(start)}_to_{to_date_key(end)}.pdf"


def preset_range(months: int, today: date | None = None) -> tuple[date, date]:
    """Range covering the last ``months`` months up to today.

    Starts on the first day of the month ``months`` months back.
    """
    if months < 0:
        raise ValueError(f"months must be non-negative, got {months}")
    today = today or date.today()
    return first_of_month_before(today, months), today


def export_report(
    state: HabitState,
    start: date,
    end: date,
    output_dir: Path | str = ".",
) -> Path:
    """Render the report for ``start``..``end`` to a PDF file.

    Args:
        state: Snapshot to report on
        start: First day of the range (inclusive)
        end: Last day of the range (inclusive)
        output_dir: Directory for the file; created if missing

    Returns:
        Path of the written PDF

    Raises:
        ValueError: If ``start`` is after ``end``.
    """
    if start > end:
        raise ValueError(f"Export start {start} is after end {end}")

    directory = Path(output_dir).expanduser()
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(start, end)

    pdf = PDFCanvas(path)
    ReportLayout(pdf, state.habits, state.completions, state.sleep, start, end).render()
    logger.info(f"Exporting {to_date_key(start)}..{to_date_key(end)} ({len(state.habits)} habits)")
    return pdf.save()


__all__ = ["export_filename", "export_report", "preset_range"]
