"""Multi-page habit report layout.

Pages, top to bottom:

1. One section per calendar month touched by the range: a habit x day
   matrix of vector check/cross glyphs, a daily completion trend line and a
   daily sleep line (0-12h), breaking onto "(Continued)" pages as needed.
2. A closing "Weekly Insights & Performance" section built on
   ``literal_week_chunks``: per-habit weekly bar charts in a two-column grid
   and one bar chart of average weekly sleep. A row of habit boxes that
   does not fit starts at the top of a "(Continued)" page rather than
   keeping its offset from the first page.

Coordinates are millimetres from the top-left of the page.
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from habitflow.habits.dates import date_range, month_label, to_date_key
from habitflow.habits.models import (
    CompletionMap,
    Habit,
    SleepMap,
    habit_color,
    is_completed,
    sleep_minutes_for,
)
from habitflow.stats.daily import EXPORT_SLEEP_AXIS_MAX, clamp_hours, count_completed, round_half_up
from habitflow.stats.weekly import (
    WeekBucket,
    habit_week_fraction,
    literal_week_chunks,
    weekly_average_sleep,
)

from .canvas import RGB, WHITE, DrawingSurface, TextAlign, hex_to_rgb

logger = logging.getLogger(__name__)

# Palette (Tailwind names)
INDIGO_700: RGB = (67, 56, 202)
INDIGO_600: RGB = (79, 70, 229)
INDIGO_100: RGB = (224, 231, 255)
SLATE_700: RGB = (51, 65, 85)
SLATE_600: RGB = (71, 85, 105)
SLATE_500: RGB = (100, 116, 139)
SLATE_200: RGB = (226, 232, 240)
SLATE_50: RGB = (248, 250, 252)
STRIPE: RGB = (245, 245, 245)
GREEN_600: RGB = (22, 163, 74)
RED_600: RGB = (220, 38, 38)
CYAN_500: RGB = (6, 182, 212)

MARGIN = 14
HEADER_HEIGHT = 22
CONTENT_TOP = 32
BOTTOM_MARGIN = 10

ROW_HEIGHT = 7
NAME_COLUMN_WIDTH = 40
NAME_MAX_CHARS = 24

CHART_LEFT = 20
CHART_HEIGHT = 40
CHART_GAP = 15

HABIT_BOX_GRAPH_HEIGHT = 25
HABIT_BOX_ROW_GAP = 20
WEEKLY_SLEEP_BLOCK = 50

WEEKLY_TITLE = "Weekly Insights & Performance"


@dataclass
class MonthChunk:
    """Consecutive days of the range that share a calendar month."""

    label: str
    dates: list[date]

    @property
    def period(self) -> str:
        """First and last date key of the chunk."""
        return f"{to_date_key(self.dates[0])} - {to_date_key(self.dates[-1])}"


def month_chunks(start: date, end: date) -> list[MonthChunk]:
    """Split a range into per-month chunks in chronological order."""
    chunks: list[MonthChunk] = []
    for day in date_range(start, end):
        label = month_label(day)
        if not chunks or chunks[-1].label != label:
            chunks.append(MonthChunk(label=label, dates=[]))
        chunks[-1].dates.append(day)
    return chunks


def _fit(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[: limit - 1] + "…"


class ReportLayout:
    """Lays out the habit report onto a drawing surface."""

    def __init__(
        self,
        surface: DrawingSurface,
        habits: Sequence[Habit],
        completions: CompletionMap,
        sleep: SleepMap,
        start: date,
        end: date,
    ) -> None:
        """Initialize the layout.

        Raises:
            ValueError: If ``start`` is after ``end``.
        """
        if start > end:
            raise ValueError(f"Report start {start} is after end {end}")
        self._surface = surface
        self._habits = list(habits)
        self._completions = completions
        self._sleep = sleep
        self._start = start
        self._end = end

    @property
    def _width(self) -> float:
        return self._surface.page_width

    @property
    def _height(self) -> float:
        return self._surface.page_height

    def render(self) -> None:
        """Draw every section of the report."""
        chunks = month_chunks(self._start, self._end)
        for index, chunk in enumerate(chunks):
            if index > 0:
                self._surface.new_page()
            self._render_month(chunk)

        self._surface.new_page()
        self._render_weekly_section()
        logger.debug(
            f"Laid out {len(chunks)} month section(s) for {len(self._habits)} habit(s)"
        )

    # --- Shared pieces ---

    def _header(self, title: str, period: str) -> None:
        s = self._surface
        s.rect(0, 0, self._width, HEADER_HEIGHT, fill=INDIGO_700)
        s.text(MARGIN, 14, title, size=16, color=WHITE, bold=True)
        s.text(
            self._width - MARGIN, 14, f"Period: {period}",
            size=10, color=INDIGO_100, align=TextAlign.RIGHT,
        )

    def _continue_page(self, title: str, period: str) -> None:
        self._surface.new_page()
        self._header(f"{title} (Continued)", period)

    def _fits(self, top: float, height: float, bottom_margin: float = BOTTOM_MARGIN) -> bool:
        return top + height <= self._height - bottom_margin

    def _section_title(self, x: float, y: float, title: str) -> None:
        self._surface.text(x, y, title, size=12, color=SLATE_700, bold=True)

    # --- Month section ---

    def _render_month(self, chunk: MonthChunk) -> None:
        title = f"Monthly Report: {chunk.label}"
        self._header(title, chunk.period)

        table_bottom = self._render_matrix(chunk, title)

        trend_top = table_bottom + CHART_GAP
        if not self._fits(trend_top, CHART_HEIGHT):
            self._continue_page(title, chunk.period)
            trend_top = CONTENT_TOP
        self._render_trend_chart(chunk, trend_top)

        sleep_top = trend_top + CHART_HEIGHT + CHART_GAP
        if not self._fits(sleep_top, CHART_HEIGHT):
            self._continue_page(title, chunk.period)
            sleep_top = CONTENT_TOP
        self._render_sleep_chart(chunk, sleep_top)

    def _render_matrix(self, chunk: MonthChunk, title: str) -> float:
        """Draw the habit x day table and return its bottom edge."""
        day_width = (self._width - 2 * MARGIN - NAME_COLUMN_WIDTH) / len(chunk.dates)
        y = CONTENT_TOP
        self._matrix_head(chunk, y, day_width)
        y += ROW_HEIGHT

        for row, habit in enumerate(self._habits):
            if not self._fits(y, ROW_HEIGHT):
                self._continue_page(title, chunk.period)
                y = CONTENT_TOP
                self._matrix_head(chunk, y, day_width)
                y += ROW_HEIGHT
            self._matrix_row(chunk, habit, row, y, day_width)
            y += ROW_HEIGHT

        return y

    def _matrix_head(self, chunk: MonthChunk, y: float, day_width: float) -> None:
        s = self._surface
        s.rect(MARGIN, y, self._width - 2 * MARGIN, ROW_HEIGHT, fill=INDIGO_700)
        baseline = y + ROW_HEIGHT / 2 + 1
        s.text(MARGIN + 1.5, baseline, "Habit", size=8, color=WHITE, bold=True)
        for i, day in enumerate(chunk.dates):
            cx = MARGIN + NAME_COLUMN_WIDTH + i * day_width + day_width / 2
            s.text(cx, baseline, str(day.day), size=8, color=WHITE, bold=True, align=TextAlign.CENTER)

    def _matrix_row(
        self, chunk: MonthChunk, habit: Habit, row: int, y: float, day_width: float
    ) -> None:
        s = self._surface
        if row % 2 == 1:
            s.rect(MARGIN, y, self._width - 2 * MARGIN, ROW_HEIGHT, fill=STRIPE)
        s.rect(MARGIN, y, NAME_COLUMN_WIDTH, ROW_HEIGHT, fill=SLATE_50, stroke=SLATE_200)
        s.text(
            MARGIN + 1.5, y + ROW_HEIGHT / 2 + 1, _fit(habit.name, NAME_MAX_CHARS),
            size=8, color=SLATE_700, bold=True,
        )

        for i, day in enumerate(chunk.dates):
            x = MARGIN + NAME_COLUMN_WIDTH + i * day_width
            s.rect(x, y, day_width, ROW_HEIGHT, stroke=SLATE_200)
            cx, cy = x + day_width / 2, y + ROW_HEIGHT / 2
            if is_completed(self._completions, habit.id, to_date_key(day)):
                self._check_glyph(cx, cy)
            else:
                self._cross_glyph(cx, cy)

    def _check_glyph(self, cx: float, cy: float) -> None:
        self._surface.line(cx - 1.5, cy, cx - 0.5, cy + 1.5, GREEN_600, 0.6)
        self._surface.line(cx - 0.5, cy + 1.5, cx + 2.5, cy - 2.5, GREEN_600, 0.6)

    def _cross_glyph(self, cx: float, cy: float, size: float = 1.2) -> None:
        self._surface.line(cx - size, cy - size, cx + size, cy + size, RED_600, 0.5)
        self._surface.line(cx + size, cy - size, cx - size, cy + size, RED_600, 0.5)

    def _chart_axes(self, top: float, left: float, width: float) -> None:
        self._surface.line(left, top, left, top + CHART_HEIGHT, SLATE_600, 0.3)
        self._surface.line(left, top + CHART_HEIGHT, left + width, top + CHART_HEIGHT, SLATE_600, 0.3)

    def _plot_line(
        self,
        chunk: MonthChunk,
        top: float,
        values: list[float],
        y_max: float,
        color: RGB,
        point_labels: list[str | None] | None = None,
    ) -> None:
        s = self._surface
        width = self._width - CHART_LEFT - MARGIN
        step = width / max(len(values) - 1, 1)
        self._chart_axes(top, CHART_LEFT, width)

        previous: tuple[float, float] | None = None
        for i, value in enumerate(values):
            x = CHART_LEFT + i * step
            y = top + CHART_HEIGHT - value / y_max * CHART_HEIGHT
            if previous is not None:
                s.line(previous[0], previous[1], x, y, color, 0.6)
            previous = (x, y)
            s.circle(x, y, 0.9, fill=color)

            label = point_labels[i] if point_labels else None
            if label:
                s.text(x, y - 2, label, size=6, color=color, align=TextAlign.CENTER)

            # Every other day plus the last one
            if i % 2 == 0 or i == len(values) - 1:
                s.text(
                    x, top + CHART_HEIGHT + 4, str(chunk.dates[i].day),
                    size=6, color=SLATE_500, align=TextAlign.CENTER,
                )

    def _render_trend_chart(self, chunk: MonthChunk, top: float) -> None:
        self._section_title(MARGIN, top - 4, "Daily Completion Trend")
        counts = [
            count_completed(self._habits, self._completions, to_date_key(d)) for d in chunk.dates
        ]
        labels: list[str | None] = [str(c) if c > 0 else None for c in counts]
        y_max = max(len(self._habits), 1)
        self._plot_line(chunk, top, [float(c) for c in counts], y_max, INDIGO_600, labels)

    def _render_sleep_chart(self, chunk: MonthChunk, top: float) -> None:
        s = self._surface
        self._section_title(MARGIN, top - 4, "Daily Sleep Tracker (Hours)")

        axis_max = EXPORT_SLEEP_AXIS_MAX
        for label, offset in ((f"{axis_max}h", 0), (f"{axis_max // 2}h", CHART_HEIGHT / 2), ("0h", CHART_HEIGHT)):
            s.text(CHART_LEFT - 2, top + offset, label, size=6, color=SLATE_500, align=TextAlign.RIGHT)

        hours = [
            clamp_hours(sleep_minutes_for(self._sleep, to_date_key(d)) / 60, axis_max)
            for d in chunk.dates
        ]
        self._plot_line(chunk, top, hours, axis_max, CYAN_500)

    # --- Weekly section ---

    def _render_weekly_section(self) -> None:
        period = f"{to_date_key(self._start)} - {to_date_key(self._end)}"
        self._header(WEEKLY_TITLE, period)
        weeks = literal_week_chunks(self._start, self._end)

        start_y = float(CONTENT_TOP)
        self._section_title(MARGIN, start_y, "Individual Habit Weekly Performance")
        start_y += 10

        row_pitch = HABIT_BOX_GRAPH_HEIGHT + HABIT_BOX_ROW_GAP
        col_width = (self._width - 2 * MARGIN) / 2 - 10

        for index, habit in enumerate(self._habits):
            col, row = index % 2, index // 2
            x = MARGIN + col * (col_width + 20)
            y = start_y + row * row_pitch

            if not self._fits(y, HABIT_BOX_GRAPH_HEIGHT, bottom_margin=20):
                self._continue_page(WEEKLY_TITLE, period)
                # Shift the origin so this row lands at the top of the new page
                start_y = CONTENT_TOP - row * row_pitch
                y = start_y + row * row_pitch

            self._habit_box(habit, index, weeks, x, y, col_width)

        rows = math.ceil(len(self._habits) / 2)
        sleep_top = start_y + rows * row_pitch + 10
        if not self._fits(sleep_top, WEEKLY_SLEEP_BLOCK):
            self._continue_page(WEEKLY_TITLE, period)
            sleep_top = CONTENT_TOP
        self._weekly_sleep_chart(weeks, sleep_top)

    def _habit_box(
        self,
        habit: Habit,
        index: int,
        weeks: list[WeekBucket],
        x: float,
        y: float,
        width: float,
    ) -> None:
        s = self._surface
        s.rounded_rect(x, y, width, HABIT_BOX_GRAPH_HEIGHT + 10, 2, fill=SLATE_50, stroke=SLATE_200)
        s.text(x + 4, y + 6, habit.name, size=10, color=SLATE_600)

        area_w = width - 10
        area_h = HABIT_BOX_GRAPH_HEIGHT - 5
        base_x, base_y = x + 5, y + 10
        bar_slot = area_w / len(weeks)
        color = hex_to_rgb(habit_color(index))

        for w_index, week in enumerate(weeks):
            fraction = habit_week_fraction(habit.id, self._completions, week)
            h = fraction * area_h
            bx = base_x + w_index * bar_slot + bar_slot * 0.1
            bw = bar_slot * 0.8
            if h > 0:
                s.rect(bx, base_y + area_h - h, bw, h, fill=color)

            s.text(bx + bw / 2, base_y + area_h + 3, f"W{w_index + 1}", size=6, color=SLATE_500, align=TextAlign.CENTER)
            if fraction > 0:
                pct = int(round_half_up(fraction * 100))
                s.text(bx + bw / 2, base_y + area_h - h - 1, f"{pct}%", size=6, color=SLATE_500, align=TextAlign.CENTER)

    def _weekly_sleep_chart(self, weeks: list[WeekBucket], top: float) -> None:
        s = self._surface
        s.text(MARGIN, top, "Weekly Sleep Analysis (Average Hours)", size=12, color=SLATE_700)

        width = self._width - 2 * MARGIN
        chart_top = top + 5
        baseline = chart_top + CHART_HEIGHT
        s.line(MARGIN, chart_top, MARGIN, baseline, SLATE_600, 0.3)
        s.line(MARGIN, baseline, MARGIN + width, baseline, SLATE_600, 0.3)

        slot = width / len(weeks)
        for w_index, week in enumerate(weeks):
            avg = weekly_average_sleep(self._sleep, week)
            h = clamp_hours(avg, EXPORT_SLEEP_AXIS_MAX) / EXPORT_SLEEP_AXIS_MAX * CHART_HEIGHT
            bx = MARGIN + w_index * slot + slot * 0.2
            bw = slot * 0.6
            cx = bx + bw / 2

            s.rect(bx, baseline - h, bw, h, fill=CYAN_500)
            s.text(cx, baseline + 5, f"Week {w_index + 1}", size=8, color=SLATE_700, align=TextAlign.CENTER)
            s.text(cx, baseline - h - 2, f"{round_half_up(avg, 1):.1f}h", size=8, color=SLATE_700, align=TextAlign.CENTER)


__all__ = ["MonthChunk", "ReportLayout", "WEEKLY_TITLE", "month_chunks"]
