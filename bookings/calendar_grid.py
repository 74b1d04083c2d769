"""Month grid for the date picker of the reservation flow."""
import datetime
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .utils.formatting import (
    add_months,
    as_date,
    days_in_month,
    end_of_month,
    is_same_day,
    start_of_month,
    weekday_monday_first,
)

logger = logging.getLogger(__name__)

WEEKDAY_LABELS = ('L', 'M', 'X', 'J', 'V', 'S', 'D')


@dataclass(frozen=True)
class CalendarCell:
    date: datetime.date
    in_current_month: bool
    is_disabled: bool
    is_selected: bool
    is_today: bool

    @property
    def day(self):
        """Day number shown in the cell, None for filler cells."""
        return self.date.day if self.in_current_month else None


@dataclass(frozen=True)
class MonthGrid:
    view_month: datetime.date
    cells: Tuple[CalendarCell, ...]
    can_go_prev: bool
    can_go_next: bool = True

    @property
    def weeks(self):
        return [self.cells[i:i + 7] for i in range(0, len(self.cells), 7)]

    @property
    def prev_month(self):
        return add_months(self.view_month, -1)

    @property
    def next_month(self):
        return add_months(self.view_month, 1)


def can_go_prev(view_month, min_date=None):
    """The previous month is reachable unless it ends before min_date."""
    if min_date is None:
        return True
    prev_end = end_of_month(add_months(view_month, -1))
    return prev_end >= as_date(min_date)


def build_month_grid(view_month, *, today, selected_date=None, min_date=None):
    """
    Lay out the displayed month as complete Monday-first weeks.

    Leading cells belong to the previous month and trailing cells to the
    next one; both are rendered empty and disabled. In-month days before
    min_date are disabled too.
    """
    month_start = start_of_month(view_month)
    today = as_date(today)
    selected_date = as_date(selected_date)
    min_date = as_date(min_date)

    dim = days_in_month(month_start)
    leading = weekday_monday_first(month_start)
    total_cells = -(-(leading + dim) // 7) * 7

    cells = []
    for idx in range(total_cells):
        day_num = idx - leading + 1
        in_month = 1 <= day_num <= dim
        cell_date = month_start + datetime.timedelta(days=day_num - 1)

        is_disabled = not in_month or (min_date is not None and cell_date < min_date)
        selected = in_month and is_same_day(cell_date, selected_date)
        is_today = in_month and not selected and is_same_day(cell_date, today)

        cells.append(CalendarCell(
            date=cell_date,
            in_current_month=in_month,
            is_disabled=is_disabled,
            is_selected=selected,
            is_today=is_today,
        ))

    return MonthGrid(
        view_month=month_start,
        cells=tuple(cells),
        can_go_prev=can_go_prev(month_start, min_date),
    )


def parse_month(value) -> Optional[datetime.date]:
    """'2026-10' -> date(2026, 10, 1); None when the value is not a month."""
    if not value:
        return None
    try:
        return datetime.datetime.strptime(value, '%Y-%m').date()
    except ValueError:
        logger.debug(f"Ignoring invalid month parameter: {value!r}")
        return None


def resolve_view_month(requested=None, selected_date=None, min_date=None, today=None):
    """
    Pick the month to display.

    An explicit month wins, but never earlier than min_date's month. Without
    one the grid follows the selected date, then today.
    """
    if requested is not None:
        month = start_of_month(requested)
        if min_date is not None and month < start_of_month(min_date):
            return start_of_month(min_date)
        return month
    if selected_date is not None:
        return start_of_month(selected_date)
    return start_of_month(today or datetime.date.today())
