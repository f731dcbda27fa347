"""Time windows - partitioning records by their creation timestamp."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from django.conf import settings
from django.utils import timezone

from apps.analytics.exceptions import InvalidWindowError


@dataclass(frozen=True)
class Window:
    """
    Time interval used to select records for an aggregate.

    Windows are half-open ``[start, end)`` unless ``closed`` is set, in
    which case ``end`` itself is included (``[start, end]``). Bounds are
    validated on construction so an impossible window fails immediately
    instead of aggregating to zero.

    Attributes:
        start: First instant inside the window.
        end: Upper bound; excluded for half-open windows.
        closed: Whether ``end`` belongs to the window.
        label: Human-readable name (``today``, ``this_period``...).
    """

    start: datetime
    end: datetime
    closed: bool = False
    label: str = ''

    def __post_init__(self):
        if self.closed:
            invalid = self.end < self.start
        else:
            invalid = self.end <= self.start
        if invalid:
            raise InvalidWindowError(
                f"Invalid window bounds: end {self.end.isoformat()} "
                f"is not after start {self.start.isoformat()}"
            )

    def lookups(self, field='created_at'):
        """ORM filter kwargs selecting rows whose ``field`` is in the window."""
        upper = 'lte' if self.closed else 'lt'
        return {
            f'{field}__gte': self.start,
            f'{field}__{upper}': self.end,
        }

    def __contains__(self, moment):
        if moment < self.start:
            return False
        return moment <= self.end if self.closed else moment < self.end


def _aware(value):
    if settings.USE_TZ and timezone.is_naive(value):
        return timezone.make_aware(value)
    return value


def start_of_day(moment):
    """Midnight of ``moment``'s calendar day in the active time zone."""
    if timezone.is_aware(moment):
        moment = timezone.localtime(moment)
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_month(moment):
    return start_of_day(moment).replace(day=1)


def today(now):
    """[start_of_today, start_of_tomorrow)"""
    start = start_of_day(now)
    return Window(start, start + timedelta(days=1), label='today')


def this_period(now):
    """[start_of_current_month, now], closed at ``now``."""
    return Window(start_of_month(now), now, closed=True, label='this_period')


def previous_period(now):
    """[start_of_previous_month, start_of_current_month)"""
    current_start = start_of_month(now)
    previous_start = start_of_month(current_start - timedelta(days=1))
    return Window(previous_start, current_start, label='previous_period')


def for_month(year, month):
    """Whole calendar month ``year-month`` in the active time zone."""
    start = _aware(datetime(year, month, 1))
    if month == 12:
        end = _aware(datetime(year + 1, 1, 1))
    else:
        end = _aware(datetime(year, month + 1, 1))
    return Window(start, end, label=f'{year:04d}-{month:02d}')


def between_dates(start_date: date, end_date: date):
    """
    Window covering calendar days ``start_date`` through ``end_date``.

    Both dates are inclusive, matching a from/to date picker. A range
    whose end date precedes its start date raises ``InvalidWindowError``.
    """
    start = _aware(datetime.combine(start_date, time.min))
    end = _aware(datetime.combine(end_date + timedelta(days=1), time.min))
    return Window(start, end, label=f'{start_date.isoformat()}..{end_date.isoformat()}')
