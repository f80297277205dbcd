"""
Weekly schedule model used by the store hours editor and the public
location page.

A week is always the seven fixed days, Monday to Sunday. Both ``DayHours``
and ``WeekHours`` are immutable; every edit returns a new value which the
caller persists through the owning store record.
"""
import re
from dataclasses import dataclass, replace
from typing import Dict, List, Tuple

DAYS = [
    ('monday', 'Monday'),
    ('tuesday', 'Tuesday'),
    ('wednesday', 'Wednesday'),
    ('thursday', 'Thursday'),
    ('friday', 'Friday'),
    ('saturday', 'Saturday'),
    ('sunday', 'Sunday'),
]
DAY_KEYS = [key for key, _ in DAYS]
WEEKDAY_KEYS = ['tuesday', 'wednesday', 'thursday', 'friday']
TIME_FIELDS = ('open', 'close')

# Seeded when a closed day is re-opened
DEFAULT_OPEN = '09:00'
DEFAULT_CLOSE = '17:00'

CLOSED_LABEL = 'Closed'
NOT_SET_LABEL = 'Not Set'

TIME_PATTERN = re.compile(r'^(\d{1,2}):(\d{2})$')


@dataclass(frozen=True)
class DayHours:
    """Opening hours of a single day. ``open``/``close`` are ignored when ``closed``."""
    open: str = ''
    close: str = ''
    closed: bool = False

    def to_dict(self) -> Dict:
        return {'open': self.open, 'close': self.close, 'closed': self.closed}

    @classmethod
    def from_dict(cls, data) -> 'DayHours':
        return cls(
            open=str(data.get('open') or ''),
            close=str(data.get('close') or ''),
            closed=bool(data.get('closed', False)),
        )


def format_time(time24: str) -> str:
    """
    Convert a 24h ``HH:MM`` string to 12h display, e.g. ``13:05`` -> ``1:05 PM``.

    Midnight is ``12 AM`` and noon is ``12 PM``. Minutes are copied as given.
    Strings that do not start with a number are returned unchanged.
    """
    if not time24:
        return ''
    hours, _, minutes = time24.partition(':')
    try:
        hour = int(hours)
    except ValueError:
        return time24
    ampm = 'PM' if hour >= 12 else 'AM'
    if hour == 0:
        hour12 = 12
    elif hour > 12:
        hour12 = hour - 12
    else:
        hour12 = hour
    return f"{hour12}:{minutes} {ampm}"


def normalize_time(value: str) -> str:
    """
    Validate a ``H:MM``/``HH:MM`` time of day and return it zero padded.

    An empty string is allowed and returned as is.

    Raises:
        ValueError: If the value is not a valid time of day.
    """
    if value == '':
        return value
    match = TIME_PATTERN.match(value)
    if not match:
        raise ValueError(f"'{value}' is not a valid time, expected HH:MM.")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"'{value}' is not a valid time of day.")
    return f"{hour:02d}:{minute:02d}"


@dataclass(frozen=True)
class WeekHours:
    """
    Opening hours for the seven days of the week.

    Attributes are the lower-case day names. Editing helpers never mutate the
    instance; they return a new ``WeekHours``.
    """
    monday: DayHours
    tuesday: DayHours
    wednesday: DayHours
    thursday: DayHours
    friday: DayHours
    saturday: DayHours
    sunday: DayHours

    @classmethod
    def default(cls) -> 'WeekHours':
        weekday = DayHours(open='07:00', close='17:00')
        return cls(
            monday=weekday,
            tuesday=weekday,
            wednesday=weekday,
            thursday=weekday,
            friday=weekday,
            saturday=DayHours(open='07:00', close='12:00'),
            sunday=DayHours(closed=True),
        )

    @classmethod
    def from_dict(cls, data) -> 'WeekHours':
        """
        Build a week from stored JSON. Days missing from ``data`` take the
        default schedule's entry; unknown keys are ignored. Anything that is
        not an object reads as the default schedule.
        """
        defaults = cls.default()
        if not data or not isinstance(data, dict):
            return defaults
        return cls(**{
            day: DayHours.from_dict(data[day]) if isinstance(data.get(day), dict) else defaults.day(day)
            for day in DAY_KEYS
        })

    def to_dict(self) -> Dict[str, Dict]:
        return {day: self.day(day).to_dict() for day in DAY_KEYS}

    def day(self, day: str) -> DayHours:
        if day not in DAY_KEYS:
            raise KeyError(f"Unknown day '{day}'")
        return getattr(self, day)

    def toggle_closed(self, day: str) -> 'WeekHours':
        """
        Flip the closed flag of ``day``.

        Closing a day clears its times. Re-opening it seeds 09:00-17:00; the
        times the day had before it was closed are not restored.
        """
        current = self.day(day)
        if current.closed:
            updated = DayHours(open=DEFAULT_OPEN, close=DEFAULT_CLOSE, closed=False)
        else:
            updated = DayHours(open='', close='', closed=True)
        return replace(self, **{day: updated})

    def set_time(self, day: str, field: str, value: str) -> 'WeekHours':
        if field not in TIME_FIELDS:
            raise ValueError(f"Unknown time field '{field}', expected 'open' or 'close'.")
        return replace(self, **{day: replace(self.day(day), **{field: value})})

    def copy_to_weekdays(self, source: str = 'monday') -> 'WeekHours':
        """Overwrite Tuesday to Friday with the hours of ``source``."""
        hours = self.day(source)
        return replace(self, **{day: hours for day in WEEKDAY_KEYS})

    def copy_to_all(self, source: str = 'monday') -> 'WeekHours':
        """Overwrite every day of the week with the hours of ``source``."""
        hours = self.day(source)
        return WeekHours(**{day: hours for day in DAY_KEYS})

    def format_for_display(self, day: str) -> str:
        hours = self.day(day)
        if hours.closed:
            return CLOSED_LABEL
        if not hours.open or not hours.close:
            return NOT_SET_LABEL
        return f"{format_time(hours.open)} - {format_time(hours.close)}"

    def preview(self) -> List[Dict[str, str]]:
        """Display rows for every day, Monday first."""
        return [
            {'day': day, 'label': label, 'display': self.format_for_display(day)}
            for day, label in DAYS
        ]

    def items(self) -> List[Tuple[str, DayHours]]:
        return [(day, self.day(day)) for day in DAY_KEYS]
