"""
Weekly, daily and rotation lookup tables and the modifier chain.

A LookupContext binds the tables to one point in a program (week, day,
set number, rotation position) and turns a configured base percentage
into the effective percentage for that point:

1. Weekly entry with a per-set percentage array → the value for this set
   replaces the base entirely.
2. Otherwise weekly percentage modifier → base × modifier / 100.
3. Then daily modifier (if non-zero) → result × modifier / 100.
"""

from dataclasses import dataclass, field

from .config import MAX_LOOKUP_NAME_LENGTH, UNKNOWN_REPS
from .errors import InvalidParamsError
from .rpe_chart import RPEChart

INTENSITY_LEVELS = ("HEAVY", "LIGHT", "MEDIUM")


def _validate_name(name: str) -> None:
    if not name or not name.strip():
        raise InvalidParamsError("lookup name is required")
    if len(name) > MAX_LOOKUP_NAME_LENGTH:
        raise InvalidParamsError(
            f"lookup name must be at most {MAX_LOOKUP_NAME_LENGTH} characters"
        )


# =============================================================================
# WEEKLY
# =============================================================================


@dataclass
class WeeklyLookupEntry:
    week_number: int
    percentages: list[float] = field(default_factory=list)
    reps: list[int] = field(default_factory=list)
    percentage_modifier: float | None = None

    def __post_init__(self) -> None:
        if self.week_number < 1:
            raise InvalidParamsError(f"week number must be >= 1, got {self.week_number}")
        if self.percentages and len(self.reps) != len(self.percentages):
            raise InvalidParamsError(
                f"week {self.week_number}: reps ({len(self.reps)}) and percentages "
                f"({len(self.percentages)}) must have the same length"
            )
        if not self.percentages and self.percentage_modifier is None:
            raise InvalidParamsError(
                f"week {self.week_number}: needs percentages or a percentage modifier"
            )
        for p in self.percentages:
            if p <= 0:
                raise InvalidParamsError(f"week {self.week_number}: percentages must be positive")
        for r in self.reps:
            if r < 1:
                raise InvalidParamsError(f"week {self.week_number}: reps must be >= 1")
        if self.percentage_modifier is not None and self.percentage_modifier <= 0:
            raise InvalidParamsError(
                f"week {self.week_number}: percentage modifier must be positive"
            )

    def has_set_percentages(self) -> bool:
        return bool(self.percentages)

    def percentage_for_set(self, set_number: int) -> float | None:
        """Return the percentage for a 1-based set number, or None if out of range."""
        if 1 <= set_number <= len(self.percentages):
            return self.percentages[set_number - 1]
        return None

    def reps_for_set(self, set_number: int) -> int | None:
        if 1 <= set_number <= len(self.reps):
            return self.reps[set_number - 1]
        return None


@dataclass
class WeeklyLookup:
    name: str
    entries: list[WeeklyLookupEntry]
    program_id: str | None = None

    def __post_init__(self) -> None:
        _validate_name(self.name)
        if not self.entries:
            raise InvalidParamsError(f"weekly lookup {self.name!r} has no entries")
        seen: set[int] = set()
        for e in self.entries:
            if e.week_number in seen:
                raise InvalidParamsError(
                    f"weekly lookup {self.name!r}: duplicate week {e.week_number}"
                )
            seen.add(e.week_number)

    def get_by_week_number(self, week_number: int) -> WeeklyLookupEntry | None:
        for e in self.entries:
            if e.week_number == week_number:
                return e
        return None


# =============================================================================
# DAILY
# =============================================================================


@dataclass
class DailyLookupEntry:
    day_identifier: str
    percentage_modifier: float
    intensity_level: str | None = None

    def __post_init__(self) -> None:
        if not self.day_identifier.strip():
            raise InvalidParamsError("day identifier is required")
        if self.percentage_modifier < 0:
            raise InvalidParamsError(
                f"day {self.day_identifier!r}: percentage modifier cannot be negative"
            )
        if self.intensity_level is not None:
            self.intensity_level = self.intensity_level.upper()
            if self.intensity_level not in INTENSITY_LEVELS:
                raise InvalidParamsError(
                    f"day {self.day_identifier!r}: intensity must be one of "
                    f"{', '.join(INTENSITY_LEVELS)}"
                )


@dataclass
class DailyLookup:
    name: str
    entries: list[DailyLookupEntry]
    program_id: str | None = None

    def __post_init__(self) -> None:
        _validate_name(self.name)
        if not self.entries:
            raise InvalidParamsError(f"daily lookup {self.name!r} has no entries")
        seen: set[str] = set()
        for e in self.entries:
            key = e.day_identifier.lower()
            if key in seen:
                raise InvalidParamsError(
                    f"daily lookup {self.name!r}: duplicate day {e.day_identifier!r}"
                )
            seen.add(key)

    def get_by_day_identifier(self, day: str) -> DailyLookupEntry | None:
        """Case-insensitive lookup by day label."""
        wanted = day.lower()
        for e in self.entries:
            if e.day_identifier.lower() == wanted:
                return e
        return None


# =============================================================================
# ROTATION
# =============================================================================


@dataclass
class RotationLookupEntry:
    position: int
    lift_identifier: str
    description: str = ""

    def __post_init__(self) -> None:
        if self.position < 0:
            raise InvalidParamsError(f"rotation position must be >= 0, got {self.position}")
        if not self.lift_identifier.strip():
            raise InvalidParamsError("rotation lift identifier is required")


@dataclass
class RotationLookup:
    name: str
    entries: list[RotationLookupEntry]
    program_id: str | None = None

    def __post_init__(self) -> None:
        _validate_name(self.name)
        if not self.entries:
            raise InvalidParamsError(f"rotation lookup {self.name!r} has no entries")
        seen: set[int] = set()
        for e in self.entries:
            if e.position in seen:
                raise InvalidParamsError(
                    f"rotation lookup {self.name!r}: duplicate position {e.position}"
                )
            seen.add(e.position)

    def get_by_position(self, position: int) -> RotationLookupEntry | None:
        for e in self.entries:
            if e.position == position:
                return e
        return None

    def __len__(self) -> int:
        return len(self.entries)


# =============================================================================
# CONTEXT
# =============================================================================


@dataclass
class LookupContext:
    """
    Position within a program plus the tables that modify prescriptions there.

    week_number <= 0 disables the weekly table; an empty day_slug disables
    the daily table; set_number is 1-based (0 = not set).
    """

    week_number: int = 0
    day_slug: str = ""
    set_number: int = 0
    rotation_position: int = 0
    weekly_lookup: WeeklyLookup | None = None
    daily_lookup: DailyLookup | None = None
    rotation_lookup: RotationLookup | None = None
    rpe_chart: RPEChart | None = None

    def weekly_entry(self) -> WeeklyLookupEntry | None:
        if self.weekly_lookup is None or self.week_number <= 0:
            return None
        return self.weekly_lookup.get_by_week_number(self.week_number)

    def daily_entry(self) -> DailyLookupEntry | None:
        if self.daily_lookup is None or not self.day_slug:
            return None
        return self.daily_lookup.get_by_day_identifier(self.day_slug)

    def rotation_entry(self) -> RotationLookupEntry | None:
        if self.rotation_lookup is None:
            return None
        return self.rotation_lookup.get_by_position(self.rotation_position)

    def apply_modifiers(self, base_percentage: float) -> float:
        """Return the effective percentage after weekly then daily modifiers."""
        result = base_percentage

        weekly = self.weekly_entry()
        if weekly is not None:
            set_pct = weekly.percentage_for_set(self.set_number) if self.set_number > 0 else None
            if weekly.has_set_percentages() and set_pct is not None:
                result = set_pct
            elif weekly.percentage_modifier is not None:
                result = result * weekly.percentage_modifier / 100.0

        daily = self.daily_entry()
        # A zero daily modifier means "not configured"
        if daily is not None and daily.percentage_modifier != 0:
            result = result * daily.percentage_modifier / 100.0

        return result

    def get_reps_for_set(self) -> int:
        """Return the weekly per-set rep target, or UNKNOWN_REPS (-1)."""
        weekly = self.weekly_entry()
        if weekly is None or self.set_number <= 0:
            return UNKNOWN_REPS
        reps = weekly.reps_for_set(self.set_number)
        return UNKNOWN_REPS if reps is None else reps

    def intensity_level(self) -> str | None:
        daily = self.daily_entry()
        return daily.intensity_level if daily is not None else None

    def is_lift_in_rotation_focus(self, lift_id: str) -> bool:
        entry = self.rotation_entry()
        return entry is not None and entry.lift_identifier == lift_id

    def has_rpe_chart(self) -> bool:
        return self.rpe_chart is not None
