import math
from datetime import date, datetime

from BackEnd.core.errors import InvalidDuration

HOUR = 3600

def local_today_str(now=None):
	"""Return local date as YYYY-MM-DD string."""
	return (now or datetime.now()).date().isoformat()

def local_time_str(now=None):
	"""Return local wall-clock time as HH:MM:SS."""
	return (now or datetime.now()).strftime("%H:%M:%S")

def format_countdown(remaining) -> str:
	"""Format remaining seconds as MM:SS, never below 00:00."""
	remaining = max(0, remaining)
	minutes = int(remaining // 60)
	seconds = int(remaining % 60)
	return f"{minutes:02}:{seconds:02}"

def format_time(seconds) -> str:
	"""Human readable total, picking the unit by magnitude.

	Below a minute the unit is always plural ("1 seconds"); the larger
	units are singular only for exactly one.
	"""
	seconds = int(seconds or 0)
	if seconds < 60:
		return f"{seconds} seconds"
	if seconds < HOUR:
		value, unit = seconds // 60, "minute"
	elif seconds < 24 * HOUR:
		value, unit = seconds // HOUR, "hour"
	else:
		value, unit = seconds // (24 * HOUR), "day"
	return f"{value} {unit}" if value == 1 else f"{value} {unit}s"

def parse_minutes(text) -> float:
	"""Turn the prompt answer (minutes, may be fractional) into seconds."""
	try:
		minutes = float(str(text).strip())
	except (TypeError, ValueError):
		raise InvalidDuration(f"Not a number of minutes: {text!r}") from None
	if not math.isfinite(minutes) or minutes <= 0:
		raise InvalidDuration(f"Duration must be positive, got {text!r}")
	return minutes * 60

def heat_level(total_seconds) -> int:
	"""Bucket a day's total into a 0-4 heatmap intensity."""
	if total_seconds > 7 * HOUR:
		return 4
	if total_seconds > 5 * HOUR:
		return 3
	if total_seconds > 3 * HOUR:
		return 2
	if total_seconds > 1 * HOUR:
		return 1
	return 0

def is_leap_year(year: int) -> bool:
	return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)

def days_in_year(year: int) -> int:
	return 366 if is_leap_year(year) else 365

def fill_year(daily_totals, year: int) -> list:
	"""Expand sparse (day, seconds) rows into one slot per calendar day of year."""
	slots = [0] * days_in_year(year)
	first = date(year, 1, 1)
	for day, seconds in daily_totals:
		d = date.fromisoformat(day)
		if d.year != year:
			continue
		slots[(d - first).days] += int(seconds or 0)
	return slots

def year_heat_levels(daily_totals, year: int) -> list:
	return [heat_level(s) for s in fill_year(daily_totals, year)]
