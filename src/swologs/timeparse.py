# Time expression resolution for --min-time / --max-time

import re
from collections import namedtuple
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional

import dateparser

from .errors import InvalidDateTimeError

UTC_SUFFIX = " UTC"

# fill: None, "year" (layout has no year) or "date" (layout has no date)
TimeLayout = namedtuple("TimeLayout", ["name", "fmt", "fill"])

# Tried in order; the first layout that parses wins.
TIME_LAYOUTS = [
	TimeLayout("layout", "%m/%d %I:%M:%S%p '%y %z", None),
	TimeLayout("ansic", "%a %b %d %H:%M:%S %Y", None),
	TimeLayout("unix_date", "%a %b %d %H:%M:%S %Z %Y", None),
	TimeLayout("ruby_date", "%a %b %d %H:%M:%S %z %Y", None),
	TimeLayout("rfc822", "%d %b %y %H:%M %Z", None),
	TimeLayout("rfc822z", "%d %b %y %H:%M %z", None),
	TimeLayout("rfc850", "%A, %d-%b-%y %H:%M:%S %Z", None),
	TimeLayout("rfc1123", "%a, %d %b %Y %H:%M:%S %Z", None),
	TimeLayout("rfc1123z", "%a, %d %b %Y %H:%M:%S %z", None),
	TimeLayout("rfc3339", "%Y-%m-%dT%H:%M:%S%z", None),
	TimeLayout("rfc3339_nano", "%Y-%m-%dT%H:%M:%S.%f%z", None),
	TimeLayout("kitchen", "%I:%M%p", "date"),
	TimeLayout("stamp", "%b %d %H:%M:%S", "year"),
	TimeLayout("stamp_fraction", "%b %d %H:%M:%S.%f", "year"),
	TimeLayout("date_time", "%Y-%m-%d %H:%M:%S", None),
	TimeLayout("date_only", "%Y-%m-%d", None),
	TimeLayout("time_only", "%H:%M:%S", "date"),
]

_LONG_FRACTION = re.compile(r"(:\d{2}\.\d{6})\d+")
_ZONE_ABBREVIATION = re.compile(r"^[A-Z][A-Za-z]{2,4}$")


def local_timezone() -> tzinfo:
	return datetime.now().astimezone().tzinfo


def format_rfc3339(value: datetime) -> str:
	"""Render an aware datetime as RFC 3339 at second precision."""
	offset = value.utcoffset()
	base = value.strftime("%Y-%m-%dT%H:%M:%S")
	if not offset:
		return base + "Z"
	total = int(offset.total_seconds())
	sign = "+" if total >= 0 else "-"
	hours, minutes = divmod(abs(total) // 60, 60)
	return f"{base}{sign}{hours:02d}:{minutes:02d}"


def parse_rfc3339(value: str) -> datetime:
	"""Parse an RFC 3339 timestamp, with or without fractional seconds."""
	value = _LONG_FRACTION.sub(r"\1", value)
	fmt = "%Y-%m-%dT%H:%M:%S.%f%z" if "." in value else "%Y-%m-%dT%H:%M:%S%z"
	return datetime.strptime(value, fmt)


def _zone_for_abbreviation(abbreviation: str, location: tzinfo, now: datetime) -> tzinfo:
	if abbreviation in ("UTC", "GMT"):
		return timezone.utc
	if now.astimezone(location).tzname() == abbreviation:
		return location
	# Unknown abbreviations carry no offset information.
	return timezone.utc


def _parse_layout(value: str, layout: TimeLayout, location: tzinfo, now: datetime) -> datetime:
	fmt = layout.fmt
	abbreviation = None
	if "%Z" in fmt:
		fmt_fields = fmt.split(" ")
		value_fields = value.split()
		if len(fmt_fields) != len(value_fields):
			raise ValueError(f"{value!r} does not match {layout.name}")
		position = fmt_fields.index("%Z")
		abbreviation = value_fields.pop(position)
		fmt_fields.pop(position)
		if not _ZONE_ABBREVIATION.match(abbreviation):
			raise ValueError(f"{abbreviation!r} is not a zone abbreviation")
		fmt = " ".join(fmt_fields)
		value = " ".join(value_fields)

	local_now = now.astimezone(location)
	if layout.fill == "year":
		value = f"{value} {local_now.year}"
		fmt = f"{fmt} %Y"
	elif layout.fill == "date":
		value = f"{local_now:%Y-%m-%d} {value}"
		fmt = f"%Y-%m-%d {fmt}"

	parsed = datetime.strptime(value, fmt)
	if abbreviation is not None:
		parsed = parsed.replace(tzinfo=_zone_for_abbreviation(abbreviation, location, now))
	if parsed.tzinfo is None:
		parsed = parsed.replace(tzinfo=location)
	return parsed


def _parse_relative(value: str, location: tzinfo, now: datetime) -> Optional[datetime]:
	base = now.astimezone(location).replace(tzinfo=None)
	parsed = dateparser.parse(value, languages=["en"], settings={"RELATIVE_BASE": base})
	if parsed is None:
		return None
	if parsed.tzinfo is None:
		return parsed.replace(tzinfo=location)
	return parsed


def resolve_time(value: str, now: Optional[datetime] = None, local_tz: Optional[tzinfo] = None) -> str:
	"""Resolve an absolute or relative time expression to an RFC 3339 string.

	A trailing " UTC" forces UTC interpretation; otherwise the local timezone
	is used. Absolute layouts are tried in TIME_LAYOUTS order before falling
	back to English relative phrases ("5 seconds ago", "yesterday at noon"),
	which are evaluated against ``now`` rather than the wall clock.

	Raises InvalidDateTimeError when nothing matches.
	"""
	location = local_tz or local_timezone()
	if value.endswith(UTC_SUFFIX):
		location = timezone.utc
		value = value[:-len(UTC_SUFFIX)]
	if now is None:
		now = datetime.now(timezone.utc)
	elif now.tzinfo is None:
		now = now.replace(tzinfo=location)

	candidate = _LONG_FRACTION.sub(r"\1", value.strip())
	for layout in TIME_LAYOUTS:
		try:
			parsed = _parse_layout(candidate, layout, location, now)
		except ValueError:
			continue
		return format_rfc3339(parsed.astimezone(location))

	parsed = _parse_relative(value, location, now)
	if parsed is None:
		raise InvalidDateTimeError(f"Could not parse timestamp: {value!r}")
	return format_rfc3339(parsed.astimezone(location))


def seconds_before(now: datetime, seconds: int, local_tz: Optional[tzinfo] = None) -> str:
	"""RFC 3339 rendering of ``now - seconds`` in the local timezone."""
	location = local_tz or local_timezone()
	return format_rfc3339((now - timedelta(seconds=seconds)).astimezone(location))
