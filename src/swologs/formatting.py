# Rendering of log events for terminal output

import json
from typing import Callable, Iterable

from .api.models import LogEvent
from .errors import RenderError
from .timeparse import parse_rfc3339

DISPLAY_TIME_FORMAT = "%b %d %H:%M:%S"


def format_timestamp(value: str) -> str:
	"""Reformat a wire timestamp as e.g. ``May 13 13:00:00`` in its own offset."""
	try:
		parsed = parse_rfc3339(value)
	except (TypeError, ValueError) as e:
		raise RenderError(f"invalid event timestamp {value!r}: {e}") from e
	return parsed.strftime(DISPLAY_TIME_FORMAT)


def format_event(event: LogEvent) -> str:
	return f"{format_timestamp(event.time)} {event.hostname} {event.program} {event.message}"


def event_to_json(event: LogEvent) -> str:
	try:
		return json.dumps(event.to_dict(), separators=(",", ":"))
	except (TypeError, ValueError) as e:
		raise RenderError(f"failed to serialize event: {e}") from e


def render_events(events: Iterable[LogEvent], json_out: bool, echo: Callable[[str], None]) -> int:
	"""Emit one line per event in the order received. Returns the count."""
	count = 0
	for event in events:
		echo(event_to_json(event) if json_out else format_event(event))
		count += 1
	return count
