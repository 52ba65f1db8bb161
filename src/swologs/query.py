# Search request construction for the get command

from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Dict, Iterable, Optional

from .errors import InvalidDateTimeError, MaxTimeFlagError, MinTimeFlagError
from .timeparse import resolve_time, seconds_before

DEFAULT_MIN_TIME = "1 hour ago"
FOLLOW_LOOKBACK_SECONDS = 10
FOLLOW_DIRECTION = "forward"


@dataclass(frozen=True)
class SearchRequest:
	filter: Optional[str] = None
	group: Optional[str] = None
	start_time: Optional[str] = None
	end_time: Optional[str] = None
	direction: Optional[str] = None

	def to_params(self) -> Dict[str, str]:
		"""Query parameters for the logs endpoint, unset fields omitted."""
		params = {
			"filter": self.filter,
			"group": self.group,
			"startTime": self.start_time,
			"endTime": self.end_time,
			"direction": self.direction,
		}
		return {key: value for key, value in params.items() if value}


def _resolve_flag(value, error_cls, now, local_tz):
	try:
		return resolve_time(value, now=now, local_tz=local_tz)
	except InvalidDateTimeError as e:
		raise error_cls(value, e) from e


def build_search_request(
	terms: Optional[Iterable[str]] = None,
	group: Optional[str] = None,
	system: Optional[str] = None,
	min_time: Optional[str] = DEFAULT_MIN_TIME,
	max_time: Optional[str] = None,
	follow: bool = False,
	now: Optional[datetime] = None,
	local_tz: Optional[tzinfo] = None,
) -> SearchRequest:
	"""Build the search request from positional terms and flag values.

	The system flag adds a ``host:<system>`` term to the filter. Follow mode
	ignores min_time entirely and starts ten seconds before ``now``.
	"""
	if now is None:
		now = datetime.now(timezone.utc)

	filter_text = " ".join(terms or [])
	if system:
		filter_text = " ".join(part for part in (filter_text, f"host:{system}") if part)

	end_time = None
	if max_time:
		end_time = _resolve_flag(max_time, MaxTimeFlagError, now, local_tz)

	start_time = None
	direction = None
	if follow:
		start_time = seconds_before(now, FOLLOW_LOOKBACK_SECONDS, local_tz=local_tz)
		direction = FOLLOW_DIRECTION
	elif min_time:
		start_time = _resolve_flag(min_time, MinTimeFlagError, now, local_tz)

	return SearchRequest(
		filter=filter_text or None,
		group=group or None,
		start_time=start_time,
		end_time=end_time,
		direction=direction,
	)
