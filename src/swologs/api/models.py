# Response models for the logs endpoint

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..errors import ServiceError
from ..query import SearchRequest


@dataclass(frozen=True)
class LogEvent:
	time: str
	hostname: str
	program: str
	message: str
	id: Optional[str] = None
	severity: Optional[str] = None

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "LogEvent":
		return cls(
			time=data.get("time") or "",
			hostname=data.get("hostname") or "",
			program=data.get("program") or "",
			message=data.get("message") or "",
			id=data.get("id"),
			severity=data.get("severity"),
		)

	def to_dict(self) -> Dict[str, Any]:
		return {
			"id": self.id,
			"time": self.time,
			"message": self.message,
			"hostname": self.hostname,
			"severity": self.severity,
			"program": self.program,
		}


@dataclass
class Page:
	"""One page of search results.

	``next_page`` is the service's cursor for the following page; ``request``
	is the search that produced this page and is reused to fetch the next one.
	"""
	events: List[LogEvent] = field(default_factory=list)
	next_page: Optional[str] = None
	request: Optional[SearchRequest] = None

	@classmethod
	def from_response(cls, data: Dict[str, Any], request: SearchRequest) -> "Page":
		"""Build a page from a decoded response body.

		Raises ServiceError when ``logs`` is not a list or ``pageInfo`` is not
		a mapping.
		"""
		logs = data.get("logs")
		if logs is None:
			logs = []
		if not isinstance(logs, list):
			raise ServiceError(f"Log service returned logs as {type(logs).__name__}")
		page_info = data.get("pageInfo")
		if page_info is None:
			page_info = {}
		if not isinstance(page_info, dict):
			raise ServiceError(f"Log service returned pageInfo as {type(page_info).__name__}")
		next_page = page_info.get("nextPage") or None
		if next_page is not None and not isinstance(next_page, str):
			raise ServiceError(f"Log service returned nextPage as {type(next_page).__name__}")
		return cls(
			events=[LogEvent.from_dict(item) for item in logs if isinstance(item, dict)],
			next_page=next_page,
			request=request,
		)
