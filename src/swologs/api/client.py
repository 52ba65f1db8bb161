# Log service client - using stdlib urllib for fast imports

import json
import urllib.error
import urllib.parse
import urllib.request
from typing import Dict, Optional

from ..config import SwoConfig
from ..errors import AuthenticationError, ConnectionFailedError, ServiceError
from ..query import SearchRequest
from .models import Page

LOGS_PATH = "/v1/logs"
SKIP_TOKEN_PARAM = "skipToken"


def skip_token_from_cursor(cursor: str) -> str:
	"""Extract the skip token from a next-page cursor.

	The service hands back either a path such as
	``/v1/logs?skipToken=abc&direction=forward`` or a bare token.
	"""
	query = urllib.parse.urlparse(cursor).query
	if query:
		values = urllib.parse.parse_qs(query).get(SKIP_TOKEN_PARAM)
		if values:
			return values[0]
	return cursor


class SwoClient:
	"""Minimal client for the log search endpoint."""

	def __init__(self, api_url, token, timeout=30):
		self.base_url = api_url.rstrip("/")
		self.timeout = timeout
		self.headers = {
			"Authorization": f"Bearer {token}",
			"Accept": "application/json",
		}

	def _request(self, path, params: Optional[Dict[str, str]] = None):
		"""GET a path and decode the JSON body. Returns None for an empty body."""
		url = f"{self.base_url}{path}"
		if params:
			url += "?" + urllib.parse.urlencode(params)
		req = urllib.request.Request(url, headers=self.headers, method="GET")
		try:
			with urllib.request.urlopen(req, timeout=self.timeout) as resp:
				body = resp.read()
		except urllib.error.HTTPError as e:
			if e.code in (401, 403):
				raise AuthenticationError(f"Authentication failed (HTTP {e.code})")
			raise ServiceError(f"Log service error: HTTP {e.code} - {e.reason}", status=e.code)
		except urllib.error.URLError as e:
			raise ConnectionFailedError(f"Cannot connect to {self.base_url}: {e.reason}")
		try:
			raw = body.decode("utf-8")
			if not raw.strip():
				return None
			return json.loads(raw)
		except ValueError as e:
			# UnicodeDecodeError is a ValueError
			raise ServiceError(f"Log service returned invalid JSON: {e}") from e

	def _search(self, request: SearchRequest, skip_token=None) -> Optional[Page]:
		params = request.to_params()
		if skip_token:
			params[SKIP_TOKEN_PARAM] = skip_token
		data = self._request(LOGS_PATH, params)
		if data is None:
			return None
		if not isinstance(data, dict):
			raise ServiceError(f"Log service returned {type(data).__name__}")
		return Page.from_response(data, request)

	def search_logs(self, request: SearchRequest) -> Optional[Page]:
		"""Run a search and return its first page."""
		return self._search(request)

	def next_page(self, page: Page) -> Optional[Page]:
		"""Fetch the page after ``page``, or None when there is no cursor."""
		if not page.next_page:
			return None
		return self._search(page.request or SearchRequest(), skip_token_from_cursor(page.next_page))


def get_client(cfg: SwoConfig) -> SwoClient:
	return SwoClient(api_url=cfg.api_url, token=cfg.token, timeout=cfg.timeout)
