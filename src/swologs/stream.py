# Paging and live-tail polling over search results

import time
from typing import Callable, Iterator, Optional

from .api.models import Page
from .formatting import render_events
from .query import SearchRequest

POLL_INTERVAL = 2.0


def iter_pages(
	client,
	request: SearchRequest,
	follow: bool = False,
	sleep: Callable[[float], None] = time.sleep,
	log: Optional[Callable[[str], None]] = None,
) -> Iterator[Page]:
	"""Lazily yield result pages for ``request``.

	Pages are fetched one at a time while the service returns a next-page
	cursor. The walk ends when a page has no cursor or a fetch returns no
	response. In follow mode the forward-direction cursor keeps the walk at
	the tail, and an empty page pauses for POLL_INTERVAL before the next
	fetch. The iterator is not restartable.
	"""
	page = client.search_logs(request)
	while page is not None:
		if log:
			log(f"Received {len(page.events)} events, next page={page.next_page}")
		yield page
		if not page.next_page:
			break
		if follow and not page.events:
			if log:
				log(f"No new events, waiting {POLL_INTERVAL:g}s")
			sleep(POLL_INTERVAL)
		page = client.next_page(page)


def stream_results(
	client,
	request: SearchRequest,
	json_out: bool,
	follow: bool,
	echo: Callable[[str], None],
	sleep: Callable[[float], None] = time.sleep,
	log: Optional[Callable[[str], None]] = None,
) -> int:
	"""Render every page of results. Returns the number of events printed."""
	total = 0
	for page in iter_pages(client, request, follow=follow, sleep=sleep, log=log):
		total += render_events(page.events, json_out, echo)
	return total
