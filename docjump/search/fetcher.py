"""
Result Fetcher - Query the remote search service for artifacts.

One GET per fetch(), no retry and no cancellation. The request runs on a
background thread so the main loop never blocks; the callback is handed to
`deliver` (GLib.idle_add in the panel) to get back onto the event thread.

Ordering between concurrent fetches is NOT handled here. The selection
state drops stale completions by sequence number.
"""

import threading
from typing import Callable, Optional

import requests
from loguru import logger

from .models import Result, ResultSet

DEFAULT_ENDPOINT = "https://clojars.org/search"


class FetchError(Exception):
    """The search request failed or returned an unusable body."""


def _call_now(fn: Callable, *args) -> None:
    fn(*args)


class ResultFetcher:
    """
    Issues search requests and parses the `results` list.

    Args:
        endpoint: Search URL; the query goes in the `q` parameter
        timeout: Request timeout in seconds
        max_results: Keep at most this many rows (None = all)
        deliver: Callable(fn, *args) that runs fn on the event thread
        background: Run requests on a daemon thread (False = inline)
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = 5.0,
        max_results: Optional[int] = None,
        deliver: Callable = _call_now,
        background: bool = True,
    ):
        self.endpoint = endpoint
        self.timeout = timeout
        self.max_results = max_results
        self.deliver = deliver
        self.background = background

    def fetch(self, query: str, on_results: Callable[[ResultSet], None]) -> None:
        """
        Start one request for query; on success deliver the ResultSet.

        Failures are logged and on_results is never called for them.
        """
        if self.background:
            threading.Thread(
                target=self._run, args=(query, on_results), daemon=True
            ).start()
        else:
            self._run(query, on_results)

    def _run(self, query: str, on_results: Callable[[ResultSet], None]) -> None:
        try:
            results = self.search(query)
        except FetchError as e:
            logger.warning(f"Search for '{query}' failed: {e}")
            return
        self.deliver(on_results, results)

    def search(self, query: str) -> ResultSet:
        """
        Perform the request synchronously.

        Raises:
            FetchError: transport error, HTTP error status, or bad body
        """
        try:
            response = requests.get(
                self.endpoint,
                params={"q": query, "format": "json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            body = response.json()
        except requests.RequestException as e:
            raise FetchError(str(e)) from e
        except ValueError as e:
            raise FetchError(f"invalid JSON: {e}") from e

        return self._parse(body)

    def _parse(self, body) -> ResultSet:
        """Convert a decoded response body into a ResultSet."""
        if not isinstance(body, dict) or not isinstance(body.get("results"), list):
            raise FetchError("response has no 'results' list")

        results = []
        for record in body["results"]:
            result = Result.from_json(record)
            if result is None:
                logger.warning(f"Skipping malformed search record: {record!r:.120}")
                continue
            results.append(result)
            if self.max_results is not None and len(results) >= self.max_results:
                break

        logger.debug(f"Parsed {len(results)} results")
        return tuple(results)
