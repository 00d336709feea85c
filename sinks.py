"""Network destination for log lines."""

from __future__ import annotations

import requests


class HttpLineSink:
    """Text stream that POSTs every written line to an HTTP endpoint.

    Each write is one synchronous request; nothing is buffered or retried.
    """

    def __init__(self, url: str, session: requests.Session | None = None, timeout: float = 10.0) -> None:
        self.url = url
        self.timeout = timeout
        self._owns_session = session is None
        self._session = session or requests.Session()

    def write(self, text: str) -> int:
        """Send one line.

        Args:
            text: Line text, including its terminator.

        Returns:
            Number of characters written.

        Raises:
            requests.RequestException: If the request fails or returns an error status.
        """
        resp = self._session.post(
            self.url,
            data=text.encode("utf-8"),
            headers={"Content-Type": "text/plain; charset=utf-8"},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return len(text)

    def flush(self) -> None:
        pass

    def close(self) -> None:
        if self._owns_session:
            self._session.close()
