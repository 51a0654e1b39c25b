"""Client for a remote JavaScript compression API."""
from __future__ import annotations

import httpx

from assetmin.config import HttpTimeout
from assetmin.errors import RemoteCompressionError

TOPTAL_ENDPOINT = "https://www.toptal.com/developers/javascript-minifier/api/raw"


class RemoteCompressor:
    """POSTs script text as the ``input`` form field and returns the response body.

    Any endpoint with the same contract works; the Toptal minifier is the default.
    """

    def __init__(
        self,
        endpoint: str = TOPTAL_ENDPOINT,
        timeout: HttpTimeout | None = None,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        self.endpoint = endpoint
        t = timeout or HttpTimeout()
        self._client = client or httpx.Client(
            timeout=httpx.Timeout(
                connect=t.connect, read=t.request, write=t.request, pool=t.connect
            ),
        )

    def compress(self, text: str) -> str:
        """Raises RemoteCompressionError on transport failure or a non-2xx status."""
        try:
            resp = self._client.post(self.endpoint, data={"input": text})
        except httpx.TimeoutException as exc:
            raise RemoteCompressionError(f"Request timed out: {exc}", cause=exc) from exc
        except httpx.HTTPError as exc:
            raise RemoteCompressionError(str(exc), cause=exc) from exc

        if resp.status_code >= 300:
            raise RemoteCompressionError(
                f"Compression API returned HTTP {resp.status_code}: {resp.text[:200]}",
                status_code=resp.status_code,
            )
        return resp.text

    def close(self) -> None:
        self._client.close()
