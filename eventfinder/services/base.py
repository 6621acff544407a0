"""
Shared plumbing for the third-party API clients
"""
import logging
from typing import Any, Dict, Optional

import requests

from eventfinder import __version__
from eventfinder.exceptions import UpstreamException

logger = logging.getLogger("main")

USER_AGENT = f"EventFinder/{__version__}"


class UpstreamClient:
    """Base client: one requests.Session, one timeout, one provider name"""

    provider = "upstream"

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = 10):
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})
        self.timeout = timeout

    def _request_json(
        self,
        method: str,
        url: str,
        failure_message: str,
        params: Optional[Dict] = None,
        headers: Optional[Dict] = None,
        data: Any = None,
    ) -> Any:
        """
        Issue one request and decode its JSON body.

        No retries. Any transport error, non-2xx status or undecodable body is
        raised as UpstreamException carrying the provider status when known.
        """
        try:
            response = self.session.request(
                method, url, params=params, headers=headers, data=data, timeout=self.timeout
            )
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            status = e.response.status_code if e.response is not None else None
            details = _error_details(e.response)
            logger.error(f"{self.provider} request failed ({method} {url}): status={status} error={e} details={details}")
            raise UpstreamException(failure_message, provider=self.provider, upstream_status=status, details=details)
        except ValueError as e:
            logger.error(f"{self.provider} returned malformed JSON ({method} {url}): {e}")
            raise UpstreamException(failure_message, provider=self.provider)


def _error_details(response):
    if response is None:
        return None
    try:
        return response.json()
    except ValueError:
        return (response.text or "")[:400]
