"""
Overpass API client

Handles communication with Overpass API including:
- Throttling (shared RequestThrottle)
- Opt-in retry on timeouts, 429 and 504
- Error handling
"""

import time
from typing import Optional

import requests
from loguru import logger

from ..config import APIConfig, get_config
from ..errors import DataShapeError, FetchError
from ..models import OverpassResponse
from .parser import ResponseParser
from .throttle import RequestThrottle


class OverpassAPIClient:
    """Client for interacting with Overpass API"""

    def __init__(
        self,
        throttle: Optional[RequestThrottle] = None,
        api_config: Optional[APIConfig] = None,
        session: Optional[requests.Session] = None
    ):
        self.api = api_config or get_config().api
        self.overpass_url = self.api.overpass_url
        self.timeout = self.api.map_timeout_s
        self.throttle = throttle or RequestThrottle(
            self.api.min_request_interval_s, self.api.max_queue
        )
        self.session = session or requests.Session()
        self.parser = ResponseParser()

    def _post(self, query: str) -> requests.Response:
        headers = {
            "User-Agent": self.api.user_agent,
            "Referer": self.api.referer,
            "Content-Type": "application/x-www-form-urlencoded",
        }
        response = self.session.post(
            self.overpass_url,
            data={"data": query},
            headers=headers,
            timeout=self.timeout
        )
        response.raise_for_status()
        return response

    def query(self, query: str) -> OverpassResponse:
        """
        Execute an Overpass QL query

        Args:
            query: Overpass QL query string

        Returns:
            Parsed Overpass response

        Raises:
            FetchError: If the request fails (after `max_retries` attempts)
            DataShapeError: If the response is not a valid `out geom` payload
        """
        max_retries = self.api.max_retries
        retry_delay = self.api.retry_delay

        for attempt in range(max_retries):
            is_last = attempt == max_retries - 1
            try:
                response = self.throttle.submit(self._post, query)
                break
            except requests.exceptions.Timeout as e:
                if is_last:
                    logger.error(f"Overpass timeout after {max_retries} attempts")
                    raise FetchError(f"Overpass API timeout after {max_retries} attempts") from e
                wait_time = retry_delay * (attempt + 1)
                logger.warning(f"Overpass timeout (attempt {attempt + 1}/{max_retries}). Retrying in {wait_time}s...")
                time.sleep(wait_time)
            except requests.exceptions.HTTPError as e:
                status = e.response.status_code if e.response is not None else None
                if status in (429, 504) and not is_last:
                    wait_time = retry_delay * (attempt + 1)
                    logger.warning(f"Overpass {status} (attempt {attempt + 1}/{max_retries}). Retrying in {wait_time}s...")
                    time.sleep(wait_time)
                    continue
                logger.error(f"Overpass HTTP {status} after {attempt + 1} attempts")
                raise FetchError(f"Overpass API HTTP error {status}") from e
            except requests.exceptions.RequestException as e:
                if is_last:
                    logger.error(f"Overpass request failed after {max_retries} attempts: {e}")
                    raise FetchError(f"Overpass API request failed: {e}") from e
                logger.warning(f"Overpass request failed (attempt {attempt + 1}): {e}")
                time.sleep(retry_delay * (attempt + 1))

        try:
            data = response.json()
        except ValueError as e:
            raise DataShapeError(f"Overpass response is not JSON: {e}") from e

        result = self.parser.parse_overpass(data)
        logger.info(f"Fetched {len(result.elements)} elements")
        return result
