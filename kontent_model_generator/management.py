"""Management API client fetching the schema of a project.

Only the endpoints needed for model generation are covered: content
types, content type snippets and taxonomy groups.
"""

from typing import Any, Dict, Iterator, List, Optional

import requests

from .codegen.core.schema import SchemaSnapshot, parse_snapshot
from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://manage.kontent.ai/v2"
CONTINUATION_HEADER = "x-continuation"


class ManagementClientError(Exception):
    """Raised when the Management API cannot be queried."""

    pass


class ManagementClient:
    """Thin requests-based client for the Kontent.ai Management API."""

    def __init__(
        self,
        project_id: str,
        api_key: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = 30,
        session: requests.Session | None = None,
    ) -> None:
        if not project_id:
            raise ManagementClientError("Project id is required")

        self.project_id = project_id
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        if api_key:
            self.session.headers["Authorization"] = f"Bearer {api_key}"
        self.session.headers.setdefault("Accept", "application/json")

    def _url(self, path: str) -> str:
        return f"{self.base_url}/projects/{self.project_id}/{path}"

    def _get(self, url: str, continuation: Optional[str] = None) -> requests.Response:
        headers = {CONTINUATION_HEADER: continuation} if continuation else {}
        logger.debug(f"GET {url}")

        try:
            response = self.session.get(url, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            return response
        except requests.exceptions.Timeout:
            logger.error(f"Request timeout for URL: {url}")
            raise ManagementClientError(f"Request timeout for URL: {url}")
        except requests.exceptions.ConnectionError as e:
            logger.error(f"Connection error for URL {url}: {e}")
            raise ManagementClientError(f"Connection error for URL: {url}") from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            logger.error(f"HTTP error {status} for URL: {url}")
            raise ManagementClientError(f"HTTP error {status} for URL: {url}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error for URL {url}: {e}", exc_info=True)
            raise ManagementClientError(f"Request error for URL {url}: {e}") from e

    def _list(self, path: str, key: str) -> Iterator[Dict[str, Any]]:
        """Yield every item of a paginated listing endpoint."""
        url = self._url(path)
        continuation = None

        while True:
            response = self._get(url, continuation)
            try:
                payload = response.json()
            except ValueError as e:
                raise ManagementClientError(f"Invalid JSON response from URL {url}: {e}") from e

            yield from payload.get(key) or []

            pagination = payload.get("pagination") or {}
            continuation = pagination.get("continuation_token") or response.headers.get(
                CONTINUATION_HEADER
            )
            if not continuation:
                break

    def list_content_types(self) -> List[Dict[str, Any]]:
        return list(self._list("types", "types"))

    def list_snippets(self) -> List[Dict[str, Any]]:
        return list(self._list("snippets", "snippets"))

    def list_taxonomies(self) -> List[Dict[str, Any]]:
        return list(self._list("taxonomies", "taxonomies"))

    def fetch_raw_snapshot(self) -> Dict[str, Any]:
        """Fetch the raw schema lists as returned by the API."""
        raw = {
            "types": self.list_content_types(),
            "snippets": self.list_snippets(),
            "taxonomies": self.list_taxonomies(),
            "metadata": {"project_id": self.project_id},
        }
        logger.info(
            f"Fetched {len(raw['types'])} types, {len(raw['snippets'])} snippets "
            f"and {len(raw['taxonomies'])} taxonomies for project {self.project_id}"
        )
        return raw

    def fetch_snapshot(self) -> SchemaSnapshot:
        """Fetch and parse the schema of the project."""
        return parse_snapshot(self.fetch_raw_snapshot())
