"""Client for the remote categorization service."""

import json
import time
from typing import Any

import httpx

from .exceptions import CategorizationServiceError
from .log import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30.0


def extract_json_object(text: str) -> dict[str, Any]:
    """Decode a JSON object, tolerating prose around it.

    Model output sometimes wraps the object in explanation or code fences; the
    outermost ``{...}`` span is tried when the text itself is not valid JSON.

    Raises:
        CategorizationServiceError: If no JSON object can be recovered
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end <= start:
            raise CategorizationServiceError("No JSON object found in service response") from None
        try:
            data = json.loads(text[start : end + 1])
        except json.JSONDecodeError as e:
            raise CategorizationServiceError(f"Malformed JSON in service response: {e}") from e

    if isinstance(data, str):
        return extract_json_object(data)
    if not isinstance(data, dict):
        raise CategorizationServiceError(
            f"Service response is a {type(data).__name__}, expected an object"
        )
    return data


class CategorizationClient:
    """Sends item lists to the categorization service."""

    def __init__(
        self,
        url: str,
        api_key: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize client.

        Args:
            url: Endpoint accepting ``{"items": [...], "urls": [...]}``
            api_key: Optional bearer token
            timeout: Request timeout in seconds
            transport: Optional httpx transport, mainly for tests
        """
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def categorize(self, items: list[str], urls: list[str] | None = None) -> dict[str, Any]:
        """Request a categorization.

        Args:
            items: Item strings to categorize
            urls: Recipe or list URLs for the service to read

        Returns:
            Decoded response object

        Raises:
            ValueError: If both items and urls are empty
            CategorizationServiceError: On transport errors, non-2xx status,
                or a body that is not a JSON object
        """
        body: dict[str, list[str]] = {}
        if items:
            body["items"] = items
        if urls:
            body["urls"] = urls
        if not body:
            raise ValueError("Nothing to categorize: provide items or urls")

        logger.info(
            "Requesting categorization of %d items and %d urls from %s",
            len(items),
            len(urls or []),
            self.url,
        )
        start_time = time.time()
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(self.url, json=body, headers=self._headers())
        except httpx.HTTPError as e:
            logger.error("Failed to reach categorization service: %s", e)
            raise CategorizationServiceError(f"Failed to reach categorization service: {e}") from e

        elapsed = time.time() - start_time
        logger.info("Categorization service returned %s in %.2f seconds", response.status_code, elapsed)

        if not response.is_success:
            logger.error("Categorization service error: %s", response.status_code)
            logger.debug("Error body: %s", response.text)
            raise CategorizationServiceError(
                f"Categorization service error: {response.status_code}"
            )

        data = extract_json_object(response.text)
        if "error" in data:
            raise CategorizationServiceError(f"Categorization service error: {data['error']}")

        logger.debug("Categorization payload keys: %s", sorted(data))
        return data
