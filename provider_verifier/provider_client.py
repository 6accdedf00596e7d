import json
import logging
from typing import Dict, List, Optional, Tuple

import httpx
from pydantic import BaseModel, ConfigDict, Field

from provider_verifier.exceptions import TransportError
from provider_verifier.matching.content_type import JSON
from provider_verifier.model.http import ActualResponse, ExpectedRequest, get_header
from provider_verifier.settings import DEFAULT_PROVIDER_HOST, Settings

logger = logging.getLogger(__name__)


class ProviderEndpoint(BaseModel):
    """Where the provider under test is listening."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(default=DEFAULT_PROVIDER_HOST)
    port: int = Field()
    scheme: str = Field(default="http")
    base_path: str = Field(default="")

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}{self.base_path.rstrip('/')}"

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ProviderEndpoint":
        settings = settings or Settings()
        port = settings.get_provider_port()
        if port is None:
            raise ValueError("PROVIDER_PORT must be set to build a provider endpoint from settings.")
        return cls(host=settings.get_provider_host(), port=port, scheme=settings.get_provider_scheme())


class ProviderClient:
    """Sends an interaction's recorded request to the provider and returns what came back.

    Transport only: no matching and no retries. Any status code is a valid result;
    connection failures, timeouts and malformed responses raise TransportError.
    """

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None, timeout: Optional[float] = None):
        """
        Args:
            http_client: Shared asynchronous HTTP client. If omitted, a client is created for each request.
            timeout: Seconds to wait for the provider before giving up. Defaults to the configured
                request timeout.
        """
        self.http_client = http_client
        self.timeout = timeout if timeout is not None else Settings().get_request_timeout()

    @staticmethod
    def _encode_body(request: ExpectedRequest, headers: Dict[str, str]) -> Optional[bytes | str]:
        if request.content_type and get_header(headers, "Content-Type") is None:
            headers["Content-Type"] = request.content_type
        body = request.body
        if body is None:
            return None
        if isinstance(body, (bytes, str)):
            return body
        if get_header(headers, "Content-Type") is None:
            headers["Content-Type"] = JSON
        return json.dumps(body)

    @staticmethod
    def _query_params(request: ExpectedRequest) -> List[Tuple[str, str]]:
        return [(name, value) for name, values in request.query.items() for value in values]

    async def send(self, request: ExpectedRequest, endpoint: ProviderEndpoint) -> ActualResponse:
        """Sends the request to the endpoint.

        Raises:
            TransportError: If the request cannot be sent (e.g. an invalid URL), the provider cannot be
                reached or times out, or the response is malformed.
        """
        url = endpoint.url_for(request.path)
        headers = dict(request.headers)
        content = self._encode_body(request, headers)
        params = self._query_params(request)

        logger.info(f"Sending {request.method} request to {url}")
        try:
            if self.http_client is not None:
                response = await self.http_client.request(
                    method=request.method,
                    url=url,
                    params=params,
                    headers=headers,
                    content=content,
                    timeout=self.timeout,
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.request(
                        method=request.method, url=url, params=params, headers=headers, content=content
                    )
        except httpx.TimeoutException as e:
            logger.error(f"Timeout after {self.timeout}s during request to {url}: {e}")
            raise TransportError(f"Timed out after {self.timeout}s waiting for {url}") from e
        except httpx.RequestError as e:
            logger.error(f"Transport error during request to {url}: {e}")
            raise TransportError(f"Request to {url} failed: {e.__class__.__name__}: {e}") from e
        except httpx.InvalidURL as e:
            logger.error(f"Request URL rejected by httpx: {url!r}: {e}")
            raise TransportError(f"Cannot send request to {url!r}: {e}") from e

        logger.info(f"Received response with status {response.status_code} from {url}")
        return ActualResponse(
            status=response.status_code,
            headers=dict(response.headers),
            body=response.text or None,
        )
