"""
Clarifai API client for requesting concept predictions.
"""

import time
from typing import List, Optional, Dict, Any
import httpx
from pydantic import ValidationError
from .models import (
    Credentials, ImageInput, PredictOutput, PredictRequest, PredictResponse,
    TokenResponse, STATUS_SUCCESS,
)
from .config import settings
from .logging import get_logger


class ServiceError(Exception):
    """Custom exception for Clarifai API errors."""
    pass


class ClarifaiClient:
    """Client for the Clarifai v2 REST API using OAuth2 client credentials.

    Requests are sent once: there is no retry and no timeout, so a hung
    connection blocks the caller. Not safe for concurrent use.
    """

    def __init__(
        self,
        credentials: Credentials,
        base_url: Optional[str] = None,
        model_id: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        if not credentials.api_secret:
            raise ValueError("ClarifaiClient requires an App ID and an App Secret")

        self.credentials = credentials
        self.base_url = (base_url or settings.clarifai_api_base).rstrip("/")
        self.model_id = model_id or settings.clarifai_model_id
        self.logger = get_logger("clarifai_client")

        self._access_token: Optional[str] = None
        self._token_expires_at = 0.0

        self.client = httpx.Client(
            timeout=None,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def close(self):
        """Close the underlying HTTP connection pool."""
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _make_request(
        self,
        method: str,
        endpoint: str,
        json_data: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        auth: Optional[httpx.Auth] = None,
    ) -> httpx.Response:
        """Make a single HTTP request, converting failures into ServiceError."""
        url = f"{self.base_url}{endpoint}"

        try:
            response = self.client.request(
                method=method,
                url=url,
                json=json_data,
                data=data,
                headers=headers,
                auth=auth,
            )
            response.raise_for_status()
            return response

        except httpx.HTTPStatusError as e:
            self.logger.error(
                f"❌ HTTP {method} {url} failed: {e.response.status_code} - {e.response.text}"
            )
            raise ServiceError(f"HTTP {e.response.status_code}: {e.response.text}") from e

        except httpx.RequestError as e:
            self.logger.error(f"❌ Request failed: {str(e)}")
            raise ServiceError(f"Request failed: {e}") from e

    def _parse(self, response: httpx.Response, model):
        """Validate a JSON response body against a model."""
        try:
            return model.parse_obj(response.json())
        except (ValueError, ValidationError) as e:
            self.logger.error(f"❌ Malformed response from {response.request.url}: {e}")
            raise ServiceError(f"Malformed response: {e}") from e

    def _get_access_token(self) -> str:
        """Return a valid access token, requesting a new one when expired."""
        if self._access_token and time.time() < self._token_expires_at:
            return self._access_token

        self.logger.debug("🔑 Requesting access token")

        response = self._make_request(
            method="POST",
            endpoint="/v2/token",
            data={"grant_type": "client_credentials"},
            auth=httpx.BasicAuth(self.credentials.api_key, self.credentials.api_secret),
        )
        token = self._parse(response, TokenResponse)

        self._access_token = token.access_token
        # expires_in of 0 means the server did not say; use the token for this call only
        self._token_expires_at = time.time() + token.expires_in
        return self._access_token

    def predict(self, inputs: List[ImageInput]) -> List[PredictOutput]:
        """Send one batched predict request to the configured model.

        Args:
            inputs: Image inputs, in the order outputs should be returned.

        Returns:
            One output per input, in the order the service returned them.

        Raises:
            ServiceError: On network, authentication, HTTP or Clarifai status
                failures, or if the response cannot be parsed.
        """
        token = self._get_access_token()

        self.logger.debug(f"📤 Sending {len(inputs)} inputs to model {self.model_id}")

        response = self._make_request(
            method="POST",
            endpoint=f"/v2/models/{self.model_id}/outputs",
            json_data=PredictRequest(inputs=inputs).dict(exclude_none=True),
            headers={"Authorization": f"Bearer {token}"},
        )
        result = self._parse(response, PredictResponse)

        if result.status.code != STATUS_SUCCESS:
            self.logger.error(
                f"❌ Prediction failed: {result.status.code} - {result.status.description}"
            )
            raise ServiceError(
                f"Clarifai status {result.status.code}: {result.status.description}"
            )

        self.logger.debug(f"📥 Received {len(result.outputs)} outputs")
        return result.outputs
