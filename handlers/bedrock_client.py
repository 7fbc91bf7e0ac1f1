"""HTTP client that forwards translated payloads to AWS Bedrock."""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

import requests

logger = logging.getLogger(__name__)

# Upper bound for the /health probe, in seconds
PROBE_TIMEOUT = 5.0


@dataclass(frozen=True)
class UpstreamResponse:
    """A Bedrock reply relayed to the caller as-is."""
    status_code: int
    body: Any


@dataclass(frozen=True)
class BackendError:
    """Bedrock answered, but with an error status."""
    status_code: int
    message: str
    body: Any = None


@dataclass(frozen=True)
class TransportError:
    """No response was obtained from Bedrock."""
    message: str


ForwardResult = Union[UpstreamResponse, BackendError, TransportError]


class BedrockForwarder:
    """
    Sends requests to the Bedrock runtime with bearer-token auth.

    Each call is a standalone requests.post/get; no session or cookie jar is
    shared between request threads.
    """

    def __init__(self, config, http=requests):
        self.base_url = config.bedrock_endpoint.rstrip('/')
        self.timeout = config.request_timeout
        self.probe_timeout = min(self.timeout, PROBE_TIMEOUT)
        self.http = http
        self.headers: Mapping[str, str] = MappingProxyType({
            'Authorization': f'Bearer {config.bearer_token}',
            'Content-Type': 'application/json',
            'Accept': 'application/json',
        })

    @staticmethod
    def invoke_path(model_id: str) -> str:
        return f'/model/{model_id}/invoke'

    @staticmethod
    def model_path(model_id: str) -> str:
        return f'/model/{model_id}'

    def forward(self, payload: Any, model_id: str) -> ForwardResult:
        """
        POST a payload to the model's invoke path.

        Returns:
            UpstreamResponse for statuses below 400, BackendError for 4xx/5xx
            replies, TransportError when no reply was received.
        """
        url = self.base_url + self.invoke_path(model_id)
        try:
            response = self.http.post(url, json=payload, headers=dict(self.headers), timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Bedrock request to {url} failed: {e}")
            return TransportError(message=str(e) or e.__class__.__name__)

        body = _decode_body(response)

        if response.status_code >= 400:
            message = _error_message(body) or response.reason or f'HTTP {response.status_code}'
            return BackendError(status_code=response.status_code, message=message, body=body)

        return UpstreamResponse(status_code=response.status_code, body=body)

    def probe(self, model_id: str) -> int:
        """
        GET the model resource with a short timeout; used as a reachability/auth check.

        Raises:
            requests.exceptions.RequestException: on transport failure
        """
        url = self.base_url + self.model_path(model_id)
        response = self.http.get(url, headers=dict(self.headers), timeout=self.probe_timeout)
        return response.status_code


def _decode_body(response: requests.Response) -> Any:
    """Decode a JSON body, wrapping anything else as {'raw': text}."""
    try:
        return response.json()
    except ValueError:
        text = response.text
        return {'raw': text} if text else None


def _error_message(body: Any) -> Optional[str]:
    """Pull a human-readable message out of a Bedrock error body."""
    if not isinstance(body, dict):
        return None

    # Bedrock uses 'message' or 'Message'; some gateways nest it under 'error'
    message = body.get('message') or body.get('Message')
    if not message:
        error_info = body.get('error')
        if isinstance(error_info, dict):
            message = error_info.get('message')
        elif isinstance(error_info, str):
            message = error_info
    return str(message) if message else None
