"""Translate Anthropic API requests to Bedrock invoke format."""

import copy
import logging
from typing import Any

logger = logging.getLogger(__name__)

BEDROCK_ANTHROPIC_VERSION = 'bedrock-2023-05-31'

# Fields Bedrock rejects on an invoke body: the model lives in the URL and
# invoke is never streamed.
DISALLOWED_FIELDS = ('model', 'stream')


def translate_request(
    endpoint: str,
    anthropic_request: Any,
    legacy_passthrough: bool = False
) -> Any:
    """
    Translate an Anthropic request body for the given endpoint to Bedrock format.

    Args:
        endpoint: Endpoint name ('messages', 'complete', ...)
        anthropic_request: The Anthropic API request body
        legacy_passthrough: Send messages bodies untouched, as older
            gateway releases did

    Returns:
        Bedrock-compatible request body. Never raises; values that are not
        JSON objects are passed through unchanged.
    """
    if endpoint != 'messages':
        return anthropic_request

    if legacy_passthrough:
        logger.debug("Legacy passthrough enabled, messages payload not translated")
        return anthropic_request

    bedrock_request = copy.deepcopy(anthropic_request)
    if not isinstance(bedrock_request, dict):
        logger.warning(f"Messages payload is {type(anthropic_request).__name__}, not an object; passing through")
        return bedrock_request

    bedrock_request['anthropic_version'] = BEDROCK_ANTHROPIC_VERSION
    for name in DISALLOWED_FIELDS:
        bedrock_request.pop(name, None)

    return bedrock_request
