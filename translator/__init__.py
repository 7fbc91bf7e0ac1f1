"""API translation layer between Anthropic and Bedrock formats."""

from .anthropic_to_bedrock import translate_request, BEDROCK_ANTHROPIC_VERSION

__all__ = ['translate_request', 'BEDROCK_ANTHROPIC_VERSION']
