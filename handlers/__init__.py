"""Request handlers for bedrock-gateway."""

from .proxy_handler import proxy_bp
from .info_api import info_bp
from .bedrock_client import BedrockForwarder

__all__ = ['proxy_bp', 'info_bp', 'BedrockForwarder']
