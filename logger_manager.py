"""Request/response logging for bedrock-gateway."""

import copy
import json
import logging
import sys
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
MAX_LOGGED_TEXT = 500


def setup_logging(level: str = 'info', log_file: Optional[str] = None):
    """Configure root logging to the console and, optionally, an append-only file."""
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='a', encoding='utf-8'))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


class LoggerManager:
    """Writes one structured line per API call plus payload dumps at debug level."""

    def log_api_call(
        self,
        method: str,
        path: str,
        status: int,
        duration_ms: int,
        request_data: Any = None,
        response_data: Any = None,
        model_id: Optional[str] = None
    ):
        """Log an API call with optional request/response data."""
        model_info = f" | model: {model_id}" if model_id else ""
        log_func = logger.info if status < 400 else logger.warning
        log_func(f"{method} {path} -> {status} ({duration_ms}ms){model_info}")

        if logger.isEnabledFor(logging.DEBUG):
            if request_data is not None:
                logger.debug(f"[{path}] Request payload: {self._dump(request_data)}")
            if response_data is not None:
                logger.debug(f"[{path}] Response payload: {self._dump(response_data)}")

    def log_server_event(self, level: str, message: str, data: Optional[Dict] = None):
        """Log a server event."""
        log_func = getattr(logger, level.lower(), logger.info)
        if data:
            log_func(f"{message} {json.dumps(data, default=str)}")
        else:
            log_func(message)

    def _dump(self, data: Any) -> str:
        return json.dumps(self._sanitize_for_log(data), indent=2, default=str)

    def _sanitize_for_log(self, data: Any) -> Any:
        """Sanitize data for logging (truncate large content)."""
        if not isinstance(data, dict):
            return data

        # Deep copy to avoid modifying original
        sanitized = copy.deepcopy(data)

        # Truncate message content if too long
        messages = sanitized.get('messages')
        if isinstance(messages, list):
            for msg in messages:
                if isinstance(msg, dict):
                    self._truncate_content(msg)

        # Truncate response content / completion prompts
        self._truncate_content(sanitized)
        if isinstance(sanitized.get('prompt'), str):
            sanitized['prompt'] = _truncate(sanitized['prompt'])

        return sanitized

    def _truncate_content(self, holder: Dict):
        content = holder.get('content')
        if isinstance(content, str):
            holder['content'] = _truncate(content)
        elif isinstance(content, list):
            for block in content:
                if isinstance(block, dict) and isinstance(block.get('text'), str):
                    block['text'] = _truncate(block['text'])


def _truncate(text: str) -> str:
    if len(text) > MAX_LOGGED_TEXT:
        return text[:MAX_LOGGED_TEXT] + '... [truncated]'
    return text
