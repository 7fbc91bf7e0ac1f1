"""Anthropic API proxy handler - forwards to AWS Bedrock."""

import time
import logging
from flask import Blueprint, request, jsonify, current_app

from translator import translate_request
from .bedrock_client import UpstreamResponse, BackendError, TransportError

logger = logging.getLogger(__name__)

proxy_bp = Blueprint('proxy', __name__)


def get_config():
    """Get config from Flask app context."""
    return current_app.config['BEDROCK_CONFIG']


def get_forwarder():
    """Get Bedrock forwarder from Flask app context."""
    return current_app.config['BEDROCK_FORWARDER']


def get_log_manager():
    """Get log manager from Flask app context."""
    return current_app.config['LOG_MANAGER']


def error_envelope(error_type: str, message: str, details=None) -> dict:
    """Build the JSON error body returned to callers."""
    error = {'type': error_type, 'message': message}
    if details is not None:
        error['details'] = details
    return {'error': error}


@proxy_bp.route('/v1/messages', methods=['POST'])
def messages():
    """Handle Anthropic /v1/messages requests."""
    return handle_bedrock_call('messages', '/v1/messages')


@proxy_bp.route('/v1/complete', methods=['POST'])
def complete():
    """Handle Anthropic /v1/complete requests."""
    return handle_bedrock_call('complete', '/v1/complete')


def handle_bedrock_call(endpoint: str, path: str):
    """
    Resolve the model, translate the payload, forward it to Bedrock and
    relay the result.

    Backend error replies keep their status; failures with no reply and
    anything unexpected become a 500.
    """
    start_time = time.time()
    log_manager = get_log_manager()
    payload = None
    model_id = None

    try:
        config = get_config()
        payload = request.get_json(silent=True)

        public_model = payload.get('model') if isinstance(payload, dict) else None
        model_id = config.aliases.resolve(public_model)
        bedrock_payload = translate_request(endpoint, payload, config.legacy_passthrough)

        logger.info(f"[{path}] Calling Bedrock with model: {model_id}")
        result = get_forwarder().forward(bedrock_payload, model_id)

        if isinstance(result, UpstreamResponse):
            status, body = result.status_code, result.body
        elif isinstance(result, BackendError):
            logger.error(f"[{path}] Bedrock API error ({result.status_code}): {result.message}")
            status = result.status_code
            body = error_envelope('bedrock_error', result.message, result.body)
        elif isinstance(result, TransportError):
            logger.error(f"[{path}] Bedrock network error: {result.message}")
            status, body = 500, error_envelope('network_error', result.message)
        else:
            raise TypeError(f"Unexpected forward result: {result!r}")

    except Exception as e:
        logger.exception(f"[{path}] Request processing failed: {e}")
        status, body = 500, error_envelope('internal_error', str(e) or e.__class__.__name__)

    duration_ms = int((time.time() - start_time) * 1000)
    log_manager.log_api_call('POST', path, status, duration_ms, payload, body, model_id=model_id)
    return jsonify(body), status
