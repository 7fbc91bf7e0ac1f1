"""Local endpoints for bedrock-gateway: model listing, health and info."""

import time
import logging
from datetime import datetime, timezone
from flask import Blueprint, jsonify, current_app

logger = logging.getLogger(__name__)

info_bp = Blueprint('info', __name__)


def get_config():
    """Get config from Flask app context."""
    return current_app.config['BEDROCK_CONFIG']


def get_forwarder():
    """Get Bedrock forwarder from Flask app context."""
    return current_app.config['BEDROCK_FORWARDER']


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


@info_bp.route('/v1/models', methods=['GET'])
def list_models():
    """List available Claude models on Bedrock."""
    config = get_config()
    created = int(time.time() * 1000)

    return jsonify({
        'data': [
            {
                'id': name,
                'object': 'model',
                'created': created,
                'owned_by': 'anthropic',
                'bedrock_model_id': model_id,
            }
            for name, model_id in config.aliases.list()
        ]
    })


@info_bp.route('/health', methods=['GET'])
def health_check():
    """
    Health check endpoint.

    Probes the default model on Bedrock to check reachability and the bearer
    token. A failed probe is reported in the body; the endpoint itself always
    answers 200.
    """
    config = get_config()
    status = {
        'status': 'ok',
        'timestamp': _now_iso(),
        'aws_region': config.aws_region,
        'bedrock_endpoint': config.bedrock_endpoint,
        'auth_configured': config.is_auth_configured(),
        'auth_valid': False,
    }

    try:
        probe_status = get_forwarder().probe(config.default_model)
        if probe_status >= 500:
            status['status'] = 'degraded'
            status['auth_error'] = f'Bedrock returned HTTP {probe_status}'
        else:
            status['auth_valid'] = probe_status < 400
    except Exception as e:
        logger.warning(f"Health probe failed: {e}")
        status['status'] = 'degraded'
        status['auth_error'] = str(e) or e.__class__.__name__

    return jsonify(status)


@info_bp.route('/info', methods=['GET'])
def server_info():
    """Static server and endpoint metadata; never calls Bedrock."""
    config = get_config()

    info = {'server_type': 'AWS Bedrock Claude Handler (Bearer Token Auth)'}
    info.update(config.to_dict())
    info.update({
        'auth_method': 'Bearer Token',
        'endpoints': {
            'messages': {
                'method': 'POST',
                'path': '/v1/messages',
                'payload_modified': not config.legacy_passthrough,
                'response_modified': False,
            },
            'complete': {
                'method': 'POST',
                'path': '/v1/complete',
                'payload_modified': False,
                'response_modified': False,
            },
            'models': {
                'method': 'GET',
                'path': '/v1/models',
                'description': 'List available Claude models on Bedrock',
            },
            'health': {
                'method': 'GET',
                'path': '/health',
                'description': 'Probe Bedrock reachability and bearer token',
            },
            'info': {
                'method': 'GET',
                'path': '/info',
                'description': 'Static server metadata',
            },
        },
        'timestamp': _now_iso(),
    })

    return jsonify(info)
