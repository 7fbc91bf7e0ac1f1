"""
Tests for the local /v1/models, /health and /info endpoints.
"""
import requests

from config import CLAUDE_MODEL_IDS
from tests.conftest import make_response


def test_models_lists_every_alias(client):
    response = client.get('/v1/models')

    assert response.status_code == 200
    data = response.get_json()['data']
    assert [(m['id'], m['bedrock_model_id']) for m in data] == list(CLAUDE_MODEL_IDS)
    assert len({m['id'] for m in data}) == len(data)
    for entry in data:
        assert entry['object'] == 'model'
        assert entry['owned_by'] == 'anthropic'
        assert isinstance(entry['created'], int)


def test_health_ok(client, http):
    response = client.get('/health')

    assert response.status_code == 200
    body = response.get_json()
    assert body['status'] == 'ok'
    assert body['aws_region'] == 'us-west-2'
    assert body['bedrock_endpoint'] == 'https://bedrock.test'
    assert body['auth_configured'] is True
    assert body['auth_valid'] is True
    assert 'auth_error' not in body
    assert body['timestamp'].endswith('Z')
    http.get.assert_called_once()


def test_health_rejected_token(client, http):
    http.get.return_value = make_response(403, {'message': 'Forbidden'})

    body = client.get('/health').get_json()

    assert body['status'] == 'ok'
    assert body['auth_valid'] is False


def test_health_probe_network_failure_is_degraded(client, http):
    http.get.side_effect = requests.exceptions.ConnectionError('connection refused')

    response = client.get('/health')

    assert response.status_code == 200
    body = response.get_json()
    assert body['status'] == 'degraded'
    assert body['auth_valid'] is False
    assert 'connection refused' in body['auth_error']


def test_health_probe_5xx_is_degraded(client, http):
    http.get.return_value = make_response(503, {'message': 'down'})

    body = client.get('/health').get_json()

    assert body['status'] == 'degraded'
    assert body['auth_valid'] is False
    assert '503' in body['auth_error']


def test_info_is_static(client, http):
    response = client.get('/info')

    assert response.status_code == 200
    body = response.get_json()
    assert body['available_models'] == ['claude-4-sonnet', 'claude-4-opus']
    assert body['default_model'] == 'us.anthropic.claude-sonnet-4-20250514-v1:0'
    assert body['auth_method'] == 'Bearer Token'
    assert set(body['endpoints']) == {'messages', 'complete', 'models', 'health', 'info'}
    assert body['endpoints']['messages']['path'] == '/v1/messages'
    http.get.assert_not_called()
    http.post.assert_not_called()


def test_info_reports_redacted_config(client, config):
    body = client.get('/info').get_json()

    for key, value in config.to_dict().items():
        assert body[key] == value
    assert body['aws_region'] == 'us-west-2'
    assert body['request_timeout'] == 5.0
    assert body['auth_configured'] is True
    assert 'bearer_token' not in body
    assert 'test-token' not in str(body)
