"""
Shared pytest fixtures.
"""
from unittest.mock import MagicMock

import pytest
import requests

from app import create_app
from config import Config, build_alias_table
from handlers.bedrock_client import BedrockForwarder


def make_response(status_code=200, body=None, text=None, reason='OK'):
    """Build a fake requests.Response."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.reason = reason
    if body is not None:
        response.json.return_value = body
        response.text = ''
    else:
        response.json.side_effect = ValueError('No JSON object could be decoded')
        response.text = text or ''
    return response


@pytest.fixture
def config():
    return Config(
        bearer_token='test-token',
        aws_region='us-west-2',
        bedrock_endpoint='https://bedrock.test',
        request_timeout=5.0,
        aliases=build_alias_table(),
    )


@pytest.fixture
def http():
    """A stand-in for the requests module; set .post / .get return values per test."""
    fake = MagicMock(spec=requests)
    fake.post.return_value = make_response(200, {'id': 'msg_1'})
    fake.get.return_value = make_response(200, {'modelId': 'x'})
    return fake


@pytest.fixture
def forwarder(config, http):
    return BedrockForwarder(config, http=http)


@pytest.fixture
def app(config, forwarder):
    app = create_app(config, forwarder)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
