"""
Tests for request logging.
"""
import logging

from logger_manager import LoggerManager, MAX_LOGGED_TEXT


def test_log_api_call_summary(caplog):
    with caplog.at_level(logging.INFO, logger='logger_manager'):
        LoggerManager().log_api_call('POST', '/v1/messages', 200, 12, model_id='m-1')

    assert 'POST /v1/messages -> 200 (12ms) | model: m-1' in caplog.text


def test_log_api_call_payloads_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger='logger_manager'):
        LoggerManager().log_api_call('POST', '/v1/complete', 429, 3, {'prompt': 'hi'}, {'error': {}})

    assert 'Request payload' in caplog.text
    assert 'Response payload' in caplog.text
    assert any(r.levelno == logging.WARNING for r in caplog.records)


def test_sanitize_truncates_long_text_without_mutating():
    long_text = 'x' * (MAX_LOGGED_TEXT + 50)
    data = {
        'messages': [
            {'role': 'user', 'content': long_text},
            {'role': 'user', 'content': [{'type': 'text', 'text': long_text}]},
        ],
        'prompt': long_text,
    }

    sanitized = LoggerManager()._sanitize_for_log(data)

    assert sanitized['messages'][0]['content'].endswith('... [truncated]')
    assert sanitized['messages'][1]['content'][0]['text'].endswith('... [truncated]')
    assert len(sanitized['prompt']) == MAX_LOGGED_TEXT + len('... [truncated]')
    assert data['messages'][0]['content'] == long_text


def test_sanitize_passes_non_dicts():
    assert LoggerManager()._sanitize_for_log(['a']) == ['a']
    assert LoggerManager()._sanitize_for_log(None) is None


def test_log_server_event_uses_level_and_data(caplog):
    with caplog.at_level(logging.INFO, logger='logger_manager'):
        LoggerManager().log_server_event('error', 'Startup failed', {'port': 3000})

    record = caplog.records[-1]
    assert record.levelno == logging.ERROR
    assert record.getMessage() == 'Startup failed {"port": 3000}'


def test_log_server_event_unknown_level_falls_back_to_info(caplog):
    with caplog.at_level(logging.INFO, logger='logger_manager'):
        LoggerManager().log_server_event('chatty', 'hello')

    assert caplog.records[-1].levelno == logging.INFO
    assert caplog.records[-1].getMessage() == 'hello'
