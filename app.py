#!/usr/bin/env python3
"""Bedrock Gateway - Anthropic API to AWS Bedrock proxy."""

import sys
import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS
from dotenv import load_dotenv

from config import Config, ConfigError
from logger_manager import LoggerManager, setup_logging
from handlers import proxy_bp, info_bp, BedrockForwarder

logger = logging.getLogger(__name__)


def create_app(config: Optional[Config] = None, forwarder: Optional[BedrockForwarder] = None) -> Flask:
    """
    Create and configure the Flask application.

    Raises:
        ConfigError: if no config is given and the environment lacks a
            bearer token.
    """
    if config is None:
        config = Config.from_env()

    app = Flask(__name__)
    CORS(app)

    app.config['BEDROCK_CONFIG'] = config
    app.config['BEDROCK_FORWARDER'] = forwarder or BedrockForwarder(config)
    log_manager = LoggerManager()
    app.config['LOG_MANAGER'] = log_manager

    # Register blueprints
    app.register_blueprint(proxy_bp)
    app.register_blueprint(info_bp)

    log_manager.log_server_event('info', 'Bedrock gateway started', config.to_dict())

    return app


def print_banner(config: Config):
    """Log startup info."""
    logger.info("=" * 60)
    logger.info("AWS Bedrock Claude API Handler (Bearer Token Auth)")
    logger.info("=" * 60)
    logger.info(f"Server URL: http://localhost:{config.port}")
    logger.info(f"AWS Region: {config.aws_region}")
    logger.info(f"Bedrock Endpoint: {config.bedrock_endpoint}")
    logger.info(f"Default Model: {config.default_model}")
    logger.info("Auth Method: Bearer Token")
    if config.legacy_passthrough:
        logger.warning("Legacy passthrough enabled: /v1/messages payloads are sent untranslated")
    logger.info("Configured Endpoints:")
    logger.info(f"  POST http://localhost:{config.port}/v1/messages    [Claude Messages API -> Bedrock]")
    logger.info(f"  POST http://localhost:{config.port}/v1/complete    [Claude Completions API -> Bedrock]")
    logger.info(f"  GET  http://localhost:{config.port}/v1/models      [List Available Models]")
    logger.info("Utility Endpoints:")
    logger.info(f"  GET  http://localhost:{config.port}/health")
    logger.info(f"  GET  http://localhost:{config.port}/info")
    logger.info("=" * 60)


def main():
    """Main entry point."""
    # Load environment variables from .env file
    load_dotenv()

    try:
        config = Config.from_env()
    except ConfigError as e:
        setup_logging()
        LoggerManager().log_server_event('error', f'Error: {e}', {
            'hint': 'Please set the bearer token in your .env file',
        })
        sys.exit(1)

    setup_logging(config.log_level, config.log_file)
    app = create_app(config)
    print_banner(config)

    # Run the Flask app
    try:
        app.run(
            host='0.0.0.0',
            port=config.port,
            debug=False,
            threaded=True
        )
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
