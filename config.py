"""Configuration management for bedrock-gateway."""

import os
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

# Public Claude model names -> Bedrock model ids, in listing order
CLAUDE_MODEL_IDS: Tuple[Tuple[str, str], ...] = (
    ('claude-4-sonnet', 'us.anthropic.claude-sonnet-4-20250514-v1:0'),
    ('claude-4-opus', 'us.anthropic.claude-opus-4-20250514-v1:0'),
)

DEFAULT_MODEL = 'us.anthropic.claude-sonnet-4-20250514-v1:0'

_TRUE_VALUES = ('1', 'true', 'yes', 'on')


class ConfigError(Exception):
    """Raised when the environment does not describe a usable gateway."""


class ModelAliasTable:
    """Read-only mapping from public model names to Bedrock model ids."""

    def __init__(self, aliases, default_model_id: str):
        self._aliases: Tuple[Tuple[str, str], ...] = tuple(aliases)
        self._lookup: Dict[str, str] = dict(self._aliases)
        self.default_model_id = default_model_id

    def resolve(self, public_name: Optional[str]) -> str:
        """Return the Bedrock model id for a public name, or the default id."""
        if not isinstance(public_name, str) or not public_name:
            return self.default_model_id
        return self._lookup.get(public_name, self.default_model_id)

    def list(self) -> List[Tuple[str, str]]:
        """Return (public_name, bedrock_model_id) pairs in declaration order."""
        return list(self._aliases)

    def names(self) -> List[str]:
        return [name for name, _ in self._aliases]


def build_alias_table(mapping_str: str = '', default_model_id: str = DEFAULT_MODEL) -> ModelAliasTable:
    """
    Build the alias table from the built-in Claude ids plus MODEL_MAPPING overrides.

    Overrides for a known name replace its id in place; new names are appended.
    """
    aliases = dict(CLAUDE_MODEL_IDS)
    for source, target in parse_model_mapping(mapping_str).items():
        if source in aliases:
            logger.info(f"Model alias override: {source} -> {target}")
        aliases[source] = target
    return ModelAliasTable(aliases.items(), default_model_id)


def parse_model_mapping(mapping_str: str) -> Dict[str, str]:
    """Parse model mapping from environment (format: source=target,source2=target2)."""
    mapping = {}
    if not mapping_str:
        return mapping

    for pair in mapping_str.split(','):
        if '=' in pair:
            source, target = pair.split('=', 1)
            source, target = source.strip(), target.strip()
            if source and target:
                mapping[source] = target
        elif pair.strip():
            logger.warning(f"Ignoring malformed MODEL_MAPPING entry: {pair.strip()!r}")

    return mapping


@dataclass(frozen=True)
class Config:
    """Gateway configuration, built once at startup and never mutated."""

    bearer_token: str
    aws_region: str = 'us-east-1'
    bedrock_endpoint: str = 'https://bedrock-runtime.us-east-1.amazonaws.com'
    port: int = 3000
    log_level: str = 'info'
    log_file: str = 'proxy_log.txt'
    request_timeout: float = 120.0
    legacy_passthrough: bool = False
    aliases: ModelAliasTable = field(default_factory=lambda: build_alias_table())

    @classmethod
    def from_env(cls, environ=None) -> 'Config':
        """
        Load configuration from environment variables.

        Raises:
            ConfigError: if AWS_BEARER_TOKEN_BEDROCK is unset or a numeric
                setting cannot be parsed.
        """
        env = os.environ if environ is None else environ

        bearer_token = env.get('AWS_BEARER_TOKEN_BEDROCK', '').strip()
        if not bearer_token:
            raise ConfigError('AWS_BEARER_TOKEN_BEDROCK environment variable is not set')

        aws_region = env.get('AWS_REGION') or 'us-east-1'
        bedrock_endpoint = env.get('BEDROCK_ENDPOINT') or f'https://bedrock-runtime.{aws_region}.amazonaws.com'

        try:
            port = int(env.get('PORT') or '3000')
            request_timeout = float(env.get('BEDROCK_TIMEOUT') or '120')
        except ValueError as e:
            raise ConfigError(f'Invalid numeric setting: {e}') from e

        if request_timeout <= 0:
            raise ConfigError('BEDROCK_TIMEOUT must be positive')

        aliases = build_alias_table(
            env.get('MODEL_MAPPING', ''),
            env.get('DEFAULT_MODEL') or DEFAULT_MODEL,
        )

        return cls(
            bearer_token=bearer_token,
            aws_region=aws_region,
            bedrock_endpoint=bedrock_endpoint.rstrip('/'),
            port=port,
            log_level=(env.get('LOG_LEVEL') or 'info').lower(),
            log_file=env.get('LOG_FILE') or 'proxy_log.txt',
            request_timeout=request_timeout,
            legacy_passthrough=(env.get('BEDROCK_LEGACY_PASSTHROUGH', 'false').lower() in _TRUE_VALUES),
            aliases=aliases,
        )

    @property
    def default_model(self) -> str:
        return self.aliases.default_model_id

    def is_auth_configured(self) -> bool:
        """Check if a bearer token is configured."""
        return bool(self.bearer_token)

    def to_dict(self) -> dict:
        """Return configuration as dictionary (token redacted)."""
        return {
            'port': self.port,
            'aws_region': self.aws_region,
            'bedrock_endpoint': self.bedrock_endpoint,
            'default_model': self.default_model,
            'available_models': self.aliases.names(),
            'request_timeout': self.request_timeout,
            'legacy_passthrough': self.legacy_passthrough,
            'auth_configured': self.is_auth_configured(),
        }
