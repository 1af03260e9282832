import json
from pathlib import Path
from typing import Dict, Any, List

from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from eval_gateway.const import (
    AGGREGATE_SCORES_PATH, DEFAULT_EVALUATION_ORIGIN, DEFAULT_GATEWAY_URL, DEFAULT_LOG_LEVEL,
    DEFAULT_PROXY_PREFIX, DEFAULT_PROXY_TARGET, DEFAULT_REQUEST_TIMEOUT, DEFAULT_RETRY_DELAY,
    DEFAULT_RETRY_MAX_ATTEMPTS, DEFAULT_SERVER_HOST, DEFAULT_SERVER_PORT, EXPERIMENT_PATH,
    HEALTH_PATH, LIBRARY_LOG_LEVELS,
)


def append_query(url: str, query: str) -> str:
    """Append a raw query string to a URL."""
    if not query:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"


class RewriteRule(BaseModel):
    """Static mapping of a public path to a fixed upstream URL."""

    source: str
    destination: str

    def target_url(self, query: str = "") -> str:
        return append_query(self.destination, query)


class ProxyRule(BaseModel):
    """Prefix-stripping passthrough to a fixed upstream origin."""

    prefix: str = DEFAULT_PROXY_PREFIX
    target: str = DEFAULT_PROXY_TARGET

    def target_url(self, path: str, query: str = "") -> str:
        """Map an incoming path under the prefix to the upstream URL.

        Args:
            path: Raw request path, including the prefix.
            query: Raw query string without the leading '?'.

        Returns:
            Absolute upstream URL with the prefix removed.
        """
        remainder = path[len(self.prefix):] if path.startswith(self.prefix) else path
        if not remainder.startswith("/"):
            remainder = "/" + remainder
        return append_query(self.target.rstrip("/") + remainder, query)


def default_rewrites(origin: str) -> List[RewriteRule]:
    """Rewrites of the public evaluation paths to the external origin."""
    origin = origin.rstrip("/")
    return [
        RewriteRule(source=path, destination=f"{origin}{path}")
        for path in (EXPERIMENT_PATH, AGGREGATE_SCORES_PATH, HEALTH_PATH)
    ]


class Config(BaseSettings):
    """Global configuration settings for the eval gateway."""

    server_host: str = DEFAULT_SERVER_HOST
    server_port: int = DEFAULT_SERVER_PORT
    evaluation_origin: str = DEFAULT_EVALUATION_ORIGIN
    rewrites: List[RewriteRule] = []
    proxy_prefix: str = DEFAULT_PROXY_PREFIX
    proxy_target: str = DEFAULT_PROXY_TARGET
    gateway_url: str = DEFAULT_GATEWAY_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    retry_max_attempts: int = DEFAULT_RETRY_MAX_ATTEMPTS
    retry_delay: float = DEFAULT_RETRY_DELAY
    log_level: str = DEFAULT_LOG_LEVEL
    library_log_levels: Dict[str, str] = dict(LIBRARY_LOG_LEVELS)

    model_config = SettingsConfigDict(
        env_prefix='EVAL_GATEWAY_',
    )

    @model_validator(mode="after")
    def _fill_default_rewrites(self) -> "Config":
        if not self.rewrites:
            self.rewrites = default_rewrites(self.evaluation_origin)
        return self

    @property
    def proxy_rule(self) -> ProxyRule:
        return ProxyRule(prefix=self.proxy_prefix, target=self.proxy_target)

    @classmethod
    def load_config_from_json(cls) -> Dict[str, Any]:
        """Load configuration from config.json file."""
        config_path = Path("config.json")
        if config_path.exists():
            with open(config_path, 'r') as f:
                return json.load(f)
        return {}

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        """
        Customise the sources for settings.

        Order of precedence (highest to lowest):
        1. Environment variables
        2. Init settings (kwargs passed to constructor)
        3. JSON config file
        4. Default values
        """
        def json_source():
            return cls.load_config_from_json()

        return (
            env_settings,
            init_settings,
            json_source,
        )
