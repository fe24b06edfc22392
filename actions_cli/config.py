"""Configuration for the GitHub Actions client."""

import os
from collections.abc import Mapping

from pydantic import BaseModel, SecretStr

TOKEN_ENV_VAR = "GITHUB_TOKEN"
API_URL_ENV_VAR = "GITHUB_API_URL"


class ConfigurationError(Exception):
    """Raised when required configuration is missing."""


class ActionsConfig(BaseModel):
    """Configuration for the GitHub Actions client."""

    token: SecretStr
    api_base_url: str = "https://api.github.com"
    user_agent: str = "actions-cli"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ActionsConfig":
        """Build configuration from environment variables.

        Raises:
            ConfigurationError: If GITHUB_TOKEN is not set

        """
        environ = os.environ if environ is None else environ
        if not (token := environ.get(TOKEN_ENV_VAR)):
            raise ConfigurationError(
                f"Please provide a {TOKEN_ENV_VAR} env variable"
            )

        config = cls(token=SecretStr(token))
        if api_base_url := environ.get(API_URL_ENV_VAR):
            config = config.model_copy(update={"api_base_url": api_base_url})
        return config
