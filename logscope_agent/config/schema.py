"""Configuration schema using Pydantic."""

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_AGENT_URL = "https://agent-prod.studio.lyzr.ai/v3/inference/chat/"
DEFAULT_AGENT_ID = "69610427c57d451439d4bc75"


class AgentConfig(BaseModel):
    """Remote log-analysis agent configuration."""

    api_url: str = DEFAULT_AGENT_URL
    api_key: str = ""
    agent_id: str = DEFAULT_AGENT_ID
    user_id: str = "cloudwatch-user"
    timeout_s: float = 60.0


class LoggingConfig(BaseModel):
    """Log sink configuration."""

    level: str = "INFO"


class Config(BaseSettings):
    """Root configuration for logscope-agent."""

    model_config = SettingsConfigDict(
        env_prefix="LOGSCOPE_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    agent: AgentConfig = Field(default_factory=AgentConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Environment variables override values read from the config file.
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    def get_api_key(self) -> str | None:
        """Get the agent API key, or None when unset."""
        return self.agent.api_key or None
