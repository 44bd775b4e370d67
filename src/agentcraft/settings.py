"""
Settings for agentcraft.

Values are read from the environment (prefix ``AGENTCRAFT_``) and from a
``.env`` file in the working directory.
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AgentcraftSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="AGENTCRAFT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # LLM
    openai_api_key: Optional[str] = Field(default=None, description="API key for the chat and embedding endpoints")
    openai_base_url: Optional[str] = Field(default=None, description="Base URL for OpenAI compatible endpoints")
    llm_model: str = Field(default="gpt-3.5-turbo-1106", description="Chat model name")
    llm_temperature: float = Field(default=0.1, ge=0.0, le=2.0)
    llm_timeout: float = Field(default=60.0, gt=0, description="Request timeout in seconds")
    embedding_model: str = Field(default="text-embedding-3-small")

    # Agent
    max_function_calls: int = Field(default=5, ge=0, description="Upper bound on tool calls per task")
    verbose: bool = False

    # Logging
    log_level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")

    # Vector store
    qdrant_url: Optional[str] = None
    qdrant_api_key: Optional[str] = None
    collection_name: str = "default"
    batch_size: int = Field(default=100, ge=1, description="Points per upsert request")


@lru_cache
def get_settings() -> AgentcraftSettings:
    return AgentcraftSettings()
