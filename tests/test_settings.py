"""
Tests for settings and logging setup.
"""
import logging

from agentcraft.logging import configure_logging
from agentcraft.settings import AgentcraftSettings


def test_defaults():
    settings = AgentcraftSettings(_env_file=None)

    assert settings.llm_model == "gpt-3.5-turbo-1106"
    assert settings.max_function_calls == 5
    assert settings.batch_size == 100
    assert settings.verbose is False


def test_environment_override(monkeypatch):
    monkeypatch.setenv("AGENTCRAFT_MAX_FUNCTION_CALLS", "2")
    monkeypatch.setenv("AGENTCRAFT_LLM_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("AGENTCRAFT_VERBOSE", "true")

    settings = AgentcraftSettings(_env_file=None)

    assert settings.max_function_calls == 2
    assert settings.llm_model == "gpt-4o-mini"
    assert settings.verbose is True


def test_configure_logging_is_idempotent():
    logger = configure_logging("agentcraft.test", level="DEBUG")
    configure_logging("agentcraft.test", level="WARNING")

    marked = [h for h in logger.handlers if getattr(h, "_agentcraft", False)]
    assert len(marked) == 1
    assert logger.level == logging.WARNING
    assert marked[0].level == logging.WARNING
