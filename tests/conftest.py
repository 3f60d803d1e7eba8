import itertools
from collections.abc import Callable

import pytest
from kiro_proxy.core.config.app_config import AppConfig
from kiro_proxy.core.domain.chat import ChatMessage, ChatRequest

TEST_BACKEND_URL = "https://kiro.test/generateAssistantResponse"


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer credentials out of the tests."""
    for name in (
        "KIRO_ACCESS_TOKEN",
        "ANTHROPIC_API_KEY",
        "KIRO_BASE_URL",
        "ANTHROPIC_BASE_URL",
        "KIRO_CONCURRENT_ATTEMPTS",
        "APP_PORT",
        "LOG_LEVEL",
        "LOG_FILE",
        "APP_HOST",
        "KIRO_DEFAULT_MODEL",
        "KIRO_ATTEMPT_TIMEOUT",
        "KIRO_PASSTHROUGH_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig.model_validate(
        {"backend": {"api_url": TEST_BACKEND_URL, "attempt_timeout": 1.0}}
    )


@pytest.fixture
def fixed_ids() -> Callable[[str], str]:
    """Deterministic id factory: prefix followed by 1, 2, 3..."""
    counter = itertools.count(1)
    return lambda prefix: f"{prefix}{next(counter)}"


@pytest.fixture
def chat_request() -> ChatRequest:
    return ChatRequest(
        model="gpt-4o",
        messages=[
            ChatMessage(role="system", content="Be brief."),
            ChatMessage(role="user", content="a"),
            ChatMessage(role="assistant", content="b"),
            ChatMessage(role="user", content="c"),
        ],
        max_tokens=256,
        temperature=0.5,
    )
