from __future__ import annotations

from types import SimpleNamespace

import pytest
from openai import OpenAIError

import app.content.provider as provider_module
from app.content.provider import MAX_TOKENS, SYSTEM_PROMPT, TEMPERATURE, OpenAIProvider
from app.errors import GenerationFailed, ProviderUnavailable


class FakeCompletions:
    def __init__(self, content="Hello", error=None):
        self.content = content
        self.error = error
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAI:
    instances: list["FakeOpenAI"] = []

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.completions = FakeCompletions()
        self.chat = SimpleNamespace(completions=self.completions)
        FakeOpenAI.instances.append(self)


@pytest.fixture
def fake_openai(monkeypatch):
    FakeOpenAI.instances = []
    monkeypatch.setattr(provider_module, "OpenAI", FakeOpenAI)
    return FakeOpenAI


def test_generate__without_api_key__provider_unavailable(fake_openai):
    p = OpenAIProvider(api_key="")
    with pytest.raises(ProviderUnavailable):
        p.generate("hello")
    assert fake_openai.instances == []


def test_generate__sends_single_chat_completion(fake_openai):
    p = OpenAIProvider(api_key="sk-test", model="gpt-test", timeout=12)

    assert p.generate("Write about tea") == "Hello"

    (client,) = fake_openai.instances
    assert client.kwargs == {"api_key": "sk-test", "timeout": 12, "max_retries": 0}
    sent = client.completions.kwargs
    assert sent["model"] == "gpt-test"
    assert sent["messages"] == [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": "Write about tea"},
    ]
    assert sent["temperature"] == TEMPERATURE
    assert sent["max_tokens"] == MAX_TOKENS


def test_generate__reuses_client(fake_openai):
    p = OpenAIProvider(api_key="sk-test")
    p.generate("a")
    p.generate("b")
    assert len(fake_openai.instances) == 1


def test_generate__sdk_error__generation_failed(fake_openai):
    p = OpenAIProvider(api_key="sk-test")
    p.generate("warm up")
    fake_openai.instances[0].completions.error = OpenAIError("rate limited")

    with pytest.raises(GenerationFailed) as e:
        p.generate("again")
    assert "rate limited" in str(e.value)


def test_generate__null_content__empty_string(fake_openai):
    p = OpenAIProvider(api_key="sk-test")
    p.generate("warm up")
    fake_openai.instances[0].completions.content = None

    assert p.generate("again") == ""
