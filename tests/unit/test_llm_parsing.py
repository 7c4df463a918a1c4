"""Unit tests for LLM response parsing helpers and provider selection."""

import pytest

from starcoach.utils import llm
from starcoach.utils.llm import (
    LLMProvider,
    LLMResponse,
    coerce_string_list,
    get_provider,
    parse_json_object,
)


@pytest.mark.unit
def test_parse_plain_json():
    assert parse_json_object('{"summary": "ok"}') == {"summary": "ok"}


@pytest.mark.unit
def test_parse_fenced_json():
    text = '```json\n{"summary": "ok", "strengths": ["a"]}\n```'
    assert parse_json_object(text) == {"summary": "ok", "strengths": ["a"]}


@pytest.mark.unit
def test_parse_json_surrounded_by_prose():
    text = 'Here is the evaluation:\n{"summary": "ok"}\nHope this helps!'
    assert parse_json_object(text) == {"summary": "ok"}


@pytest.mark.unit
@pytest.mark.parametrize("text", ["", None, "no json here", "[1, 2, 3]", "{broken"])
def test_parse_returns_none_for_unusable_text(text):
    assert parse_json_object(text) is None


@pytest.mark.unit
def test_coerce_string_list():
    assert coerce_string_list(None) == []
    assert coerce_string_list("one") == ["one"]
    assert coerce_string_list([" a ", "", None, 3]) == ["a", "3"]
    assert coerce_string_list({"not": "a list"}) == []


@pytest.mark.unit
def test_get_provider_unknown_name():
    with pytest.raises(ValueError, match="Unknown provider"):
        get_provider("grok")


@pytest.mark.unit
def test_openai_provider_requires_key(monkeypatch):
    """Test that a missing API key fails before any request."""
    pytest.importorskip("openai")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(ValueError, match="OPENAI_API_KEY"):
        get_provider("openai")


class FlakyProvider(LLMProvider):
    """Fails with a retryable error a fixed number of times, then answers."""

    _provider_prefix = "fake"
    _retry_message = "Fake overload"

    def __init__(self, failures: int):
        self._retryable_exception = TimeoutError
        self.failures = failures
        self.calls = 0
        self.update_model("flaky")

    def _call_api(self, system_prompt, user_prompt, max_tokens, temperature):
        self.calls += 1
        if self.calls <= self.failures:
            raise TimeoutError("overloaded")
        return LLMResponse(content="ok", model=self.model, input_tokens=1, output_tokens=1)


@pytest.mark.unit
def test_generate_retries_retryable_errors(monkeypatch):
    monkeypatch.setattr(llm.time, "sleep", lambda seconds: None)
    provider = FlakyProvider(failures=2)

    response = provider.generate("system", "user")

    assert response.content == "ok"
    assert provider.calls == 3
    assert provider.name == "fake/flaky"


@pytest.mark.unit
def test_generate_gives_up_after_max_retries(monkeypatch):
    monkeypatch.setattr(llm.time, "sleep", lambda seconds: None)
    provider = FlakyProvider(failures=llm.MAX_RETRIES)

    with pytest.raises(TimeoutError):
        provider.generate("system", "user")
    assert provider.calls == llm.MAX_RETRIES
