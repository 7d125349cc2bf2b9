"""
Tests for the provider-agnostic LLM client.
"""

from types import SimpleNamespace

import pytest

from core.llm import (
    DecodingPolicy,
    LLMClient,
    LLMResponse,
    MockProvider,
    create_llm_client,
    create_provider,
    get_configured_providers,
    policy_to_provider_args,
    strip_code_fences,
)


class TestStripCodeFences:

    @pytest.mark.parametrize("raw,expected", [
        ('```json\n{"a": 1}\n```', '{"a": 1}'),
        ('```\n{"a": 1}\n```', '{"a": 1}'),
        ('  {"a": 1}  ', '{"a": 1}'),
        ('```JSON{"a": 1}```', '{"a": 1}'),
        ("", ""),
    ])
    def test_strip(self, raw, expected):
        assert strip_code_fences(raw) == expected


class TestMockProvider:

    def test_responses_cycle(self):
        client = LLMClient(MockProvider(responses=["first", "second"]))
        assert [client.generate("q") for _ in range(3)] == ["first", "second", "first"]

    def test_exception_raised(self):
        client = LLMClient(MockProvider(responses=[RuntimeError("boom")]))
        with pytest.raises(RuntimeError, match="boom"):
            client.generate("q")

    def test_response_fn_sees_messages(self):
        provider = MockProvider(response_fn=lambda messages, policy: messages[-1]["content"].upper())
        client = LLMClient(provider)
        assert client.generate("hello") == "HELLO"
        assert provider.calls[0]["messages"] == [{"role": "user", "content": "hello"}]

    def test_no_responses_returns_empty(self):
        assert LLMClient(MockProvider()).generate("q") == ""

    def test_set_responses_resets_sequence(self):
        provider = MockProvider(responses=["a", "b"])
        client = LLMClient(provider)
        client.generate("q")
        provider.set_responses(["c"])
        assert client.generate("q") == "c"
        assert provider.call_count == 1


class TestLLMClient:

    def test_system_prompt_prepended(self):
        provider = MockProvider(responses=["ok"])
        LLMClient(provider).chat([{"role": "user", "content": "hi"}], system_prompt="Be brief.")
        assert provider.calls[0]["messages"][0] == {"role": "system", "content": "Be brief."}

    def test_default_policy_used(self):
        provider = MockProvider(responses=["ok"])
        policy = DecodingPolicy(temperature=0.3)
        LLMClient(provider, default_policy=policy).generate("q")
        assert provider.calls[0]["policy"] is policy

    def test_latency_recorded(self):
        response = LLMClient(MockProvider(responses=["ok"])).chat([{"role": "user", "content": "q"}])
        assert response.latency_ms >= 0.0
        assert response.total_tokens == 150

    def test_response_as_json(self):
        response = LLMResponse(content='```json\n{"a": 1}\n```', model="m", provider="mock")
        assert response.as_json() == {"a": 1}
        assert LLMResponse(content="nope", model="m", provider="mock").as_json() is None


class TestFactories:

    def test_create_mock_client(self):
        client = create_llm_client("mock", responses=["x"])
        assert client.provider.name == "mock"
        assert client.provider.model == "mock-model"
        assert client.generate("q") == "x"

    def test_mock_ignores_network_kwargs(self):
        provider = create_provider("mock", api_key="unused", base_url="http://x", timeout=5)
        assert isinstance(provider, MockProvider)

    def test_default_models(self):
        assert create_provider("openai", api_key="sk-test").model == "gpt-4o"
        assert create_provider("ANTHROPIC", api_key="sk-test").model == "claude-sonnet-4-20250514"

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unknown provider"):
            create_provider("grok")

    def test_configured_providers(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        assert get_configured_providers() == [{"provider": "openai", "default_model": "gpt-4o"}]


class TestPolicyArgs:

    def test_openai_args(self):
        args = policy_to_provider_args(DecodingPolicy(stop_sequences=("END",)), "openai")
        assert args == {"temperature": 0.0, "max_tokens": 2048, "top_p": 1.0, "seed": 42, "stop": ["END"]}

    def test_anthropic_args(self):
        args = policy_to_provider_args(DecodingPolicy(max_tokens=100), "anthropic")
        assert args == {"temperature": 0.0, "max_tokens": 100}

    def test_with_json_mode_keeps_other_settings(self):
        policy = DecodingPolicy(temperature=0.3, max_tokens=512).with_json_mode()
        assert policy.json_mode is True
        assert policy.temperature == 0.3
        assert policy.max_tokens == 512


class RecordingCompletions:
    """Stands in for openai's client.chat.completions."""

    def __init__(self):
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        return SimpleNamespace(
            model="gpt-4o",
            choices=[SimpleNamespace(message=SimpleNamespace(content="{}"), finish_reason="stop")],
            usage=SimpleNamespace(prompt_tokens=3, completion_tokens=1),
        )


class TestOpenAIProvider:

    def _provider(self):
        from core.llm import OpenAIProvider

        provider = OpenAIProvider(api_key="sk-test")
        completions = RecordingCompletions()
        provider._client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
        return provider, completions

    def test_json_mode_requests_json_object(self):
        provider, completions = self._provider()
        provider.chat([{"role": "user", "content": "hi"}], policy=DecodingPolicy(json_mode=True))
        assert completions.kwargs["response_format"] == {"type": "json_object"}

    def test_plain_policy_sends_no_response_format(self):
        provider, completions = self._provider()
        response = provider.chat([{"role": "user", "content": "hi"}], policy=DecodingPolicy())
        assert "response_format" not in completions.kwargs
        assert response.input_tokens == 3
