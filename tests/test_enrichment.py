from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from journal.enrichment import (
    FALLBACK_ANALYSIS,
    MISSING_SUMMARY,
    Analysis,
    EnrichmentClient,
    OpenAIProvider,
    build_enrichment_client,
    extract_json,
)


class StubProvider:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


# ==================== extract_json ====================


def test_extract_json_strict():
    assert extract_json('{"summary": "ok", "mood": "calm"}') == {'summary': 'ok', 'mood': 'calm'}


def test_extract_json_from_code_fence():
    text = 'Here you go:\n```json\n{"summary": "ok", "mood": "sad"}\n```'
    assert extract_json(text) == {'summary': 'ok', 'mood': 'sad'}


def test_extract_json_skips_broken_object_before_valid_one():
    text = 'Mood {not json} then {"summary": "x", "mood": "happy"} trailing'
    assert extract_json(text) == {'summary': 'x', 'mood': 'happy'}


@pytest.mark.parametrize('text', ['', 'no braces here', '["a", "b"]', '{"unterminated": '])
def test_extract_json_returns_none_without_object(text):
    assert extract_json(text) is None


# ==================== EnrichmentClient.analyze ====================


@pytest.mark.parametrize('content', ['', '   ', '\n\t'])
def test_blank_content_skips_provider(content):
    provider = StubProvider(reply='{"summary": "s", "mood": "happy"}')
    client = EnrichmentClient(provider=provider)

    assert client.analyze(content) == FALLBACK_ANALYSIS
    assert provider.prompts == []


def test_no_provider_returns_fallback():
    assert EnrichmentClient().analyze('Today was fine.') == FALLBACK_ANALYSIS


def test_provider_error_returns_fallback():
    client = EnrichmentClient(provider=StubProvider(error=RuntimeError('quota exceeded')))
    assert client.analyze('Today was fine.') == FALLBACK_ANALYSIS


def test_undecodable_reply_returns_fallback():
    client = EnrichmentClient(provider=StubProvider(reply='I feel like this entry is happy.'))
    assert client.analyze('Today was fine.') == FALLBACK_ANALYSIS


def test_valid_reply_is_normalized():
    client = EnrichmentClient(provider=StubProvider(reply='{"summary": " A good day. ", "mood": " Happy "}'))
    assert client.analyze('Great day at the beach') == Analysis('A good day.', 'happy')


def test_unknown_mood_becomes_neutral():
    client = EnrichmentClient(provider=StubProvider(reply='{"summary": "Rough day.", "mood": "furious"}'))
    assert client.analyze('Traffic was awful') == Analysis('Rough day.', 'neutral')


def test_missing_summary_uses_placeholder():
    client = EnrichmentClient(provider=StubProvider(reply='{"mood": "grateful"}'))
    assert client.analyze('Thanks to my friends') == Analysis(MISSING_SUMMARY, 'grateful')


def test_prompt_carries_content_and_moods():
    provider = StubProvider(reply='{"summary": "s", "mood": "calm"}')
    EnrichmentClient(provider=provider).analyze('Quiet evening reading')

    prompt = provider.prompts[0]
    assert 'Quiet evening reading' in prompt
    assert 'grateful' in prompt
    assert '"summary"' in prompt


def test_generate_json_never_raises():
    client = EnrichmentClient(provider=StubProvider(error=ConnectionError('offline')))
    assert client.generate_json('anything') is None


# ==================== OpenAIProvider ====================


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def test_openai_provider_sends_single_request():
    sdk = MagicMock()
    sdk.chat.completions.create.return_value = _completion('  {"summary": "s"}  ')
    provider = OpenAIProvider(api_key='sk-test', model='gpt-test', client=sdk)

    assert provider.generate('hello') == '{"summary": "s"}'
    sdk.chat.completions.create.assert_called_once()
    kwargs = sdk.chat.completions.create.call_args.kwargs
    assert kwargs['model'] == 'gpt-test'
    assert kwargs['messages'][-1] == {'role': 'user', 'content': 'hello'}


def test_openai_provider_rejects_empty_completion():
    sdk = MagicMock()
    sdk.chat.completions.create.return_value = _completion(None)
    provider = OpenAIProvider(api_key='sk-test', client=sdk)

    with pytest.raises(ValueError):
        provider.generate('hello')


def test_build_client_without_key_has_no_provider():
    client = build_enrichment_client({'OPENAI_API_KEY': None})
    assert not client.available


def test_build_client_with_key():
    with patch('journal.enrichment.OpenAI') as openai_cls:
        client = build_enrichment_client({'OPENAI_API_KEY': 'sk-test', 'OPENAI_MODEL': 'gpt-x', 'OPENAI_TIMEOUT': 5})

    assert client.available
    assert client.provider.model == 'gpt-x'
    openai_cls.assert_called_once_with(api_key='sk-test', timeout=5, max_retries=0)
