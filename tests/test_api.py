from types import SimpleNamespace

import pytest

from bayes_core import api
from bayes_core.api import ENGINE_REGISTRY, _clean_response, get_engine


class RecordingEngine:
    def __init__(self, api_key=None, model=None, temperature=0.7):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature


def test_unknown_provider():
    with pytest.raises(ValueError):
        get_engine("nonexistent")


def test_default_model_per_provider(monkeypatch):
    monkeypatch.delenv("BAYES_BOXES_MODEL", raising=False)
    monkeypatch.setitem(ENGINE_REGISTRY, "groq", RecordingEngine)

    engine = get_engine("GROQ", api_key="k", runtime={"temperature": 0.1})

    assert engine.model == "llama-3.3-70b-versatile"
    assert engine.temperature == 0.1
    assert engine.api_key == "k"


def test_provider_and_model_from_environment(monkeypatch):
    monkeypatch.setenv("BAYES_BOXES_PROVIDER", "openai")
    monkeypatch.setenv("BAYES_BOXES_MODEL", "gpt-test")
    monkeypatch.setitem(ENGINE_REGISTRY, "openai", RecordingEngine)

    engine = get_engine()

    assert isinstance(engine, RecordingEngine)
    assert engine.model == "gpt-test"


def test_missing_api_key(monkeypatch):
    pytest.importorskip("groq")
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    with pytest.raises(ValueError):
        api.GroqEngine()


def test_clean_response():
    assert _clean_response("  Assistant: Hello ") == "Hello"
    assert _clean_response("Explanation: Box 2") == "Box 2"
    assert _clean_response(None) == ""


class FakeGenerativeModel:
    def __init__(self, model):
        self.model = model
        self.calls = []

    def generate_content(self, prompt, generation_config=None):
        self.calls.append((prompt, generation_config))
        return SimpleNamespace(text="  Explanation: Box 2 holds more red. ")


class FakeGenai:
    def __init__(self):
        self.configured_key = None

    def configure(self, api_key=None):
        self.configured_key = api_key

    def GenerativeModel(self, model):
        return FakeGenerativeModel(model)


def test_gemini_missing_api_key(monkeypatch):
    monkeypatch.setattr(api, "genai", FakeGenai())
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    with pytest.raises(ValueError):
        api.GeminiEngine()


def test_gemini_requires_package(monkeypatch):
    monkeypatch.setattr(api, "genai", None)
    with pytest.raises(ImportError):
        api.GeminiEngine(api_key="k")


def test_gemini_generate_passes_generation_config(monkeypatch):
    fake = FakeGenai()
    monkeypatch.setattr(api, "genai", fake)

    engine = api.GeminiEngine(api_key="k", model="gemini-test", temperature=0.3)
    text = engine.generate("why?", max_tokens=99)

    assert fake.configured_key == "k"
    assert engine.client.model == "gemini-test"
    assert engine.client.calls == [("why?", {"temperature": 0.3, "max_output_tokens": 99})]
    assert text == "Box 2 holds more red."


def test_gemini_is_default_provider(monkeypatch):
    monkeypatch.delenv("BAYES_BOXES_PROVIDER", raising=False)
    monkeypatch.delenv("BAYES_BOXES_MODEL", raising=False)
    monkeypatch.setattr(api, "genai", FakeGenai())

    engine = get_engine(api_key="k")

    assert isinstance(engine, api.GeminiEngine)
    assert engine.model == "gemini-2.5-flash"


def test_chat_completions_generate(monkeypatch):
    calls = []

    class FakeClient:
        def __init__(self, api_key=None):
            self.chat = SimpleNamespace(completions=SimpleNamespace(create=self.create))

        def create(self, **kwargs):
            calls.append(kwargs)
            message = SimpleNamespace(content="AI: Blue is likelier in Box 1.")
            return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    monkeypatch.setattr(api, "OpenAI", FakeClient)

    engine = api.OpenAIEngine(api_key="k")
    text = engine.generate("why?", max_tokens=50)

    assert text == "Blue is likelier in Box 1."
    assert calls == [
        {
            "model": "gpt-4o-mini",
            "messages": [{"role": "user", "content": "why?"}],
            "temperature": 0.7,
            "max_tokens": 50,
        }
    ]
