from __future__ import annotations

from typing import Dict, Optional

import logging
import os

try:
    import google.generativeai as genai
except ImportError:  # pragma: no cover
    genai = None

try:
    from groq import Groq
except ImportError:  # pragma: no cover
    Groq = None

try:
    from openai import OpenAI
except ImportError:  # pragma: no cover
    OpenAI = None

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = "gemini"
DEFAULT_MODELS = {
    "gemini": "gemini-2.5-flash",
    "groq": "llama-3.3-70b-versatile",
    "openai": "gpt-4o-mini",
}


def _clean_response(generated: Optional[str]) -> str:
    generated = (generated or "").strip()
    for prefix in ["Response:", "Assistant:", "AI:", "Explanation:"]:
        if generated.startswith(prefix):
            generated = generated[len(prefix) :].strip()
            break
    return generated


class GeminiEngine:
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODELS["gemini"],
        temperature: float = 0.7,
    ) -> None:
        if genai is None:
            raise ImportError(
                "google-generativeai package required. Install with: pip install google-generativeai"
            )

        self.api_key = api_key or os.getenv("GEMINI_API_KEY")
        if not self.api_key:
            raise ValueError("GEMINI_API_KEY not found.")

        genai.configure(api_key=self.api_key)
        self.client = genai.GenerativeModel(model)
        self.model = model
        self.temperature = temperature

    def generate(self, prompt: str, max_tokens: int = 512) -> str:
        response = self.client.generate_content(
            prompt,
            generation_config={
                "temperature": self.temperature,
                "max_output_tokens": max_tokens,
            },
        )
        return _clean_response(response.text)


class ChatCompletionsEngine:
    """Shared client for providers exposing ``chat.completions.create``."""

    provider = ""
    key_variable = ""
    package = ""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: float = 0.7,
    ) -> None:
        client_cls = self.client_class()
        if client_cls is None:
            raise ImportError(f"{self.package} package required. Install with: pip install {self.package}")

        self.api_key = api_key or os.getenv(self.key_variable)
        if not self.api_key:
            raise ValueError(f"{self.key_variable} not found.")

        self.client = client_cls(api_key=self.api_key)
        self.model = model or DEFAULT_MODELS[self.provider]
        self.temperature = temperature

    @staticmethod
    def client_class():
        raise NotImplementedError

    def generate(self, prompt: str, max_tokens: int = 512) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.temperature,
            max_tokens=max_tokens,
        )
        return _clean_response(response.choices[0].message.content)


class GroqEngine(ChatCompletionsEngine):
    provider = "groq"
    key_variable = "GROQ_API_KEY"
    package = "groq"

    @staticmethod
    def client_class():
        return Groq


class OpenAIEngine(ChatCompletionsEngine):
    provider = "openai"
    key_variable = "OPENAI_API_KEY"
    package = "openai"

    @staticmethod
    def client_class():
        return OpenAI


ENGINE_REGISTRY = {
    "gemini": GeminiEngine,
    "groq": GroqEngine,
    "openai": OpenAIEngine,
}


def get_engine(provider: Optional[str] = None, api_key: Optional[str] = None, runtime: Optional[Dict[str, float]] = None):
    runtime = runtime or {}
    provider = (provider or os.getenv("BAYES_BOXES_PROVIDER") or DEFAULT_PROVIDER).lower()
    if provider not in ENGINE_REGISTRY:
        raise ValueError(f"Unsupported provider: {provider}")

    engine_cls = ENGINE_REGISTRY[provider]
    model = runtime.get("model") or os.getenv("BAYES_BOXES_MODEL") or DEFAULT_MODELS[provider]
    logger.debug("Creating %s engine with model %s", provider, model)

    return engine_cls(
        api_key=api_key,
        model=model,
        temperature=float(runtime.get("temperature", 0.7)),
    )
