from typing import Dict, Type
from pixelpeek.llm.adapters import (
    AnthropicClient,
    GeminiClient,
    LLMClient,
    MockClient,
    OllamaClient,
    OpenAIClient
)

PROVIDERS: Dict[str, Type[LLMClient]] = {
    "openai": OpenAIClient,
    "anthropic": AnthropicClient,
    "google": GeminiClient,
    "gemini": GeminiClient,
    "ollama": OllamaClient,
    "mock": MockClient,
}


def create_client(provider: str, model_id: str | None = None, **kwargs) -> LLMClient:
    """
    Builds the completion client for a provider name. Without a model id the
    client's own default model is used.
    """
    client_cls = PROVIDERS.get(provider.lower())
    if client_cls is None:
        raise ValueError(f"Unknown provider: {provider} (expected one of {', '.join(sorted(PROVIDERS))})")
    if model_id:
        kwargs["model"] = model_id
    return client_cls(**kwargs)
