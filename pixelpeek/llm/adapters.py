import json
import logging
import os
import re
import aiohttp
from pixelpeek.errors import ProviderError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


def extract_json(text: str) -> dict:
    """
    Robustly extracts JSON from a string, handling markdown blocks and preambles.
    """
    # 1. Try direct parse
    try:
        data = json.loads(text)
        if isinstance(data, dict):
            return data
    except json.JSONDecodeError:
        pass

    # 2. Try to find content between ```json and ```
    match = re.search(r'```(?:json)?\s*(\{.*?\})\s*```', text, re.DOTALL)
    if match:
        try:
            return json.loads(match.group(1))
        except json.JSONDecodeError:
            pass

    # 3. Try to find anything between { and }
    match = re.search(r'(\{.*\})', text, re.DOTALL)
    if match:
        try:
            return json.loads(match.group(1))
        except json.JSONDecodeError:
            pass

    return {}


class LLMClient:
    """
    Base class for chat-completion style providers.
    Subclasses implement _call_api; complete() is what callers use.
    """

    def __init__(self, model: str, timeout: float = DEFAULT_TIMEOUT):
        self.model = model
        self.timeout = timeout

    async def complete(self, system_prompt: str, user_prompt: str, json_mode: bool = False) -> str:
        return await self._call_api(system_prompt, user_prompt, json_mode)

    async def _call_api(self, system_prompt: str, user_prompt: str, json_mode: bool) -> str:
        raise NotImplementedError()

    async def _post(self, url: str, payload: dict, headers: dict | None = None) -> dict:
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.post(url, headers=headers, json=payload) as resp:
                if resp.status != 200:
                    text = await resp.text()
                    logger.error(f"{type(self).__name__} API error: {resp.status} - {text}")
                    raise ProviderError(f"{type(self).__name__} returned HTTP {resp.status}")
                return await resp.json()


class OpenAIClient(LLMClient):
    def __init__(self, model: str = "gpt-4o", api_key: str = None, timeout: float = DEFAULT_TIMEOUT):
        super().__init__(model, timeout)
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        self.url = "https://api.openai.com/v1/chat/completions"

    async def _call_api(self, system_prompt: str, user_prompt: str, json_mode: bool) -> str:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt}
            ]
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        data = await self._post(self.url, payload, headers)
        return data["choices"][0]["message"]["content"]


class AnthropicClient(LLMClient):
    def __init__(self, model: str = "claude-3-5-sonnet-20240620", api_key: str = None, timeout: float = DEFAULT_TIMEOUT):
        super().__init__(model, timeout)
        self.api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        self.url = "https://api.anthropic.com/v1/messages"

    async def _call_api(self, system_prompt: str, user_prompt: str, json_mode: bool) -> str:
        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": "2023-06-01",
            "content-type": "application/json"
        }
        payload = {
            "model": self.model,
            "system": system_prompt,
            "messages": [{"role": "user", "content": user_prompt}],
            "max_tokens": 256
        }

        data = await self._post(self.url, payload, headers)
        return data["content"][0]["text"]


class GeminiClient(LLMClient):
    def __init__(self, model: str = "gemini-2.0-flash", api_key: str = None, timeout: float = DEFAULT_TIMEOUT):
        super().__init__(model, timeout)
        self.api_key = api_key or os.getenv("GOOGLE_API_KEY")
        self.url = f"https://generativelanguage.googleapis.com/v1beta/models/{self.model}:generateContent"

    async def _call_api(self, system_prompt: str, user_prompt: str, json_mode: bool) -> str:
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key or ""
        }
        payload = {
            "system_instruction": {"parts": [{"text": system_prompt}]},
            "contents": [{"parts": [{"text": user_prompt}]}]
        }
        if json_mode:
            payload["generationConfig"] = {"response_mime_type": "application/json"}

        data = await self._post(self.url, payload, headers)
        return data["candidates"][0]["content"]["parts"][0]["text"]


class OllamaClient(LLMClient):
    def __init__(self, model: str = "llama3", base_url: str = "http://localhost:11434", timeout: float = DEFAULT_TIMEOUT):
        super().__init__(model, timeout)
        self.base_url = f"{base_url}/api/chat"

    async def _call_api(self, system_prompt: str, user_prompt: str, json_mode: bool) -> str:
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt}
            ],
            "stream": False
        }
        if json_mode:
            payload["format"] = "json"

        data = await self._post(self.base_url, payload)
        return data["message"]["content"]


class MockClient(LLMClient):
    """
    Offline client. Replays the given responses in order, then returns "".
    """

    def __init__(self, model: str = "mock", responses: list[str] | None = None, timeout: float = DEFAULT_TIMEOUT):
        super().__init__(model, timeout)
        self.responses = list(responses or [])
        self.calls = []

    async def _call_api(self, system_prompt: str, user_prompt: str, json_mode: bool) -> str:
        self.calls.append((system_prompt, user_prompt))
        if self.responses:
            return self.responses.pop(0)
        return ""
