import json
import logging
from typing import Any, Dict, Optional

from openai import AsyncOpenAI, OpenAIError

from ...errors import GenerationError, NotConfigured

logger = logging.getLogger(__name__)


def _strip_code_fences(content: str) -> str:
    # Some models wrap JSON in ```json ... ``` even in JSON mode
    cleaned = content.strip()
    if cleaned.startswith("```"):
        cleaned = "\n".join(cleaned.splitlines()[1:])
    if cleaned.endswith("```"):
        cleaned = "\n".join(cleaned.splitlines()[:-1])
    return cleaned.strip()


def parse_json_object(content: Optional[str]) -> Dict[str, Any]:
    """
    Parse a model reply that must be a single JSON object.
    """
    cleaned = _strip_code_fences(content or "")
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise GenerationError("Generation service returned invalid JSON", details=str(exc)) from exc
    if not isinstance(data, dict):
        raise GenerationError("Generation service returned a non-object JSON value")
    return data


class LLMClient:
    """
    Chat-completion and transcription calls against the OpenAI API.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gpt-4o",
        transcribe_model: str = "whisper-1",
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.transcribe_model = transcribe_model
        self._client = client

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key) or self._client is not None

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self.api_key:
                raise NotConfigured("OpenAI API key not configured")
            self._client = AsyncOpenAI(api_key=self.api_key)
        return self._client

    async def complete_text(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
    ) -> str:
        params: Dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        }
        if temperature is not None:
            params["temperature"] = temperature
        if max_tokens is not None:
            params["max_tokens"] = max_tokens
        if json_mode:
            params["response_format"] = {"type": "json_object"}

        logger.info("Calling %s, prompt length=%d", self.model, len(user_prompt))
        try:
            completion = await self.client.chat.completions.create(**params)
        except OpenAIError as exc:
            raise GenerationError("Generation service request failed", details=str(exc)) from exc
        return completion.choices[0].message.content or ""

    async def complete_json(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: Optional[float] = None,
    ) -> Dict[str, Any]:
        content = await self.complete_text(
            system_prompt, user_prompt, temperature=temperature, json_mode=True
        )
        logger.debug("Raw LLM response snippet: %s", content[:200])
        return parse_json_object(content)

    async def transcribe(self, audio: bytes, file_name: str = "audio.webm", language: str = "en") -> str:
        try:
            response = await self.client.audio.transcriptions.create(
                file=(file_name, audio, "audio/webm"),
                model=self.transcribe_model,
                language=language,
            )
        except OpenAIError as exc:
            raise GenerationError("Transcription request failed", details=str(exc)) from exc
        return response.text
