# apps/coaching/adapters/openai_generator.py
import json
import logging
from typing import Any, Dict, Optional

import openai
from django.conf import settings

from apps.core.exceptions import UpstreamGenerationError
from apps.coaching.ports.text_generator import ITextGenerator

logger = logging.getLogger(__name__)


class OpenAITextGenerator(ITextGenerator):
    """Chat Completions z wymuszonym trybem JSON (response_format=json_object)."""

    def __init__(
            self,
            api_key: Optional[str] = None,
            model: Optional[str] = None,
            temperature: Optional[float] = None,
            timeout: Optional[float] = None,
            client=None
        ):
        self.model = model or settings.OPENAI_MODEL
        self.temperature = settings.OPENAI_TEMPERATURE if temperature is None else temperature
        self.client = client or openai.OpenAI(
            api_key=api_key or settings.OPENAI_API_KEY,
            timeout=timeout or settings.OPENAI_TIMEOUT,
        )

    def generate_json(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
        messages = [{"role": "system", "content": system_prompt}]
        if user_prompt:
            messages.append({"role": "user", "content": user_prompt})

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
                response_format={"type": "json_object"},
            )
        except openai.OpenAIError as e:
            logger.error("OpenAI request failed: %s", e)
            raise UpstreamGenerationError("AI service is unavailable, please try again later")

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise UpstreamGenerationError("AI service returned an empty response")

        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as e:
            logger.warning("Unparseable OpenAI response: %s", e)
            raise UpstreamGenerationError("AI service returned malformed JSON")

        if not isinstance(parsed, dict):
            raise UpstreamGenerationError("AI service returned malformed JSON")
        return parsed
