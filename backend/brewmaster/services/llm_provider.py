import json
import logging
import re

import httpx
from pydantic import ValidationError

from brewmaster.schemas.ai import AISuggestion
from brewmaster.schemas.recipe import Recipe

logger = logging.getLogger(__name__)


class LLMProviderError(RuntimeError):
    """Raised when LLM provider calls fail or return unusable output."""


def _extract_json_block(text: str) -> str:
    fenced_match = re.search(r"```(?:json)?\s*(\{.*\})\s*```", text, flags=re.DOTALL)
    if fenced_match:
        return fenced_match.group(1)

    brace_match = re.search(r"\{.*\}", text, flags=re.DOTALL)
    if brace_match:
        return brace_match.group(0)

    return text


def _load_json_object(content: str) -> dict:
    try:
        parsed = json.loads(_extract_json_block(content))
    except json.JSONDecodeError as exc:
        raise LLMProviderError("LLM response was not valid JSON") from exc

    if not isinstance(parsed, dict):
        raise LLMProviderError("LLM response was not a JSON object")
    return parsed


class OpenAICompatibleLLM:
    """Minimal client for any ``/v1/chat/completions`` endpoint."""

    def __init__(self, base_url: str, api_key: str | None, model: str, timeout_seconds: int = 20):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.model = model
        self.timeout_seconds = timeout_seconds

    def _request(self, system_prompt: str, user_prompt: str) -> str:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": 0.2,
        }

        try:
            response = httpx.post(
                f"{self.base_url}/v1/chat/completions",
                headers=headers,
                json=payload,
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as exc:
            raise LLMProviderError(f"LLM request failed: {exc}") from exc
        except ValueError as exc:
            raise LLMProviderError("LLM response body was not JSON") from exc

        try:
            content = body["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise LLMProviderError("LLM response missing choices/message content") from exc

        if not isinstance(content, str) or not content.strip():
            raise LLMProviderError("LLM response content is empty")

        return content

    def _parse_suggestions(self, content: str) -> list[AISuggestion]:
        suggestions_raw = _load_json_object(content).get("suggestions")
        if not isinstance(suggestions_raw, list):
            raise LLMProviderError("LLM response missing suggestions list")

        suggestions: list[AISuggestion] = []
        for item in suggestions_raw:
            if not isinstance(item, dict):
                continue
            suggestion = AISuggestion(
                title=str(item.get("title", "")).strip(),
                rationale=str(item.get("rationale", "")).strip(),
                action=str(item.get("action", "")).strip(),
                priority=str(item.get("priority", "medium")).strip() or "medium",
            )
            if suggestion.title and suggestion.rationale and suggestion.action:
                suggestions.append(suggestion)

        if not suggestions:
            raise LLMProviderError("LLM response did not contain valid suggestions")

        return suggestions

    def _parse_recipe(self, content: str) -> Recipe:
        parsed = _load_json_object(content)
        payload = parsed.get("recipe", parsed)
        if not isinstance(payload, dict):
            raise LLMProviderError("LLM response recipe was not an object")

        try:
            recipe = Recipe.model_validate(payload)
        except ValidationError as exc:
            raise LLMProviderError(f"LLM recipe did not validate: {exc.error_count()} error(s)") from exc

        if not recipe.name or not recipe.ingredients.fermentables:
            raise LLMProviderError("LLM recipe is missing a name or fermentables")

        logger.debug("LLM drafted recipe %r with %d fermentable(s)", recipe.name, len(recipe.ingredients.fermentables))
        return recipe

    def suggest(self, *, system_prompt: str, user_prompt: str) -> list[AISuggestion]:
        content = self._request(system_prompt=system_prompt, user_prompt=user_prompt)
        return self._parse_suggestions(content)

    def draft_recipe(self, *, system_prompt: str, user_prompt: str) -> Recipe:
        content = self._request(system_prompt=system_prompt, user_prompt=user_prompt)
        return self._parse_recipe(content)
