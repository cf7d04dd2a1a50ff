import httpx
import pytest

from brewmaster.services import llm_provider
from brewmaster.services.llm_provider import LLMProviderError, OpenAICompatibleLLM


@pytest.fixture
def client() -> OpenAICompatibleLLM:
    return OpenAICompatibleLLM(base_url="https://example.com/", api_key="secret", model="x")


def test_parse_suggestions_from_json_content(client: OpenAICompatibleLLM) -> None:
    content = (
        '{"suggestions": ['
        '{"title": "Tip 1", "rationale": "Why", "action": "Do X", "priority": "high"}, '
        '{"title": "Tip 2", "rationale": "Why 2", "action": "Do Y"}, '
        '{"title": "", "rationale": "dropped", "action": "dropped"}'
        "]}"
    )

    suggestions = client._parse_suggestions(content)  # noqa: SLF001

    assert len(suggestions) == 2
    assert suggestions[0].title == "Tip 1"
    assert suggestions[1].priority == "medium"


def test_parse_suggestions_from_markdown_fence(client: OpenAICompatibleLLM) -> None:
    content = """
```json
{
  "suggestions": [
    {"title": "Tip 1", "rationale": "Why", "action": "Do X", "priority": "low"}
  ]
}
```
"""

    suggestions = client._parse_suggestions(content)  # noqa: SLF001

    assert len(suggestions) == 1
    assert suggestions[0].title == "Tip 1"


def test_parse_suggestions_raises_for_invalid_json(client: OpenAICompatibleLLM) -> None:
    with pytest.raises(LLMProviderError):
        client._parse_suggestions("not json")  # noqa: SLF001


def test_parse_recipe_accepts_wrapped_recipe(client: OpenAICompatibleLLM) -> None:
    content = """Here you go:
```json
{"recipe": {"name": "Hazy Pale", "type": "All Grain",
  "ingredients": {"fermentables": [{"name": "Pale Malt", "amount": {"unit": "kilograms", "value": 4},
                                    "yield": {"potential": {"value": 1.037}}}],
                  "hops": [{"name": "Citra", "use": "Aroma"}]}}}
```
"""

    recipe = client._parse_recipe(content)  # noqa: SLF001

    assert recipe.name == "Hazy Pale"
    assert recipe.type == "all_grain"
    assert recipe.ingredients.fermentables[0].yield_.potential.value == 1.037
    assert recipe.ingredients.hops[0].use == "whirlpool"


def test_parse_recipe_requires_fermentables(client: OpenAICompatibleLLM) -> None:
    with pytest.raises(LLMProviderError):
        client._parse_recipe('{"name": "Water", "ingredients": {}}')  # noqa: SLF001


def test_request_posts_chat_completion(client: OpenAICompatibleLLM, monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_post(url: str, **kwargs: object) -> httpx.Response:
        captured["url"] = url
        captured.update(kwargs)
        return httpx.Response(
            200,
            json={"choices": [{"message": {"content": "hello"}}]},
            request=httpx.Request("POST", url),
        )

    monkeypatch.setattr(llm_provider.httpx, "post", fake_post)

    assert client._request("system", "user") == "hello"  # noqa: SLF001
    assert captured["url"] == "https://example.com/v1/chat/completions"
    assert captured["headers"]["Authorization"] == "Bearer secret"
    assert captured["json"]["model"] == "x"


def test_request_wraps_http_errors(client: OpenAICompatibleLLM, monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_post(url: str, **_: object) -> httpx.Response:
        return httpx.Response(503, request=httpx.Request("POST", url))

    monkeypatch.setattr(llm_provider.httpx, "post", fake_post)

    with pytest.raises(LLMProviderError):
        client._request("system", "user")  # noqa: SLF001


def test_request_rejects_empty_content(client: OpenAICompatibleLLM, monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_post(url: str, **_: object) -> httpx.Response:
        return httpx.Response(
            200,
            json={"choices": [{"message": {"content": "  "}}]},
            request=httpx.Request("POST", url),
        )

    monkeypatch.setattr(llm_provider.httpx, "post", fake_post)

    with pytest.raises(LLMProviderError):
        client._request("system", "user")  # noqa: SLF001
