import json
import logging

from brewmaster.core.config import settings
from brewmaster.models.tasting_note import TastingNote
from brewmaster.schemas.ai import AISuggestion
from brewmaster.schemas.recipe import Recipe
from brewmaster.services.brewing_assistant import BrewingAssistant
from brewmaster.services.llm_provider import LLMProviderError, OpenAICompatibleLLM
from brewmaster.services.observability import observability_tracker
from brewmaster.services.recipe_calculator import apply_specifications, calculate_recipe_stats
from brewmaster.services.recipe_templates import build_recipe, match_template

logger = logging.getLogger(__name__)

_RECIPE_SHAPE = (
    '{"recipe":{"name":"...","type":"all_grain","batch_size":{"unit":"liters","value":20},'
    '"style":{"name":"...","category":"..."},"efficiency":{"brewhouse":75},'
    '"boil_time":{"unit":"minutes","value":60},"ingredients":{'
    '"fermentables":[{"name":"...","amount":{"unit":"kilograms","value":4.5},'
    '"yield":{"potential":{"value":1.037}},"color":{"value":3}}],'
    '"hops":[{"name":"...","amount":{"unit":"grams","value":25},"alpha_acid":{"value":10},'
    '"use":"boil|first_wort|whirlpool|dry_hop|mash","time":{"unit":"minutes","value":60}}],'
    '"cultures":[{"name":"...","type":"ale","form":"dry","attenuation":75}]}}}'
)


def _llm_enabled() -> bool:
    return settings.ai_provider.lower() == "llm"


def _build_llm_client() -> OpenAICompatibleLLM:
    if not settings.ai_llm_base_url or not settings.ai_llm_model:
        raise LLMProviderError("LLM provider is enabled but AI_LLM_BASE_URL or AI_LLM_MODEL is missing")

    return OpenAICompatibleLLM(
        base_url=settings.ai_llm_base_url,
        api_key=settings.ai_llm_api_key,
        model=settings.ai_llm_model,
        timeout_seconds=settings.ai_llm_timeout_seconds,
    )


def _draft_prompts(prompt: str) -> tuple[str, str]:
    system_prompt = (
        "You are a homebrewing recipe designer. Output JSON only with shape: "
        f"{_RECIPE_SHAPE}. Use metric units and realistic amounts for the batch size."
    )
    user_prompt = f"Design a recipe for: {prompt}"
    return system_prompt, user_prompt


def _tasting_prompts(recipe: Recipe, note: TastingNote | None, comments: str) -> tuple[str, str]:
    system_prompt = (
        "You are a beer judge giving recipe feedback. Output JSON only with shape: "
        '{"suggestions":[{"title":"...","rationale":"...","action":"...","priority":"low|medium|high"}]}. '
        "Tie every suggestion to a concrete recipe or process change."
    )

    stats = calculate_recipe_stats(recipe)
    scores = None
    if note is not None:
        scores = {
            "appearance": note.appearance,
            "aroma": note.aroma,
            "flavor": note.flavor,
            "mouthfeel": note.mouthfeel,
            "overall": note.overall,
        }

    user_prompt = (
        f"Recipe: {recipe.name}\n"
        f"Style: {recipe.style.name if recipe.style else 'unspecified'}\n"
        f"Estimated OG {stats.og}, FG {stats.fg}, ABV {stats.abv}%, IBU {stats.ibu}, SRM {stats.color}\n"
        f"Fermentables: {[item.name for item in recipe.ingredients.fermentables]}\n"
        f"Hops: {[item.name for item in recipe.ingredients.hops]}\n"
        f"Scores (0-5): {json.dumps(scores)}\n"
        f"Tasting notes: {comments or (note.comments if note else '')}\n"
        "Return 1-4 actionable suggestions."
    )
    return system_prompt, user_prompt


def _fallback(kind: str, exc: LLMProviderError) -> None:
    logger.warning("LLM %s failed, using rules instead: %s", kind, exc)
    observability_tracker.increment("ai_llm_fallback")


def draft_recipe(prompt: str) -> tuple[Recipe, str]:
    rules_recipe = build_recipe(match_template(prompt))

    if not _llm_enabled():
        return apply_specifications(rules_recipe), "rules"

    try:
        client = _build_llm_client()
        system_prompt, user_prompt = _draft_prompts(prompt)
        llm_recipe = client.draft_recipe(system_prompt=system_prompt, user_prompt=user_prompt)
        return apply_specifications(llm_recipe.model_copy(update={"id": None})), "llm"
    except LLMProviderError as exc:
        _fallback("recipe draft", exc)
        return apply_specifications(rules_recipe), "llm_fallback"


def analyze_tasting(recipe: Recipe, note: TastingNote | None, comments: str = "") -> tuple[list[AISuggestion], str]:
    rules_suggestions = BrewingAssistant.analyze_tasting(recipe=recipe, note=note, comments=comments)

    if not _llm_enabled():
        return rules_suggestions, "rules"

    try:
        client = _build_llm_client()
        system_prompt, user_prompt = _tasting_prompts(recipe=recipe, note=note, comments=comments)
        llm_suggestions = client.suggest(system_prompt=system_prompt, user_prompt=user_prompt)
        return llm_suggestions, "llm"
    except LLMProviderError as exc:
        _fallback("tasting analysis", exc)
        return rules_suggestions, "llm_fallback"
