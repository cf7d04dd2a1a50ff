from brewmaster.models.tasting_note import TastingNote
from brewmaster.schemas.ai import AISuggestion
from brewmaster.schemas.recipe import Recipe
from brewmaster.services.recipe_calculator import attenuation_pct, calculate_recipe_stats


class BrewingAssistant:
    """Rules-based tasting critique; the LLM path in ai_orchestrator replaces it when enabled."""

    @staticmethod
    def analyze_tasting(recipe: Recipe, note: TastingNote | None, comments: str = "") -> list[AISuggestion]:
        suggestions: list[AISuggestion] = []
        stats = calculate_recipe_stats(recipe)
        text = f"{comments} {note.comments if note else ''}".lower()

        if note is not None and 0 < note.appearance <= 2:
            suggestions.append(
                AISuggestion(
                    title="Improve clarity",
                    rationale="Appearance scored low, which usually points to haze from yeast or chill haze.",
                    action="Add a kettle fining at 15 minutes and cold crash for 48 hours before packaging.",
                    priority="medium",
                )
            )

        if (note is not None and 0 < note.aroma <= 2) or "grassy" in text or "muted" in text:
            suggestions.append(
                AISuggestion(
                    title="Rework the aroma additions",
                    rationale="Aroma came across weak or vegetal for the hop load in this recipe.",
                    action="Move late hops to a 80 C whirlpool and shorten dry hop contact to 3-4 days.",
                    priority="medium",
                )
            )

        under_attenuated = stats.og > 1.0 and attenuation_pct(stats.og, stats.fg) < 70
        if "sweet" in text or "cloying" in text or under_attenuated:
            suggestions.append(
                AISuggestion(
                    title="Dry out the finish",
                    rationale="A sweet finish suggests the beer stopped short of its expected attenuation.",
                    action="Mash 1-2 C lower, pitch more yeast, and let fermentation free rise at the end.",
                    priority="high",
                )
            )

        if "harsh" in text or "astringent" in text or (stats.ibu > 60 and stats.og < 1.055):
            suggestions.append(
                AISuggestion(
                    title="Soften the bitterness",
                    rationale="Bitterness is high relative to the malt backbone.",
                    action="Shift part of the 60 minute charge to whirlpool or raise the base malt by 5-10%.",
                    priority="medium",
                )
            )

        if note is not None and 0 < note.mouthfeel <= 2:
            suggestions.append(
                AISuggestion(
                    title="Build more body",
                    rationale="Mouthfeel was rated thin.",
                    action="Add 5% carapils or flaked oats, or raise mash temperature to 68 C.",
                    priority="low",
                )
            )

        if not suggestions:
            suggestions.append(
                AISuggestion(
                    title="Brew it again",
                    rationale="Scores and comments do not point to a specific fault.",
                    action="Repeat the recipe unchanged and log measurements to confirm consistency.",
                    priority="low",
                )
            )

        return suggestions
