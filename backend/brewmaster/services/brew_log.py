import json
from datetime import date

from brewmaster.models.brew_log import BrewLog
from brewmaster.schemas.brew_log import BrewLogBottling, BrewLogMeasurements, BrewLogRead
from brewmaster.schemas.recipe import Recipe
from brewmaster.services.recipe_calculator import calculate_abv, calculate_recipe_stats, priming_sugar

STATUS_ORDER = ("brewing", "fermenting", "bottled")

DEFAULT_BOTTLING_VOLUME_L = 20.0
DEFAULT_TARGET_CO2 = 2.4
DEFAULT_FERMENTATION_TEMP_C = 20.0
FALLBACK_OG = 1.050
FALLBACK_FG = 1.010


class InvalidStatusTransition(ValueError):
    """Raised when a brew log would move back to an earlier stage."""


def measured_alpha(log: BrewLog) -> dict[str, float]:
    if not log.measured_alpha_json:
        return {}
    try:
        payload = json.loads(log.measured_alpha_json)
    except json.JSONDecodeError:
        return {}
    if not isinstance(payload, dict):
        return {}
    return {str(name): float(alpha) for name, alpha in payload.items() if isinstance(alpha, (int, float))}


def apply_measurements(log: BrewLog, measurements: BrewLogMeasurements) -> None:
    log.actual_og = measurements.actual_og
    log.actual_fg = measurements.actual_fg
    log.actual_volume = measurements.actual_volume
    log.mash_temp = measurements.mash_temp
    log.boil_gravity = measurements.boil_gravity
    log.fermentation_temp = measurements.fermentation_temp
    log.measured_alpha_json = json.dumps(measurements.measured_alpha) if measurements.measured_alpha else None
    sync_bottling_volume(log)


def apply_bottling(log: BrewLog, bottling: BrewLogBottling) -> None:
    log.bottling_date = bottling.bottling_date
    log.target_co2 = bottling.target_co2
    log.sugar_type = bottling.sugar_type
    log.sugar_amount = bottling.sugar_amount
    if bottling.bottling_volume is not None:
        log.bottling_volume = bottling.bottling_volume
    sync_bottling_volume(log)


def sync_bottling_volume(log: BrewLog) -> None:
    # Until the beer is bottled the bottling volume follows the fermenter volume.
    if log.status != "bottled" and log.actual_volume is not None:
        log.bottling_volume = log.actual_volume


def log_priming_sugar(log: BrewLog) -> int:
    volume = log.bottling_volume or log.actual_volume or DEFAULT_BOTTLING_VOLUME_L
    target_co2 = log.target_co2 or DEFAULT_TARGET_CO2
    temp_c = log.fermentation_temp if log.fermentation_temp is not None else DEFAULT_FERMENTATION_TEMP_C
    return priming_sugar(target_co2, volume, temp_c, log.sugar_type or "table_sugar")


def advance_status(log: BrewLog, new_status: str, today: date) -> None:
    if new_status not in STATUS_ORDER:
        raise InvalidStatusTransition(f"Unknown brew log status '{new_status}'.")

    current_status = log.status or STATUS_ORDER[0]
    if STATUS_ORDER.index(new_status) < STATUS_ORDER.index(current_status):
        raise InvalidStatusTransition(f"Cannot move a brew log from '{current_status}' back to '{new_status}'.")

    sync_bottling_volume(log)
    log.status = new_status

    if new_status == "fermenting" and log.fermentation_date is None:
        log.fermentation_date = today

    if new_status == "bottled":
        if log.bottling_date is None:
            log.bottling_date = today
        if log.sugar_amount is None:
            log.sugar_amount = log_priming_sugar(log)


def actual_abv(log: BrewLog, recipe: Recipe) -> float:
    specifications = recipe.specifications
    spec_og = specifications.og.value if specifications and specifications.og else None
    spec_fg = specifications.fg.value if specifications and specifications.fg else None

    og = log.actual_og or spec_og or FALLBACK_OG
    fg = log.actual_fg or spec_fg or FALLBACK_FG

    return calculate_abv(
        og,
        fg,
        log.status == "bottled",
        log.sugar_amount,
        log.bottling_volume,
    )


def build_brew_log_read(log: BrewLog, recipe: Recipe) -> BrewLogRead:
    alpha_overrides = measured_alpha(log)

    return BrewLogRead(
        id=log.id,
        recipe_id=log.recipe_id,
        recipe_name=recipe.name,
        status=log.status,
        started_on=log.started_on,
        brew_date=log.brew_date,
        fermentation_date=log.fermentation_date,
        notes=log.notes or "",
        measurements=BrewLogMeasurements(
            actual_og=log.actual_og,
            actual_fg=log.actual_fg,
            actual_volume=log.actual_volume,
            mash_temp=log.mash_temp,
            boil_gravity=log.boil_gravity,
            measured_alpha=alpha_overrides,
            fermentation_temp=log.fermentation_temp,
        ),
        bottling=BrewLogBottling(
            bottling_date=log.bottling_date,
            target_co2=log.target_co2 or DEFAULT_TARGET_CO2,
            sugar_type=log.sugar_type or "table_sugar",
            sugar_amount=log.sugar_amount,
            bottling_volume=log.bottling_volume,
        ),
        created_at=log.created_at,
        actual_abv=actual_abv(log, recipe),
        brew_day_ibu=calculate_recipe_stats(recipe, alpha_overrides).ibu,
        priming_sugar_g=log_priming_sugar(log),
    )
