from fastapi import APIRouter

from brewmaster.schemas.calculations import AbvRead, AbvRequest, PrimingSugarRead, PrimingSugarRequest
from brewmaster.services.brew_log import FALLBACK_FG, FALLBACK_OG
from brewmaster.services.recipe_calculator import calculate_abv, priming_sugar, residual_co2

router = APIRouter(prefix="/calculators", tags=["calculators"])


@router.post("/abv", response_model=AbvRead)
def abv(payload: AbvRequest) -> AbvRead:
    value = calculate_abv(
        payload.og or FALLBACK_OG,
        payload.fg or FALLBACK_FG,
        payload.is_bottled,
        payload.sugar_g,
        payload.volume_l,
    )
    return AbvRead(abv=value)


@router.post("/priming-sugar", response_model=PrimingSugarRead)
def priming(payload: PrimingSugarRequest) -> PrimingSugarRead:
    return PrimingSugarRead(
        sugar_g=priming_sugar(payload.target_co2, payload.liters, payload.temp_c, payload.sugar_type),
        sugar_type=payload.sugar_type,
        residual_co2=round(residual_co2(payload.temp_c), 2),
    )
