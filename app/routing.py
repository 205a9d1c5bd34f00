import logging
from typing import Mapping, Optional, Sequence

from .eligibility import filter_eligible
from .errors import InvalidContext
from .models import Attempt, MidConfig, PaymentContext, RouteDecision, RoutingMode, WeightEntry
from .selector import RandomSource, select
from .weights import attach_weights

logger = logging.getLogger(__name__)


def validate_context(ctx: PaymentContext) -> None:
    missing = [name for name in ("country", "currency", "mcc") if not getattr(ctx, name)]
    if not ctx.allowed_card_brands:
        missing.append("allowed_card_brands")
    if not ctx.allowed_card_types:
        missing.append("allowed_card_types")
    if missing:
        raise InvalidContext(missing)


def decide_route(
    candidates: Sequence[MidConfig],
    weight_table: Mapping[str, Sequence[WeightEntry]],
    ctx: PaymentContext,
    mode: RoutingMode = RoutingMode.SIMPLE,
    rng: Optional[RandomSource] = None,
) -> RouteDecision:
    """Pick one MID for the payment described by ``ctx``.

    Raises ``InvalidContext`` before doing any work if the context is incomplete,
    and ``NoEligibleRoute`` when nothing can take the payment.
    """
    validate_context(ctx)

    eligible, rejected = filter_eligible(candidates, ctx)
    weighted = attach_weights(eligible, weight_table, ctx.country)
    chosen = select(weighted, mode, rng)

    attempts = [
        Attempt(
            mid_id=w.mid.id,
            weight=w.weight,
            outcome="selected" if w is chosen else "considered",
        )
        for w in weighted
    ]
    logger.info("Routed %s/%s via %s (mode=%s, weight=%s)", ctx.country, ctx.currency, chosen.mid.id, mode.value, chosen.weight)
    return RouteDecision(mid=chosen.mid, weight=chosen.weight, mode=mode, attempts=attempts, rejected=rejected)


def select_route(
    candidates: Sequence[MidConfig],
    weight_table: Mapping[str, Sequence[WeightEntry]],
    ctx: PaymentContext,
    mode: RoutingMode = RoutingMode.SIMPLE,
    rng: Optional[RandomSource] = None,
) -> MidConfig:
    return decide_route(candidates, weight_table, ctx, mode, rng).mid
