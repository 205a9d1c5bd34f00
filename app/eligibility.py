import logging
from typing import List, NamedTuple, Sequence

from .models import MidConfig, PaymentContext, Rejection

logger = logging.getLogger(__name__)


class FilterResult(NamedTuple):
    eligible: List[MidConfig]
    rejected: List[Rejection]


def rejection_reasons(mid: MidConfig, ctx: PaymentContext) -> List[str]:
    reasons = []
    rules = mid.cards
    if mid.status != "ACTIVE":
        reasons.append("inactive")
    if mid.country != ctx.country:
        reasons.append("country")
    if mid.currency != ctx.currency:
        reasons.append("currency")
    if rules.supported_mcc and ctx.mcc not in rules.supported_mcc:
        reasons.append("mcc")
    if ctx.allowed_card_brands.isdisjoint(rules.supported_card_brands):
        reasons.append("card_brand")
    if rules.supported_card_types is not None and ctx.allowed_card_types.isdisjoint(rules.supported_card_types):
        reasons.append("card_type")
    return reasons


def filter_eligible(candidates: Sequence[MidConfig], ctx: PaymentContext) -> FilterResult:
    eligible = []
    rejected = []
    for mid in candidates:
        reasons = rejection_reasons(mid, ctx)
        if reasons:
            logger.debug("Skipped MID %s: %s", mid.id, ", ".join(reasons))
            rejected.append(Rejection(mid_id=mid.id, reasons=reasons))
        else:
            logger.debug("Matched MID %s: %s", mid.id, mid.cards.mid_label)
            eligible.append(mid)

    logger.info("Found %d matching routes for %s/%s", len(eligible), ctx.country, ctx.currency)
    return FilterResult(eligible, rejected)
