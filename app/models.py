from enum import Enum
from typing import Any, Dict, FrozenSet, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class RoutingMode(str, Enum):
    SIMPLE = "SIMPLE"
    SPLIT = "SPLIT"


MidStatus = Literal["ACTIVE", "INACTIVE"]
MID_STATUSES = ("ACTIVE", "INACTIVE")


class Connection(BaseModel):
    model_config = ConfigDict(frozen=True)

    alias: str
    partner_name: str
    merchant_id: str
    acquiring_bank_name: str
    acquiring_bank_mid: str


class CardRules(BaseModel):
    model_config = ConfigDict(frozen=True)

    mid_label: str = ""
    supported_mcc: List[str] = Field(default_factory=list)  # empty => every mcc
    supported_card_brands: List[str] = Field(min_length=1)
    supported_card_types: Optional[List[str]] = None  # None => every card type
    installment: Any = None


class MidConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    status: MidStatus
    country: str
    currency: str
    weight: Optional[float] = None  # informational only, routing reads the weight table
    connection: Optional[Connection] = None
    cards: CardRules


class WeightEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    country: str
    mid_id: str
    weight: float = Field(ge=0)
    partner: Optional[str] = None


WeightTable = Dict[str, List[WeightEntry]]


class WeightedMid(BaseModel):
    model_config = ConfigDict(frozen=True)

    mid: MidConfig
    weight: float


class PaymentContext(BaseModel):
    """Everything the engine needs to know about a single card payment."""

    model_config = ConfigDict(frozen=True)

    country: str
    currency: str
    mcc: str
    allowed_card_brands: FrozenSet[str]
    allowed_card_types: FrozenSet[str]

    @classmethod
    def for_merchant(cls, country: str, currency: str, merchant: "MerchantSettings") -> "PaymentContext":
        return cls(
            country=country,
            currency=currency,
            mcc=merchant.cards.mcc,
            allowed_card_brands=frozenset(merchant.cards.allowed_card_brands),
            allowed_card_types=frozenset(merchant.cards.allowed_card_types),
        )


class CurrencyLimits(BaseModel):
    min_amount: Optional[str] = None
    max_amount: Optional[str] = None
    settlement_time: Optional[str] = None


class MerchantCards(BaseModel):
    allowed_card_brands: List[str]
    allowed_card_types: List[str]
    currency_configuration: Dict[str, Optional[CurrencyLimits]] = Field(default_factory=dict)
    mcc: str
    industry_sector: Optional[str] = None


class MerchantSettings(BaseModel):
    id: str
    business_id: str
    signing_entity: Optional[str] = None
    cards: MerchantCards


class Rejection(BaseModel):
    mid_id: str
    reasons: List[str]


class Attempt(BaseModel):
    mid_id: str
    weight: float
    outcome: Literal["considered", "selected"]


class RouteDecision(BaseModel):
    mid: MidConfig
    weight: float
    mode: RoutingMode
    attempts: List[Attempt] = Field(default_factory=list)
    rejected: List[Rejection] = Field(default_factory=list)


class RouteRequest(BaseModel):
    business_id: str
    country: str
    currency: str
    mode: Optional[RoutingMode] = None
    idempotency_key: Optional[str] = None


class MidStatusUpdate(BaseModel):
    mid_id: Optional[str] = None
    status: Optional[str] = None
