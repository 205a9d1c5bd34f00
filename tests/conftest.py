import shutil
from pathlib import Path

import pytest

from app.config import DEFAULT_DATA_DIR, Settings
from app.models import CardRules, MidConfig, PaymentContext, WeightEntry


def make_mid(mid_id, country="US", currency="USD", status="ACTIVE", mcc=(), brands=("VISA",), types=None):
    return MidConfig(
        id=mid_id,
        status=status,
        country=country,
        currency=currency,
        cards=CardRules(
            mid_label=f"{mid_id} label",
            supported_mcc=list(mcc),
            supported_card_brands=list(brands),
            supported_card_types=list(types) if types is not None else None,
        ),
    )


def make_ctx(country="US", currency="USD", mcc="5999", brands=("VISA",), types=("CREDIT",)):
    return PaymentContext(
        country=country,
        currency=currency,
        mcc=mcc,
        allowed_card_brands=frozenset(brands),
        allowed_card_types=frozenset(types),
    )


def make_weights(country, **weights):
    return {country: [WeightEntry(country=country, mid_id=k, weight=v) for k, v in weights.items()]}


class FixedRandom:
    """Returns a fixed draw and counts how often it was asked."""

    def __init__(self, value):
        self.value = value
        self.calls = 0

    def random(self):
        self.calls += 1
        return self.value


@pytest.fixture
def data_dir(tmp_path) -> Path:
    target = tmp_path / "data"
    shutil.copytree(DEFAULT_DATA_DIR, target)
    return target


@pytest.fixture
def settings(data_dir) -> Settings:
    return Settings(data_dir=data_dir)
