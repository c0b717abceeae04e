"""Models for product recommendations."""

from __future__ import annotations

from enum import StrEnum

from topiko.models.base import FrozenModel


class Product(StrEnum):
    DISBLAY = "Disblay"
    TOPIKO = "Topiko"
    BRANDPRENEURING = "Topiko + Brandpreneuring"
    HEBT = "HEBT"


class Confidence(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ProductRecommendation(FrozenModel):
    """A recommended product with its static sales sheet."""

    product: Product
    confidence: Confidence
    reason: str
    features: tuple[str, ...] = ()
    pricing: str = ""
    setup_time: str = ""
