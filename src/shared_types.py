"""Shared enums and types for vylobot."""

from enum import StrEnum


class Facet(StrEnum):
    """Aspect of a catalog item a customer is asking about."""

    PRICE = "price"
    WARRANTY = "warranty"
    FEATURES = "features"
    FULL = "full"


class Provenance(StrEnum):
    """Where a knowledge entry came from."""

    OPERATOR_TAUGHT = "operator_taught"
    DERIVED = "derived"
    PENDING_REVIEW = "pending_review"
