# src/pricing/promotion_parser.py

"""Shelf promotion label interpretation.

Two label families are understood:

* multi-buy, ``"<N>x<M>"`` at the start of the label (``"2x1"``,
  ``"3x2"``, ``"4x3"``): the promotional unit price applies once ``N``
  units are taken;
* second-unit discount, any label containing ``"2do al"``
  (``"2do al 70%"``): the promotional unit price applies in pairs.

Anything else falls back to regular pricing.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger("chango.pricing")

_MULTI_BUY_RE = re.compile(r"^(\d+)x", re.IGNORECASE)
_SECOND_UNIT_MARKER = "2do al"


class PromotionKind(Enum):
    """How a promotion is unlocked."""

    MULTI_BUY = "multiBuy"
    NTH_UNIT_DISCOUNT = "nthUnitDiscount"
    NONE = "none"


@dataclass(frozen=True)
class PromotionRule:
    """Minimum quantity that unlocks the promotional unit price."""

    kind: PromotionKind = PromotionKind.NONE
    threshold: int = 1

    @property
    def is_active(self) -> bool:
        """True when the rule can change the price of a line."""
        return self.kind is not PromotionKind.NONE and self.threshold > 1


NO_PROMOTION = PromotionRule()


def parse_promotion(label: str | None) -> PromotionRule:
    """Turn a promotion label into a :class:`PromotionRule`.

    Never raises; empty or unrecognised labels yield ``NO_PROMOTION``.
    """
    if not label:
        return NO_PROMOTION

    lowered = label.lower()

    match = _MULTI_BUY_RE.match(lowered)
    if match:
        return PromotionRule(
            kind=PromotionKind.MULTI_BUY,
            threshold=max(int(match.group(1)), 1),
        )

    if _SECOND_UNIT_MARKER in lowered:
        return PromotionRule(
            kind=PromotionKind.NTH_UNIT_DISCOUNT, threshold=2,
        )

    logger.debug("Unrecognised promotion label %r", label)
    return NO_PROMOTION
