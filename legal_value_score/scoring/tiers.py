"""
Tier Metadata
legal_value_score/scoring/tiers.py

Presentation record (title, color, message) for every tier label of both
variants. Pure lookup; never computed from scores.
"""

from dataclasses import asdict, dataclass
from typing import Dict

from legal_value_score.core.exceptions import UnknownTierError


@dataclass(frozen=True)
class TierMetadata:
    title: str
    color: str
    message: str

    def as_dict(self) -> Dict[str, str]:
        return asdict(self)


TIER_METADATA: Dict[str, TierMetadata] = {
    # Legacy impact tiers
    "optimized": TierMetadata(
        title="OPTIMIZED",
        color="green",
        message="Your legal function operates as a strategic asset. Focus on maintaining this advantage as you scale.",
    ),
    "capable": TierMetadata(
        title="CAPABLE WITH GAPS",
        color="yellow",
        message="You're managing well, but there are opportunities to unlock more value and reduce hidden costs.",
    ),
    "at-risk": TierMetadata(
        title="AT RISK",
        color="orange",
        message="Significant blind spots exist. Without intervention, these will compound as you grow.",
    ),
    "exposed": TierMetadata(
        title="EXPOSED",
        color="red",
        message="Critical vulnerabilities detected. Immediate action recommended to prevent material loss or compliance failure.",
    ),
    # Opportunity tiers
    "maximized": TierMetadata(
        title="VALUE MAXIMIZED",
        color="green",
        message="Your legal function is already capturing most of the value available. Protect that position as you scale.",
    ),
    "strong-foundation": TierMetadata(
        title="STRONG FOUNDATION",
        color="yellow",
        message="The fundamentals are in place. Targeted improvements can still release meaningful value.",
    ),
    "significant-opportunity": TierMetadata(
        title="SIGNIFICANT OPPORTUNITY",
        color="orange",
        message="There is substantial value left on the table in your contracts, spend and commercial velocity.",
    ),
    "transformational": TierMetadata(
        title="TRANSFORMATIONAL OPPORTUNITY",
        color="red",
        message="Your legal function has the largest upside of any tier. The right changes could unlock a step change in value.",
    ),
}


def get_tier_metadata(tier: str) -> TierMetadata:
    """Return the presentation record for a tier label."""
    try:
        return TIER_METADATA[tier]
    except KeyError:
        raise UnknownTierError(tier) from None
