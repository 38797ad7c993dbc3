"""Recommendation content shown for each tier."""

from dataclasses import dataclass

from hair_analysis.domain.results import Tier


@dataclass(frozen=True)
class Recommendation:
    """User-facing advice for a tier."""

    title: str
    message: str
    icon: str
    status: str
    tips: tuple[str, ...]


RECOMMENDATIONS: dict[Tier, Recommendation] = {
    Tier.LOW: Recommendation(
        title="Low Hair Density Detected",
        message=(
            "Consider consulting a dermatologist. "
            "Early intervention can be very effective."
        ),
        icon="⚠️",
        status="needs-attention",
        tips=(
            "Schedule professional consultation",
            "Consider proven hair loss treatments",
            "Maintain healthy diet with proteins",
            "Avoid harsh chemical treatments",
            "Use gentle, sulfate-free products",
        ),
    ),
    Tier.MEDIUM: Recommendation(
        title="Moderate Hair Density",
        message=(
            "Your hair shows some thinning. A good hair care routine "
            "can help maintain and improve density."
        ),
        icon="⚡",
        status="moderate",
        tips=(
            "Start comprehensive hair care routine",
            "Use strengthening shampoos with biotin",
            "Apply weekly conditioning treatments",
            "Consider hair growth supplements",
            "Minimize heat styling damage",
        ),
    ),
    Tier.GOOD: Recommendation(
        title="Good Hair Health",
        message=(
            "Your hair density is in a healthy range. "
            "Focus on maintenance to keep it this way."
        ),
        icon="✅",
        status="excellent",
        tips=(
            "Continue current hair care routine",
            "Use UV protection when outdoors",
            "Schedule regular trims every 6-8 weeks",
            "Maintain balanced, nutritious diet",
            "Monitor any changes over time",
        ),
    ),
}


def recommendation_for(tier: Tier) -> Recommendation:
    """Return the recommendation for a tier."""
    return RECOMMENDATIONS[tier]
