from .rules import (
    MedicalInsight,
    SpecialistRecommendation,
    analyze_symptoms,
    check_drug_interactions,
    get_lifestyle_recommendations,
    get_specialist_recommendations,
)

__all__ = [
    "MedicalInsight",
    "SpecialistRecommendation",
    "analyze_symptoms",
    "check_drug_interactions",
    "get_lifestyle_recommendations",
    "get_specialist_recommendations",
]
