# app/advisory/rules.py
"""
Static advisory rules used when building the screening report.

This is a fixed lookup table, not a knowledge base: the same inputs always
give the same outputs.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Literal, Tuple

from pydantic import BaseModel

from app.intake.schema import PatientRecord


class MedicalInsight(BaseModel):
    condition: str
    likelihood: int
    reasoning: str
    recommendations: List[str]


class SpecialistRecommendation(BaseModel):
    specialty: str
    reason: str
    urgency: Literal["routine", "soon", "urgent"]
    description: str


@dataclass(frozen=True)
class Condition:
    name: str
    description: str
    symptoms: Tuple[str, ...]
    category: str
    severity: Literal["low", "medium", "high"]


CONDITIONS: Tuple[Condition, ...] = (
    Condition(
        name="Thyroid Dysfunction",
        description="Imbalance in thyroid hormone production affecting metabolism",
        symptoms=("fatigue", "weight changes", "brain fog", "temperature sensitivity"),
        category="Endocrine",
        severity="medium",
    ),
    Condition(
        name="Adrenal Fatigue",
        description="Chronic stress leading to adrenal gland dysfunction",
        symptoms=("fatigue", "stress", "anxiety", "sleep issues", "brain fog"),
        category="Endocrine",
        severity="medium",
    ),
    Condition(
        name="Gut Dysbiosis",
        description="Imbalance in gut microbiome affecting digestion and immunity",
        symptoms=("bloating", "constipation", "diarrhea", "fatigue", "brain fog"),
        category="Digestive",
        severity="medium",
    ),
    Condition(
        name="Chronic Inflammation",
        description="Systemic inflammation affecting multiple body systems",
        symptoms=("pain", "fatigue", "brain fog", "mood changes"),
        category="Immune",
        severity="high",
    ),
    Condition(
        name="Nutrient Deficiencies",
        description="Deficiencies in essential vitamins and minerals",
        symptoms=("fatigue", "weakness", "brain fog", "mood changes"),
        category="Nutritional",
        severity="low",
    ),
)

CONDITIONS_BY_NAME: Dict[str, Condition] = {c.name: c for c in CONDITIONS}

# category -> (specialty, description)
SPECIALISTS: Dict[str, Tuple[str, str]] = {
    "Endocrine": (
        "Functional Medicine Endocrinologist",
        "Specialists in hormone optimization and metabolic health",
    ),
    "Digestive": (
        "Gastroenterologist / Functional Medicine Practitioner",
        "Experts in gut health and digestive system disorders",
    ),
    "Immune": (
        "Functional Medicine Practitioner / Rheumatologist",
        "Specialists in immune system dysfunction and autoimmune conditions",
    ),
    "Nutritional": (
        "Functional Nutritionist / Registered Dietitian",
        "Experts in nutritional therapy and supplement protocols",
    ),
    "Mental Health": (
        "Integrative Psychiatrist / Functional Medicine Practitioner",
        "Specialists in mental health with functional medicine approach",
    ),
}

CATEGORY_RECOMMENDATIONS: Dict[str, List[str]] = {
    "Endocrine": [
        "Comprehensive hormone panel testing",
        "Evaluate stress management and sleep quality",
        "Consider adaptogenic herb protocols",
    ],
    "Digestive": [
        "Comprehensive stool analysis",
        "Food sensitivity testing",
        "Probiotic and prebiotic supplementation",
    ],
    "Immune": [
        "Inflammatory marker testing (CRP, ESR)",
        "Autoimmune panel if indicated",
        "Anti-inflammatory diet protocol",
    ],
    "Nutritional": [
        "Comprehensive nutrient panel",
        "Targeted supplementation protocol",
        "Dietary optimization consultation",
    ],
}

GENERAL_PRACTITIONER = SpecialistRecommendation(
    specialty="Functional Medicine Practitioner",
    reason="Comprehensive root-cause analysis and personalized treatment plan",
    urgency="routine",
    description=(
        "A functional medicine practitioner can provide a holistic assessment "
        "and create an integrated treatment approach addressing all your "
        "health concerns."
    ),
)

DRUG_INTERACTION_WARNING = (
    "Multiple medications detected - recommend reviewing with pharmacist "
    "for potential interactions"
)

STRESS_TIPS = [
    "Implement stress reduction techniques: meditation, deep breathing, or yoga",
    "Consider adaptogenic herbs like ashwagandha or rhodiola (consult practitioner)",
]
SLEEP_TIPS = [
    "Optimize sleep hygiene: consistent bedtime, dark room, no screens 2 hours before bed",
    "Consider magnesium supplementation for sleep support (consult practitioner)",
]
DIGESTIVE_TIPS = [
    "Support digestive health with fermented foods and fiber-rich vegetables",
    "Consider elimination diet to identify food sensitivities",
    "Stay hydrated and consider digestive enzymes with meals",
]
ENERGY_TIPS = [
    "Support mitochondrial health with CoQ10 and B-complex vitamins",
    "Maintain stable blood sugar with balanced meals every 3-4 hours",
    "Get morning sunlight exposure to support circadian rhythm",
]
GENERAL_TIPS = [
    "Focus on nutrient-dense, whole foods diet",
    "Incorporate gentle movement like walking or swimming",
    "Stay hydrated with filtered water",
]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _symptom_matches(keyword: str, reported: List[str]) -> bool:
    keyword = keyword.lower()
    for symptom in reported:
        symptom = symptom.lower()
        if keyword in symptom or symptom in keyword:
            return True
    return False


def analyze_symptoms(symptoms: List[str]) -> List[MedicalInsight]:
    """
    Match reported symptoms against the condition table.

    Likelihood is the share of a condition's keywords found among the
    reported symptoms (substring match either way), as a whole percentage.
    Highest first; ties keep table order.
    """
    insights: List[MedicalInsight] = []

    for condition in CONDITIONS:
        matching = [s for s in condition.symptoms if _symptom_matches(s, symptoms)]
        if not matching:
            continue

        likelihood = _round_half_up(len(matching) / len(condition.symptoms) * 100)
        insights.append(
            MedicalInsight(
                condition=condition.name,
                likelihood=likelihood,
                reasoning=(
                    f"Based on {len(matching)} matching symptoms: {', '.join(matching)}"
                ),
                recommendations=list(CATEGORY_RECOMMENDATIONS.get(condition.category, [])),
            )
        )

    return sorted(insights, key=lambda i: i.likelihood, reverse=True)


def get_specialist_recommendations(
    insights: List[MedicalInsight],
) -> List[SpecialistRecommendation]:
    categories: List[str] = []
    for insight in insights[:3]:
        condition = CONDITIONS_BY_NAME.get(insight.condition)
        if condition is not None and condition.category not in categories:
            categories.append(condition.category)

    recommendations = [GENERAL_PRACTITIONER.model_copy()]
    for category in categories:
        specialist = SPECIALISTS.get(category)
        if specialist is None:
            continue
        specialty, description = specialist
        recommendations.append(
            SpecialistRecommendation(
                specialty=specialty,
                reason=f"Specialized care for {category.lower()} conditions",
                urgency="soon",
                description=description,
            )
        )
    return recommendations


def check_drug_interactions(medications: List[str]) -> List[str]:
    if len(medications) > 2:
        return [DRUG_INTERACTION_WARNING]
    return []


def get_lifestyle_recommendations(record: PatientRecord) -> List[str]:
    symptoms = record.symptoms
    lifestyle = record.lifestyle
    tips: List[str] = []

    if lifestyle.stress_level == "high" or "anxiety" in symptoms or "stress" in symptoms:
        tips.extend(STRESS_TIPS)

    if lifestyle.sleep_quality == "poor" or "insomnia" in symptoms or "fatigue" in symptoms:
        tips.extend(SLEEP_TIPS)

    if any(s in ("bloating", "constipation", "diarrhea") for s in symptoms):
        tips.extend(DIGESTIVE_TIPS)

    if "fatigue" in symptoms or "brain fog" in symptoms:
        tips.extend(ENERGY_TIPS)

    tips.extend(GENERAL_TIPS)
    return tips
