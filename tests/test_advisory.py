from app.advisory import (
    analyze_symptoms,
    check_drug_interactions,
    get_lifestyle_recommendations,
    get_specialist_recommendations,
)
from app.intake import PatientRecord


def test_fatigue_and_brain_fog_ranking():
    insights = analyze_symptoms(["fatigue", "brain fog"])
    names = [i.condition for i in insights]

    assert "Adrenal Fatigue" in names
    assert "Chronic Inflammation" in names
    assert [i.likelihood for i in insights] == sorted(
        (i.likelihood for i in insights), reverse=True
    )
    # 2 of 4 keywords beats 2 of 5; ties keep table order
    assert names == [
        "Thyroid Dysfunction",
        "Chronic Inflammation",
        "Nutrient Deficiencies",
        "Adrenal Fatigue",
        "Gut Dysbiosis",
    ]
    assert insights[0].likelihood == 50
    assert insights[-1].likelihood == 40


def test_more_matches_rank_higher():
    insights = analyze_symptoms(["bloating", "constipation", "fatigue"])
    assert insights[0].condition == "Gut Dysbiosis"
    assert insights[0].likelihood == 60
    assert insights[0].reasoning == (
        "Based on 3 matching symptoms: bloating, constipation, fatigue"
    )
    assert "Comprehensive stool analysis" in insights[0].recommendations


def test_substring_match_works_both_ways():
    # "sleep" is inside "sleep issues", "weakness" contains "weak"
    names = [i.condition for i in analyze_symptoms(["sleep", "weak"])]
    assert names == ["Nutrient Deficiencies", "Adrenal Fatigue"]


def test_case_insensitive_matching():
    insights = analyze_symptoms(["PAIN"])
    assert [i.condition for i in insights] == ["Chronic Inflammation"]
    assert insights[0].likelihood == 25


def test_no_matches():
    assert analyze_symptoms(["nausea"]) == []
    assert analyze_symptoms([]) == []


def test_specialists_always_start_with_general_practitioner():
    recs = get_specialist_recommendations([])
    assert len(recs) == 1
    assert recs[0].specialty == "Functional Medicine Practitioner"
    assert recs[0].urgency == "routine"


def test_specialists_from_top_three_categories():
    insights = analyze_symptoms(["fatigue", "brain fog"])
    recs = get_specialist_recommendations(insights)
    # top three: Thyroid (Endocrine), Inflammation (Immune), Nutrient (Nutritional)
    assert [r.specialty for r in recs] == [
        "Functional Medicine Practitioner",
        "Functional Medicine Endocrinologist",
        "Functional Medicine Practitioner / Rheumatologist",
        "Functional Nutritionist / Registered Dietitian",
    ]
    assert all(r.urgency == "soon" for r in recs[1:])
    assert recs[1].reason == "Specialized care for endocrine conditions"


def test_specialist_categories_are_not_repeated():
    insights = analyze_symptoms(["stress", "anxiety", "temperature sensitivity"])
    recs = get_specialist_recommendations(insights)
    assert [r.specialty for r in recs] == [
        "Functional Medicine Practitioner",
        "Functional Medicine Endocrinologist",
    ]


def test_drug_interactions():
    assert len(check_drug_interactions(["A", "B", "C"])) == 1
    assert check_drug_interactions(["A"]) == []
    assert check_drug_interactions(["A", "B"]) == []


def test_lifestyle_recommendations_general_only():
    tips = get_lifestyle_recommendations(PatientRecord())
    assert tips == [
        "Focus on nutrient-dense, whole foods diet",
        "Incorporate gentle movement like walking or swimming",
        "Stay hydrated with filtered water",
    ]


def test_lifestyle_recommendations_blocks():
    record = PatientRecord.model_validate(
        {
            "symptoms": ["fatigue", "bloating"],
            "lifestyle": {"stress_level": "high", "sleep_quality": "good"},
        }
    )
    tips = get_lifestyle_recommendations(record)
    assert tips[0].startswith("Implement stress reduction techniques")
    assert any(t.startswith("Optimize sleep hygiene") for t in tips)
    assert any(t.startswith("Support digestive health") for t in tips)
    assert any(t.startswith("Support mitochondrial health") for t in tips)
    assert tips[-1] == "Stay hydrated with filtered water"
    assert len(tips) == 2 + 2 + 3 + 3 + 3


def test_rules_are_deterministic():
    symptoms = ["pain", "fatigue", "stress"]
    assert analyze_symptoms(symptoms) == analyze_symptoms(symptoms)
