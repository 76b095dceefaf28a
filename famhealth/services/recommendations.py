"""Screening-test recommendations from age, sex and family/personal history.

Rules are evaluated in a fixed order and the output keeps that order:
callers show the first few entries as "coming up", so reordering rules
changes what users see.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from famhealth.utils.records import record_value

DEFAULT_AGE = 30
PRIORITIES = ("high", "medium", "routine")

CARDIAC_CATEGORIES = ("Heart Disease", "Hypertension")


def _rec(test: str, reason: str, frequency: str, priority: str) -> Dict[str, str]:
    return {"test": test, "reason": reason, "frequency": frequency, "priority": priority}


def personal_conditions(health_history: Any) -> List[str]:
    """Conditions used for matching: detail categories win over the legacy list.

    A single detail record hides every ``current_conditions`` entry; the two
    lists are never merged.
    """
    if health_history is None:
        return []
    details = record_value(health_history, "condition_details", [])
    from_details = [v for v in (record_value(d, "category") or record_value(d, "label") for d in details) if v]
    if from_details:
        return from_details
    return list(record_value(health_history, "current_conditions", []))


def condition_pool(family_members: Optional[Iterable[Any]], health_history: Any) -> List[str]:
    pool: List[str] = []
    for member in family_members or []:
        pool.extend(record_value(member, "condition_list", []))
    pool.extend(personal_conditions(health_history))
    return pool


def recommend(profile: Any, family_members: Optional[Iterable[Any]], health_history: Any) -> List[Dict[str, str]]:
    """Return the ordered list of recommended tests.

    ``profile`` needs ``age``/``sex``, each family member ``condition_list``
    and ``health_history`` ``current_conditions``/``condition_details``; any of
    them may be missing. Matching is exact and case-sensitive on category
    names.
    """
    pool = set(condition_pool(family_members, health_history))
    age = record_value(profile, "age", DEFAULT_AGE)
    sex = record_value(profile, "sex")

    cardiac = any(c in pool for c in CARDIAC_CATEGORIES)
    cancer = "Cancer" in pool

    recs: List[Dict[str, str]] = [
        _rec("Complete Blood Count (CBC)", "Baseline health screening for all adults", "Annually", "routine"),
        _rec("Basic Metabolic Panel", "Monitors kidney function, blood sugar, and electrolytes", "Annually", "routine"),
        _rec(
            "Lipid Panel",
            "Screens for cholesterol and triglyceride levels",
            "Annually" if age >= 40 else "Every 4-6 years",
            "high" if cardiac else "routine",
        ),
    ]

    if "Diabetes" in pool:
        recs.append(_rec("HbA1c Test", "Family history of diabetes", "Every 6 months", "high"))
        recs.append(_rec("Fasting Glucose", "Monitor blood sugar", "Annually", "high"))

    if cardiac:
        recs.append(_rec("Blood Pressure Monitoring", "Cardiac conditions in family", "Every 3-6 months", "high"))
        recs.append(_rec("Electrocardiogram (ECG)", "Baseline cardiac screening", "Annually", "medium"))

    if cancer:
        recs.append(_rec("Cancer Marker Screening", "Family history of cancer", "Discuss with doctor", "high"))

    if sex == "female":
        recs.append(_rec(
            "Mammogram",
            "Recommended for women 40+" if age >= 40 else "Baseline if family history",
            "Annually" if age >= 40 else "As recommended",
            "high" if cancer else "medium",
        ))
        recs.append(_rec("Pap Smear", "Cervical cancer screening", "Every 3 years", "routine"))

    if age >= 45:
        recs.append(_rec("Colonoscopy", "Recommended from age 45", "Every 10 years", "high" if cancer else "medium"))

    if "Mental Health" in pool:
        recs.append(_rec("Mental Health Screening", "Family history", "Annually", "medium"))

    if age >= 50:
        recs.append(_rec("Bone Density Scan (DEXA)", "Adults 50+", "Every 2 years", "routine"))

    return recs


def group_by_priority(recs: Iterable[Dict[str, str]]) -> Dict[str, List[Dict[str, str]]]:
    grouped: Dict[str, List[Dict[str, str]]] = {p: [] for p in PRIORITIES}
    for rec in recs:
        grouped.setdefault(rec["priority"], []).append(rec)
    return grouped


def top_recommendations(recs: List[Dict[str, str]], limit: int = 6) -> List[Dict[str, str]]:
    return list(recs[: max(0, limit)])


__all__ = [
    "DEFAULT_AGE",
    "PRIORITIES",
    "condition_pool",
    "group_by_priority",
    "personal_conditions",
    "recommend",
    "top_recommendations",
]
