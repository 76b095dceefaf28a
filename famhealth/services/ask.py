"""Keyword-matched answers for the guided "Ask" flow.

No model is involved: the message is matched against a few topics and the
answer is filled in from the user's own records.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Optional

from famhealth.utils.records import record_value

TOPICS = {
    "tests": "Which tests should I get",
    "heart": "Heart health and cholesterol",
    "diabetes": "Diabetes risk",
    "cancer": "Cancer screening",
    "mental": "Mental health",
    "medication": "Is my medication safe",
    "symptom": "A symptom I've noticed",
    "treatment": "Treatment options",
}


def build_question(topic: Optional[str], details: Optional[str] = None) -> str:
    topic_label = TOPICS.get(topic or "", topic or "")
    parts = [f"Question about: {topic_label}."]
    if details and details.strip():
        parts.append(f"Details: {details.strip()}")
    return " ".join(parts)


def _unique(items: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(items))


def generate_canned_response(
    message: str,
    profile: Any,
    family_members: Optional[Iterable[Any]],
    health_history: Any,
) -> str:
    msg = (message or "").lower()
    family_conditions: List[str] = []
    for member in family_members or []:
        family_conditions.extend(record_value(member, "condition_list", []))
    medications: List[str] = list(record_value(health_history, "medications", []))
    allergies: List[str] = list(record_value(health_history, "allergies", []))
    age = record_value(profile, "age")
    sex = record_value(profile, "sex")

    if "cholesterol" in msg or "heart" in msg:
        if any(c in ("Heart Disease", "Hypertension") for c in family_conditions):
            advice = (
                "Given your age, early screening is a great preventive step."
                if age and age < 30
                else "I'd recommend regular lipid panel tests."
            )
            return (
                "Based on your family history, I can see cardiac conditions in your family. "
                f"{advice} Consider discussing a comprehensive cardiovascular screening with your "
                "doctor, including a lipid panel, blood pressure monitoring, and possibly an ECG."
            )
        return (
            "While I don't see significant cardiac history in your family records, it's always wise "
            "to monitor cholesterol levels regularly. A standard lipid panel every 4-6 years is "
            "recommended for most adults."
        )

    if "test" in msg or "screening" in msg:
        tests = ["Complete blood count (CBC)", "Basic metabolic panel"]
        if age and age >= 40:
            tests.append("Colonoscopy screening")
        if age and age >= 50:
            tests.append("Bone density scan")
        if "Diabetes" in family_conditions:
            tests.append("HbA1c (diabetes screening)")
        if "Cancer" in family_conditions:
            tests.append("Cancer marker screening")
        if sex == "female":
            tests.extend(["Mammogram", "Pap smear"])
        age_part = f" (age {age})" if age else ""
        lines = "\n".join(f"- {t}" for t in tests)
        return (
            f"Based on your profile{age_part} and family history, here are recommended tests:\n\n"
            f"{lines}\n\nSpeak with your healthcare provider about the right schedule for these screenings."
        )

    if "medication" in msg or "safe" in msg or "drug" in msg:
        if medications:
            if allergies:
                caution = (
                    f"Given your allergies to {', '.join(allergies)}, always inform your doctor "
                    "before starting any new medication."
                )
            else:
                caution = "Always consult your doctor before making any changes to your medication regimen."
            return f"You're currently taking: {', '.join(medications)}. {caution}"
        return (
            "I don't have any medications on record for you. If you'd like to track your "
            "medications, you can update your health profile in Settings."
        )

    if "treatment" in msg:
        history = f" ({', '.join(_unique(family_conditions)[:5])})" if family_conditions else ""
        return (
            f"Based on your family history{history}, any treatment decision should be made with your "
            "doctor. Share your family history with them so they can tailor options. I can help you "
            "prepare: note any symptoms, current medications, and what you've already tried."
        )

    if "symptom" in msg:
        history = f" ({', '.join(_unique(family_conditions))})" if family_conditions else ""
        return (
            f"Symptoms can have many causes. Given your family history{history}, it's worth mentioning "
            "these patterns to your doctor. Track when the symptom started, how often it happens, and "
            "what makes it better or worse. I recommend discussing with a healthcare provider for a "
            "proper assessment."
        )

    if "diabetes" in msg or "blood sugar" in msg:
        if "Diabetes" in family_conditions:
            return (
                "I see diabetes in your family history. This means you may have a higher genetic "
                "predisposition. Key preventive steps include: maintaining a healthy weight, regular "
                "exercise (150+ min/week), limiting processed sugars, and getting annual HbA1c tests."
            )
        return (
            "Based on your records, there's no significant family history of diabetes. However, "
            "maintaining a balanced diet and regular exercise is always beneficial."
        )

    if "cancer" in msg:
        if "Cancer" in family_conditions:
            return (
                "Your family history includes cancer. I recommend discussing enhanced screening "
                "protocols with your doctor. Depending on the type of cancer in your family, genetic "
                "counseling may also be valuable."
            )
        return (
            "I don't see cancer in your family history, but regular age-appropriate screenings are "
            "still important for everyone."
        )

    if "mental" in msg or "anxiety" in msg or "depression" in msg:
        if "Mental Health" in family_conditions:
            return (
                "Mental health conditions appear in your family history. It's great that you're being "
                "proactive. Consider maintaining regular check-ins with a mental health professional, "
                "staying physically active, and practicing stress management techniques."
            )
        return (
            "While your family history doesn't show mental health conditions, mental wellness is "
            "important for everyone. Don't hesitate to seek support if you're feeling overwhelmed."
        )

    if family_conditions:
        summary = f"Based on your family history (including {', '.join(_unique(family_conditions))})"
    else:
        summary = "Based on your profile"
    return (
        f"{summary}, I'd be happy to help with more specific questions. Try asking about:\n\n"
        '- "What tests should I get at my age?"\n'
        '- "Should I be worried about heart disease?"\n'
        '- "Is my medication safe?"\n'
        '- "What about diabetes risk?"\n\n'
        "I can provide more tailored insights based on your family and personal health data."
    )


__all__ = ["TOPICS", "build_question", "generate_canned_response"]
