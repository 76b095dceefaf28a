"""Static medication notes shown next to the user's medication list."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from famhealth.utils.records import record_value

CONFIG_PATH = Path(__file__).parent.parent / "config" / "medications.yaml"

UNKNOWN_MEDICATION_NOTE = (
    "Detailed information for this medication is not yet in our database. "
    "Please consult your pharmacist or doctor for interactions and warnings."
)
GENERAL_DISCLAIMER = (
    "This information is for educational purposes only. It is not a substitute for "
    "professional medical or pharmaceutical advice. Always consult your doctor or "
    "pharmacist regarding medication interactions and side effects."
)


def load_medication_info() -> Dict[str, Dict[str, Any]]:
    with open(CONFIG_PATH, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return {
        str(name).strip().lower(): {
            "category": entry.get("category", ""),
            "warnings": list(entry.get("warnings") or []),
            "interactions": list(entry.get("interactions") or []),
        }
        for name, entry in data.items()
    }


MEDICATION_INFO = load_medication_info()


def lookup_medication(name: Optional[str]) -> Optional[Dict[str, Any]]:
    """Return the reference entry for a medication name, if we have one."""
    key = (name or "").strip().lower()
    if not key:
        return None
    return MEDICATION_INFO.get(key)


def medication_insights(health_history: Any, family_members: Any) -> Dict[str, Any]:
    """Per-medication cards plus allergy and family context."""
    medications: List[str] = list(record_value(health_history, "medications", []))
    allergies: List[str] = list(record_value(health_history, "allergies", []))

    family_conditions: List[str] = []
    for member in family_members or []:
        for cond in record_value(member, "condition_list", []):
            if cond not in family_conditions:
                family_conditions.append(cond)

    cards = []
    for med in medications:
        info = lookup_medication(med)
        cards.append({
            "name": med,
            "info": info,
            "note": None if info else UNKNOWN_MEDICATION_NOTE,
        })

    return {
        "medications": cards,
        "allergies": allergies,
        "family_conditions": family_conditions,
        "disclaimer": GENERAL_DISCLAIMER,
    }


__all__ = ["MEDICATION_INFO", "lookup_medication", "medication_insights"]
