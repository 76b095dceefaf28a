"""Catalog of selectable health conditions and their follow-up questions.

The same catalog is used when logging conditions for the user, for family
members and for children. Stored records may predate the catalog (free-text
entries), so every helper here degrades to echoing the raw value instead of
failing.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

FOLLOW_UP_SUBTYPE = "subtype"
FOLLOW_UP_AGE = "age_at_diagnosis"
FOLLOW_UP_NOTES = "notes"
FOLLOW_UP_TYPES: Tuple[str, ...] = (FOLLOW_UP_SUBTYPE, FOLLOW_UP_AGE, FOLLOW_UP_NOTES)


@dataclass(frozen=True)
class ConditionOption:
    id: str
    label: str
    # recommendation rules match on this (e.g. "Cancer", "Diabetes")
    category: Optional[str] = None
    follow_ups: Tuple[str, ...] = ()
    # choices offered for the "subtype" follow-up
    subtypes: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "category": self.category,
            "follow_ups": list(self.follow_ups),
            "subtypes": list(self.subtypes),
        }


_CANCER_SUBTYPES = (
    "Breast", "Lung", "Colorectal", "Prostate", "Melanoma",
    "Ovarian", "Cervical", "Leukaemia", "Lymphoma", "Other",
)
_AUTOIMMUNE_SUBTYPES = (
    "Rheumatoid arthritis", "Lupus (SLE)", "Multiple sclerosis", "Crohn's / IBD",
    "Coeliac", "Psoriasis / psoriatic arthritis", "Sjögren's", "Other",
)

ALL_CONDITIONS: Tuple[ConditionOption, ...] = (
    # Blood & anaemia
    ConditionOption("anaemia", "Anaemia", "Anaemia"),
    ConditionOption("anaemia-iron", "Anaemia (iron deficiency)", "Anaemia"),
    ConditionOption("anaemia-b12", "Anaemia (B12 / folate)", "Anaemia"),
    ConditionOption("anaemia-haemolytic", "Anaemia (haemolytic)", "Anaemia"),
    ConditionOption("thalassaemia", "Thalassaemia", "Anaemia"),
    ConditionOption("sickle-cell", "Sickle cell disease", "Anaemia"),
    ConditionOption("bleeding-disorder", "Bleeding / clotting disorder"),
    # Cancer
    ConditionOption("cancer", "Cancer", "Cancer", (FOLLOW_UP_SUBTYPE, FOLLOW_UP_AGE), _CANCER_SUBTYPES),
    ConditionOption("cancer-breast", "Breast cancer", "Cancer", (FOLLOW_UP_AGE,)),
    ConditionOption("cancer-lung", "Lung cancer", "Cancer", (FOLLOW_UP_AGE,)),
    ConditionOption("cancer-colorectal", "Colorectal cancer", "Cancer", (FOLLOW_UP_AGE,)),
    ConditionOption("cancer-prostate", "Prostate cancer", "Cancer", (FOLLOW_UP_AGE,)),
    ConditionOption("cancer-ovarian", "Ovarian cancer", "Cancer", (FOLLOW_UP_AGE,)),
    ConditionOption("cancer-other", "Other cancer", "Cancer", (FOLLOW_UP_AGE, FOLLOW_UP_NOTES)),
    # Cardiovascular
    ConditionOption("heart-disease", "Heart disease", "Heart Disease", (FOLLOW_UP_NOTES,)),
    ConditionOption("hypertension", "Hypertension", "Hypertension"),
    ConditionOption("stroke", "Stroke", "Stroke", (FOLLOW_UP_AGE,)),
    ConditionOption("cholesterol", "High cholesterol"),
    # Metabolic
    ConditionOption(
        "diabetes", "Diabetes", "Diabetes", (FOLLOW_UP_SUBTYPE,),
        ("Type 1", "Type 2", "Gestational", "Prediabetes"),
    ),
    ConditionOption(
        "thyroid", "Thyroid disorder", None, (FOLLOW_UP_SUBTYPE,),
        ("Hypothyroidism", "Hyperthyroidism", "Hashimoto's", "Other"),
    ),
    ConditionOption("pcos", "PCOS", "Autoimmune Disorder"),
    # Autoimmune & inflammatory
    ConditionOption(
        "autoimmune", "Autoimmune disease", "Autoimmune Disorder",
        (FOLLOW_UP_SUBTYPE, FOLLOW_UP_NOTES), _AUTOIMMUNE_SUBTYPES,
    ),
    ConditionOption("rheumatoid-arthritis", "Rheumatoid arthritis", "Autoimmune Disorder"),
    ConditionOption("lupus", "Lupus (SLE)", "Autoimmune Disorder"),
    ConditionOption("ms", "Multiple sclerosis", "Autoimmune Disorder"),
    ConditionOption("ibd", "Crohn's / IBD", "Autoimmune Disorder"),
    ConditionOption("coeliac", "Coeliac disease", "Autoimmune Disorder"),
    ConditionOption("asthma", "Asthma", "Asthma"),
    ConditionOption("eczema", "Eczema"),
    # Mental health
    ConditionOption(
        "mental-health", "Mental health condition", "Mental Health", (FOLLOW_UP_SUBTYPE,),
        ("Depression", "Anxiety", "Bipolar", "PTSD", "ADHD", "Other"),
    ),
    ConditionOption("depression", "Depression", "Mental Health"),
    ConditionOption("anxiety", "Anxiety disorder", "Mental Health"),
    ConditionOption("bipolar", "Bipolar disorder", "Mental Health"),
    ConditionOption("adhd", "ADHD", "Mental Health"),
    # Neurological
    ConditionOption("alzheimers", "Alzheimer's / dementia", "Alzheimer's", (FOLLOW_UP_AGE,)),
    ConditionOption("epilepsy", "Epilepsy"),
    ConditionOption("migraine", "Migraine"),
    # Kidney & liver
    ConditionOption("kidney-disease", "Kidney disease", "Kidney Disease"),
    ConditionOption("liver-disease", "Liver disease"),
    # Gynaecological / reproductive
    ConditionOption("menopause", "Menopause", None, (FOLLOW_UP_AGE, FOLLOW_UP_NOTES)),
    ConditionOption("endometriosis", "Endometriosis"),
    ConditionOption("fibroids", "Fibroids"),
    ConditionOption("irregular-periods", "Irregular or heavy periods"),
    ConditionOption("infertility", "Fertility issues / infertility"),
    # Other
    ConditionOption("osteoporosis", "Osteoporosis"),
    ConditionOption("arthritis", "Arthritis (osteo or other)"),
    ConditionOption("chronic-pain", "Chronic pain"),
    ConditionOption("obesity", "Obesity / weight-related"),
    ConditionOption("eating-disorder", "Eating disorder"),
    ConditionOption("other", "Other", None, (FOLLOW_UP_NOTES,)),
)

RECOMMENDATION_CATEGORIES: Tuple[str, ...] = (
    "Heart Disease",
    "Hypertension",
    "Diabetes",
    "Cancer",
    "Autoimmune Disorder",
    "Mental Health",
    "Stroke",
    "Alzheimer's",
    "Asthma",
    "Kidney Disease",
    "Anaemia",
)

_BY_ID: Dict[str, ConditionOption] = {c.id: c for c in ALL_CONDITIONS}
_BY_LABEL: Dict[str, ConditionOption] = {c.label: c for c in ALL_CONDITIONS}


def condition_labels() -> List[str]:
    """Labels in catalog order, for pickers."""
    return [c.label for c in ALL_CONDITIONS]


def lookup_condition(key: Optional[str]) -> Optional[ConditionOption]:
    """Find a catalog entry by id first, then by label."""
    if not key:
        return None
    return _BY_ID.get(key) or _BY_LABEL.get(key)


def category_for_condition(key: str, strict: bool = False) -> Optional[str]:
    """Map a stored condition (id, label or category name) to its matching category.

    Entries without a declared category match under the key itself. Keys the
    catalog does not know are echoed back unchanged so historical free-text
    entries still take part in matching; pass ``strict=True`` to get ``None``
    for those instead.
    """
    option = lookup_condition(key)
    if option is None:
        option = next((c for c in ALL_CONDITIONS if c.category == key), None)
    if option is not None:
        return option.category or key
    return None if strict else key


def condition_label(key: str) -> str:
    option = lookup_condition(key)
    return option.label if option else key


def _detail_get(detail: Any, name: str) -> Any:
    if isinstance(detail, dict):
        return detail.get(name)
    return getattr(detail, name, None)


def details_to_display_list(details: Optional[Sequence[Any]], fallback: Sequence[str]) -> List[str]:
    """Render stored condition details for display.

    Details win whenever there is at least one; the legacy flat list is only
    shown when no detail records exist.
    """
    if details:
        out: List[str] = []
        for d in details:
            label = _detail_get(d, "label")
            subtype = _detail_get(d, "subtype")
            out.append(f"{label} ({subtype})" if subtype else label)
        return out
    return list(fallback or [])


def conditions_from_details(details: Optional[Iterable[Any]]) -> List[str]:
    """Flat ``category or label`` list matching the given details."""
    out: List[str] = []
    for d in details or []:
        value = _detail_get(d, "category") or _detail_get(d, "label")
        if value:
            out.append(value)
    return out


def details_from_labels(labels: Optional[Iterable[str]]) -> List[Dict[str, Any]]:
    """Minimal detail records for a list of labels picked in the family editor."""
    out: List[Dict[str, Any]] = []
    for label in labels or []:
        option = _BY_LABEL.get(label)
        detail: Dict[str, Any] = {"id": option.id if option else label, "label": label}
        if option and option.category:
            detail["category"] = option.category
        out.append(detail)
    return out


def build_condition_detail(
    key: str,
    subtype: Optional[str] = None,
    age_at_diagnosis: Optional[int] = None,
    notes: Optional[str] = None,
) -> Dict[str, Any]:
    """Build one detail record, keeping only answers the condition asks for.

    Raises ValueError for a subtype outside the declared choices or a
    negative age at diagnosis.
    """
    option = lookup_condition(key)
    if option is None:
        option = ConditionOption(id=key, label=key)

    detail: Dict[str, Any] = {
        "id": option.id,
        "label": option.label,
        "category": option.category or option.label,
    }
    subtype = (subtype or "").strip() or None
    notes = (notes or "").strip() or None

    if subtype and FOLLOW_UP_SUBTYPE in option.follow_ups:
        if option.subtypes and subtype not in option.subtypes:
            raise ValueError(f"Unknown subtype '{subtype}' for {option.label}")
        detail["subtype"] = subtype
    if age_at_diagnosis is not None and FOLLOW_UP_AGE in option.follow_ups:
        if age_at_diagnosis < 0:
            raise ValueError("age_at_diagnosis must be non-negative")
        detail["age_at_diagnosis"] = int(age_at_diagnosis)
    if notes and FOLLOW_UP_NOTES in option.follow_ups:
        detail["notes"] = notes
    return detail


__all__ = [
    "ALL_CONDITIONS",
    "ConditionOption",
    "FOLLOW_UP_TYPES",
    "RECOMMENDATION_CATEGORIES",
    "build_condition_detail",
    "category_for_condition",
    "condition_label",
    "condition_labels",
    "conditions_from_details",
    "details_from_labels",
    "details_to_display_list",
    "lookup_condition",
]
