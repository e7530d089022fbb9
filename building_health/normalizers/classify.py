"""
Free-text classification by ordered keyword rules.

Each rule set is a list of (predicate, label) pairs evaluated in priority
order; the first matching predicate wins. Matching is case-insensitive
substring containment.
"""

from typing import Callable, List, Tuple

OTHER = "Other"

HEAT = "heat"
PESTS = "pests"
NOISE = "noise"
OTHER_SIGNAL = "other"

SIGNAL_KEYS = (HEAT, PESTS, NOISE, OTHER_SIGNAL)


def contains_any(*keywords: str) -> Callable[[str], bool]:
    """Predicate matching text that contains any of the keywords."""
    def predicate(text: str) -> bool:
        return any(k in text for k in keywords)
    return predicate


CATEGORY_RULES: List[Tuple[Callable[[str], bool], str]] = [
    (contains_any("heat", "hot water", "boiler"), "Heat/Hot Water"),
    (contains_any("roach", "mice", "rat", "pest", "rodent", "bedbug"), "Pests"),
    (contains_any("lead", "paint"), "Lead Paint"),
    (contains_any("mold", "mildew"), "Mold"),
    (contains_any("fire", "smoke", "detector", "sprinkler"), "Fire Safety"),
    (contains_any("electric", "outlet", "wiring"), "Electrical"),
    (contains_any("plumb", "leak", "water", "toilet", "sink"), "Plumbing"),
    (contains_any("lock", "door", "window", "security"), "Security"),
    (contains_any("elevator"), "Elevator"),
    (contains_any("gas"), "Gas"),
    (contains_any("roof", "structural", "wall", "floor", "ceiling"), "Structural"),
    (contains_any("garbage", "trash", "sanitary"), "Sanitation"),
]

CATEGORIES = tuple(label for _, label in CATEGORY_RULES) + (OTHER,)

# 311 rules see (complaint_type, descriptor)
SR311_RULES: List[Tuple[Callable[[str, str], bool], str]] = [
    (lambda t, d: contains_any("noise", "loud")(t) or "noise" in d, NOISE),
    (lambda t, d: contains_any("heat", "hot water")(t) or contains_any("heat", "hot water")(d), HEAT),
    (
        lambda t, d: contains_any("rodent", "pest", "roaches", "rats")(t)
        or contains_any("rodent", "roach", "mice", "rat", "bed bug")(d),
        PESTS,
    ),
]

HPD_COMPLAINT_RULES: List[Tuple[Callable[[str], bool], str]] = [
    (contains_any("heat", "hot water"), HEAT),
    (contains_any("rodent", "roach", "mice", "rat", "pest", "bedbug"), PESTS),
]


def first_match(rules, default: str, *texts: str) -> str:
    """Label of the first rule whose predicate accepts the texts."""
    for predicate, label in rules:
        if predicate(*texts):
            return label
    return default


def categorize(description: str) -> str:
    """Map a violation/complaint description to a fixed category."""
    return first_match(CATEGORY_RULES, OTHER, (description or "").lower())


def classify_311(complaint_type: str, descriptor: str) -> str:
    """Map a 311 request to 'noise', 'heat', 'pests' or 'other'."""
    return first_match(
        SR311_RULES,
        OTHER_SIGNAL,
        (complaint_type or "").lower(),
        (descriptor or "").lower(),
    )


def classify_hpd_complaint(complaint_type: str, major_category: str = "") -> str:
    """Map an HPD complaint to 'heat', 'pests' or 'other'."""
    return first_match(HPD_COMPLAINT_RULES, OTHER_SIGNAL, (complaint_type or major_category or "").lower())
