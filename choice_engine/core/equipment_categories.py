"""
Equipment Category Classification.

Maps free-text fragments from starting-equipment descriptions ("any simple weapon",
"one set of artisan's tools") to the category ids used by the 5e equipment catalog.

Both pattern tables are ordered lists and the first matching pattern wins, so a
more specific pattern must come before any looser pattern it contains.
"""
from typing import List, Optional, Tuple


class EquipmentCategory:
    """Category ids matching the 5e API equipment categories."""
    # Weapons
    SIMPLE_WEAPONS = "simple-weapons"
    MARTIAL_WEAPONS = "martial-weapons"
    SIMPLE_MELEE_WEAPONS = "simple-melee-weapons"
    SIMPLE_RANGED_WEAPONS = "simple-ranged-weapons"
    MARTIAL_MELEE_WEAPONS = "martial-melee-weapons"
    MARTIAL_RANGED_WEAPONS = "martial-ranged-weapons"

    # Armor
    LIGHT_ARMOR = "light-armor"
    MEDIUM_ARMOR = "medium-armor"
    HEAVY_ARMOR = "heavy-armor"
    SHIELDS = "shields"

    # Tools
    ARTISAN_TOOLS = "artisan-tools"
    MUSICAL_INSTRUMENTS = "musical-instruments"
    GAMING_SETS = "gaming-sets"
    TOOL_PROFICIENCIES = "tool-proficiencies"
    TOOLS = "tools"

    # General
    ADVENTURING_GEAR = "adventuring-gear"
    EQUIPMENT = "equipment"
    VEHICLES = "vehicles"


# (substring pattern, category id), checked in order against lower-cased text.
# Melee- and ranged-labelled weapon text collapses to the broad weapon category.
CATEGORY_PATTERNS: List[Tuple[str, str]] = [
    ("martial melee weapon", EquipmentCategory.MARTIAL_WEAPONS),
    ("martial ranged weapon", EquipmentCategory.MARTIAL_WEAPONS),
    ("martial weapon", EquipmentCategory.MARTIAL_WEAPONS),
    ("simple melee weapon", EquipmentCategory.SIMPLE_WEAPONS),
    ("simple ranged weapon", EquipmentCategory.SIMPLE_WEAPONS),
    ("simple weapon", EquipmentCategory.SIMPLE_WEAPONS),
    ("light armor", EquipmentCategory.LIGHT_ARMOR),
    ("medium armor", EquipmentCategory.MEDIUM_ARMOR),
    ("heavy armor", EquipmentCategory.HEAVY_ARMOR),
    ("shield", EquipmentCategory.SHIELDS),
    ("artisan's tools", EquipmentCategory.ARTISAN_TOOLS),
    ("artisan tool", EquipmentCategory.ARTISAN_TOOLS),
    ("gaming set", EquipmentCategory.GAMING_SETS),
    ("musical", EquipmentCategory.MUSICAL_INSTRUMENTS),
    ("pack", EquipmentCategory.ADVENTURING_GEAR),
    ("holy symbol", EquipmentCategory.ADVENTURING_GEAR),
]

# Looser patterns only consulted by describe_category, after CATEGORY_PATTERNS.
DESCRIPTION_FALLBACK_PATTERNS: List[Tuple[str, str]] = [
    ("tool proficiencies", EquipmentCategory.TOOL_PROFICIENCIES),
    ("adventuring gear", EquipmentCategory.ADVENTURING_GEAR),
    ("gear", EquipmentCategory.ADVENTURING_GEAR),
    ("vehicle", EquipmentCategory.VEHICLES),
    ("tool", EquipmentCategory.TOOLS),
]


def _first_match(text: str, patterns: List[Tuple[str, str]]) -> Optional[str]:
    for pattern, category_id in patterns:
        if pattern in text:
            return category_id
    return None


def classify(text: Optional[str]) -> Optional[str]:
    """
    Classify text as an equipment category reference.

    Returns the category id of the first pattern in CATEGORY_PATTERNS that occurs
    in the lower-cased text, or None when the text names no category.
    """
    if not isinstance(text, str) or not text:
        return None
    return _first_match(text.lower(), CATEGORY_PATTERNS)


def is_category_reference(text: Optional[str]) -> bool:
    """Check whether text refers to an open equipment category."""
    return classify(text) is not None


def describe_category(description: Optional[str]) -> str:
    """
    Best category for a structured sub-choice that only carries a description.

    Unlike classify this never returns None: it tries the looser fallback
    patterns and finally settles on the generic equipment category.
    """
    if not isinstance(description, str) or not description.strip():
        return EquipmentCategory.EQUIPMENT

    text = description.strip().lower()
    return (
        _first_match(text, CATEGORY_PATTERNS)
        or _first_match(text, DESCRIPTION_FALLBACK_PATTERNS)
        or EquipmentCategory.EQUIPMENT
    )
