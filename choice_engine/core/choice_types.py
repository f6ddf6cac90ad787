"""
Choice Type Normalization.

External sources label choices inconsistently ("Skills", "skill_proficiency",
"tool-proficiency", "starting_equipment"). Labels are normalized to the canonical
ChoiceType set in two stages, and equipment is the fallback at both:

1. normalize_choice_type: alias lookup; unknown labels pass through unchanged
2. resolve_choice_type / to_wire_choice_type: unknown labels become equipment
"""
import logging
from enum import Enum
from typing import Dict, Optional, Union

from choice_engine.core.choices import ChoiceType

logger = logging.getLogger(__name__)


CHOICE_TYPE_ALIASES: Dict[str, ChoiceType] = {
    # Skills
    "skill": ChoiceType.SKILL,
    "skills": ChoiceType.SKILL,
    "proficiencies": ChoiceType.SKILL,
    "skill_proficiency": ChoiceType.SKILL,
    "skill-proficiency": ChoiceType.SKILL,
    "skill_proficiencies": ChoiceType.SKILL,

    # Tools
    "tool": ChoiceType.TOOL,
    "tools": ChoiceType.TOOL,
    "tool_proficiency": ChoiceType.TOOL,
    "tool-proficiency": ChoiceType.TOOL,
    "tool_proficiencies": ChoiceType.TOOL,

    # Languages
    "language": ChoiceType.LANGUAGE,
    "languages": ChoiceType.LANGUAGE,
    "language_choice": ChoiceType.LANGUAGE,
    "language-choice": ChoiceType.LANGUAGE,

    # Weapon proficiencies
    "weapon": ChoiceType.WEAPON_PROFICIENCY,
    "weapons": ChoiceType.WEAPON_PROFICIENCY,
    "weapon_proficiency": ChoiceType.WEAPON_PROFICIENCY,
    "weapon-proficiency": ChoiceType.WEAPON_PROFICIENCY,
    "weapon_proficiencies": ChoiceType.WEAPON_PROFICIENCY,

    # Armor proficiencies
    "armor": ChoiceType.ARMOR_PROFICIENCY,
    "armors": ChoiceType.ARMOR_PROFICIENCY,
    "armor_proficiency": ChoiceType.ARMOR_PROFICIENCY,
    "armor-proficiency": ChoiceType.ARMOR_PROFICIENCY,
    "armor_proficiencies": ChoiceType.ARMOR_PROFICIENCY,

    # Spells
    "spell": ChoiceType.SPELL,
    "spells": ChoiceType.SPELL,
    "spell_choice": ChoiceType.SPELL,
    "spell-choice": ChoiceType.SPELL,

    # Feats
    "feat": ChoiceType.FEAT,
    "feats": ChoiceType.FEAT,
    "feature": ChoiceType.FEAT,
    "features": ChoiceType.FEAT,
    "feat_choice": ChoiceType.FEAT,
    "feat-choice": ChoiceType.FEAT,

    # Equipment
    "equipment": ChoiceType.EQUIPMENT,
    "gear": ChoiceType.EQUIPMENT,
    "starting_equipment": ChoiceType.EQUIPMENT,
    "starting-equipment": ChoiceType.EQUIPMENT,
    "equipment_choice": ChoiceType.EQUIPMENT,
    "equipment-choice": ChoiceType.EQUIPMENT,
}


class WireChoiceType(str, Enum):
    """Choice type enum of the wire protocol."""
    UNSPECIFIED = "CHOICE_TYPE_UNSPECIFIED"
    EQUIPMENT = "CHOICE_TYPE_EQUIPMENT"
    SKILL = "CHOICE_TYPE_SKILL"
    TOOL = "CHOICE_TYPE_TOOL"
    LANGUAGE = "CHOICE_TYPE_LANGUAGE"
    WEAPON_PROFICIENCY = "CHOICE_TYPE_WEAPON_PROFICIENCY"
    ARMOR_PROFICIENCY = "CHOICE_TYPE_ARMOR_PROFICIENCY"
    SPELL = "CHOICE_TYPE_SPELL"
    FEAT = "CHOICE_TYPE_FEAT"


_CHOICE_TYPE_TO_WIRE: Dict[ChoiceType, WireChoiceType] = {
    ChoiceType.EQUIPMENT: WireChoiceType.EQUIPMENT,
    ChoiceType.SKILL: WireChoiceType.SKILL,
    ChoiceType.TOOL: WireChoiceType.TOOL,
    ChoiceType.LANGUAGE: WireChoiceType.LANGUAGE,
    ChoiceType.WEAPON_PROFICIENCY: WireChoiceType.WEAPON_PROFICIENCY,
    ChoiceType.ARMOR_PROFICIENCY: WireChoiceType.ARMOR_PROFICIENCY,
    ChoiceType.SPELL: WireChoiceType.SPELL,
    ChoiceType.FEAT: WireChoiceType.FEAT,
}

_WIRE_TO_CHOICE_TYPE: Dict[WireChoiceType, ChoiceType] = {
    wire: choice_type for choice_type, wire in _CHOICE_TYPE_TO_WIRE.items()
}


def normalize_choice_type(raw_type: Optional[str]) -> str:
    """
    Normalize a raw choice-type label.

    Returns the canonical ChoiceType for a known alias, equipment for an empty
    or non-text label, and the trimmed lower-cased label itself when nothing
    matches.
    """
    normalized = raw_type.strip().lower() if isinstance(raw_type, str) else ""
    if not normalized:
        return ChoiceType.EQUIPMENT
    return CHOICE_TYPE_ALIASES.get(normalized, normalized)


def resolve_choice_type(raw_type: Optional[str]) -> ChoiceType:
    """Normalize a raw label and fall back to equipment for unknown ones."""
    normalized = normalize_choice_type(raw_type)
    if isinstance(normalized, ChoiceType):
        return normalized
    logger.debug(f"Unknown choice type {raw_type!r}, treating as equipment")
    return ChoiceType.EQUIPMENT


def to_wire_choice_type(value: Union[ChoiceType, str, None]) -> WireChoiceType:
    """Map a canonical type, or any raw label, to the wire enum."""
    if not isinstance(value, ChoiceType):
        value = resolve_choice_type(value)
    return _CHOICE_TYPE_TO_WIRE.get(value, WireChoiceType.EQUIPMENT)


def from_wire_choice_type(value: Union[WireChoiceType, str, None]) -> ChoiceType:
    """Map a wire enum value back to a canonical type; unspecified becomes equipment."""
    try:
        wire_type = WireChoiceType(value)
    except ValueError:
        return ChoiceType.EQUIPMENT
    return _WIRE_TO_CHOICE_TYPE.get(wire_type, ChoiceType.EQUIPMENT)
