"""
D&D Choice Engine.

Normalizes character-creation choices from the 5e content API, the rules
engine and the wire protocol into one canonical Choice tree.
"""
from choice_engine.core.choices import (
    Choice,
    ChoiceType,
    ExplicitOptions,
    CategoryReference,
    ItemReference,
    CountedItemReference,
    ItemBundle,
    NestedChoice,
)
from choice_engine.core.choice_assembler import ChoiceEngine, assemble_choice
from choice_engine.core.equipment_categories import classify
from choice_engine.core.choice_types import normalize_choice_type
from choice_engine.core.option_parser import parse_equipment_option

__all__ = [
    "Choice",
    "ChoiceType",
    "ExplicitOptions",
    "CategoryReference",
    "ItemReference",
    "CountedItemReference",
    "ItemBundle",
    "NestedChoice",
    "ChoiceEngine",
    "assemble_choice",
    "classify",
    "normalize_choice_type",
    "parse_equipment_option",
]
