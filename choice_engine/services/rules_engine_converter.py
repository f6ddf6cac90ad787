"""
Rules Engine Choice Conversion.

Maps choice records produced by the rules engine onto the canonical Choice
model.
"""
import logging
from typing import List, Optional, Sequence

from choice_engine.core.choice_assembler import assemble_choice
from choice_engine.core.choices import (
    BundleItem,
    Choice,
    ChoiceItem,
    ChoiceOption,
    ChoiceType,
    ConcreteItem,
    CountedItemReference,
    ItemBundle,
    ItemReference,
    NestedChoice,
)
from choice_engine.models.rules_engine import (
    ClassEquipmentChoice,
    EquipmentBundleEntry,
    EquipmentData,
    EquipmentOption,
    RulesEngineChoice,
    RulesEngineEquipmentChoice,
)

logger = logging.getLogger(__name__)


def convert_choice(
    record: Optional[RulesEngineChoice],
    choice_id: Optional[str] = None,
) -> Optional[Choice]:
    """
    Convert a proficiency/language style choice.

    A `from_` category with no options becomes a category reference, anything
    else an explicit option list (decided by the assembler).
    """
    if record is None:
        return None

    return assemble_choice(
        choice_id or record.id,
        description=f"Choose {record.choose} {record.type}",
        choose_count=record.choose,
        choice_type=record.type,
        options=record.options,
        category=record.from_,
    )


def convert_equipment_choice(
    record: Optional[RulesEngineEquipmentChoice],
    choice_id: str,
) -> Optional[Choice]:
    """Convert an equipment choice with text options."""
    if record is None:
        return None

    return assemble_choice(
        choice_id,
        description=record.description,
        choose_count=record.choose_count,
        choice_type=ChoiceType.EQUIPMENT.value,
        options=record.options,
    )


# ==================== Class starting equipment ====================

def _quantity(item: EquipmentData) -> int:
    if isinstance(item.quantity, int) and item.quantity >= 1:
        return item.quantity
    logger.debug(f"Item {item.item_id!r} has quantity {item.quantity!r}, using 1")
    return 1


def _counted(item: EquipmentData) -> CountedItemReference:
    return CountedItemReference(item_id=item.item_id, name=item.display_name, quantity=_quantity(item))


def _bundle_entry(entry: EquipmentBundleEntry) -> Optional[BundleItem]:
    if entry.concrete_item is not None:
        return ConcreteItem(item=_counted(entry.concrete_item))
    if entry.nested_choice is not None:
        return ChoiceItem(nested=NestedChoice(choice=convert_class_equipment_choice(entry.nested_choice)))
    return None


def convert_equipment_option(option: EquipmentOption) -> Optional[ChoiceOption]:
    """
    Convert one class equipment option.

    A lone concrete item becomes an item (quantity 1 or less) or a counted
    item; a lone nested choice becomes a nested choice; anything else is a
    bundle. Quantities below 1 count as 1.
    """
    if len(option.items) == 1:
        entry = option.items[0]
        if entry.concrete_item is not None:
            if _quantity(entry.concrete_item) == 1:
                return ItemReference(item_id=entry.concrete_item.item_id, name=entry.concrete_item.display_name)
            return _counted(entry.concrete_item)
        if entry.nested_choice is not None:
            return NestedChoice(choice=convert_class_equipment_choice(entry.nested_choice))

    items = [_bundle_entry(entry) for entry in option.items]
    items = [item for item in items if item is not None]
    if not items:
        logger.debug(f"Equipment option {option.id!r} has no items, dropping it")
        return None
    return ItemBundle(items=tuple(items))


def convert_class_equipment_choice(
    choice: Optional[ClassEquipmentChoice],
    choice_id: Optional[str] = None,
) -> Optional[Choice]:
    """Convert one class equipment choice, recursing into nested choices."""
    if choice is None:
        return None

    options = [convert_equipment_option(option) for option in choice.options]
    return assemble_choice(
        choice_id or choice.id,
        description=choice.description,
        choose_count=choice.choose,
        choice_type=ChoiceType.EQUIPMENT.value,
        options=[option for option in options if option is not None],
    )


def convert_class_equipment_choices(
    class_id: str,
    choices: Optional[Sequence[Optional[ClassEquipmentChoice]]],
) -> List[Choice]:
    """Convert all starting-equipment choices of a class ("<class>_equipment_<n>")."""
    result = []
    for index, choice in enumerate(choices or [], start=1):
        converted = convert_class_equipment_choice(choice, f"{class_id}_equipment_{index}")
        if converted is not None:
            result.append(converted)
    return result
