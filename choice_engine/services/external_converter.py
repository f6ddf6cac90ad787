"""
External API Choice Conversion.

Maps choice records from the 5e content API onto the canonical Choice model.
Text records go straight through the assembler; structured option trees are
first turned into ChoiceOptions and then handed to the assembler as
pre-structured options.
"""
import logging
from typing import Any, List, Optional, Sequence

from choice_engine.config import get_settings
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
from choice_engine.core.equipment_categories import describe_category
from choice_engine.core.option_parser import generate_nested_choice_id
from choice_engine.models.external import (
    ExternalChoiceOption,
    ExternalCountedReferenceOption,
    ExternalEquipmentChoice,
    ExternalMultipleOption,
    ExternalOption,
    ExternalProficiencyChoice,
    ExternalReferenceOption,
)

logger = logging.getLogger(__name__)


# ==================== Text records ====================

def convert_equipment_choice(
    record: Optional[ExternalEquipmentChoice],
    choice_id: str,
) -> Optional[Choice]:
    """Convert a flat equipment choice with text options."""
    if record is None:
        return None

    return assemble_choice(
        choice_id,
        description=record.description,
        choose_count=record.choose_count,
        choice_type=ChoiceType.EQUIPMENT.value,
        options=record.options,
    )


def convert_proficiency_choices(
    records: Optional[Sequence[Optional[ExternalProficiencyChoice]]],
    base_id: str,
) -> List[Choice]:
    """
    Convert proficiency/language choices.

    Ids are "<base_id>_<type>_<n>" and descriptions "Choose <n> <type>";
    missing records are skipped.
    """
    result = []
    for index, record in enumerate(records or [], start=1):
        if record is None:
            continue
        result.append(assemble_choice(
            f"{base_id}_{record.type}_{index}",
            description=f"Choose {record.choose} {record.type}",
            choose_count=record.choose,
            choice_type=record.type,
            options=record.options,
            category=record.from_,
        ))
    return result


# ==================== Structured option trees ====================

def _valid_count(count: Any) -> Optional[int]:
    """The count of a counted reference, or None when it is not a positive integer."""
    if isinstance(count, int) and count >= 1:
        return count
    logger.debug(f"Ignoring non-positive count {count!r}")
    return None


def _nested_choice(option: ExternalChoiceOption) -> NestedChoice:
    category_id = option.category_index or describe_category(option.description)
    return NestedChoice(choice=assemble_choice(
        generate_nested_choice_id(
            option.description, category_id, max_length=get_settings().NESTED_ID_MAX_LENGTH
        ),
        description=option.description,
        choose_count=option.choice_count,
        choice_type=option.choice_type,
        options=convert_option_list(option.option_list),
        category=category_id,
    ))


def _bundle_item(item: ExternalOption) -> Optional[BundleItem]:
    if isinstance(item, ExternalCountedReferenceOption) and item.reference:
        return ConcreteItem(item=CountedItemReference(
            item_id=item.reference.key,
            name=item.reference.name,
            quantity=_valid_count(item.count) or 1,
        ))
    if isinstance(item, ExternalReferenceOption) and item.reference:
        return ConcreteItem(item=CountedItemReference(
            item_id=item.reference.key,
            name=item.reference.name,
            quantity=1,
        ))
    if isinstance(item, ExternalChoiceOption):
        return ChoiceItem(nested=_nested_choice(item))

    logger.debug(f"Dropping unsupported bundle entry {item!r}")
    return None


def convert_option(option: Optional[ExternalOption]) -> Optional[ChoiceOption]:
    """Convert one structured API option; options without a reference yield None."""
    if isinstance(option, ExternalReferenceOption):
        if option.reference:
            return ItemReference(item_id=option.reference.key, name=option.reference.name)
    elif isinstance(option, ExternalCountedReferenceOption):
        if option.reference:
            quantity = _valid_count(option.count)
            if quantity is None:
                return ItemReference(item_id=option.reference.key, name=option.reference.name)
            return CountedItemReference(
                item_id=option.reference.key,
                name=option.reference.name,
                quantity=quantity,
            )
    elif isinstance(option, ExternalMultipleOption):
        items = [_bundle_item(item) for item in option.items]
        return ItemBundle(items=tuple(item for item in items if item is not None))
    elif isinstance(option, ExternalChoiceOption):
        return _nested_choice(option)

    logger.debug(f"Dropping unsupported option {option!r}")
    return None


def convert_option_list(options: Optional[Sequence[ExternalOption]]) -> List[ChoiceOption]:
    """Convert an API option list, dropping entries that cannot be converted."""
    converted = [convert_option(option) for option in options or []]
    return [option for option in converted if option is not None]


def convert_option_tree_choice(
    record: Optional[ExternalChoiceOption],
    choice_id: str,
) -> Optional[Choice]:
    """Convert one structured top-level choice."""
    if record is None:
        return None

    return assemble_choice(
        choice_id,
        description=record.description,
        choose_count=record.choice_count,
        choice_type=record.choice_type,
        options=convert_option_list(record.option_list),
        category=record.category_index,
    )


def convert_option_tree_choices(
    records: Optional[Sequence[Optional[ExternalChoiceOption]]],
    class_id: str,
) -> List[Choice]:
    """Convert a class's structured starting-equipment choices ("<class>_equipment_<n>")."""
    result = []
    for index, record in enumerate(records or [], start=1):
        choice = convert_option_tree_choice(record, f"{class_id}_equipment_{index}")
        if choice is not None:
            result.append(choice)
    return result


def convert_equipment_choices(
    records: Optional[Sequence[Optional[ExternalEquipmentChoice]]],
    class_id: str,
) -> List[Choice]:
    """Convert a class's flat equipment choices ("<class>_equipment_<n>")."""
    result = []
    for index, record in enumerate(records or [], start=1):
        choice = convert_equipment_choice(record, f"{class_id}_equipment_{index}")
        if choice is not None:
            result.append(choice)
    return result
