"""
External Content API Records.

Choice records as returned by the third-party 5e content API. Two shapes exist:

- Flat records (ExternalEquipmentChoice, ExternalProficiencyChoice) whose
  options are free text ("(a) a mace or (b) a warhammer").
- Structured option trees (ExternalChoiceOption) parsed from the API's JSON
  `starting_equipment_options`, built from reference, counted_reference,
  multiple and choice options.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass
class ExternalEquipmentChoice:
    """Flat equipment choice with text options."""
    description: str = ""
    choose_count: int = 1
    options: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExternalEquipmentChoice":
        return cls(
            description=data.get("description", data.get("desc", "")) or "",
            choose_count=data.get("choose_count", data.get("choose", 1)),
            options=list(data.get("options") or []),
        )


@dataclass
class ExternalProficiencyChoice:
    """Proficiency or language choice ("choose 2 skills from ...")."""
    type: str = ""
    choose: int = 1
    options: List[str] = field(default_factory=list)
    from_: str = ""  # Optional category text, e.g. "artisan's tools"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExternalProficiencyChoice":
        return cls(
            type=data.get("type", "") or "",
            choose=data.get("choose", 1),
            options=list(data.get("options") or []),
            from_=data.get("from", "") or "",
        )


# ==================== Structured option trees ====================

@dataclass
class ExternalReference:
    """An API resource reference ({"index": "mace", "name": "Mace"})."""
    key: str
    name: str

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["ExternalReference"]:
        if not data or not data.get("index"):
            return None
        return cls(key=data["index"], name=data.get("name") or data["index"])


@dataclass
class ExternalReferenceOption:
    reference: Optional[ExternalReference]


@dataclass
class ExternalCountedReferenceOption:
    count: int
    reference: Optional[ExternalReference]


@dataclass
class ExternalMultipleOption:
    """Several options taken together ("a martial weapon and a shield")."""
    items: List["ExternalOption"] = field(default_factory=list)


@dataclass
class ExternalChoiceOption:
    """A choice, either top-level or nested inside another option list."""
    description: str = ""
    choice_count: int = 1
    choice_type: str = "equipment"
    option_list: Optional[List["ExternalOption"]] = None
    category_index: Optional[str] = None  # Set for equipment_category option sets

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExternalChoiceOption":
        """Parse a choice object in the 5e API JSON format."""
        option_set = data.get("from") or {}
        option_list = None
        category_index = None

        set_type = option_set.get("option_set_type")
        if set_type == "equipment_category":
            category = option_set.get("equipment_category") or {}
            category_index = category.get("index")
        elif set_type == "options_array" or "options" in option_set:
            option_list = []
            for raw_option in option_set.get("options") or []:
                option = external_option_from_dict(raw_option)
                if option is not None:
                    option_list.append(option)

        return cls(
            description=data.get("desc", data.get("description", "")) or "",
            choice_count=data.get("choose", 1),
            choice_type=data.get("type", "equipment") or "equipment",
            option_list=option_list,
            category_index=category_index,
        )


ExternalOption = Union[
    ExternalReferenceOption,
    ExternalCountedReferenceOption,
    ExternalMultipleOption,
    ExternalChoiceOption,
]


def external_option_from_dict(data: Optional[Dict[str, Any]]) -> Optional[ExternalOption]:
    """Parse one entry of an API options array; unknown option types yield None."""
    if not data:
        return None

    option_type = data.get("option_type")
    if option_type == "reference":
        return ExternalReferenceOption(reference=ExternalReference.from_dict(data.get("item")))
    if option_type == "counted_reference":
        return ExternalCountedReferenceOption(
            count=data.get("count", 1),
            reference=ExternalReference.from_dict(data.get("of")),
        )
    if option_type == "multiple":
        items = [external_option_from_dict(item) for item in data.get("items") or []]
        return ExternalMultipleOption(items=[item for item in items if item is not None])
    if option_type == "choice":
        return ExternalChoiceOption.from_dict(data.get("choice") or {})
    return None
