"""
Rules Engine Records.

Choice data produced by the internal rules engine: proficiency/language
choices, text equipment choices, and class starting-equipment choices whose
options are already structured into concrete items and nested choices.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class RulesEngineChoice:
    """A proficiency, language or similar choice."""
    id: str = ""
    type: str = ""
    choose: int = 1
    from_: str = ""  # Category text, when the choice is "any X"
    options: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RulesEngineChoice":
        return cls(
            id=data.get("id", "") or "",
            type=data.get("type", "") or "",
            choose=data.get("choose", 1),
            from_=data.get("from", "") or "",
            options=list(data.get("options") or []),
        )


@dataclass
class RulesEngineEquipmentChoice:
    """An equipment choice whose options are text."""
    description: str = ""
    options: List[str] = field(default_factory=list)
    choose_count: int = 1


@dataclass
class EquipmentData:
    """A concrete item in a class equipment option."""
    item_id: str
    quantity: int = 1
    name: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or self.item_id


@dataclass
class EquipmentBundleEntry:
    """One entry of an equipment option: a concrete item or a nested choice."""
    concrete_item: Optional[EquipmentData] = None
    nested_choice: Optional["ClassEquipmentChoice"] = None


@dataclass
class EquipmentOption:
    """One selectable option of a class equipment choice."""
    id: str = ""
    items: List[EquipmentBundleEntry] = field(default_factory=list)


@dataclass
class ClassEquipmentChoice:
    """A starting-equipment choice of a class."""
    id: str = ""
    description: str = ""
    choose: int = 1
    options: List[EquipmentOption] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClassEquipmentChoice":
        options = []
        for raw_option in data.get("options") or []:
            entries = []
            for raw_entry in raw_option.get("items") or []:
                concrete = raw_entry.get("concrete_item") or {}
                nested = raw_entry.get("nested_choice")
                # Concrete items without an id cannot be referenced
                if not concrete.get("item_id") and not nested:
                    continue
                entries.append(EquipmentBundleEntry(
                    concrete_item=EquipmentData(
                        item_id=concrete["item_id"],
                        quantity=concrete.get("quantity", 1),
                        name=concrete.get("name"),
                    ) if concrete.get("item_id") else None,
                    nested_choice=cls.from_dict(nested) if nested else None,
                ))
            options.append(EquipmentOption(id=raw_option.get("id", ""), items=entries))

        return cls(
            id=data.get("id", "") or "",
            description=data.get("description", "") or "",
            choose=data.get("choose", 1),
            options=options,
        )
