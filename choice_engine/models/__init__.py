"""Record and message models for the sources the engine reads from."""
from .external import (
    ExternalEquipmentChoice,
    ExternalProficiencyChoice,
    ExternalChoiceOption,
    external_option_from_dict,
)
from .rules_engine import (
    RulesEngineChoice,
    RulesEngineEquipmentChoice,
    ClassEquipmentChoice,
)
from .wire import WireChoice, ChoiceSelectionMessage

__all__ = [
    'ExternalEquipmentChoice',
    'ExternalProficiencyChoice',
    'ExternalChoiceOption',
    'external_option_from_dict',
    'RulesEngineChoice',
    'RulesEngineEquipmentChoice',
    'ClassEquipmentChoice',
    'WireChoice',
    'ChoiceSelectionMessage',
]
