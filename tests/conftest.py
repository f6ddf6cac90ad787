"""
D&D Choice Engine - Test Configuration and Fixtures
Shared choice records for pytest.
"""
import pytest
from typing import Dict, Any
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


# ==================== Settings Fixtures ====================

@pytest.fixture
def clean_env(monkeypatch):
    """Remove engine environment variables so settings use their defaults."""
    for name in (
        "CHOICE_ENGINE_NESTED_CHOICE_ID",
        "CHOICE_ENGINE_NESTED_ID_MAX_LENGTH",
        "CHOICE_ENGINE_LOG_LEVEL",
        "DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# ==================== External API Fixtures ====================

@pytest.fixture
def fighter_armor_option() -> Dict[str, Any]:
    """Fighter armor choice as returned by the 5e API."""
    return {
        "desc": "(a) chain mail or (b) leather armor, longbow, and 20 arrows",
        "choose": 1,
        "type": "equipment",
        "from": {
            "option_set_type": "options_array",
            "options": [
                {
                    "option_type": "counted_reference",
                    "count": 1,
                    "of": {"index": "chain-mail", "name": "Chain Mail"},
                },
                {
                    "option_type": "multiple",
                    "items": [
                        {
                            "option_type": "counted_reference",
                            "count": 1,
                            "of": {"index": "leather-armor", "name": "Leather Armor"},
                        },
                        {
                            "option_type": "counted_reference",
                            "count": 1,
                            "of": {"index": "longbow", "name": "Longbow"},
                        },
                        {
                            "option_type": "counted_reference",
                            "count": 20,
                            "of": {"index": "arrow", "name": "Arrow"},
                        },
                    ],
                },
            ],
        },
    }


@pytest.fixture
def fighter_weapon_option() -> Dict[str, Any]:
    """Fighter weapon choice with nested category sub-choices."""
    return {
        "desc": "(a) a martial weapon and a shield or (b) two martial weapons",
        "choose": 1,
        "type": "equipment",
        "from": {
            "option_set_type": "options_array",
            "options": [
                {
                    "option_type": "multiple",
                    "items": [
                        {
                            "option_type": "choice",
                            "choice": {
                                "desc": "a martial weapon",
                                "choose": 1,
                                "type": "equipment",
                                "from": {
                                    "option_set_type": "equipment_category",
                                    "equipment_category": {
                                        "index": "martial-weapons",
                                        "name": "Martial Weapons",
                                    },
                                },
                            },
                        },
                        {
                            "option_type": "counted_reference",
                            "count": 1,
                            "of": {"index": "shield", "name": "Shield"},
                        },
                    ],
                },
                {
                    "option_type": "choice",
                    "choice": {
                        "desc": "two martial weapons",
                        "choose": 2,
                        "type": "equipment",
                        "from": {
                            "option_set_type": "equipment_category",
                            "equipment_category": {
                                "index": "martial-weapons",
                                "name": "Martial Weapons",
                            },
                        },
                    },
                },
            ],
        },
    }


# ==================== Rules Engine Fixtures ====================

@pytest.fixture
def fighter_class_equipment() -> Dict[str, Any]:
    """Fighter weapon choice as produced by the rules engine."""
    return {
        "id": "fighter-weapons",
        "description": "(a) a martial weapon and a shield or (b) two martial weapons",
        "choose": 1,
        "options": [
            {
                "id": "fighter-weapons-a",
                "items": [
                    {
                        "nested_choice": {
                            "id": "fighter-martial",
                            "description": "a martial weapon",
                            "choose": 1,
                            "options": [],
                        }
                    },
                    {"concrete_item": {"item_id": "shield", "quantity": 1, "name": "Shield"}},
                ],
            },
            {
                "id": "fighter-weapons-b",
                "items": [
                    {
                        "nested_choice": {
                            "id": "fighter-martial-pair",
                            "description": "two martial weapons",
                            "choose": 2,
                            "options": [],
                        }
                    },
                ],
            },
        ],
    }
