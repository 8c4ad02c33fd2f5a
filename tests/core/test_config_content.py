"""
Tests for the combat configuration and the content loaders.
"""

import json

import pytest

from combat_core.abilities.scaling import LinearScaling
from combat_core.core.config import CombatConfig, load_config, save_config
from combat_core.core.constants import ActionKind, EffectStat, WeaponType
from combat_core.core.content import (
    ContentRepository,
    load_abilities,
    load_effects,
    load_items,
    load_weapons,
)


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def repository_cleanup():
    yield
    ContentRepository.clear_instance()


# === Configuration ===


def test_default_config():
    config = CombatConfig()
    assert config.damage_floor == 1
    assert config.default_crit_multiplier == 1.5
    assert config.max_damage_reduction_percent == 90
    assert config.speed_modifier_for(ActionKind.ATTACK) == -3
    assert config.speed_modifier_for(ActionKind.DEFEND) == 3


def test_missing_config_uses_defaults(tmp_path):
    assert load_config(tmp_path / "missing.json") == CombatConfig()


def test_config_round_trip(tmp_path):
    path = tmp_path / "combat.json"
    config = CombatConfig(flee_chance=45, damage_floor=0)
    save_config(config, path)
    assert load_config(path) == config


def test_partial_config_keeps_other_defaults(tmp_path):
    path = write_json(tmp_path / "combat.json", {"speed_modifiers": {"ATTACK": -5}})
    config = load_config(path)
    assert config.speed_modifier_for(ActionKind.ATTACK) == -5
    assert config.speed_modifier_for(ActionKind.DEFEND) == 3


def test_invalid_config_raises(tmp_path):
    path = tmp_path / "combat.json"
    path.write_text("{oops", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)
    write_json(path, {"flee_chance": 150})
    with pytest.raises(ValueError):
        load_config(path)


def test_unarmed_damage_must_be_ordered():
    with pytest.raises(ValueError):
        CombatConfig(unarmed_damage=(5, 1))


# === Content ===


def test_load_effects(tmp_path):
    path = write_json(
        tmp_path / "effects.json",
        [
            {"type": "Burning", "potency": 5, "duration": 2},
            {
                "name": "Iron Skin",
                "kind": "BUFF",
                "modifiers": {"DAMAGE_REDUCTION_FLAT": 3},
                "duration": 4,
            },
        ],
    )
    effects = load_effects(path)
    assert set(effects) == {"Burning", "Iron Skin"}
    assert effects["Iron Skin"].modifiers[EffectStat.DAMAGE_REDUCTION_FLAT] == 3


def test_load_abilities(tmp_path):
    path = write_json(
        tmp_path / "abilities.json",
        [
            {
                "name": "Keen Eye",
                "ability_type": "PASSIVE",
                "passive": "PARTY_ACCURACY",
                "passive_values": {"accuracy": {"scaling_type": "linear", "low": 2, "high": 20}},
            }
        ],
    )
    abilities = load_abilities(path)
    assert isinstance(abilities["Keen Eye"].passive_values["accuracy"], LinearScaling)


def test_load_weapons_and_items(tmp_path):
    weapons = load_weapons(
        write_json(
            tmp_path / "weapons.json",
            [{"name": "Hunting Spear", "weapon_type": "SPEAR", "min_damage": 8, "max_damage": 12}],
        )
    )
    items = load_items(write_json(tmp_path / "items.json", [{"name": "Potion", "heal": 30}]))
    assert weapons["Hunting Spear"].weapon_type == WeaponType.SPEAR
    assert items["Potion"].heal == 30


def test_duplicate_names_raise(tmp_path):
    path = write_json(tmp_path / "items.json", [{"name": "Potion", "heal": 30}] * 2)
    with pytest.raises(ValueError):
        load_items(path)


def test_content_must_be_a_list(tmp_path):
    path = write_json(tmp_path / "items.json", {"name": "Potion", "heal": 30})
    with pytest.raises(ValueError):
        load_items(path)


def test_missing_content_file_raises(tmp_path):
    with pytest.raises(ValueError):
        load_items(tmp_path / "items.json")


def test_invalid_record_raises(tmp_path):
    path = write_json(tmp_path / "weapons.json", [{"name": "Stick", "min_damage": 5, "max_damage": 1}])
    with pytest.raises(ValueError):
        load_weapons(path)


def test_repository(tmp_path, repository_cleanup):
    """
    Test that the repository serves every collection and leaves the ones
    without a file empty.
    """
    write_json(tmp_path / "items.json", [{"name": "Potion", "heal": 30}])
    write_json(tmp_path / "effects.json", [{"type": "Haste", "potency": 2, "duration": 3}])
    repository = ContentRepository(tmp_path)

    assert repository.get_item("Potion").heal == 30
    assert repository.get_effect("Haste").modifiers[EffectStat.SPEED] == 2
    assert repository.get_weapon("Hunting Spear") is None
    assert repository.armors == {}
    assert ContentRepository() is repository


def test_repository_needs_data_dir_first(repository_cleanup):
    ContentRepository.clear_instance()
    with pytest.raises(ValueError):
        ContentRepository()
