"""
Content loading module for the combat core.

Reads the read-only content records (effects, abilities, weapons, armors and
consumables) from JSON lists and keeps them by name in a repository. The
content itself is data shipped by the game, not part of this package.
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

from catchery import log_warning

from combat_core.abilities.base_ability import AbilityDefinition
from combat_core.core.logging import log_info
from combat_core.core.utils import Singleton
from combat_core.effects.base_effect import Effect
from combat_core.effects.effect_factory import EffectFactory
from combat_core.items.armor import Armor
from combat_core.items.consumable import Consumable
from combat_core.items.weapon import Weapon


def _by_name(records: list[Any], description: str) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for record in records:
        if record.name in result:
            raise ValueError(f"Duplicate {description} name: {record.name}")
        result[record.name] = record
    return result


def _load_effects(data: list[dict]) -> dict[str, Effect]:
    return _by_name([EffectFactory.from_dict(entry) for entry in data], "effect")


def _load_abilities(data: list[dict]) -> dict[str, AbilityDefinition]:
    return _by_name([AbilityDefinition(**entry) for entry in data], "ability")


def _load_weapons(data: list[dict]) -> dict[str, Weapon]:
    return _by_name([Weapon(**entry) for entry in data], "weapon")


def _load_armors(data: list[dict]) -> dict[str, Armor]:
    return _by_name([Armor(**entry) for entry in data], "armor")


def _load_items(data: list[dict]) -> dict[str, Consumable]:
    return _by_name([Consumable(**entry) for entry in data], "item")


def _load_json_file(
    filepath: Path,
    loader_func: Callable[[list[dict]], dict[str, Any]],
    description: str,
) -> dict[str, Any]:
    """
    Load a JSON list and turn it into records keyed by name.

    Raises:
        ValueError:
            If the file is missing, is not a JSON list, or holds invalid or
            duplicate records.

    """
    try:
        log_info(f"Loading {description} from {filepath}.")
        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")
        if not filepath.is_file():
            raise ValueError(f"Not a file: {filepath}")
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"Expected list in {filepath}, got {type(data).__name__}")
        return loader_func(data)
    except (json.JSONDecodeError, FileNotFoundError, ValueError) as e:
        raise ValueError(f"File {filepath} raised an error: {e}") from e


def load_effects(path: Path) -> dict[str, Effect]:
    """Load effect definitions, by name."""
    return _load_json_file(path, _load_effects, "effects")


def load_abilities(path: Path) -> dict[str, AbilityDefinition]:
    """Load ability definitions, by name."""
    return _load_json_file(path, _load_abilities, "abilities")


def load_weapons(path: Path) -> dict[str, Weapon]:
    return _load_json_file(path, _load_weapons, "weapons")


def load_armors(path: Path) -> dict[str, Armor]:
    return _load_json_file(path, _load_armors, "armors")


def load_items(path: Path) -> dict[str, Consumable]:
    """Load consumables, by name."""
    return _load_json_file(path, _load_items, "items")


class ContentRepository(metaclass=Singleton):
    """
    One-stop registry for every content record that needs by-name access.

    Each collection is read from its own file in the data directory. A
    missing file leaves the collection empty.
    """

    FILES: dict[str, tuple[str, Callable[[Path], dict[str, Any]]]] = {
        "effects": ("effects.json", load_effects),
        "abilities": ("abilities.json", load_abilities),
        "weapons": ("weapons.json", load_weapons),
        "armors": ("armors.json", load_armors),
        "items": ("items.json", load_items),
    }

    effects: dict[str, Effect]
    abilities: dict[str, AbilityDefinition]
    weapons: dict[str, Weapon]
    armors: dict[str, Armor]
    items: dict[str, Consumable]

    def __init__(self, data_dir: Path | None = None) -> None:
        """
        Initialize the ContentRepository.

        Args:
            data_dir (Path | None):
                The directory containing the content files.

        """
        if data_dir:
            self.reload(data_dir)
            self.loaded = True
        elif not hasattr(self, "loaded"):
            raise ValueError(
                "ContentRepository must be initialized with a valid data_dir on first use."
            )

    def reload(self, root: Path) -> None:
        """
        (Re)load every collection from disk.

        Args:
            root (Path):
                The directory containing the content files.

        """
        for collection, (filename, loader) in self.FILES.items():
            path = root / filename
            if not path.exists():
                log_warning(
                    f"No {collection} content found.",
                    {"path": str(path)},
                )
                setattr(self, collection, {})
                continue
            setattr(self, collection, loader(path))

    def _get_from_collection(self, collection_name: str, item_name: str) -> Any | None:
        collection = getattr(self, collection_name, None)
        if collection is None:
            log_warning(
                f"Collection '{collection_name}' not found in ContentRepository.",
                {"collection_name": collection_name, "item_name": item_name},
            )
            return None
        return collection.get(item_name)

    def get_effect(self, name: str) -> Effect | None:
        return self._get_from_collection("effects", name)

    def get_ability(self, name: str) -> AbilityDefinition | None:
        return self._get_from_collection("abilities", name)

    def get_weapon(self, name: str) -> Weapon | None:
        return self._get_from_collection("weapons", name)

    def get_armor(self, name: str) -> Armor | None:
        return self._get_from_collection("armors", name)

    def get_item(self, name: str) -> Consumable | None:
        return self._get_from_collection("items", name)
