"""
Constants and enumerations for the combat core.

Defines the enumerations for combatant types, action kinds, effect kinds and
the stats effects modify, ability metadata, weapon types and combat
resolution states used throughout the package.
"""

from enum import Enum


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return self.name.lower().replace("_", " ").capitalize()


class CombatantType(NiceEnum):
    """Defines the type of combatant taking part in a battle."""

    PLAYER = "PLAYER"
    COMPANION = "COMPANION"
    ENEMY = "ENEMY"
    BOSS = "BOSS"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this combatant type."""
        return {
            CombatantType.PLAYER: "👤",
            CombatantType.COMPANION: "🤝",
            CombatantType.ENEMY: "👹",
            CombatantType.BOSS: "💀",
        }.get(self, "❔")

    @property
    def color(self) -> str:
        """Returns the color string associated with this combatant type."""
        return {
            CombatantType.PLAYER: "bold blue",
            CombatantType.COMPANION: "bold green",
            CombatantType.ENEMY: "bold red",
            CombatantType.BOSS: "bold magenta",
        }.get(self, "dim white")

    @property
    def colored_name(self) -> str:
        return self.colorize(self.display_name)

    def colorize(self, message: str) -> str:
        """Applies combatant type color formatting to a message."""
        return f"[{self.color}]{message}[/]"

    @property
    def is_party(self) -> bool:
        return self in (CombatantType.PLAYER, CombatantType.COMPANION)


class ActionKind(NiceEnum):
    """Defines the kind of action a combatant took on its turn."""

    NONE = "NONE"
    ATTACK = "ATTACK"
    DEFEND = "DEFEND"
    ABILITY = "ABILITY"
    ITEM = "ITEM"
    FLEE = "FLEE"


class EffectKind(NiceEnum):
    """Defines the category of an effect, used for processing and cleansing."""

    BUFF = "BUFF"
    DEBUFF = "DEBUFF"
    DAMAGE_OVER_TIME = "DAMAGE_OVER_TIME"
    HEAL_OVER_TIME = "HEAL_OVER_TIME"
    CROWD_CONTROL = "CROWD_CONTROL"
    STAT_MODIFIER = "STAT_MODIFIER"

    @property
    def is_negative(self) -> bool:
        """Returns True if a cleanse removes effects of this kind."""
        return self in (
            EffectKind.DEBUFF,
            EffectKind.DAMAGE_OVER_TIME,
            EffectKind.CROWD_CONTROL,
        )

    @property
    def color(self) -> str:
        """Returns the color string associated with this effect kind."""
        return {
            EffectKind.BUFF: "bold cyan",
            EffectKind.DEBUFF: "bold yellow",
            EffectKind.DAMAGE_OVER_TIME: "bold magenta",
            EffectKind.HEAL_OVER_TIME: "bold green",
            EffectKind.CROWD_CONTROL: "bold red",
            EffectKind.STAT_MODIFIER: "bold blue",
        }.get(self, "dim white")

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this effect kind."""
        return {
            EffectKind.BUFF: "🛡️",
            EffectKind.DEBUFF: "🔻",
            EffectKind.DAMAGE_OVER_TIME: "❣️",
            EffectKind.HEAL_OVER_TIME: "💚",
            EffectKind.CROWD_CONTROL: "😵‍💫",
            EffectKind.STAT_MODIFIER: "📈",
        }.get(self, "❔")


class EffectStat(NiceEnum):
    """Defines which combat value an effect modifier applies to."""

    # Multiplies outgoing damage by (1 + value / 100).
    DAMAGE_PERCENT = "DAMAGE_PERCENT"
    # Added to outgoing damage after multipliers.
    DAMAGE_FLAT = "DAMAGE_FLAT"
    # Multiplies incoming damage by (1 - value / 100).
    DAMAGE_REDUCTION_PERCENT = "DAMAGE_REDUCTION_PERCENT"
    # Subtracted from incoming damage.
    DAMAGE_REDUCTION_FLAT = "DAMAGE_REDUCTION_FLAT"
    CRIT_CHANCE = "CRIT_CHANCE"
    ACCURACY = "ACCURACY"
    SPEED = "SPEED"


class AbilityType(NiceEnum):
    """Defines whether an ability is activated or always on."""

    ACTIVE = "ACTIVE"
    PASSIVE = "PASSIVE"


class AbilityTarget(NiceEnum):
    """Defines who an active ability may be used on."""

    SELF = "SELF"
    SINGLE_ENEMY = "SINGLE_ENEMY"
    ALL_ENEMIES = "ALL_ENEMIES"
    SINGLE_ALLY = "SINGLE_ALLY"
    ALL_ALLIES = "ALL_ALLIES"
    AREA = "AREA"

    @property
    def targets_enemies(self) -> bool:
        return self in (
            AbilityTarget.SINGLE_ENEMY,
            AbilityTarget.ALL_ENEMIES,
            AbilityTarget.AREA,
        )


class AbilityRarity(NiceEnum):
    """Defines how rare an ability is."""

    COMMON = "COMMON"
    UNCOMMON = "UNCOMMON"
    RARE = "RARE"
    EPIC = "EPIC"
    LEGENDARY = "LEGENDARY"

    @property
    def color(self) -> str:
        return {
            AbilityRarity.COMMON: "white",
            AbilityRarity.UNCOMMON: "green",
            AbilityRarity.RARE: "blue",
            AbilityRarity.EPIC: "magenta",
            AbilityRarity.LEGENDARY: "yellow",
        }.get(self, "dim white")


class PassiveBonus(NiceEnum):
    """Defines the bonus a passive ability contributes to combat math."""

    NONE = "NONE"
    # Chance to fully avoid an incoming hit (self).
    EVASION = "EVASION"
    # Flat accuracy for the whole party.
    PARTY_ACCURACY = "PARTY_ACCURACY"
    # Percentage damage for companions of the owner.
    COMPANION_DAMAGE = "COMPANION_DAMAGE"
    # Percentage speed for companions of the owner.
    COMPANION_SPEED = "COMPANION_SPEED"
    # Chance to cleanse negative effects at the end of each round (self).
    END_OF_ROUND_CLEANSE = "END_OF_ROUND_CLEANSE"
    # Party tier unlocked at level milestones.
    LEADERSHIP = "LEADERSHIP"
    # Critical chance and critical multiplier (self).
    CRITICAL = "CRITICAL"
    # Accuracy, damage and crit while wielding a given weapon type (self).
    WEAPON_MASTERY = "WEAPON_MASTERY"


class WeaponType(NiceEnum):
    """Defines the family a weapon belongs to."""

    NONE = "NONE"
    SWORD = "SWORD"
    SPEAR = "SPEAR"
    AXE = "AXE"
    BOW = "BOW"
    CROSSBOW = "CROSSBOW"
    DAGGER = "DAGGER"
    STAFF = "STAFF"
    MACE = "MACE"
    WAND = "WAND"


class ArmorType(NiceEnum):
    """Defines the material class of a piece of armor."""

    CLOTH = "CLOTH"
    LEATHER = "LEATHER"
    CHAINMAIL = "CHAINMAIL"
    PLATE = "PLATE"
    ROBE = "ROBE"
    SHIELD = "SHIELD"


class CombatResolution(NiceEnum):
    """Defines the state of a battle after a round."""

    ONGOING = "ONGOING"
    VICTORY = "VICTORY"
    DEFEAT = "DEFEAT"
    MUTUAL_DEFEAT = "MUTUAL_DEFEAT"


def is_opponent(type1: CombatantType, type2: CombatantType) -> bool:
    """Determines if type2 is an opponent of type1.

    Args:
        type1 (CombatantType): The first combatant type.
        type2 (CombatantType): The second combatant type.

    Returns:
        bool: True if type2 is an opponent of type1, False otherwise.

    """
    return type1.is_party != type2.is_party

