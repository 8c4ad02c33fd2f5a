"""
Action resolver module for the combat core.

Turns a chosen action into numbers: accuracy, damage, critical and evasion
checks for attacks, the payload of abilities and consumables, defending and
fleeing. Every random check is rolled exactly once through the provider and
recorded in the returned ActionOutcome.
"""

from collections.abc import Sequence

from combat_core.abilities.base_ability import Ability
from combat_core.combatants.combatant import Combatant
from combat_core.core.config import CombatConfig
from combat_core.core.constants import (
    AbilityTarget,
    ActionKind,
    CombatantType,
    EffectStat,
    PassiveBonus,
    is_opponent,
)
from combat_core.core.errors import (
    AbilityNotActivatable,
    AbilityOnCooldown,
    InsufficientResource,
    InvalidTarget,
)
from combat_core.core.logging import log_debug
from combat_core.effects.base_effect import Effect
from combat_core.effects.effect_engine import EffectEngine
from combat_core.effects.event_system import (
    AttackEvent,
    CombatEvent,
    EventType,
    HealthEvent,
)
from combat_core.items.consumable import Consumable
from combat_core.rng.provider import RandomProvider, get_default_provider

from .damage import compute_damage
from .outcome import ActionOutcome, HitResult


class ActionResolver:
    """
    Resolves the actions of combatants.

    Recoverable errors (cooldown, cost, targeting) are raised before any
    state is changed, so the caller can pick another action.
    """

    def __init__(
        self,
        provider: RandomProvider | None = None,
        effect_engine: EffectEngine | None = None,
        config: CombatConfig | None = None,
    ) -> None:
        self._provider = provider
        self.effect_engine = effect_engine or EffectEngine(provider)
        self.config = config or CombatConfig()

    @property
    def provider(self) -> RandomProvider:
        return self._provider or get_default_provider()

    def _emit(self, event: CombatEvent, outcome: ActionOutcome) -> None:
        outcome.events.append(self.effect_engine.dispatcher.dispatch(event))

    def _apply_effect(
        self,
        target: Combatant,
        effect: Effect,
        source: Combatant,
        outcome: ActionOutcome,
    ) -> None:
        outcome.events.extend(self.effect_engine.add_effect(target, effect, source))

    # === Derived combat values ===

    def _party_total(
        self,
        actor: Combatant,
        combatants: Sequence[Combatant],
        bonus: PassiveBonus,
        key: str,
    ) -> float:
        if not actor.is_party:
            return 0
        allies = [c for c in combatants if c.is_party and c.is_alive()]
        if not any(ally is actor for ally in allies):
            allies.append(actor)
        return sum(ally.abilities.passive_total(bonus, key) for ally in allies)

    def accuracy(self, actor: Combatant, combatants: Sequence[Combatant] = ()) -> int:
        """
        Accuracy of the actor, unclamped.

        Weapon or innate accuracy, plus the party accuracy passives, the
        mastery of the wielded weapon and the accuracy modifiers of effects,
        crowd control penalties included.
        """
        if actor.weapon is not None:
            base = actor.weapon.accuracy
        elif actor.accuracy is not None:
            base = actor.accuracy
        else:
            base = self.config.unarmed_accuracy
        base += self._party_total(actor, combatants, PassiveBonus.PARTY_ACCURACY, "accuracy")
        base += actor.abilities.mastery_bonus(actor.weapon_type, "accuracy")
        base += actor.effects.modifier_total(EffectStat.ACCURACY)
        return int(base)

    def crit_chance(self, actor: Combatant) -> int:
        """
        Critical chance of the actor.

        Critical passives may be negative at low level.
        """
        if actor.weapon is not None:
            base = actor.weapon.crit_chance
        elif actor.crit_chance is not None:
            base = actor.crit_chance
        else:
            base = self.config.unarmed_crit_chance
        base += actor.abilities.passive_total(PassiveBonus.CRITICAL, "crit_chance")
        base += actor.abilities.mastery_bonus(actor.weapon_type, "crit_chance")
        base += actor.effects.modifier_total(EffectStat.CRIT_CHANCE)
        return int(base)

    def damage_percent(self, actor: Combatant, combatants: Sequence[Combatant] = ()) -> float:
        """Summed outgoing damage percentage of the actor."""
        percent: float = actor.effects.modifier_total(EffectStat.DAMAGE_PERCENT)
        percent += actor.abilities.mastery_bonus(actor.weapon_type, "damage")
        if actor.combatant_type == CombatantType.COMPANION:
            percent += self._party_total(actor, combatants, PassiveBonus.COMPANION_DAMAGE, "damage")
        return percent

    def damage_range(self, actor: Combatant) -> tuple[int, int]:
        if actor.weapon is not None:
            return actor.weapon.damage_range
        if actor.damage_range is not None:
            return actor.damage_range
        return self.config.unarmed_damage

    def evasion_chance(self, target: Combatant) -> float:
        """Evasion of the target, none while defending."""
        if target.is_defending:
            return 0
        return target.abilities.passive_total(PassiveBonus.EVASION, "chance")

    # === Targeting ===

    def _check_target(
        self,
        actor: Combatant,
        target: Combatant | None,
        enemy: bool,
    ) -> Combatant:
        if target is None:
            raise InvalidTarget(actor, target, "a target is required")
        if not target.is_alive():
            raise InvalidTarget(actor, target, "target is defeated")
        hostile = is_opponent(actor.combatant_type, target.combatant_type)
        if enemy and not hostile:
            raise InvalidTarget(actor, target, "target is not an enemy")
        if not enemy and hostile:
            raise InvalidTarget(actor, target, "target is not an ally")
        return target

    def ability_targets(
        self,
        actor: Combatant,
        ability: Ability,
        target: Combatant | None,
        combatants: Sequence[Combatant] = (),
    ) -> list[Combatant]:
        """
        Resolve the targets of an ability from its target type.

        Raises:
            InvalidTarget:
                If the target is missing, defeated or on the wrong side, or
                if a group ability has nobody to affect.

        """
        kind = ability.definition.target
        if kind == AbilityTarget.SELF:
            if target is not None and target is not actor:
                raise InvalidTarget(actor, target, f"{ability.name} only targets its user")
            return [actor]
        if kind == AbilityTarget.SINGLE_ENEMY:
            return [self._check_target(actor, target, enemy=True)]
        if kind == AbilityTarget.SINGLE_ALLY:
            return [self._check_target(actor, target or actor, enemy=False)]
        if kind.targets_enemies:
            targets = [
                c for c in combatants
                if c.is_alive() and is_opponent(actor.combatant_type, c.combatant_type)
            ]
        else:
            targets = [
                c for c in combatants
                if c.is_alive() and not is_opponent(actor.combatant_type, c.combatant_type)
            ]
            if not any(c is actor for c in targets):
                targets.insert(0, actor)
        if not targets:
            raise InvalidTarget(actor, None, f"{ability.name} has nobody to affect")
        return targets

    # === Attack pipeline ===

    def attack(
        self,
        actor: Combatant,
        target: Combatant,
        outcome: ActionOutcome,
        combatants: Sequence[Combatant] = (),
        damage_range: tuple[int, int] | None = None,
    ) -> HitResult:
        """
        Resolve one attack against one target and apply its damage.

        Args:
            actor (Combatant):
                The attacker.
            target (Combatant):
                The defender.
            outcome (ActionOutcome):
                The outcome collecting the emitted events.
            combatants (Sequence[Combatant]):
                Every participant, for the party passives.
            damage_range (tuple[int, int] | None):
                Range to roll instead of the weapon or innate range.

        Returns:
            HitResult:
                The rolls and the damage pipeline of the attack.

        """
        provider = self.provider
        accuracy = self.accuracy(actor, combatants)
        accuracy_roll = provider.roll(1, 100)
        result = HitResult(
            target=target.name,
            accuracy=accuracy,
            accuracy_roll=accuracy_roll,
        )
        if accuracy_roll > accuracy:
            log_debug(
                f"{actor.name} misses {target.name}.",
                {"roll": accuracy_roll, "accuracy": accuracy},
            )
            self._emit(
                AttackEvent(
                    event_type=EventType.MISS,
                    target=target,
                    actor=actor,
                    roll=accuracy_roll,
                ),
                outcome,
            )
            return result
        result.hit = True

        low, high = damage_range or self.damage_range(actor)
        base_roll = provider.roll(low, high)
        result.crit_chance = self.crit_chance(actor)
        result.critical_roll = provider.roll(1, 100)
        critical = result.critical_roll <= result.crit_chance

        evasion = self.evasion_chance(target)
        evaded = False
        if evasion > 0:
            result.evasion_roll = provider.roll(1, 100)
            evaded = result.evasion_roll <= evasion

        breakdown = compute_damage(
            self.config,
            base_roll=base_roll,
            level=actor.level,
            critical=critical,
            crit_multiplier=actor.abilities.crit_multiplier(self.config.default_crit_multiplier),
            damage_percent=self.damage_percent(actor, combatants),
            flat_bonus=actor.effects.modifier_total(EffectStat.DAMAGE_FLAT),
            evaded=evaded,
            armor=target.defense,
            flat_resistance=target.effects.modifier_total(EffectStat.DAMAGE_REDUCTION_FLAT),
            reduction_percent=target.effects.modifier_total(EffectStat.DAMAGE_REDUCTION_PERCENT),
            defending=target.is_defending,
        )
        result.breakdown = breakdown
        log_debug(
            f"{actor.name} hits {target.name}.",
            {
                "roll": base_roll,
                "critical": critical,
                "evaded": evaded,
                "final": breakdown.final,
            },
        )

        # An evaded attack still counts as a hit.
        self._emit(
            AttackEvent(
                event_type=EventType.HIT,
                target=target,
                actor=actor,
                roll=accuracy_roll,
                amount=breakdown.final,
            ),
            outcome,
        )
        if critical:
            self._emit(
                AttackEvent(
                    event_type=EventType.CRITICAL_HIT,
                    target=target,
                    actor=actor,
                    roll=result.critical_roll,
                    amount=breakdown.final,
                ),
                outcome,
            )
        if evaded:
            self._emit(
                AttackEvent(
                    event_type=EventType.EVADE,
                    target=target,
                    actor=actor,
                    roll=result.evasion_roll,
                ),
                outcome,
            )
            return result

        result.damage = self._deal_damage(target, breakdown.final, outcome)
        return result

    def _deal_damage(self, target: Combatant, amount: int, outcome: ActionOutcome) -> int:
        dealt = target.take_damage(amount)
        self._emit(
            HealthEvent(
                event_type=EventType.DAMAGE_TAKEN,
                target=target,
                amount=dealt,
                health=target.health,
            ),
            outcome,
        )
        if not target.is_alive():
            self._emit(HealthEvent(event_type=EventType.DEATH, target=target), outcome)
        return dealt

    def _heal(self, target: Combatant, amount: int, outcome: ActionOutcome) -> int:
        healed = target.heal(amount)
        outcome.healing[target.name] = outcome.healing.get(target.name, 0) + healed
        self._emit(
            HealthEvent(
                event_type=EventType.HEAL,
                target=target,
                amount=healed,
                health=target.health,
            ),
            outcome,
        )
        return healed

    # === Actions ===

    def resolve(
        self,
        actor: Combatant,
        kind: ActionKind,
        target: Combatant | None = None,
        ability: Ability | str | None = None,
        item: Consumable | None = None,
        combatants: Sequence[Combatant] = (),
    ) -> ActionOutcome:
        """
        Resolve an action of the actor.

        Args:
            actor (Combatant):
                The combatant taking its turn.
            kind (ActionKind):
                The kind of action.
            target (Combatant | None):
                The chosen target, if the action needs one.
            ability (Ability | str | None):
                The ability, or its name, for ABILITY actions.
            item (Consumable | None):
                The consumable for ITEM actions.
            combatants (Sequence[Combatant]):
                Every participant, for group targets and party passives.

        Returns:
            ActionOutcome:
                The structured result of the action.

        Raises:
            InvalidTarget:
                If the actor is defeated or the target is not valid.
            AbilityOnCooldown:
                If the ability is still cooling down.
            AbilityNotActivatable:
                If the ability is passive.
            InsufficientResource:
                If the actor cannot pay the ability cost.

        """
        if not actor.is_alive():
            raise InvalidTarget(actor, actor, "a defeated combatant cannot act")

        outcome = ActionOutcome(actor=actor.name, kind=kind)
        if actor.effects.is_incapacitated():
            log_debug(f"{actor.name} is incapacitated and loses the turn.")
            actor.is_defending = False
            outcome.incapacitated = True
            return outcome

        if kind == ActionKind.ATTACK:
            self._resolve_attack(actor, target, outcome, combatants)
        elif kind == ActionKind.ABILITY:
            self._resolve_ability(actor, target, ability, outcome, combatants)
        elif kind == ActionKind.ITEM:
            self._resolve_item(actor, target, item, outcome)
        elif kind == ActionKind.DEFEND:
            actor.is_defending = True
            log_debug(f"{actor.name} takes a defensive stance.")
        elif kind == ActionKind.FLEE:
            actor.is_defending = False
            outcome.flee_roll = self.provider.roll(1, 100)
            outcome.fled = outcome.flee_roll <= self.config.flee_chance
            log_debug(
                f"{actor.name} tries to flee.",
                {"roll": outcome.flee_roll, "fled": outcome.fled},
            )
        else:
            actor.is_defending = False
        return outcome

    def _resolve_attack(
        self,
        actor: Combatant,
        target: Combatant | None,
        outcome: ActionOutcome,
        combatants: Sequence[Combatant],
    ) -> None:
        target = self._check_target(actor, target, enemy=True)
        actor.is_defending = False
        result = self.attack(actor, target, outcome, combatants)
        outcome.hits.append(result)
        if result.hit and not result.evaded and target.is_alive() and actor.weapon:
            for effect in actor.weapon.on_hit_effects:
                self._apply_effect(target, effect, actor, outcome)

    def _resolve_ability(
        self,
        actor: Combatant,
        target: Combatant | None,
        ability: Ability | str | None,
        outcome: ActionOutcome,
        combatants: Sequence[Combatant],
    ) -> None:
        if ability is None:
            raise ValueError("An ability action needs an ability.")
        if isinstance(ability, str):
            owned = actor.abilities.get(ability)
            if owned is None:
                raise KeyError(f"{actor.name} does not know {ability}.")
            ability = owned
        if ability.is_passive:
            raise AbilityNotActivatable(ability)
        if not ability.can_use():
            raise AbilityOnCooldown(ability)
        if actor.mana < ability.cost:
            raise InsufficientResource(actor, ability)
        targets = self.ability_targets(actor, ability, target, combatants)

        definition = ability.definition
        actor.is_defending = False
        actor.spend_mana(ability.cost)
        ability.start_cooldown()
        outcome.ability = ability.name
        outcome.experience = ability.gain_combat_experience()
        effect = ability.build_effect()
        log_debug(
            f"{actor.name} uses {ability.name}.",
            {"level": ability.level, "targets": len(targets)},
        )

        for recipient in targets:
            connected = True
            if definition.weapon_attack or definition.damage is not None:
                damage_range = (
                    ability.scaled_range(definition.damage)
                    if definition.damage is not None
                    else None
                )
                result = self.attack(actor, recipient, outcome, combatants, damage_range)
                outcome.hits.append(result)
                connected = result.hit and not result.evaded and recipient.is_alive()
            if definition.healing is not None:
                low, high = ability.scaled_range(definition.healing)
                self._heal(recipient, self.provider.roll(low, high), outcome)
            if definition.cleanse:
                outcome.events.extend(self.effect_engine.remove_negative_effects(recipient))
            if effect is not None and not definition.effect_on_self and connected:
                self._apply_effect(recipient, effect, actor, outcome)

        if effect is not None and definition.effect_on_self:
            self._apply_effect(actor, effect, actor, outcome)

    def _resolve_item(
        self,
        actor: Combatant,
        target: Combatant | None,
        item: Consumable | None,
        outcome: ActionOutcome,
    ) -> None:
        if item is None:
            raise ValueError("An item action needs a consumable.")
        if item.is_offensive:
            target = self._check_target(actor, target, enemy=True)
        elif item.is_revive:
            target = target or actor
            if is_opponent(actor.combatant_type, target.combatant_type):
                raise InvalidTarget(actor, target, "target is not an ally")
            if target.is_alive():
                raise InvalidTarget(actor, target, "target is not defeated")
        else:
            target = self._check_target(actor, target or actor, enemy=False)

        actor.is_defending = False
        outcome.item = item.name
        log_debug(f"{actor.name} uses {item.name} on {target.name}.")
        if item.is_revive:
            restored = target.revive(item.revive_percent)
            outcome.healing[target.name] = restored
            self._emit(
                HealthEvent(
                    event_type=EventType.HEAL,
                    target=target,
                    amount=restored,
                    health=target.health,
                ),
                outcome,
            )
        if item.damage:
            dealt = self._deal_damage(target, item.damage, outcome)
            outcome.hits.append(HitResult(target=target.name, hit=True, damage=dealt))
        if item.heal:
            self._heal(target, item.heal, outcome)
        if item.cleanse:
            outcome.events.extend(self.effect_engine.remove_negative_effects(target))
        if target.is_alive():
            for effect in item.effects:
                self._apply_effect(target, effect, actor, outcome)
