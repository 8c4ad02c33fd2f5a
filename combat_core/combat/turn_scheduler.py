"""
Turn scheduler module for the combat core.

Decides the order in which combatants act each round. At the start of a
round every transient speed modifier is reset and derived again from the
last action, the active speed effects and the party passives, then the
living combatants are sorted by effective speed.
"""

from collections.abc import Iterable, Sequence

from combat_core.combatants.combatant import Combatant
from combat_core.core.config import CombatConfig
from combat_core.core.constants import (
    ActionKind,
    CombatantType,
    CombatResolution,
    EffectStat,
    PassiveBonus,
)
from combat_core.core.errors import EmptyActSequence
from combat_core.core.logging import log_debug


def swift_tactics_bonus(base_speed: int, percent: float) -> int:
    """Extra speed granted to a companion by a speed percentage passive."""
    return int(base_speed * (1 + percent / 100)) - base_speed


def combat_resolution(combatants: Iterable[Combatant]) -> CombatResolution:
    """
    Decide whether the battle is over.

    Args:
        combatants (Iterable[Combatant]):
            Every participant, alive or not.

    Returns:
        CombatResolution:
            ONGOING while both sides have someone standing.

    """
    party_alive = False
    enemies_alive = False
    for combatant in combatants:
        if not combatant.is_alive():
            continue
        if combatant.is_party:
            party_alive = True
        else:
            enemies_alive = True
    if party_alive and enemies_alive:
        return CombatResolution.ONGOING
    if party_alive:
        return CombatResolution.VICTORY
    if enemies_alive:
        return CombatResolution.DEFEAT
    return CombatResolution.MUTUAL_DEFEAT


class TurnScheduler:
    """
    Produces the act sequence of each round.

    Attributes:
        config (CombatConfig):
            The speed modifiers per action kind and the minimum speed.
        round_number (int):
            Number of rounds started so far.
        order (list[Combatant]):
            The act sequence of the current round.

    """

    def __init__(self, config: CombatConfig | None = None) -> None:
        self.config = config or CombatConfig()
        self.round_number = 0
        self.order: list[Combatant] = []
        self._registered: list[Combatant] = []

    # === Registration ===

    def register(self, combatants: Iterable[Combatant]) -> None:
        """
        Register combatants, fixing the order used to break speed ties.

        Combatants already registered keep their position.
        """
        for combatant in combatants:
            if not any(combatant is known for known in self._registered):
                self._registered.append(combatant)

    def _registration_index(self, combatant: Combatant) -> int:
        for index, known in enumerate(self._registered):
            if known is combatant:
                return index
        return len(self._registered)

    def record_action(self, combatant: Combatant, kind: ActionKind) -> None:
        """Store the kind of action taken, read at the start of next round."""
        combatant.last_action = kind

    # === Speed ===

    def speed_modifier(
        self,
        combatant: Combatant,
        combatants: Sequence[Combatant] = (),
    ) -> int:
        """
        Compute the transient speed modifier of a combatant.

        Args:
            combatant (Combatant):
                The combatant whose modifier is computed.
            combatants (Sequence[Combatant]):
                Every participant, used to find the party speed passives.

        Returns:
            int:
                The modifier for this round.

        """
        modifier = self.config.speed_modifier_for(combatant.last_action)
        modifier += combatant.effects.modifier_total(EffectStat.SPEED)
        if combatant.combatant_type == CombatantType.COMPANION:
            percent = sum(
                ally.abilities.passive_total(PassiveBonus.COMPANION_SPEED, "speed")
                for ally in combatants
                if ally.is_party and ally.is_alive()
            )
            if percent:
                modifier += swift_tactics_bonus(combatant.base_speed, percent)
        return modifier

    def effective_speed(self, combatant: Combatant) -> int:
        return max(
            self.config.minimum_speed,
            combatant.base_speed + combatant.speed_modifier,
        )

    # === Rounds ===

    def start_round(self, combatants: Sequence[Combatant]) -> list[Combatant]:
        """
        Snapshot the speeds and produce the act sequence of a new round.

        Args:
            combatants (Sequence[Combatant]):
                Every participant, alive or not.

        Returns:
            list[Combatant]:
                The living combatants, fastest first, ties in registration
                order.

        Raises:
            EmptyActSequence:
                If no combatant is alive, carrying the combat resolution.

        """
        self.register(combatants)
        for combatant in combatants:
            combatant.speed_modifier = 0
        for combatant in combatants:
            combatant.speed_modifier = self.speed_modifier(combatant, combatants)

        alive = [combatant for combatant in combatants if combatant.is_alive()]
        if not alive:
            self.order = []
            raise EmptyActSequence(combat_resolution(combatants))

        self.order = sorted(
            alive,
            key=lambda c: (-self.effective_speed(c), self._registration_index(c)),
        )
        self.round_number += 1
        log_debug(
            f"Round {self.round_number} order.",
            {
                "order": ", ".join(
                    f"{c.name}:{self.effective_speed(c)}" for c in self.order
                )
            },
        )
        return list(self.order)

    def resolution(self, combatants: Iterable[Combatant]) -> CombatResolution:
        return combat_resolution(combatants)
