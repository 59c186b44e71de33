"""
Ground combat resolution - a unit attacks an adjacent enemy after moving.

Damage is a flat base value, reduced in Winter for the faction whose
doctrine suffers in harsh weather. No terrain or unit-type modifiers.
"""

import logging

from .base import CombatResolver, CombatReport
from ..map import Weather

logger = logging.getLogger(__name__)


class GroundCombat(CombatResolver):
    """Resolves ground combat engagements."""

    def resolve(self, attacker, defender, weather: Weather) -> CombatReport:
        """
        Resolve one attack and apply damage to the defender.

        The defender is only marked destroyed; removing it from the
        registry is the caller's job.
        """
        logger.info(f"Combat: {attacker.id} attacks {defender.id}")

        damage = self.calculate_damage(attacker, defender, weather)
        destroyed = self.apply_damage(defender, damage)

        report = CombatReport(
            attacker_id=attacker.id,
            defender_id=defender.id,
            weather=weather,
            damage=damage,
            defender_health=defender.health,
            defender_destroyed=destroyed,
            location=defender.position,
        )

        modifier = self.weather_modifier(attacker, weather)
        if modifier:
            report.notes.append(f"{weather.label} attrition: {modifier:+d} damage")

        logger.info(f"{defender.id} health is now {defender.health}")
        if destroyed:
            logger.info(f"{defender.id} has been destroyed!")

        return report
