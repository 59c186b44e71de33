"""
Base combat resolution system with common mechanics.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..config import RulesConfig
from ..map import Weather


@dataclass
class CombatReport:
    """Report of a combat engagement."""
    attacker_id: str
    defender_id: str
    weather: Weather
    damage: int
    defender_health: int  # Remaining health after damage, may be negative
    defender_destroyed: bool
    turn: int = 0
    location: Optional[tuple[int, int]] = None  # Defender's cell
    notes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "attacker_id": self.attacker_id,
            "defender_id": self.defender_id,
            "weather": self.weather.value,
            "damage": self.damage,
            "defender_health": self.defender_health,
            "defender_destroyed": self.defender_destroyed,
            "turn": self.turn,
            "location": self.location,
            "notes": list(self.notes),
        }


class CombatResolver:
    """Base class for combat resolution."""

    def __init__(self, rules: Optional[RulesConfig] = None):
        self.rules = rules or RulesConfig()

    def weather_modifier(self, attacker, weather: Weather) -> int:
        """Flat damage adjustment for the attacker in this weather."""
        if weather == Weather.WINTER and attacker.faction == self.rules.winter_penalised_faction:
            return -self.rules.winter_penalty
        return 0

    def calculate_damage(self, attacker, defender, weather: Weather) -> int:
        """Calculate damage dealt. Never negative."""
        return max(0, self.rules.base_damage + self.weather_modifier(attacker, weather))

    def apply_damage(self, defender, damage: int) -> bool:
        """Apply damage and report whether the defender is destroyed."""
        defender.take_damage(damage)
        return defender.is_destroyed()
