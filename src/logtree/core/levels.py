"""Severity levels for log records.

Levels are ordered by their integer value. The predefined constants,
ascending: ALL, FINEST, FINER, FINE, CONFIG, INFO, WARNING, SEVERE, SHOUT,
OFF. Custom levels should use a value between ALL and OFF.
"""

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True, eq=False)
class Level:
    """An ordered, named severity.

    Attributes:
        name: Display name (e.g., "INFO").
        value: Rank used for ordering and equality.
    """

    name: str
    value: int

    ALL: ClassVar["Level"]
    FINEST: ClassVar["Level"]
    FINER: ClassVar["Level"]
    FINE: ClassVar["Level"]
    CONFIG: ClassVar["Level"]
    INFO: ClassVar["Level"]
    WARNING: ClassVar["Level"]
    SEVERE: ClassVar["Level"]
    SHOUT: ClassVar["Level"]
    OFF: ClassVar["Level"]
    LEVELS: ClassVar[tuple["Level", ...]]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Level):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __lt__(self, other: "Level") -> bool:
        if not isinstance(other, Level):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: "Level") -> bool:
        if not isinstance(other, Level):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other: "Level") -> bool:
        if not isinstance(other, Level):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other: "Level") -> bool:
        if not isinstance(other, Level):
            return NotImplemented
        return self.value >= other.value

    def __str__(self) -> str:
        return self.name

    @classmethod
    def parse(cls, text: str) -> "Level":
        """Resolve a level from its name or integer value.

        Args:
            text: Predefined level name (case-insensitive) or an integer
                literal such as "850".

        Returns:
            The predefined level with that name or value, or a new custom
            level for an unknown integer value.

        Raises:
            ValueError: If text is neither a known name nor an integer.
        """
        candidate = text.strip()
        for level in cls.LEVELS:
            if level.name == candidate.upper():
                return level
        try:
            value = int(candidate)
        except ValueError:
            raise ValueError(f"Unknown log level: {text!r}") from None
        for level in cls.LEVELS:
            if level.value == value:
                return level
        return cls(f"LEVEL_{value}", value)


Level.ALL = Level("ALL", 0)
Level.FINEST = Level("FINEST", 300)
Level.FINER = Level("FINER", 400)
Level.FINE = Level("FINE", 500)
Level.CONFIG = Level("CONFIG", 700)
Level.INFO = Level("INFO", 800)
Level.WARNING = Level("WARNING", 900)
Level.SEVERE = Level("SEVERE", 1000)
Level.SHOUT = Level("SHOUT", 1200)
Level.OFF = Level("OFF", 2000)

Level.LEVELS = (
    Level.ALL,
    Level.FINEST,
    Level.FINER,
    Level.FINE,
    Level.CONFIG,
    Level.INFO,
    Level.WARNING,
    Level.SEVERE,
    Level.SHOUT,
    Level.OFF,
)
