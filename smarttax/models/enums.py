"""Enumerations for SmartTax Optimizer."""

from enum import IntEnum, StrEnum


class FilingStatus(IntEnum):
    SINGLE = 1
    MARRIED_JOINT = 2
    MARRIED_SEPARATE = 3
    HEAD_OF_HOUSEHOLD = 4


class AgeBand(StrEnum):
    UNDER_65 = "UNDER_65"
    SIXTY_FIVE_PLUS = "SIXTY_FIVE_PLUS"

    @classmethod
    def for_age(cls, age: int) -> "AgeBand":
        return cls.SIXTY_FIVE_PLUS if age >= 65 else cls.UNDER_65


class TopBracketPolicy(StrEnum):
    """How income above the highest defined bracket is treated.

    BOUNDED leaves it untaxed (the default).
    OPEN taxes it at the top level's rate.
    """

    BOUNDED = "BOUNDED"
    OPEN = "OPEN"
