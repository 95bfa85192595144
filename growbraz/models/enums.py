"""Categorical fields of the cultivation records.

Values are the exact strings written to the store, so renaming a member's
value breaks round-tripping of previously saved collections.
"""

from enum import StrEnum


class Genetics(StrEnum):
    """How flowering is triggered."""

    auto = "Auto"
    photoperiod = "Photoperiod"


class GrowStage(StrEnum):
    """Plant lifecycle phase, declared in cultivation order."""

    germination = "Germination"
    seedling = "Seedling"
    vegetative = "Vegetative"
    flowering = "Flowering"
    harvested = "Harvested"


class LogType(StrEnum):
    watering = "Watering"
    feeding = "Feeding"
    training = "Training"
    photo = "Photo"


class TrainingType(StrEnum):
    topping = "Topping"
    lst = "LST"
    defoliation = "Defoliation"
    super_cropping = "Super Cropping"
