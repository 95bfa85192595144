"""Domain model registry.

Application code can do::

    from growbraz.models import GrowSpace, Plant, MaintenanceLog, GrowStage, ...
"""

# ── Enums ───────────────────────────────────────────────────────────────────
from growbraz.models.enums import Genetics, GrowStage, LogType, TrainingType

# ── Records ─────────────────────────────────────────────────────────────────
from growbraz.models.records import (
    MS_PER_DAY,
    STAGE_PROGRESS,
    GrowSpace,
    MaintenanceLog,
    Plant,
    Record,
    as_valid,
    now_ms,
    parse_records,
    plant_age_days,
    stage_progress,
)

__all__ = [
    "MS_PER_DAY",
    "STAGE_PROGRESS",
    # Enums
    "Genetics",
    # Records
    "GrowSpace",
    "GrowStage",
    "LogType",
    "MaintenanceLog",
    "Plant",
    "Record",
    "TrainingType",
    # Helpers
    "as_valid",
    "now_ms",
    "parse_records",
    "plant_age_days",
    "stage_progress",
]
