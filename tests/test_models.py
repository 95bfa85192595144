from __future__ import annotations

import pytest

from growbraz.models import (
    MS_PER_DAY,
    Genetics,
    GrowSpace,
    GrowStage,
    LogType,
    MaintenanceLog,
    Plant,
    TrainingType,
    as_valid,
    parse_records,
    plant_age_days,
    stage_progress,
)


def _plant(**overrides: object) -> Plant:
    fields: dict[str, object] = {
        "id": "p1",
        "grow_space_id": "1",
        "name": "Glookies #1",
        "strain": "Glookies",
        "genetics": Genetics.photoperiod,
        "seed_bank": "Barney's Farm",
        "start_date": 0,
        "current_stage": GrowStage.vegetative,
    }
    fields.update(overrides)
    return Plant(**fields)


def test_enum_values_match_stored_spellings() -> None:
    assert [g.value for g in Genetics] == ["Auto", "Photoperiod"]
    assert [s.value for s in GrowStage] == ["Germination", "Seedling", "Vegetative", "Flowering", "Harvested"]
    assert [t.value for t in LogType] == ["Watering", "Feeding", "Training", "Photo"]
    assert [t.value for t in TrainingType] == ["Topping", "LST", "Defoliation", "Super Cropping"]


def test_plant_record_uses_camel_case_keys() -> None:
    log = MaintenanceLog(id="l1", date=5, type=LogType.watering, ph=6.2, ec_ppm=1.4, volume_liters=1.5)
    plant = _plant(logs=[log])

    assert plant.to_record() == {
        "id": "p1",
        "growSpaceId": "1",
        "name": "Glookies #1",
        "strain": "Glookies",
        "genetics": "Photoperiod",
        "seedBank": "Barney's Farm",
        "startDate": 0,
        "currentStage": "Vegetative",
        "logs": [
            {"id": "l1", "date": 5, "type": "Watering", "ph": 6.2, "ecPpm": 1.4, "volumeLiters": 1.5},
        ],
    }


def test_record_accepts_aliases_and_names() -> None:
    by_alias = GrowSpace.model_validate(
        {"id": "1", "name": "Tent", "dimensions": "80x80", "lightType": "LED", "lightPower": 150}
    )
    by_name = GrowSpace(id="1", name="Tent", dimensions="80x80", light_type="LED", light_power=150)

    assert by_alias == by_name


def test_training_log_serializes_technique_list() -> None:
    log = MaintenanceLog(
        id="l2",
        date=10,
        type=LogType.training,
        training_types=[TrainingType.lst, TrainingType.defoliation],
    )

    assert log.to_record()["trainingTypes"] == ["LST", "Defoliation"]


@pytest.mark.parametrize(
    ("elapsed", "expected"),
    [(0, 0), (MS_PER_DAY - 1, 0), (MS_PER_DAY, 1), (30 * MS_PER_DAY + 5, 30), (-1, -1)],
)
def test_plant_age_days_floors(elapsed: int, expected: int) -> None:
    plant = _plant(start_date=1_000_000)

    assert plant_age_days(plant, 1_000_000 + elapsed) == expected


def test_stage_progress_mapping() -> None:
    assert [stage_progress(stage) for stage in GrowStage] == [10, 25, 50, 85, 100]
    assert stage_progress("Flowering") == 85


def test_parse_records_keeps_malformed_entries() -> None:
    good = _plant().to_record()
    bad = {"id": "p2", "name": "Broken", "genetics": "Hybrid"}

    plants = parse_records(Plant, [good, bad])

    assert plants[0] == _plant()
    assert plants[1] == bad


def test_parse_records_keeps_non_object_entries() -> None:
    assert parse_records(GrowSpace, ["junk", 7]) == ["junk", 7]


def test_as_valid_rejects_raw_and_invalid_records() -> None:
    assert as_valid(Plant, _plant()) == _plant()
    assert as_valid(Plant, {"id": "p2", "name": "Broken"}) is None
    assert as_valid(Plant, _plant().model_copy(update={"genetics": "Hybrid"})) is None
