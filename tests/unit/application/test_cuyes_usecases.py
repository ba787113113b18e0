from __future__ import annotations

import random
from dataclasses import replace
from datetime import date, timedelta
from decimal import Decimal
from types import SimpleNamespace

import pytest

from src.application.errors import PartialBatchError, TransitionRejected, ValidationError
from src.application.use_cases.cuyes import (
    change_purpose,
    create_cuy,
    create_from_groups,
    cuy_stats,
    get_cuy,
    update_cuy,
)
from src.domain.models.cuy import Cuy

TODAY = date(2025, 6, 15)


class StubCuyes:
    def __init__(self, *cuyes: Cuy, fail_on_add: int | None = None) -> None:
        self.stored = {c.id: c for c in cuyes}
        self.next_id = max(self.stored, default=0) + 1
        self.fail_on_add = fail_on_add
        self.add_calls = 0

    async def add(self, cuy):
        self.add_calls += 1
        if self.fail_on_add == self.add_calls:
            raise RuntimeError("database unavailable")
        cuy = replace(cuy, id=self.next_id)
        self.next_id += 1
        self.stored[cuy.id] = cuy
        return replace(cuy)

    async def get(self, cuy_id):
        cuy = self.stored.get(cuy_id)
        return replace(cuy) if cuy else None

    async def update(self, cuy):
        self.stored[cuy.id] = replace(cuy)
        return replace(cuy)


class FailingStatsRepo:
    async def count(self, **kwargs):
        raise RuntimeError("connection lost")


class CountingStatsRepo:
    async def count(self, *, sex=None, exclude_statuses=None):
        if sex is None:
            return 10
        return 6 if sex == "M" else 3

    async def count_born_after(self, cutoff, *, exclude_statuses=None):
        assert cutoff == date(2025, 4, 15)
        return 4

    async def count_by_breed(self, *, exclude_statuses=None):
        return [("Andina", 2), ("Peru", 7)]


def make_uow(repo):
    state = {"commits": 0, "rollbacks": 0}

    async def commit():
        state["commits"] += 1

    async def rollback():
        state["rollbacks"] += 1

    return SimpleNamespace(cuyes=repo, commit=commit, rollback=rollback, state=state)


def make_cuy(cuy_id: int = 1, *, birth: date, sex: str = "M", **kwargs) -> Cuy:
    values = dict(
        id=cuy_id,
        breed="Peru",
        birth_date=birth,
        sex=sex,
        weight=Decimal("0.800"),
        shed="G1",
        cage="J1",
    )
    values.update(kwargs)
    return Cuy(**values)


@pytest.mark.asyncio
async def test_create_cuy_derives_stage_and_purpose():
    uow = make_uow(StubCuyes())
    created = await create_cuy.execute(
        uow,
        create_cuy.CreateCuyInput(
            breed="Peru",
            sex="hembra",
            weight=Decimal("1.2"),
            shed="G1",
            cage="J2",
            birth_date="2024-12-01",
        ),
        today=TODAY,
    )
    assert created.id == 1
    assert created.sex == "H"
    assert created.life_stage == "Reproductora"
    assert created.purpose == "Reproducción"
    assert created.status == "Activo"
    assert created.last_evaluation is not None
    assert uow.state["commits"] == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"sex": "X"},
        {"birth_date": "2025-07-01"},
        {"weight": Decimal("0")},
        {"status": "Perdido"},
        {"breed": ""},
    ],
)
async def test_create_cuy_rejects_invalid_input(overrides):
    repo = StubCuyes()
    values = dict(breed="Peru", sex="M", weight=Decimal("1"), shed="G1", cage="J1")
    values.update(overrides)
    with pytest.raises(ValidationError):
        await create_cuy.execute(make_uow(repo), create_cuy.CreateCuyInput(**values), today=TODAY)
    assert repo.add_calls == 0


@pytest.mark.asyncio
async def test_get_cuy_projects_current_stage_without_saving():
    repo = StubCuyes(make_cuy(birth=date(2024, 12, 15), life_stage="Cría", purpose=None))
    cuy = await get_cuy.execute(make_uow(repo), 1, today=TODAY)
    assert cuy is not None
    assert cuy.life_stage == "Engorde"
    assert cuy.purpose == "Engorde"
    assert repo.stored[1].life_stage == "Cría"


@pytest.mark.asyncio
async def test_get_cuy_keeps_pinned_stage():
    repo = StubCuyes(make_cuy(birth=date(2024, 1, 1), sex="H", life_stage="Gestante"))
    cuy = await get_cuy.execute(make_uow(repo), 1, today=TODAY)
    assert cuy is not None
    assert cuy.life_stage == "Gestante"


@pytest.mark.asyncio
async def test_update_birth_date_overwrites_manual_stage():
    repo = StubCuyes(
        make_cuy(birth=date(2024, 12, 15), life_stage="Reproductor", purpose="Reproducción")
    )
    updated = await update_cuy.execute(
        make_uow(repo),
        1,
        update_cuy.UpdateCuyInput(birth_date=date(2025, 5, 1)),
        today=TODAY,
    )
    assert updated is not None
    assert updated.life_stage == "Cría"
    assert updated.purpose == "Indefinido"


@pytest.mark.asyncio
async def test_update_sex_rederives_adult_stage():
    repo = StubCuyes(
        make_cuy(birth=date(2024, 1, 1), sex="H", life_stage="Reproductora", purpose="Reproducción")
    )
    updated = await update_cuy.execute(
        make_uow(repo), 1, update_cuy.UpdateCuyInput(sex="M"), today=TODAY
    )
    assert updated is not None
    assert (updated.sex, updated.life_stage, updated.purpose) == ("M", "Engorde", "Engorde")


@pytest.mark.asyncio
async def test_update_without_age_change_keeps_explicit_stage():
    repo = StubCuyes(make_cuy(birth=date(2024, 1, 1), life_stage="Engorde", purpose="Engorde"))
    updated = await update_cuy.execute(
        make_uow(repo),
        1,
        update_cuy.UpdateCuyInput(life_stage="Reproductor", purpose="Reproducción", weight=Decimal("1.1")),
        today=TODAY,
    )
    assert updated is not None
    assert updated.life_stage == "Reproductor"
    assert updated.purpose == "Reproducción"
    assert updated.weight == Decimal("1.1")


@pytest.mark.asyncio
async def test_update_missing_cuy_returns_none():
    uow = make_uow(StubCuyes())
    assert await update_cuy.execute(uow, 3, update_cuy.UpdateCuyInput(breed="Andina"), today=TODAY) is None
    assert uow.state["commits"] == 0


@pytest.mark.asyncio
async def test_change_purpose_rejects_animals_under_two_months():
    repo = StubCuyes(make_cuy(birth=date(2025, 5, 1), life_stage="Cría"))
    with pytest.raises(TransitionRejected) as excinfo:
        await change_purpose.execute(make_uow(repo), 1, "Engorde", "Engorde", today=TODAY)
    assert "2 months" in excinfo.value.message
    assert excinfo.value.details["age_months"] == 1
    assert repo.stored[1].purpose is None


@pytest.mark.asyncio
async def test_change_purpose_rejects_young_breeding_male():
    repo = StubCuyes(make_cuy(birth=date(2025, 2, 16)))
    with pytest.raises(TransitionRejected) as excinfo:
        await change_purpose.execute(make_uow(repo), 1, "Reproducción", "Reproductor", today=TODAY)
    assert excinfo.value.message == "Males need 4+ months to be assigned to breeding"


@pytest.mark.asyncio
async def test_change_purpose_allows_three_month_female():
    repo = StubCuyes(make_cuy(birth=date(2025, 3, 15), sex="H", life_stage="Juvenil"))
    uow = make_uow(repo)
    updated = await change_purpose.execute(uow, 1, "Reproducción", "Reproductora", today=TODAY)
    assert updated is not None
    assert updated.purpose == "Reproducción"
    assert updated.life_stage == "Reproductora"
    assert uow.state["commits"] == 1


@pytest.mark.asyncio
async def test_change_purpose_missing_cuy_returns_none():
    assert await change_purpose.execute(make_uow(StubCuyes()), 8, "Engorde", "Engorde", today=TODAY) is None


@pytest.mark.asyncio
async def test_cage_registration_with_zero_variance_is_exact():
    repo = StubCuyes()
    uow = make_uow(repo)
    created = await create_from_groups.execute(
        uow,
        create_from_groups.CageRegistrationInput(
            shed="G2",
            cage="J4",
            breed="Andina",
            groups=[
                create_from_groups.CuyGroup(
                    sex="M",
                    count=3,
                    target_age_days=40,
                    target_weight_grams=300,
                    age_variance=0,
                    weight_variance=0,
                )
            ],
        ),
        rng=random.Random(1),
        today=TODAY,
    )
    assert [c.id for c in created] == [1, 2, 3]
    for cuy in created:
        assert cuy.birth_date == TODAY - timedelta(days=40)
        assert cuy.weight == Decimal("0.300")
        assert (cuy.life_stage, cuy.purpose) == ("Juvenil", "Juvenil")
        assert (cuy.shed, cuy.cage, cuy.breed, cuy.status) == ("G2", "J4", "Andina", "Activo")
    assert uow.state["commits"] == 3


@pytest.mark.asyncio
async def test_cage_registration_uses_default_variances():
    repo = StubCuyes()
    created = await create_from_groups.execute(
        make_uow(repo),
        create_from_groups.CageRegistrationInput(
            shed="G2",
            cage="J4",
            breed="Andina",
            groups=[
                create_from_groups.CuyGroup(
                    sex="H", count=20, target_age_days=100, target_weight_grams=700
                )
            ],
        ),
        rng=random.Random(3),
        today=TODAY,
        default_age_variance=3,
        default_weight_variance=50,
    )
    assert len(created) == 20
    for cuy in created:
        assert TODAY - timedelta(days=103) <= cuy.birth_date <= TODAY - timedelta(days=97)
        assert Decimal("0.650") <= cuy.weight <= Decimal("0.750")


@pytest.mark.asyncio
async def test_cage_registration_validates_every_group_first():
    repo = StubCuyes()
    groups = [
        create_from_groups.CuyGroup(sex="M", count=2, target_age_days=40, target_weight_grams=300),
        create_from_groups.CuyGroup(sex="H", count=0, target_age_days=40, target_weight_grams=300),
    ]
    with pytest.raises(ValidationError):
        await create_from_groups.execute(
            make_uow(repo),
            create_from_groups.CageRegistrationInput(shed="G1", cage="J1", breed="Peru", groups=groups),
            today=TODAY,
        )
    assert repo.add_calls == 0


@pytest.mark.asyncio
async def test_cage_registration_reports_partial_progress():
    repo = StubCuyes(fail_on_add=3)
    uow = make_uow(repo)
    with pytest.raises(PartialBatchError) as excinfo:
        await create_from_groups.execute(
            uow,
            create_from_groups.CageRegistrationInput(
                shed="G1",
                cage="J1",
                breed="Peru",
                groups=[
                    create_from_groups.CuyGroup(
                        sex="M", count=5, target_age_days=20, target_weight_grams=200
                    )
                ],
            ),
            rng=random.Random(0),
            today=TODAY,
        )
    assert excinfo.value.details == {"created": 2, "created_ids": [1, 2]}
    assert uow.state["commits"] == 2
    assert uow.state["rollbacks"] == 1


def test_sampled_weight_has_a_floor():
    assert create_from_groups.sample_weight_kg(10, 0, random.Random(0)) == Decimal("0.050")


@pytest.mark.asyncio
async def test_stats_counts_herd():
    stats = await cuy_stats.execute(make_uow(CountingStatsRepo()), today=TODAY)
    assert stats.available is True
    assert (stats.total, stats.male, stats.female) == (10, 6, 3)
    assert stats.under_two_months == 4
    assert stats.adults == 6
    assert [(b.breed, b.total) for b in stats.by_breed] == [("Andina", 2), ("Peru", 7)]


@pytest.mark.asyncio
async def test_stats_flag_unavailable_on_storage_error():
    stats = await cuy_stats.execute(make_uow(FailingStatsRepo()), today=TODAY)
    assert stats.available is False
    assert stats.total == 0
    assert stats.by_breed == []
