from __future__ import annotations

from dataclasses import replace
from datetime import date

from src.domain.models.cuy import Cuy
from src.domain.services.classification import derive_purpose, derive_stage
from src.domain.value_objects.life_stage import PINNED_STAGES


def with_current_stage(cuy: Cuy, today: date) -> Cuy:
    """Copy of ``cuy`` whose stage reflects its age today; nothing is persisted."""
    if cuy.life_stage in PINNED_STAGES:
        return cuy
    stage = derive_stage(cuy.birth_date, cuy.sex, today)
    return replace(cuy, life_stage=stage, purpose=cuy.purpose or derive_purpose(stage))
