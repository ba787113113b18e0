from __future__ import annotations

from enum import Enum


class CuyStatus(str, Enum):
    ACTIVE = "Activo"
    SICK = "Enfermo"
    SOLD = "Vendido"
    DECEASED = "Fallecido"


# Animals that no longer count towards the living herd
INACTIVE_STATUSES = (CuyStatus.SOLD.value, CuyStatus.DECEASED.value)
