from __future__ import annotations

from enum import Enum


class LifeStage(str, Enum):
    CRIA = "Cría"
    JUVENIL = "Juvenil"
    ENGORDE = "Engorde"
    REPRODUCTOR = "Reproductor"
    REPRODUCTORA = "Reproductora"
    GESTANTE = "Gestante"
    LACTANTE = "Lactante"
    RETIRADO = "Retirado"


class Purpose(str, Enum):
    ENGORDE = "Engorde"
    REPRODUCCION = "Reproducción"
    VENTA = "Venta"
    INDEFINIDO = "Indefinido"


# Stages the automatic evaluator never moves an animal out of
PINNED_STAGES = frozenset(
    {
        LifeStage.GESTANTE.value,
        LifeStage.LACTANTE.value,
        LifeStage.RETIRADO.value,
        "Enfermo",
        "Vendido",
        "Fallecido",
    }
)
