#!/usr/bin/env python3
"""
Run the life-stage evaluator once.

Meant for cron: animals evaluated within STAGE_EVALUATION_INTERVAL_HOURS are
skipped, so running it more often than that is harmless.

Usage:
  python scripts/evaluate_stages.py
"""

import asyncio
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.application.use_cases.stages import evaluate_transitions
from src.config.settings import get_settings
from src.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)
from src.utils.datetime_tz import local_today


async def run() -> None:
    settings = get_settings()
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)

    try:
        uow = SQLAlchemyUnitOfWork(session_factory)
        async with uow:
            transitions = await evaluate_transitions.execute(
                uow,
                today=local_today(settings.timezone),
                interval_hours=settings.stage_evaluation_interval_hours,
            )
    finally:
        await engine.dispose()

    if not transitions:
        print("No stage transitions suggested")
        return
    for item in transitions:
        print(
            f"Cuy {item.cuy_id}: {item.current_stage or '-'} -> {item.suggested_stage} "
            f"({item.age_months} months, {item.sex})"
        )


if __name__ == "__main__":
    asyncio.run(run())
