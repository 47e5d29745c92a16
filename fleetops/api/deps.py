"""
Dépendances communes des routes / Shared route dependencies.
Injectées dans les routes via Depends().
"""

from datetime import date

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fleetops.config import settings
from fleetops.models.contract import Contract
from fleetops.services.report_service import month_bounds
from fleetops.utils.clock import Clock, SystemClock

_system_clock = SystemClock(settings.TIMEZONE)


def get_clock() -> Clock:
    """Horloge de facturation (surchargee dans les tests) / Billing clock (overridden in tests)."""
    return _system_clock


def resolve_window(date_from: date | None, date_to: date | None, clock: Clock) -> tuple[date, date]:
    """Fenetre de la requete, mois courant par defaut / Request window, current month by default.

    Valide avant d'appeler le moteur / Validated before the engine is called.
    """
    month_start, month_end = month_bounds(clock.today())
    window_start = date_from or month_start
    window_end = date_to or month_end
    if window_start > window_end:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"date_from {window_start.isoformat()} is after date_to {window_end.isoformat()}",
        )
    return window_start, window_end


async def load_contract(db: AsyncSession, contract_id: int) -> Contract:
    """Charger un contrat et son calendrier ou 404 / Load a contract with its calendar or 404."""
    result = await db.execute(
        select(Contract)
        .where(Contract.id == contract_id)
        .options(selectinload(Contract.calendar_overrides))
    )
    contract = result.scalar_one_or_none()
    if not contract:
        raise HTTPException(status_code=404, detail="Contract not found")
    return contract
