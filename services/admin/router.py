"""
services/admin/router.py
Platform trust indicators and admin CSV exports.
"""

import csv
import logging
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from io import StringIO
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from config.storage import get_storage
from shared.middleware.auth import require_admin
from shared.models.models import BookingStatus
from shared.schemas.schemas import (
    BookingResponse,
    LocationResponse,
    ProfessionalResponse,
    ServiceCategoryResponse,
    ServiceResponse,
    StatsResponse,
    UserAccount,
    UserResponse,
)
from shared.storage.base import Storage

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Admin"])


# ── Helpers ────────────────────────────────────────────────────────────────────

def _mean(values: List[Decimal]) -> Decimal:
    if not values:
        return Decimal("0")
    return sum(values, Decimal("0")) / len(values)


def _cell(value) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return ";".join(_cell(v) for v in value)
    if isinstance(value, dict):
        return ";".join(f"{k}={_cell(v)}" for k, v in value.items())
    return str(value)


def _to_csv(records: List[BaseModel], model) -> StringIO:
    output = StringIO()
    writer = csv.writer(output)
    fields = list(model.model_fields)
    writer.writerow(fields)
    for record in records:
        row = record.model_dump(mode="json")
        writer.writerow([_cell(row.get(f)) for f in fields])
    output.seek(0)
    return output


async def _export_users(storage: Storage):
    users = await storage.list_users()
    return [u.public() for u in users], UserResponse


async def _export_bookings(storage: Storage):
    return await storage.list_bookings(), BookingResponse


async def _export_services(storage: Storage):
    return await storage.list_services(), ServiceResponse


async def _export_professionals(storage: Storage):
    return await storage.list_professionals(), ProfessionalResponse


async def _export_categories(storage: Storage):
    return await storage.list_categories(), ServiceCategoryResponse


async def _export_locations(storage: Storage):
    return await storage.list_locations(), LocationResponse


EXPORTERS = {
    "bookings": _export_bookings,
    "users": _export_users,
    "services": _export_services,
    "professionals": _export_professionals,
    "categories": _export_categories,
    "locations": _export_locations,
}


# ── Stats ──────────────────────────────────────────────────────────────────────

@router.get("/stats", response_model=StatsResponse)
async def get_stats(storage: Storage = Depends(get_storage)):
    """
    Trust indicators for the landing page.
    Rating is the mean of all reviews, falling back to the mean profile
    rating of verified professionals before any review exists.
    """
    professionals = [p for p in await storage.list_professionals() if p.is_verified]
    reviews = await storage.list_reviews()
    completed = await storage.list_bookings(status=BookingStatus.COMPLETED.value)

    if reviews:
        rating = _mean([Decimal(r.rating) for r in reviews])
    else:
        rating = _mean([p.rating for p in professionals])

    return StatsResponse(
        professionals=f"{len(professionals)}+",
        rating=f"{rating.quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)}/5",
        completed_bookings=f"{len(completed)}+",
    )


# ── CSV Export ─────────────────────────────────────────────────────────────────

@router.get("/admin/export/{entity}")
async def export_csv(
    entity: str,
    admin: UserAccount = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    """Download one entity table as CSV."""
    exporter = EXPORTERS.get(entity)
    if exporter is None:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown export '{entity}'. Choose from: {', '.join(EXPORTERS)}",
        )

    records, model = await exporter(storage)
    output = _to_csv(records, model)
    filename = f"{entity}_export_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv"

    logger.info(f"CSV export {filename} ({len(records)} rows) by admin {admin.id}")

    return StreamingResponse(
        iter([output.getvalue()]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
