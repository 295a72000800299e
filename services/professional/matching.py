"""
services/professional/matching.py
Professional matching for a service request.

A professional is eligible when verified and available, when it offers the
service (skill label equal to the service name, or a service_ids tag), and
when it covers the location (an area label contained in the requested
location text, or a location_ids tag for the registry entry that text names).
Results keep registry order; auto-assignment takes the first one.
"""

from typing import Iterable, List, Optional, Set

from shared.models.models import AvailabilityStatus
from shared.schemas.schemas import LocationResponse, ProfessionalResponse, ServiceResponse


def _norm(value: str) -> str:
    return value.strip().casefold()


def is_bookable(prof: ProfessionalResponse) -> bool:
    return prof.is_verified and prof.availability_status == AvailabilityStatus.AVAILABLE.value


def offers_service(prof: ProfessionalResponse, service: ServiceResponse) -> bool:
    name = _norm(service.name)
    return any(_norm(skill) == name for skill in prof.skills) or service.id in prof.service_ids


def covers_area_label(prof: ProfessionalResponse, location: str) -> bool:
    wanted = _norm(location)
    return any(_norm(area) and _norm(area) in wanted for area in prof.service_areas)


def resolve_location_ids(location: str, registry: Iterable[LocationResponse]) -> Set[str]:
    """Registry entries whose English or Nepali name appears in the location text."""
    wanted = _norm(location)
    ids = set()
    for loc in registry:
        names = [n for n in (loc.name, loc.name_nepali) if n and n.strip()]
        if any(_norm(n) in wanted for n in names):
            ids.add(loc.id)
    return ids


def covers_location(
    prof: ProfessionalResponse,
    location: str,
    location_ids: Optional[Set[str]] = None,
) -> bool:
    if covers_area_label(prof, location):
        return True
    return bool(location_ids and location_ids.intersection(prof.location_ids))


def find_matches(
    professionals: Iterable[ProfessionalResponse],
    service: ServiceResponse,
    location: str,
    registry: Iterable[LocationResponse] = (),
) -> List[ProfessionalResponse]:
    """All eligible professionals in registry order. Empty list is a valid answer."""
    location_ids = resolve_location_ids(location, registry)
    return [
        prof for prof in professionals
        if is_bookable(prof)
        and offers_service(prof, service)
        and covers_location(prof, location, location_ids)
    ]


def select_professional(
    professionals: Iterable[ProfessionalResponse],
    service: ServiceResponse,
    location: str,
    registry: Iterable[LocationResponse] = (),
) -> Optional[ProfessionalResponse]:
    matches = find_matches(professionals, service, location, registry)
    return matches[0] if matches else None
