"""
Listing filters for the job search page.

All active criteria are combined with AND. A criterion is inactive when it
is empty (or the ``"all"`` sentinel for the work-mode selector), so the
default ``FilterCriteria()`` keeps every listing.

The salary criterion keeps listings whose whole range lies inside the
requested bounds; a listing that only overlaps the bounds is excluded.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Tuple

from django.conf import settings

from .exceptions import CriteriaError

ALL = 'all'
SALARY_FLOOR = 0


def salary_ceiling() -> int:
    return getattr(settings, 'JOBBOARD_SALARY_SLIDER_MAX', 300000)


def _field(listing: Any, name: str) -> Any:
    if isinstance(listing, Mapping):
        return listing.get(name)
    return getattr(listing, name, None)


def _parse_bound(raw: Any, name: str) -> Optional[int]:
    if raw is None:
        return None
    raw = str(raw).strip().replace(',', '')
    if not raw:
        return None
    try:
        return int(float(raw))
    except (ValueError, OverflowError):
        raise CriteriaError(f"{name} must be a number, got {raw!r}")


@dataclass(frozen=True)
class FilterCriteria:
    query: str = ''
    location: str = ''
    work_mode: str = ''
    salary_range: Optional[Tuple[int, int]] = None
    category: str = ''

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> 'FilterCriteria':
        """Build criteria from request query parameters.

        Recognised keys: ``q``, ``location``, ``type``, ``salary_min``,
        ``salary_max`` and ``category``. When only one salary bound is given
        the other falls back to the slider limits.
        """
        low = _parse_bound(params.get('salary_min'), 'salary_min')
        high = _parse_bound(params.get('salary_max'), 'salary_max')
        salary_range = None
        if low is not None or high is not None:
            low = SALARY_FLOOR if low is None else low
            high = salary_ceiling() if high is None else high
            if low > high:
                raise CriteriaError("salary_min cannot be greater than salary_max")
            salary_range = (low, high)

        return cls(
            query=(params.get('q') or '').strip(),
            location=(params.get('location') or '').strip(),
            work_mode=(params.get('type') or '').strip().lower(),
            salary_range=salary_range,
            category=(params.get('category') or '').strip(),
        )

    def active_criteria(self) -> Tuple[str, ...]:
        active = []
        if self.query:
            active.append('query')
        if self.location:
            active.append('location')
        if self.work_mode and self.work_mode != ALL:
            active.append('work_mode')
        if self.salary_range is not None:
            active.append('salary_range')
        if self.category:
            active.append('category')
        return tuple(active)

    @property
    def is_active(self) -> bool:
        return bool(self.active_criteria())

    def as_params(self) -> dict:
        """Inverse of :meth:`from_params` for the active criteria (used to prefill the form)."""
        params = {}
        if self.query:
            params['q'] = self.query
        if self.location:
            params['location'] = self.location
        if self.work_mode and self.work_mode != ALL:
            params['type'] = self.work_mode
        if self.salary_range is not None:
            params['salary_min'], params['salary_max'] = self.salary_range
        if self.category:
            params['category'] = self.category
        return params

    def matches(self, listing: Any) -> bool:
        if self.query:
            needle = self.query.lower()
            title = (_field(listing, 'title') or '').lower()
            company = (_field(listing, 'company') or '').lower()
            if needle not in title and needle not in company:
                return False

        if self.location:
            location = (_field(listing, 'location') or '').lower()
            if self.location.lower() not in location:
                return False

        if self.work_mode and self.work_mode != ALL:
            if _field(listing, 'work_mode') != self.work_mode:
                return False

        if self.category:
            if _field(listing, 'category') != self.category:
                return False

        if self.salary_range is not None:
            low, high = self.salary_range
            salary_min = _field(listing, 'salary_min')
            salary_max = _field(listing, 'salary_max')
            if salary_min is None or salary_max is None:
                return False
            if not (salary_min >= low and salary_max <= high):
                return False

        return True


def filter_listings(listings: Iterable[Any], criteria: FilterCriteria) -> list:
    """Return the listings matching every active criterion, in input order."""
    return [listing for listing in listings if criteria.matches(listing)]
