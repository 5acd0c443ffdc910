"""
Status partitions for tabbed job and application views.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Sequence

LOADING = 'loading'
EMPTY = 'empty'
POPULATED = 'populated'


def _status(item: Any) -> Any:
    if isinstance(item, Mapping):
        return item.get('status')
    return getattr(item, 'status', None)


def partition(items: Iterable[Any], status: Any) -> list:
    """Entries whose status equals ``status``, in their original order."""
    return [item for item in items if _status(item) == status]


def status_counts(items: Iterable[Any], statuses: Sequence[Any]) -> dict:
    counts = {s: 0 for s in statuses}
    for item in items:
        s = _status(item)
        if s in counts:
            counts[s] += 1
    return counts


@dataclass(frozen=True)
class Tab:
    status: str
    label: str
    empty_message: str


LISTING_TABS = (
    Tab('active', 'Active Jobs', 'No active jobs found'),
    Tab('hired', 'Hired', 'No hired jobs found'),
    Tab('closed', 'Closed Jobs', 'No closed jobs found'),
)

APPLICATION_TABS = (
    Tab('pending', 'Pending', 'No pending applications'),
    Tab('reviewed', 'In Review', 'No applications in review'),
    Tab('accepted', 'Offers', 'No accepted applications'),
    Tab('rejected', 'Rejected', 'No rejected applications'),
)


def find_tab(tabs: Sequence[Tab], status: Optional[str]) -> Tab:
    """Tab for ``status``; unknown or missing values select the first tab."""
    for tab in tabs:
        if tab.status == status:
            return tab
    return tabs[0]


@dataclass
class StatusView:
    state: str
    items: list = field(default_factory=list)
    status: Optional[str] = None
    empty_message: str = ''

    @property
    def is_loading(self):
        return self.state == LOADING

    @property
    def is_empty(self):
        return self.state == EMPTY

    @property
    def is_populated(self):
        return self.state == POPULATED

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


def compose_view(items: Optional[Iterable[Any]], status: Optional[str] = None,
                 loading: bool = False, empty_message: str = 'Nothing to show') -> StatusView:
    """Build the render state for a (possibly status-scoped) list.

    ``items=None`` or ``loading=True`` means the collection has not been
    fetched yet. ``status=None`` shows the whole collection.
    """
    if loading or items is None:
        return StatusView(state=LOADING, status=status, empty_message=empty_message)
    selected = list(items) if status is None else partition(items, status)
    state = POPULATED if selected else EMPTY
    return StatusView(state=state, items=selected, status=status, empty_message=empty_message)


def compose_tabs(items: Iterable[Any], tabs: Sequence[Tab]) -> list:
    """One ``(tab, StatusView)`` pair per tab over the same collection."""
    items = list(items)
    return [(tab, compose_view(items, tab.status, empty_message=tab.empty_message)) for tab in tabs]
