"""
Status changes and removals over an in-memory collection.

A ``StatusMutator`` owns the list a view renders from. Each change is
applied to the list first, then handed to the ``persist`` / ``delete``
callables (normally ORM writes). If the callable raises, the list is put
back the way it was and ``CollaboratorError`` is raised, so partitions
computed afterwards only ever see committed state.
"""
import logging
from typing import Any, Callable, FrozenSet, List, Mapping, Optional

from .exceptions import CollaboratorError, EntityNotFound, IllegalTransition

logger = logging.getLogger(__name__)

Transitions = Mapping[str, FrozenSet[str]]

LISTING_TRANSITIONS: Transitions = {
    'active': frozenset({'closed', 'hired'}),
    'closed': frozenset({'active'}),
    'hired': frozenset(),
}

APPLICATION_TRANSITIONS: Transitions = {
    'pending': frozenset({'reviewed', 'accepted', 'rejected'}),
    'reviewed': frozenset({'accepted', 'rejected'}),
    'accepted': frozenset(),
    'rejected': frozenset(),
}


def validate_transition(transitions: Transitions, current: str, new: str) -> None:
    if new not in transitions:
        raise IllegalTransition(current, new)
    if current == new:
        return
    if new not in transitions.get(current, frozenset()):
        raise IllegalTransition(current, new)


def allowed_statuses(transitions: Transitions, current: str) -> List[str]:
    """Statuses selectable from ``current`` (itself first), in table order."""
    targets = transitions.get(current, frozenset())
    return [current] + [s for s in transitions if s in targets]


def _entity_id(item: Any) -> Any:
    if isinstance(item, Mapping):
        return item.get('id')
    return getattr(item, 'pk', None) if hasattr(item, 'pk') else getattr(item, 'id', None)


def _status(item: Any) -> Any:
    if isinstance(item, Mapping):
        return item.get('status')
    return getattr(item, 'status', None)


def _with_status(item: Any, status: str) -> Any:
    if isinstance(item, Mapping):
        return {**item, 'status': status}
    item.status = status
    return item


class StatusMutator:
    def __init__(self, items: List[Any], transitions: Transitions,
                 persist: Optional[Callable[[Any, str], Any]] = None,
                 delete: Optional[Callable[[Any], Any]] = None):
        self.items = items
        self.transitions = transitions
        self.persist = persist
        self.delete = delete

    def _index(self, entity_id: Any) -> Optional[int]:
        key = str(entity_id)
        for idx, item in enumerate(self.items):
            if str(_entity_id(item)) == key:
                return idx
        return None

    def get(self, entity_id: Any) -> Any:
        idx = self._index(entity_id)
        if idx is None:
            raise EntityNotFound(entity_id)
        return self.items[idx]

    def set_status(self, entity_id: Any, new_status: str) -> Any:
        """Move an entry to ``new_status`` and return the updated entry.

        Raises ``EntityNotFound``, ``IllegalTransition`` or
        ``CollaboratorError``; in every error case the collection is unchanged.
        """
        idx = self._index(entity_id)
        if idx is None:
            raise EntityNotFound(entity_id)
        original = self.items[idx]
        previous = _status(original)
        validate_transition(self.transitions, previous, new_status)
        if previous == new_status:
            return original

        self.items[idx] = _with_status(original, new_status)
        if self.persist is not None:
            try:
                self.persist(self.items[idx], new_status)
            except Exception as exc:
                self.items[idx] = _with_status(original, previous)
                logger.warning("Rolled back status of %s to %s: %s", entity_id, previous, exc)
                if isinstance(exc, CollaboratorError):
                    raise
                raise CollaboratorError(f"Failed to update status: {exc}") from exc

        logger.info("Status of %s changed %s -> %s", entity_id, previous, new_status)
        return self.items[idx]

    def remove(self, entity_id: Any) -> bool:
        """Remove an entry; returns False (and does nothing) when it is absent."""
        idx = self._index(entity_id)
        if idx is None:
            return False
        entity = self.items[idx]
        if self.delete is not None:
            try:
                self.delete(entity)
            except Exception as exc:
                logger.warning("Failed to remove %s: %s", entity_id, exc)
                if isinstance(exc, CollaboratorError):
                    raise
                raise CollaboratorError(f"Failed to remove entry: {exc}") from exc
        del self.items[idx]
        logger.info("Removed %s", entity_id)
        return True

