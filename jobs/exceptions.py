# jobs/exceptions.py


class JobBoardError(Exception):
    """Base class for job board errors surfaced to views."""


class CollaboratorError(JobBoardError):
    """The database, file storage or mail backend failed or rejected a call."""


class EntityNotFound(JobBoardError):
    """The entity does not exist in the collection (or is not visible to the caller)."""

    def __init__(self, entity_id):
        super().__init__(f"No entity with id {entity_id!r}")
        self.entity_id = entity_id


class IllegalTransition(JobBoardError):
    def __init__(self, current, new):
        super().__init__(f"Cannot change status from {current!r} to {new!r}")
        self.current = current
        self.new = new


class CriteriaError(JobBoardError, ValueError):
    """Malformed filter parameters."""
