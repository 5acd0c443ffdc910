"""
Explicit session context for views and templates.

Views take the current identity and role from a ``SessionContext`` built
once per request instead of reaching into ``request.user`` ad hoc, so the
filter / partition / mutation helpers never depend on ambient auth state.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SessionContext:
    user_id: Optional[int] = None
    display_name: str = ''
    email: str = ''
    role: Optional[str] = None
    # server-rendered requests resolve auth before the view runs
    loading: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @property
    def is_employer(self) -> bool:
        return self.role == 'employer'

    @property
    def is_job_seeker(self) -> bool:
        return self.role == 'job_seeker'

    @classmethod
    def anonymous(cls) -> 'SessionContext':
        return cls()

    @classmethod
    def from_user(cls, user) -> 'SessionContext':
        if user is None or not user.is_authenticated:
            return cls.anonymous()
        return cls(
            user_id=user.pk,
            display_name=user.get_full_name() or user.username,
            email=user.email or '',
            role=getattr(user, 'role', None),
        )


def get_session_context(request) -> SessionContext:
    """Return the request's ``SessionContext``, building it on first use."""
    ctx = getattr(request, '_session_context', None)
    if ctx is None:
        ctx = SessionContext.from_user(getattr(request, 'user', None))
        request._session_context = ctx
    return ctx


def session_context(request):
    """Template context processor exposing ``session``."""
    return {'session': get_session_context(request)}
