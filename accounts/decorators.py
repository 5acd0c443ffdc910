from django.shortcuts import redirect
from django.core.exceptions import PermissionDenied
from functools import wraps


def role_required(role, message):
    def decorator(view_func):
        @wraps(view_func)
        def _wrapped(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return redirect('login')
            if getattr(request.user, 'role', None) != role:
                raise PermissionDenied(message)
            return view_func(request, *args, **kwargs)
        return _wrapped
    return decorator


employer_required = role_required('employer', "Employer access required.")
job_seeker_required = role_required('job_seeker', "Job seeker access required.")
