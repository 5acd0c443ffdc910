# accounts/views.py
import logging

from django.shortcuts import render, redirect
from django.contrib.auth import login
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.db import DatabaseError
from django.db.models import Count, Q

from jobs.models import Job, Application
from jobs.mutations import APPLICATION_TRANSITIONS
from jobs.partitions import LISTING_TABS, compose_tabs, compose_view, find_tab, status_counts
from .forms import CompanyProfileForm, ProfileForm, UserSignupForm
from .session import get_session_context

logger = logging.getLogger(__name__)


def signup(request):
    if request.method == 'POST':
        form = UserSignupForm(request.POST)
        if form.is_valid():
            user = form.save()
            logger.info("New %s account %s", user.role, user.username)
            # auto-login after signup
            login(request, user)
            return redirect('dashboard')
    else:
        form = UserSignupForm()
    return render(request, 'accounts/signup.html', {'form': form})


@login_required
def dashboard(request):
    session = get_session_context(request)
    if session.is_employer:
        return _employer_dashboard(request, session)
    return _job_seeker_dashboard(request, session)


def _employer_dashboard(request, session):
    """
    Employer dashboard: the employer's jobs split into Active / Hired / Closed tabs.
    """
    jobs = list(
        Job.objects.filter(employer_id=session.user_id)
        .annotate(
            application_count=Count('applications'),
            pending_count=Count('applications', filter=Q(applications__status='pending')),
        )
        .order_by('-created_at')
    )
    selected = find_tab(LISTING_TABS, request.GET.get('tab'))
    counts = status_counts(jobs, [t.status for t in LISTING_TABS])
    return render(request, 'accounts/employer_dashboard.html', {
        'tabs': compose_tabs(jobs, LISTING_TABS),
        'selected_tab': selected,
        'active_jobs': counts['active'],
        'total_applications': sum(j.application_count for j in jobs),
        'new_applications': sum(j.pending_count for j in jobs),
    })


def _job_seeker_dashboard(request, session):
    apps = list(
        Application.objects.filter(applicant_id=session.user_id)
        .select_related('job')
        .order_by('-submitted_at')
    )
    counts = status_counts(apps, list(APPLICATION_TRANSITIONS))
    return render(request, 'accounts/job_seeker_dashboard.html', {
        'applications': compose_view(apps, empty_message="You haven't applied to any jobs yet"),
        'total': len(apps),
        'pending': counts['pending'],
        'in_review': counts['reviewed'],
        'offers': counts['accepted'],
    })


@login_required
def settings_view(request):
    user = request.user
    is_employer = get_session_context(request).is_employer
    if request.method == 'POST':
        form = ProfileForm(request.POST, request.FILES, instance=user)
        company_form = CompanyProfileForm(request.POST, instance=user) if is_employer else None
        if form.is_valid() and (company_form is None or company_form.is_valid()):
            try:
                user = form.save()
                if company_form is not None:
                    company_form.save()
            except (DatabaseError, OSError) as e:
                logger.exception("Settings update failed for %s", user.username)
                messages.error(request, f"Failed to update settings: {e}")
            else:
                messages.success(request, "Your settings have been updated.")
                return redirect('settings')
    else:
        form = ProfileForm(instance=user)
        company_form = CompanyProfileForm(instance=user) if is_employer else None
    return render(request, 'accounts/settings.html', {'form': form, 'company_form': company_form})
