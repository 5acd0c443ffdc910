# jobs/views.py
import logging

from django.conf import settings
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db import DatabaseError, IntegrityError
from django.http import Http404
from django.shortcuts import render, get_object_or_404, redirect
from django.urls import reverse
from django.views.decorators.http import require_POST

from accounts.decorators import employer_required, job_seeker_required
from accounts.session import get_session_context

from .email_utils import STATUS_EMAILS
from .exceptions import CollaboratorError, CriteriaError, EntityNotFound, IllegalTransition
from .filters import FilterCriteria, filter_listings, salary_ceiling
from .forms import ApplyForm, JobForm, SearchForm, StatusForm
from .models import Job, Application, CATEGORY_CHOICES
from .mutations import (
    APPLICATION_TRANSITIONS,
    LISTING_TRANSITIONS,
    StatusMutator,
    allowed_statuses,
)
from .partitions import APPLICATION_TABS, compose_view, find_tab, status_counts

logger = logging.getLogger(__name__)

NO_JOBS_MESSAGE = "No jobs found. Try adjusting your filters."
NOT_FOUND_MESSAGE = "Job not found or you don't have permission to manage it."


# -------------------------
# ORM-backed persistence for the mutation layer
# -------------------------
def persist_status(model):
    def _persist(entity, status):
        try:
            updated = model.objects.filter(pk=entity.pk).update(status=status)
        except DatabaseError as e:
            raise CollaboratorError(f"Database rejected the update: {e}") from e
        if not updated:
            raise CollaboratorError(f"{model.__name__} {entity.pk} no longer exists")
    return _persist


def persist_delete(entity):
    try:
        entity.delete()
    except DatabaseError as e:
        raise CollaboratorError(f"Database rejected the delete: {e}") from e


def _owned_job(user, job_id):
    try:
        return Job.objects.get(id=job_id, employer=user)
    except Job.DoesNotExist:
        raise EntityNotFound(job_id)


def _discard_resume(application):
    # the file is stored before the row, so a failed insert leaves it orphaned
    if not application.resume:
        return
    try:
        application.resume.delete(save=False)
    except OSError as e:
        logger.warning("Could not remove orphaned resume %s: %s", application.resume.name, e)


# -------------------------
# Public pages
# -------------------------
def home(request):
    active = Job.objects.filter(status='active')
    featured = active.filter(
        salary_min__gte=getattr(settings, 'JOBBOARD_FEATURED_MIN_SALARY', 80000)
    ).order_by('-salary_min')[:3]
    recent = active.order_by('-created_at')[:6]
    return render(request, 'home.html', {
        'featured_jobs': list(featured),
        'recent_jobs': list(recent),
        'categories': [c for c, _ in CATEGORY_CHOICES if c != 'Other'],
    })


def job_list(request):
    """
    Active listings, newest first, narrowed by the search bar / category links.
    """
    try:
        criteria = FilterCriteria.from_params(request.GET)
    except CriteriaError as e:
        messages.error(request, str(e))
        criteria = FilterCriteria()

    jobs = list(Job.objects.filter(status='active').order_by('-created_at'))
    view = compose_view(filter_listings(jobs, criteria), empty_message=NO_JOBS_MESSAGE)
    logger.debug("job_list criteria=%s matched=%s of %s", criteria.active_criteria(), len(view), len(jobs))

    return render(request, 'jobs/job_list.html', {
        'view': view,
        'criteria': criteria,
        'form': SearchForm(initial=criteria.as_params()),
        'salary_max_limit': salary_ceiling(),
    })


def job_detail(request, job_id):
    job = get_object_or_404(Job, id=job_id)
    session = get_session_context(request)
    already_applied = session.is_job_seeker and Application.objects.filter(
        job=job, applicant_id=session.user_id
    ).exists()
    is_owner = session.is_employer and job.employer_id == session.user_id
    if job.status != 'active' and not (is_owner or already_applied):
        raise Http404("Job not found")
    return render(request, 'jobs/job_detail.html', {
        'job': job,
        'is_open': job.is_open(),
        'already_applied': already_applied,
        'can_apply': session.is_job_seeker and job.is_open() and not already_applied,
        'is_owner': is_owner,
    })


# -------------------------
# Employer: job management
# -------------------------
@login_required
@employer_required
def job_create(request):
    if request.method == 'POST':
        form = JobForm(request.POST)
        if form.is_valid():
            job = form.save(commit=False)
            job.employer = request.user
            job.status = 'active'
            try:
                job.save()
            except DatabaseError as e:
                logger.exception("Failed to post job for %s", request.user.username)
                messages.error(request, f"Failed to post job: {e}")
            else:
                logger.info("Job %s posted by %s", job.id, request.user.username)
                messages.success(request, "Job has been posted.")
                return redirect('dashboard')
    else:
        form = JobForm()
    return render(request, 'jobs/job_form.html', {'form': form, 'is_editing': False})


@login_required
@employer_required
def job_edit(request, job_id):
    try:
        job = _owned_job(request.user, job_id)
    except EntityNotFound:
        messages.error(request, NOT_FOUND_MESSAGE)
        return redirect('dashboard')

    if request.method == 'POST':
        form = JobForm(request.POST, instance=job)
        if form.is_valid():
            try:
                form.save()
            except DatabaseError as e:
                messages.error(request, f"Failed to update job: {e}")
            else:
                messages.success(request, "Job has been updated.")
                return redirect('dashboard')
    else:
        form = JobForm(instance=job)
    return render(request, 'jobs/job_form.html', {'form': form, 'job': job, 'is_editing': True})


@login_required
@employer_required
@require_POST
def job_set_status(request, job_id):
    """
    Close, reactivate or mark a listing as hired.
    """
    new_status = request.POST.get('status', '')
    jobs = list(Job.objects.filter(employer=request.user).order_by('-created_at'))
    mutator = StatusMutator(jobs, LISTING_TRANSITIONS, persist=persist_status(Job))
    try:
        job = mutator.set_status(job_id, new_status)
    except EntityNotFound:
        messages.error(request, NOT_FOUND_MESSAGE)
        return redirect('dashboard')
    except IllegalTransition as e:
        messages.error(request, str(e))
        return redirect('dashboard')
    except CollaboratorError as e:
        messages.error(request, f"Failed to update job status: {e}")
        return redirect('dashboard')

    messages.success(request, f"“{job.title}” is now {job.get_status_display().lower()}.")
    return redirect(f"{reverse('dashboard')}?tab={job.status}")


@login_required
@employer_required
def job_applications(request, job_id):
    try:
        job = _owned_job(request.user, job_id)
    except EntityNotFound:
        messages.error(request, "Job not found or you don't have permission to view these applications.")
        return redirect('dashboard')

    applications = list(Application.objects.filter(job=job).select_related('applicant').order_by('-submitted_at'))
    status = request.GET.get('status') or None
    if status is not None and status not in APPLICATION_TRANSITIONS:
        status = None
    tab = find_tab(APPLICATION_TABS, status)
    view = compose_view(
        applications,
        status,
        empty_message=tab.empty_message if status else "No applications received yet",
    )
    rows = [(app, allowed_statuses(APPLICATION_TRANSITIONS, app.status)) for app in view]
    return render(request, 'jobs/job_applications.html', {
        'job': job,
        'view': view,
        'rows': rows,
        'tabs': APPLICATION_TABS,
        'counts': status_counts(applications, list(APPLICATION_TRANSITIONS)),
        'total': len(applications),
        'status': status,
    })


@login_required
@employer_required
@require_POST
def application_set_status(request, app_id):
    app = get_object_or_404(Application.objects.select_related('job', 'applicant'), id=app_id)
    job = app.job
    if job.employer_id != request.user.id:
        messages.error(request, "Application not found or you don't have permission to manage it.")
        return redirect('dashboard')

    form = StatusForm(request.POST)
    if not form.is_valid():
        messages.error(request, "Invalid status update.")
        return redirect('job_applications', job_id=job.id)

    new_status = form.cleaned_data['status']
    applications = list(Application.objects.filter(job=job).select_related('applicant'))
    mutator = StatusMutator(applications, APPLICATION_TRANSITIONS, persist=persist_status(Application))
    previous = app.status
    try:
        app = mutator.set_status(app_id, new_status)
    except (EntityNotFound, IllegalTransition) as e:
        messages.error(request, str(e))
        return redirect('job_applications', job_id=job.id)
    except CollaboratorError as e:
        messages.error(request, f"Failed to update application status: {e}")
        return redirect('job_applications', job_id=job.id)

    messages.success(request, "Application status has been updated.")

    send = STATUS_EMAILS.get(app.status)
    if send is not None and previous != app.status and app.applicant.application_updates:
        try:
            send(
                applicant_email=app.applicant_email,
                applicant_name=app.applicant_name,
                employer_name=request.user.company_name or request.user.display_name,
                job_title=job.title,
                message=form.cleaned_data.get('message') or '',
            )
        except Exception as e:
            logger.warning("Status email for application %s failed: %s", app.id, e)
            messages.warning(request, f"Status saved but the applicant email could not be sent: {e}")
    return redirect('job_applications', job_id=job.id)


# -------------------------
# Job seeker: application flow
# -------------------------
@login_required
@job_seeker_required
def apply(request, job_id):
    job = get_object_or_404(Job, id=job_id, status='active')
    if not job.is_open():
        messages.error(request, "This job is not accepting applications.")
        return redirect('job_detail', job_id=job.id)
    if Application.objects.filter(job=job, applicant=request.user).exists():
        messages.info(request, "You have already applied for this job.")
        return redirect('my_applications')

    if request.method == 'POST':
        form = ApplyForm(request.POST, request.FILES)
        if form.is_valid():
            user = request.user
            application = Application(
                applicant=user,
                job=job,
                applicant_name=user.display_name,
                applicant_email=user.email,
                cover_letter=form.cleaned_data.get('cover_letter', ''),
            )
            uploaded = form.cleaned_data.get('resume')
            try:
                if uploaded:
                    application.resume.save(uploaded.name, uploaded, save=False)
                application.save()
            except IntegrityError:
                _discard_resume(application)
                messages.info(request, "You have already applied for this job.")
                return redirect('my_applications')
            except (DatabaseError, OSError) as e:
                _discard_resume(application)
                logger.exception("Application for job %s by %s failed", job.id, user.username)
                messages.error(request, f"Failed to submit application: {e}")
            else:
                logger.info("Application %s submitted for job %s by %s", application.id, job.id, user.username)
                messages.success(request, "Application submitted successfully.")
                return redirect('my_applications')
    else:
        form = ApplyForm()
    return render(request, 'jobs/apply.html', {'job': job, 'form': form})


@login_required
@job_seeker_required
def my_applications(request):
    apps = list(Application.objects.filter(applicant=request.user).select_related('job').order_by('-submitted_at'))
    status = request.GET.get('status') or None
    if status is not None and status not in APPLICATION_TRANSITIONS:
        status = None
    tab = find_tab(APPLICATION_TABS, status)
    view = compose_view(
        apps,
        status,
        empty_message=tab.empty_message if status else "You haven't applied to any jobs yet",
    )
    return render(request, 'jobs/my_applications.html', {
        'view': view,
        'tabs': APPLICATION_TABS,
        'status': status,
        'counts': status_counts(apps, list(APPLICATION_TRANSITIONS)),
        'total': len(apps),
    })


@login_required
@job_seeker_required
@require_POST
def application_withdraw(request, app_id):
    apps = list(Application.objects.filter(applicant=request.user))
    mutator = StatusMutator(apps, APPLICATION_TRANSITIONS, delete=persist_delete)
    try:
        removed = mutator.remove(app_id)
    except CollaboratorError as e:
        messages.error(request, f"Failed to withdraw application: {e}")
        return redirect('my_applications')

    if removed:
        messages.success(request, "Application withdrawn.")
    else:
        messages.error(request, "Application not found.")
    return redirect('my_applications')
