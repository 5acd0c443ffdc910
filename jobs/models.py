# jobs/models.py
from django.db import models
from django.conf import settings
from django.utils import timezone
import os

WORK_MODE_CHOICES = (
    ('remote', 'Remote'),
    ('hybrid', 'Hybrid'),
    ('onsite', 'On-site'),
)

CATEGORY_CHOICES = (
    ('Technology', 'Technology'),
    ('Engineering', 'Engineering'),
    ('Design', 'Design'),
    ('Marketing', 'Marketing'),
    ('Finance', 'Finance'),
    ('Healthcare', 'Healthcare'),
    ('Education', 'Education'),
    ('Sales', 'Sales'),
    ('Other', 'Other'),
)

CURRENCY_CHOICES = (
    ('$', 'USD ($)'),
    ('€', 'EUR (€)'),
    ('£', 'GBP (£)'),
)

JOB_STATUS = (
    ('active', 'Active'),
    ('closed', 'Closed'),
    ('hired', 'Hired'),
)


class Job(models.Model):
    employer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='posted_jobs')
    title = models.CharField(max_length=255)
    company = models.CharField(max_length=255)
    location = models.CharField(max_length=255)
    work_mode = models.CharField(max_length=10, choices=WORK_MODE_CHOICES, default='onsite')
    category = models.CharField(max_length=50, choices=CATEGORY_CHOICES, default='Technology', db_index=True)
    salary_min = models.PositiveIntegerField(default=50000)
    salary_max = models.PositiveIntegerField(default=100000)
    salary_currency = models.CharField(max_length=3, choices=CURRENCY_CHOICES, default='$')
    description = models.TextField()
    requirements = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deadline = models.DateField(null=True, blank=True)
    status = models.CharField(max_length=10, choices=JOB_STATUS, default='active', db_index=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.title} @ {self.company or '—'}"

    def salary_display(self):
        c = self.salary_currency
        return f"{c}{self.salary_min:,} - {c}{self.salary_max:,}"

    def requirement_list(self):
        return [line.strip(' -*\t') for line in (self.requirements or '').splitlines() if line.strip(' -*\t')]

    def is_open(self):
        if self.status != 'active':
            return False
        if self.deadline and self.deadline < timezone.localdate():
            return False
        return True


APPLICATION_STATUS = (
    ('pending', 'Pending'),
    ('reviewed', 'Reviewed'),
    ('accepted', 'Accepted'),
    ('rejected', 'Rejected'),
)


def application_resume_upload_path(instance, filename):
    return os.path.join('applications', str(instance.applicant_id), filename)


class Application(models.Model):
    applicant = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='applications')
    job = models.ForeignKey(Job, on_delete=models.CASCADE, related_name='applications')
    # snapshot of the applicant at submission time
    applicant_name = models.CharField(max_length=255)
    applicant_email = models.EmailField()
    resume = models.FileField(upload_to=application_resume_upload_path, null=True, blank=True)
    cover_letter = models.TextField(blank=True)
    status = models.CharField(max_length=10, choices=APPLICATION_STATUS, default='pending', db_index=True)
    submitted_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['-submitted_at']
        constraints = [
            models.UniqueConstraint(fields=['applicant', 'job'], name='unique_application_per_job'),
        ]

    def __str__(self):
        return f"{self.applicant_name} -> {self.job.title} ({self.status})"
