# accounts/models.py
import os

from django.contrib.auth.models import AbstractUser
from django.db import models


def avatar_upload_path(instance, filename):
    return os.path.join('avatars', str(instance.id), filename)


class User(AbstractUser):
    ROLE_EMPLOYER = 'employer'
    ROLE_JOB_SEEKER = 'job_seeker'
    ROLE_CHOICES = [
        (ROLE_EMPLOYER, 'Employer'),
        (ROLE_JOB_SEEKER, 'Job Seeker'),
    ]
    # fixed at sign-up; the settings form never exposes it
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_JOB_SEEKER)

    # profile
    headline = models.CharField(max_length=255, blank=True)
    location = models.CharField(max_length=255, blank=True)
    bio = models.TextField(blank=True)
    skills = models.JSONField(default=list, blank=True)
    website_url = models.URLField(blank=True)
    linkedin_url = models.URLField(blank=True)
    github_url = models.URLField(blank=True)
    avatar = models.FileField(upload_to=avatar_upload_path, null=True, blank=True)

    # notification preferences
    job_alerts = models.BooleanField(default=True)
    application_updates = models.BooleanField(default=True)
    marketing_emails = models.BooleanField(default=False)

    # company profile (employers only)
    company_name = models.CharField(max_length=255, blank=True)
    industry = models.CharField(max_length=255, blank=True)
    company_size = models.CharField(max_length=50, blank=True)
    company_description = models.TextField(blank=True)
    company_website = models.URLField(blank=True)

    def is_employer(self):
        return self.role == self.ROLE_EMPLOYER

    def is_job_seeker(self):
        return self.role == self.ROLE_JOB_SEEKER

    @property
    def display_name(self):
        return self.get_full_name() or self.username
