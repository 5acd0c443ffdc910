from django.contrib import admin
from .models import Job, Application


@admin.register(Job)
class JobAdmin(admin.ModelAdmin):
    list_display = ('title', 'company', 'employer', 'work_mode', 'category', 'status', 'created_at', 'deadline')
    list_filter = ('status', 'work_mode', 'category')
    search_fields = ('title', 'company', 'location', 'description')


@admin.register(Application)
class ApplicationAdmin(admin.ModelAdmin):
    list_display = ('applicant_name', 'job', 'status', 'submitted_at')
    list_filter = ('status',)
    search_fields = ('applicant_name', 'applicant_email', 'job__title')
