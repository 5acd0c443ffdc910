from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import User


@admin.register(User)
class JobBoardUserAdmin(UserAdmin):
    list_display = ('username', 'email', 'role', 'company_name', 'is_staff')
    list_filter = UserAdmin.list_filter + ('role',)
    fieldsets = UserAdmin.fieldsets + (
        ('Job board', {'fields': ('role', 'headline', 'location', 'company_name', 'application_updates')}),
    )
