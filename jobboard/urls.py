# jobboard/urls.py
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

from accounts import views as account_views
from jobs import views as jobs_views

urlpatterns = [
    path('admin/', admin.site.urls),

    # Auth (login/logout/password reset)
    path('accounts/', include('django.contrib.auth.urls')),
    path('accounts/signup/', account_views.signup, name='signup'),

    # Home
    path('', jobs_views.home, name='home'),

    # Dashboards / settings
    path('dashboard/', account_views.dashboard, name='dashboard'),
    path('settings/', account_views.settings_view, name='settings'),

    # Jobs and applications
    path('', include('jobs.urls')),
]

# Serve media in development (only when DEBUG=True)
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
