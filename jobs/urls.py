# jobs/urls.py
from django.urls import path
from . import views

urlpatterns = [
    # listing / detail
    path('jobs/', views.job_list, name='job_list'),                                  # /jobs/?q=&type=remote
    path('jobs/<int:job_id>/', views.job_detail, name='job_detail'),

    # employer job management
    path('jobs/post/', views.job_create, name='job_create'),
    path('jobs/<int:job_id>/edit/', views.job_edit, name='job_edit'),
    path('jobs/<int:job_id>/status/', views.job_set_status, name='job_set_status'),
    path('jobs/<int:job_id>/applications/', views.job_applications, name='job_applications'),
    path('applications/<int:app_id>/status/', views.application_set_status, name='application_set_status'),

    # job seeker application flow
    path('jobs/<int:job_id>/apply/', views.apply, name='job_apply'),
    path('applications/my/', views.my_applications, name='my_applications'),
    path('applications/<int:app_id>/withdraw/', views.application_withdraw, name='application_withdraw'),
]
