"""URL configuration for the jobs app.

Paths are kept flat (``/create``, ``/update/<id>``, ``/track/<id>``)
because the tracking links already printed on QR labels use them.
"""

from django.urls import path
from . import views


urlpatterns = [
    path('', views.dashboard_view, name='dashboard'),
    path('create', views.job_create_view, name='job_create'),
    path('update/<str:job_id>', views.job_status_update_view, name='job_update'),
    path('upload/<str:job_id>', views.job_upload_view, name='job_upload'),
    path('qr/<str:job_id>.svg', views.job_qr_svg, name='job_qr'),
    path('export/xlsx', views.jobs_export_xlsx, name='export_xlsx'),
    # Public, no login required
    path('track/<str:job_id>', views.track_view, name='track'),
]
