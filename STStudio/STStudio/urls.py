from django.urls import path, include
from django.conf import settings

urlpatterns = [
    # Auth (single shared admin; login/logout only)
    path('', include('gate.urls')),

    # Dashboard, job actions and the public tracking page
    path('', include('jobs.urls')),
]

if settings.DEBUG:
    from django.conf.urls.static import static
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
