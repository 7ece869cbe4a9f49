"""
URL configuration for the HOH backend.

Every app contributes its routes under /api/.
"""
from django.contrib import admin
from django.urls import path, include, re_path
from django.conf import settings
from django.http import JsonResponse
from django.views.static import serve

admin.site.site_header = "HOH 108 Admin Panel"
admin.site.site_title = "HOH 108 Admin Portal"
admin.site.index_title = "Welcome to HOH 108 Admin Portal"


def health(request):
    return JsonResponse({'status': 'ok', 'message': 'Server is running'})


urlpatterns = [
    path('admin/', admin.site.urls),
    path('health/', health, name='health'),
    path('api/', include('hoh.core.urls')),
    path('api/', include('hoh.showcase.urls')),
    path('api/', include('hoh.leads.urls')),
    path('api/', include('hoh.estimates.urls')),
    path('api/', include('hoh.staff.urls')),
    path('api/', include('hoh.projects.urls')),
    path('api/', include('hoh.payments.urls')),
    path('api/', include('hoh.renovations.urls')),
    path('api/', include('hoh.dashboard.urls')),
]

if settings.DEBUG:
    urlpatterns += [
        re_path(r'^static/(?P<path>.*)$', serve, {'document_root': settings.STATIC_ROOT}),
    ]
