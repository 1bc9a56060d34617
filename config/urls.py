from django.contrib import admin
from django.http import JsonResponse
from django.urls import path


def health_check(request):
    """Liveness check: returns 200 while the process is running."""
    return JsonResponse({"status": "ok"})


urlpatterns = [
    path("health/", health_check, name="health"),
    path("admin/", admin.site.urls),
]
