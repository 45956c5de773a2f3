"""
Root URL configuration for the examination backend.

- /admin/: Django admin (Jazzmin theme)
- /api/examination/: examination REST API
"""

from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/examination/", include("examination.urls")),
]
