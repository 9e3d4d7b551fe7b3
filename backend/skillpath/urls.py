"""
URL configuration for the skillpath project.
"""
from django.urls import path, include

urlpatterns = [
    path('api/', include('careers.urls')),
]
