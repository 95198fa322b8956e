"""
URL configuration for core app.
"""

from django.urls import path

from core import views

urlpatterns = [
    path("health/", views.health_check, name="health_check"),
    path("articles", views.articles_view, name="articles"),
    path("article/<str:article_id>", views.article_view, name="article"),
    path("article/<str:article_id>/content", views.article_content_view, name="article_content"),
    path("content", views.content_view, name="content"),
    path("refresh_status", views.refresh_status_view, name="refresh_status"),
]
