"""Routing for the public pages and the authoring admin."""

from django.urls import path

from . import views

app_name = "portal"

urlpatterns = [
    path("", views.home, name="home"),
    path("articles/<str:article_id>/", views.article_detail, name="article-detail"),
    path("read/<slug:slug>/", views.read_article, name="read-article"),
    path("authors/", views.authors, name="authors"),
    path("test-connection/", views.test_connection, name="test-connection"),
    path("admin/", views.admin_dashboard, name="admin-dashboard"),
    path("admin/articles/", views.admin_articles, name="admin-articles"),
    path("admin/articles/new/", views.admin_article_new, name="admin-article-new"),
    path("admin/articles/<str:article_id>/edit/", views.admin_article_edit, name="admin-article-edit"),
    path("admin/articles/<str:article_id>/delete/", views.admin_article_delete, name="admin-article-delete"),
]
