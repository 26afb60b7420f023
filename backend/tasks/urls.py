from django.urls import path, re_path

from . import views

urlpatterns = [
    re_path(r"^api/tasks/?$", views.TaskCollection.as_view(), name="task-collection"),
    # anything after the id ("/api/tasks/<id>/extra") is ignored
    re_path(r"^api/tasks/(?P<task_id>[^/]+)(?:/.*)?$", views.TaskDetail.as_view(), name="task-detail"),
    path("", views.static_asset, {"filename": "index.html"}, name="index"),
    path("index.html", views.static_asset, {"filename": "index.html"}),
    path("style.css", views.static_asset, {"filename": "style.css"}),
    path("script.js", views.static_asset, {"filename": "script.js"}),
    path("favicon.ico", views.favicon),
]
