from django.urls import include, path

urlpatterns = [
    path("", include("tasks.urls")),
]

handler404 = "tasks.views.not_found"
