from django.urls import path

from . import views

app_name = "ai_agent"

urlpatterns = [
    path("session/", views.AgentSessionView.as_view(), name="session"),
    path("tools/", views.AgentToolListView.as_view(), name="tools"),
    path("tool/<str:tool_name>/", views.AgentToolView.as_view(), name="tool"),
]
