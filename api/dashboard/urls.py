"""
URL configuration for dashboard API endpoints.
"""

from django.urls import path

from api.dashboard import views

urlpatterns = [
    path("login", views.LoginView.as_view(), name="dashboard-login"),
    path("logout", views.LogoutView.as_view(), name="dashboard-logout"),
    path("me", views.MeView.as_view(), name="dashboard-me"),
    path("keys", views.KeysView.as_view(), name="dashboard-keys"),
    path(
        "keys/by-prefix/<path:prefix>",
        views.KeysByPrefixView.as_view(),
        name="dashboard-keys-by-prefix",
    ),
    path("keys/<path:key>", views.KeyDetailView.as_view(), name="dashboard-key-detail"),
    path("moderators", views.ModeratorsView.as_view(), name="dashboard-moderators"),
    path(
        "moderators/<uuid:moderator_id>",
        views.ModeratorDetailView.as_view(),
        name="dashboard-moderator-detail",
    ),
    path(
        "moderators/<uuid:moderator_id>/clear-debt",
        views.ClearDebtView.as_view(),
        name="dashboard-moderator-clear-debt",
    ),
    path("prices", views.PricesView.as_view(), name="dashboard-prices"),
]
