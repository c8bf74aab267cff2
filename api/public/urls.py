"""
URL configuration for the public key API.
"""

from django.urls import path

from api.public import views

urlpatterns = [
    path(
        "activate",
        views.ActivateKeyView.as_view(),
        name="activate-key",
    ),
    path(
        "verify",
        views.VerifyKeyView.as_view(),
        name="verify-key",
    ),
]
