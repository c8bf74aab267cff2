"""
Model registry for the accounts app.

Django discovers an app's models through `<app>.models`; the model itself
lives in the infrastructure layer.
"""
from accounts.infrastructure.models import Moderator

__all__ = ["Moderator"]
