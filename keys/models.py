"""
Model registry for the keys app.

Django discovers an app's models through `<app>.models`; the model itself
lives in the infrastructure layer.
"""
from keys.infrastructure.models import Key

__all__ = ["Key"]
