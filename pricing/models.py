"""
Model registry for the pricing app.

Django discovers an app's models through `<app>.models`; the model itself
lives in the infrastructure layer.
"""
from pricing.infrastructure.models import Price

__all__ = ["Price"]
