"""
Price model.
"""
from django.db import models


class Price(models.Model):
    """
    Unit price for one validity tier.
    A tier without a row is free.
    """

    validity_days = models.PositiveIntegerField(unique=True, help_text="Tier duration in days")
    price = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "prices"
        ordering = ["validity_days"]

    def __str__(self):
        return f"{self.validity_days} days - {self.price}"
