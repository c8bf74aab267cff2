"""
Key model.
"""
from django.db import models


class Key(models.Model):
    """
    A license key generated from the dashboard.
    Activated at most once by an external client.
    """

    key = models.CharField(max_length=64, unique=True)
    prefix = models.CharField(max_length=10, db_index=True)
    validity_days = models.PositiveIntegerField(help_text="Requested validity in days")
    price = models.DecimalField(
        max_digits=12, decimal_places=2, default=0, help_text="Unit price charged at generation"
    )
    activation_date = models.DateField(null=True, blank=True)
    expires = models.DateField(null=True, blank=True)
    is_active = models.BooleanField(default=False)
    created_by = models.CharField(max_length=150, db_index=True)
    created_at = models.DateTimeField()

    class Meta:
        db_table = "keys"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["created_by", "created_at"]),
        ]

    def __str__(self):
        return self.key
