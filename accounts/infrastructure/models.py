"""
Moderator account model.
"""
import uuid

from django.db import models


class Moderator(models.Model):
    """
    A stored moderator account.
    The admin account is configured through settings and never stored.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    username = models.CharField(max_length=150, unique=True)
    password = models.CharField(max_length=128, help_text="Django password hasher string")
    role = models.CharField(max_length=20, default="moderator", editable=False)
    debt = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    created_at = models.DateTimeField()

    class Meta:
        db_table = "moderators"
        ordering = ["-created_at"]

    def __str__(self):
        return self.username
