"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models


class Webinar(models.Model):
    """Persistence model for webinars."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner_id = models.CharField(max_length=255)
    title = models.CharField(max_length=255)
    capacity = models.PositiveIntegerField()
    starts_at = models.DateTimeField()
    ends_at = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["starts_at"]
        indexes = [
            models.Index(fields=["starts_at"], name="webinars_we_starts__6f1c2a_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(capacity__gt=0), name="webinar_capacity_positive"
            ),
            models.CheckConstraint(
                condition=models.Q(ends_at__gt=models.F("starts_at")),
                name="webinar_ends_after_start",
            ),
        ]

    def __str__(self) -> str:
        return self.title


class Attendee(models.Model):
    """Persistence model for attendees."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(max_length=254)
    credential = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return self.email


class Admission(models.Model):
    """Persistence model for admissions. Rows are never updated or deleted."""

    id = models.UUIDField(primary_key=True, editable=False)
    webinar = models.ForeignKey(
        Webinar, on_delete=models.PROTECT, related_name="admissions"
    )
    attendee = models.ForeignKey(
        Attendee, on_delete=models.PROTECT, related_name="admissions"
    )
    created_at = models.DateTimeField()

    class Meta:
        ordering = ["created_at"]
        indexes = [
            models.Index(
                fields=["webinar", "created_at"], name="webinars_ad_webinar_3b9e4d_idx"
            ),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["webinar", "attendee"], name="unique_admission_per_attendee"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.attendee_id} @ {self.webinar_id}"
