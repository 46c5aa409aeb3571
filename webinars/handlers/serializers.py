"""Serializers for transforming domain models to API responses."""

from rest_framework import serializers


class WebinarSerializer(serializers.Serializer):
    """Serializer for the Event domain model."""

    id = serializers.CharField(source="event.id")
    owner_id = serializers.CharField(source="event.owner_id")
    title = serializers.CharField(source="event.title")
    capacity = serializers.IntegerField(source="event.capacity.value")
    starts_at = serializers.DateTimeField(source="event.starts_at")
    ends_at = serializers.DateTimeField(source="event.ends_at")
    seats_remaining = serializers.IntegerField()


class AdmissionSerializer(serializers.Serializer):
    """Serializer for the Admission domain model."""

    id = serializers.CharField()
    event_id = serializers.CharField()
    attendee_id = serializers.CharField()
    created_at = serializers.DateTimeField()


class AdmissionRequestSerializer(serializers.Serializer):
    """Input for POST /api/webinars/{event_id}/admissions."""

    attendee_id = serializers.CharField(max_length=64)
