from webinars.stores.interfaces import AdmissionLedger, AttendeeStore, EventStore

__all__ = ["AdmissionLedger", "AttendeeStore", "EventStore"]
