from webinars.services.admission_service import AdmissionService
from webinars.services.webinar_service import WebinarService

__all__ = ["AdmissionService", "WebinarService"]
