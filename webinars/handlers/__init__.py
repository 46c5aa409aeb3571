from webinars.handlers.views import AdmissionCreateView, WebinarDetailView, WebinarListView

__all__ = ["AdmissionCreateView", "WebinarDetailView", "WebinarListView"]
