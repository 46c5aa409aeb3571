from django.urls import path

from webinars.handlers import AdmissionCreateView, WebinarDetailView, WebinarListView

urlpatterns = [
    path("webinars", WebinarListView.as_view(), name="webinar-list"),
    path("webinars/<str:event_id>", WebinarDetailView.as_view(), name="webinar-detail"),
    path(
        "webinars/<str:event_id>/admissions",
        AdmissionCreateView.as_view(),
        name="admission-create",
    ),
]
