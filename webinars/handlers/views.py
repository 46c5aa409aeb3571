"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors and admission outcomes to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import structlog
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from webinars import container
from webinars.domain import AdmissionError, Attendee, AttendeeId
from webinars.domain.errors import (
    AttendeeNotFoundError,
    DomainError,
    ErrorCode,
    InfrastructureError,
    InvalidAttendeeIdError,
)
from webinars.handlers.serializers import (
    AdmissionRequestSerializer,
    AdmissionSerializer,
    WebinarSerializer,
)
from webinars.services.webinar_service import parse_event_id

logger = structlog.get_logger(__name__)

DOMAIN_ERROR_STATUS = {
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ATTENDEE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_EVENT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_ATTENDEE_ID: status.HTTP_400_BAD_REQUEST,
}

ADMISSION_ERROR_STATUS = {
    AdmissionError.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    AdmissionError.ALREADY_ADMITTED: status.HTTP_409_CONFLICT,
    AdmissionError.CAPACITY_EXCEEDED: status.HTTP_409_CONFLICT,
}


def error_response(code: str, message: str, http_status: int) -> Response:
    return Response({"code": code, "message": message}, status=http_status)


def domain_error_response(error: DomainError) -> Response:
    return error_response(error.code.value, error.message, DOMAIN_ERROR_STATUS[error.code])


class WebinarListView(APIView):
    """Handler for GET /api/webinars"""

    def get(self, request: Request) -> Response:
        service = container.build_webinar_service()
        payload = [
            {"event": event, "seats_remaining": service.seats_remaining(str(event.id))}
            for event in service.list_events()
        ]
        return Response(WebinarSerializer(payload, many=True).data)


class WebinarDetailView(APIView):
    """Handler for GET /api/webinars/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        service = container.build_webinar_service()
        try:
            event = service.get_event(event_id)
            remaining = service.seats_remaining(event_id)
        except DomainError as exc:
            return domain_error_response(exc)
        return Response(WebinarSerializer({"event": event, "seats_remaining": remaining}).data)


class AdmissionCreateView(APIView):
    """Handler for POST /api/webinars/{event_id}/admissions"""

    def post(self, request: Request, event_id: str) -> Response:
        serializer = AdmissionRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return domain_error_response(InvalidAttendeeIdError())

        raw_attendee_id = serializer.validated_data["attendee_id"]
        try:
            parsed_event_id = parse_event_id(event_id)
            attendee = self._resolve_attendee(raw_attendee_id)
        except DomainError as exc:
            return domain_error_response(exc)

        try:
            result = container.build_admission_service().admit(parsed_event_id, attendee)
        except InfrastructureError:
            logger.exception("Admission failed", event_id=event_id)
            return error_response(
                "ADMISSION_UNAVAILABLE",
                "Admission could not be recorded, please retry",
                status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        if not result.ok:
            return error_response(
                result.error.value, result.error.message, ADMISSION_ERROR_STATUS[result.error]
            )
        admission = result.admission
        data = AdmissionSerializer(
            {
                "id": str(admission.id),
                "event_id": str(admission.event_id),
                "attendee_id": str(admission.attendee_id),
                "created_at": admission.created_at,
            }
        ).data
        return Response(data, status=status.HTTP_201_CREATED)

    def _resolve_attendee(self, raw_attendee_id: str) -> Attendee:
        try:
            attendee_id = AttendeeId.from_string(raw_attendee_id)
        except ValueError as exc:
            raise InvalidAttendeeIdError() from exc
        attendee = container.build_attendee_store().get_attendee(attendee_id)
        if attendee is None:
            raise AttendeeNotFoundError(raw_attendee_id)
        return attendee
