"""API views for the reservation domain."""

from __future__ import annotations

import logging

from django.db import DatabaseError  # type: ignore
from django.shortcuts import get_object_or_404  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.properties.models import Property, RoomType
from shared.application.message_bus import message_bus

from .application.command_handlers import (
    AdmitReservationCommand,
    CancelReservationCommand,
    CheckInReservationCommand,
    CheckOutReservationCommand,
    MarkNoShowCommand,
)
from .domain.entities import AdmissionReason, ReservationStateError
from .filters import ReservationFilterSet
from .models import Reservation
from .serializers import (
    AvailabilityCalendarQuerySerializer,
    AvailabilityCheckSerializer,
    CancelSerializer,
    CheckInSerializer,
    ReservationCreateSerializer,
    ReservationSerializer,
)
from .services import AvailabilityService, todays_arrivals, todays_departures

logger = logging.getLogger(__name__)

REJECTION_STATUS = {
    AdmissionReason.VALIDATION: status.HTTP_400_BAD_REQUEST,
    AdmissionReason.NO_RATES: status.HTTP_404_NOT_FOUND,
    AdmissionReason.NO_ROOMS_AVAILABLE: status.HTTP_409_CONFLICT,
    AdmissionReason.RESTRICTED: status.HTTP_409_CONFLICT,
}


def validation_failed(errors) -> Response:
    """400 body shaped like every other rejection."""

    message = "Invalid request data"
    non_field = errors.get("non_field_errors") if isinstance(errors, dict) else None
    if non_field:
        message = str(non_field[0])
    return Response(
        {"reason": AdmissionReason.VALIDATION.value, "error": message, "details": errors},
        status=status.HTTP_400_BAD_REQUEST,
    )


class AvailabilityCheckView(APIView):
    """Advisory availability for a stay; admission re-checks under lock."""

    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, property_id):  # type: ignore
        property_obj = get_object_or_404(Property, pk=property_id)
        serializer = AvailabilityCheckSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_failed(serializer.errors)
        data = serializer.validated_data

        room_type = get_object_or_404(RoomType, pk=data["room_type_id"], property=property_obj)
        snapshot = AvailabilityService().check_availability(
            property_obj.pk,
            room_type.pk,
            data["arrival_date"],
            data["departure_date"],
        )
        return Response({"availability": snapshot.to_dict()})


class AvailabilityCalendarView(APIView):
    """Per-date inventory and restriction flags for a room type."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, property_id, room_type_id):  # type: ignore
        room_type = get_object_or_404(RoomType, pk=room_type_id, property_id=property_id)
        serializer = AvailabilityCalendarQuerySerializer(data=request.query_params)
        if not serializer.is_valid():
            return validation_failed(serializer.errors)
        data = serializer.validated_data

        days = AvailabilityService().availability_calendar(
            room_type.property_id,
            room_type.pk,
            data["from_date"],
            data["to_date"],
        )
        return Response(
            {
                "room_type_id": room_type.pk,
                "from_date": data["from_date"].isoformat(),
                "to_date": data["to_date"].isoformat(),
                "availability": [day.to_dict() for day in days],
            }
        )


class ReservationViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Admission, lookup and front-desk lifecycle of reservations."""

    queryset = Reservation.objects.select_related("property", "guest", "room_type", "room", "rate_plan").all()
    serializer_class = ReservationSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_class = ReservationFilterSet
    lookup_value_regex = r"\d+"

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return ReservationCreateSerializer
        if self.action == "check_in":
            return CheckInSerializer
        if self.action == "cancel":
            return CancelSerializer
        return ReservationSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        if not serializer.is_valid():
            return validation_failed(serializer.errors)

        command = AdmitReservationCommand(
            created_by=request.user if request.user.is_authenticated else None,
            **serializer.validated_data,
        )
        try:
            result = message_bus.handle_command(command)
        except DatabaseError:
            logger.error("Reservation creation failed", exc_info=True)
            return Response(
                {"error": "Reservation creation failed"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        if not result.success:
            body = {"reason": result.reason.value, "error": result.error}
            if result.reason == AdmissionReason.NO_ROOMS_AVAILABLE and result.availability:
                body["availability"] = result.availability.to_dict()
            if result.restrictions:
                body["restrictions"] = [restriction.to_dict() for restriction in result.restrictions]
            return Response(body, status=REJECTION_STATUS[result.reason])

        data = ReservationSerializer(result.reservation, context=self.get_serializer_context()).data
        return Response({"reservation": data}, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["get"], url_path=r"confirmation/(?P<confirmation_number>[^/]+)")
    def confirmation(self, request, confirmation_number=None):  # type: ignore
        reservation = get_object_or_404(self.get_queryset(), confirmation_number=confirmation_number)
        return Response(ReservationSerializer(reservation, context=self.get_serializer_context()).data)

    @action(detail=False, methods=["get"])
    def arrivals(self, request):  # type: ignore
        return self._todays_list(request, todays_arrivals)

    @action(detail=False, methods=["get"])
    def departures(self, request):  # type: ignore
        return self._todays_list(request, todays_departures)

    @action(detail=True, methods=["post"], url_path="check-in")
    def check_in(self, request, pk=None):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        if not serializer.is_valid():
            return validation_failed(serializer.errors)
        return self._run_lifecycle(
            CheckInReservationCommand(reservation_id=pk, room_id=serializer.validated_data["room_id"])
        )

    @action(detail=True, methods=["post"], url_path="check-out")
    def check_out(self, request, pk=None):  # type: ignore
        return self._run_lifecycle(CheckOutReservationCommand(reservation_id=pk))

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        if not serializer.is_valid():
            return validation_failed(serializer.errors)
        return self._run_lifecycle(
            CancelReservationCommand(reservation_id=pk, reason=serializer.validated_data["reason"])
        )

    @action(detail=True, methods=["post"], url_path="no-show")
    def no_show(self, request, pk=None):  # type: ignore
        return self._run_lifecycle(MarkNoShowCommand(reservation_id=pk))

    def _todays_list(self, request, query):  # type: ignore
        property_id = request.query_params.get("property")
        if not property_id or not property_id.isdigit():
            return Response(
                {"reason": AdmissionReason.VALIDATION.value, "error": "The property query parameter is required"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        reservations = query(int(property_id))
        data = ReservationSerializer(reservations, many=True, context=self.get_serializer_context()).data
        return Response({"count": len(data), "results": data})

    def _run_lifecycle(self, command):  # type: ignore
        try:
            reservation = message_bus.handle_command(command)
        except Reservation.DoesNotExist:
            return Response({"error": "Reservation not found"}, status=status.HTTP_404_NOT_FOUND)
        except ReservationStateError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(ReservationSerializer(reservation, context=self.get_serializer_context()).data)
