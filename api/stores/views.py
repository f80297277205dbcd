import logging
from django.core.exceptions import ValidationError
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema
from .models import Store
from .serializers import (
    ContactSubmissionSerializer,
    HoursEditSerializer,
    LocationListSerializer,
    LocationSerializer,
    StoreFormSerializer,
    StoreSerializer,
)
from .services import ContactService, LocationDisplayService, ScheduleService, StoreService

# Create a logger for this module
logger = logging.getLogger('stores_views')

SAVE_SUCCESS_MESSAGE = "Store updated successfully!"
SAVE_FAILED_MESSAGE = "Failed to save store. Please try again."
LOAD_FAILED_MESSAGE = "Failed to load store. Please try again."
LOAD_STORES_FAILED_MESSAGE = "Failed to load stores. Please try again."
LOAD_LOCATIONS_FAILED_MESSAGE = "Failed to load locations. Please try again."
CONTACT_SUCCESS_MESSAGE = "Message sent successfully! We'll get back to you soon."
CONTACT_FAILED_MESSAGE = "Failed to send message. Please try again or call us directly."
STORE_NOT_FOUND_MESSAGE = "Store not found."
INVALID_REQUEST_MESSAGE = "Invalid request."


def first_error(errors):
    """
    Return the first message of a (possibly nested) serializer error structure,
    or a generic message when it holds none.
    """
    if isinstance(errors, dict):
        errors = list(errors.values())
    if isinstance(errors, (list, tuple)):
        for value in errors:
            message = first_error(value)
            if message != INVALID_REQUEST_MESSAGE:
                return message
        return INVALID_REQUEST_MESSAGE
    return str(errors) or INVALID_REQUEST_MESSAGE


def invalid_response(errors):
    return Response(
        {'error': first_error(errors), 'errors': errors},
        status=status.HTTP_400_BAD_REQUEST
    )


class LocationListView(APIView):
    """Public list of active store locations for the contact page"""
    permission_classes = [AllowAny]

    @extend_schema(
        summary="List Locations",
        description="Every active store with its address, phone links, map embed and opening hours.",
        responses={200: LocationSerializer(many=True), 500: "Server Error"}
    )
    def get(self, request):
        try:
            locations = LocationDisplayService.all()
        except Exception as e:
            logger.error(f"Error loading locations: {e}", exc_info=True)
            return Response(
                {'error': LOAD_LOCATIONS_FAILED_MESSAGE},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        return Response(LocationSerializer(locations, many=True).data, status=status.HTTP_200_OK)


class LocationDetailView(APIView):
    """Public view of a single store location"""
    permission_classes = [AllowAny]

    @extend_schema(
        summary="Retrieve Location",
        responses={200: LocationSerializer, 404: "Not Found", 500: "Server Error"}
    )
    def get(self, request, location):
        try:
            block = LocationDisplayService.get(location)
        except Store.DoesNotExist:
            return Response({'error': STORE_NOT_FOUND_MESSAGE}, status=status.HTTP_404_NOT_FOUND)
        except Exception as e:
            logger.error(f"Error loading location '{location}': {e}", exc_info=True)
            return Response(
                {'error': LOAD_LOCATIONS_FAILED_MESSAGE},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        return Response(LocationSerializer(block).data, status=status.HTTP_200_OK)


class ContactSubmissionView(APIView):
    """Contact form of a store location"""
    permission_classes = [AllowAny]

    @extend_schema(
        summary="Send Contact Message",
        description="Store a message for the location and notify the store by e-mail.",
        request=ContactSubmissionSerializer,
        responses={201: ContactSubmissionSerializer, 400: "Bad Request", 404: "Not Found"}
    )
    def post(self, request, location):
        serializer = ContactSubmissionSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_response(serializer.errors)
        try:
            submission = ContactService.submit(location, **serializer.validated_data)
        except Store.DoesNotExist:
            return Response({'error': STORE_NOT_FOUND_MESSAGE}, status=status.HTTP_404_NOT_FOUND)
        except Exception as e:
            logger.error(f"Error submitting contact form for '{location}': {e}", exc_info=True)
            return Response(
                {'error': CONTACT_FAILED_MESSAGE},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        return Response(
            {
                'message': CONTACT_SUCCESS_MESSAGE,
                'data': ContactSubmissionSerializer(submission).data
            },
            status=status.HTTP_201_CREATED
        )


class StoreLocationListView(APIView):
    """Store selector of the admin store settings page"""
    permission_classes = [IsAdminUser]

    @extend_schema(
        summary="List Stores",
        responses={200: LocationListSerializer(many=True), 500: "Server Error"}
    )
    def get(self, request):
        try:
            stores = StoreService.list_locations()
        except Exception as e:
            logger.error(f"Error loading stores: {e}", exc_info=True)
            return Response(
                {'error': LOAD_STORES_FAILED_MESSAGE},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        return Response(LocationListSerializer(stores, many=True).data, status=status.HTTP_200_OK)


class StoreSettingsView(APIView):
    """
    Load and save the settings of one store, including its weekly hours.
    Saving is an upsert keyed by the location in the URL, so the first save of
    a new location creates it.
    Permissions:
        Only admin users are allowed to access these endpoints.
    """
    permission_classes = [IsAdminUser]

    @extend_schema(
        summary="Load Store Settings",
        description="Saved settings for the location, or the initial form values if it was never saved.",
        responses={200: StoreSerializer, 500: "Server Error"}
    )
    def get(self, request, location):
        try:
            store = StoreService.load(location)
        except Exception as e:
            logger.error(f"Error loading store data for '{location}': {e}", exc_info=True)
            return Response(
                {'error': LOAD_FAILED_MESSAGE},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        return Response(StoreSerializer(store).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Save Store Settings",
        request=StoreFormSerializer,
        responses={200: StoreSerializer, 400: "Bad Request", 500: "Server Error"}
    )
    def put(self, request, location):
        serializer = StoreFormSerializer(data=request.data)
        if not serializer.is_valid():
            logger.warning(f"Store form for '{location}' rejected: {serializer.errors}")
            return invalid_response(serializer.errors)
        try:
            store = StoreService.save(location, serializer.validated_data)
        except ValidationError as e:
            logger.warning(f"Store form for '{location}' rejected: {e.messages[0]}")
            return Response({'error': e.messages[0]}, status=status.HTTP_400_BAD_REQUEST)
        except Exception as e:
            logger.error(f"Error saving store '{location}': {e}", exc_info=True)
            return Response(
                {'error': SAVE_FAILED_MESSAGE},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        return Response(
            {
                'message': SAVE_SUCCESS_MESSAGE,
                'data': StoreSerializer(store).data
            },
            status=status.HTTP_200_OK
        )


class HoursEditView(APIView):
    """
    Apply one hours-editor action (toggle a day closed, set a time, copy a
    day to the weekdays or to the whole week) and return the edited hours
    with their website preview. Nothing is saved; the hours are stored when
    the store settings are saved.
    """
    permission_classes = [IsAdminUser]

    @extend_schema(
        summary="Edit Hours",
        request=HoursEditSerializer,
        responses={200: "Edited hours and preview", 400: "Bad Request"}
    )
    def post(self, request):
        serializer = HoursEditSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_response(serializer.errors)
        data = serializer.validated_data
        hours = ScheduleService.apply(
            data['hours'],
            data['action'],
            day=data.get('day'),
            field=data.get('field'),
            value=data.get('value'),
            source=data['source'],
        )
        return Response(
            {'hours': hours.to_dict(), 'preview': hours.preview()},
            status=status.HTTP_200_OK
        )
