"""
License API views.

These endpoints are used by:
- Anyone holding a key, to verify it
- License owners, to manage the domains a license is activated on
"""

import uuid
from typing import Optional

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from activations.application.commands.add_activation import AddActivationCommand
from activations.application.commands.remove_activation import RemoveActivationCommand
from activations.application.queries.list_activations import ListActivationsQuery
from api.v1.license.serializers import (
    ActivationListResponseSerializer,
    ActivationSerializer,
    AddActivationRequestSerializer,
    AddActivationResponseSerializer,
    CustomerLicenseListResponseSerializer,
    CustomerLicenseSerializer,
    VerifyLicenseResponseSerializer,
)
from core.container import get_container
from core.domain.exceptions import ValidationError
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.queries.list_licenses import ListCustomerLicensesQuery
from licenses.application.queries.verify_license import VerifyLicenseQuery

tracer = get_tracer(__name__)

CUSTOMER_HEADER = OpenApiParameter(
    name="X-Customer-Id",
    type=str,
    location=OpenApiParameter.HEADER,
    required=False,
    description="Owning customer id; when present the license must belong to it",
)


def get_customer_id(request: Request, required: bool = False) -> Optional[uuid.UUID]:
    """Owner scope from the X-Customer-Id header."""
    value = request.headers.get("X-Customer-Id")
    if not value:
        if required:
            raise ValidationError("X-Customer-Id header is required")
        return None
    try:
        return uuid.UUID(value)
    except ValueError:
        raise ValidationError("X-Customer-Id must be a UUID") from None


class VerifyLicenseView(APIView):
    """View for public license verification."""

    @extend_schema(
        operation_id="verify_license",
        summary="Verify License",
        description=(
            "Check a license key. Unknown and malformed keys get the same "
            "404 response with status 'invalid'."
        ),
        tags=["License API"],
        responses={
            200: VerifyLicenseResponseSerializer,
            404: {"description": "Invalid license"},
            429: {"description": "Rate limit exceeded"},
        },
    )
    def get(self, request: Request, key: str) -> Response:
        """Verify a license key."""
        return async_to_sync(self._handle_verify)(request, key)

    async def _handle_verify(self, request: Request, key: str) -> Response:
        """Async handler for verify license."""
        with tracer.start_as_current_span("verify_license") as span:
            span.set_attribute("operation", "verify_license")

            result = await get_container().verify_license_handler.handle(
                VerifyLicenseQuery(key=key)
            )
            span.set_attribute("license.status", result.status)
            span.set_attribute("license.valid", result.valid)

            if not result.found:
                span.set_status(Status(StatusCode.OK))
                return Response(
                    {"success": False, "message": result.message, "status": result.status},
                    status=status.HTTP_404_NOT_FOUND,
                )

            serializer = VerifyLicenseResponseSerializer(
                {
                    "success": True,
                    "valid": result.valid,
                    "message": result.message,
                    "status": result.status,
                }
            )
            span.set_status(Status(StatusCode.OK))
            return Response(serializer.data, status=status.HTTP_200_OK)


class ActivationsView(APIView):
    """View for listing and adding activations of a license."""

    @extend_schema(
        operation_id="list_activations",
        summary="List Activations",
        tags=["License API"],
        parameters=[CUSTOMER_HEADER],
        responses={
            200: ActivationListResponseSerializer,
            404: {"description": "License not found or access denied"},
        },
    )
    def get(self, request: Request, license_id: uuid.UUID) -> Response:
        """List the activations of a license."""
        return async_to_sync(self._handle_list)(request, license_id)

    async def _handle_list(self, request: Request, license_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("list_activations") as span:
            span.set_attribute("license.id", str(license_id))

            result = await get_container().list_activations_handler.handle(
                ListActivationsQuery(license_id=license_id, customer_id=get_customer_id(request))
            )
            serializer = ActivationListResponseSerializer(
                {
                    "success": True,
                    "license_id": result.license_id,
                    "max_activations": result.max_activations,
                    "usage": result.usage,
                    "activations": result.activations,
                }
            )
            span.set_attribute("activations.count", len(result.activations))
            span.set_status(Status(StatusCode.OK))
            return Response(serializer.data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="add_activation",
        summary="Activate Domain",
        description=(
            "Activate the license on a domain. Fails with 403 when the license "
            "has no activations left."
        ),
        tags=["License API"],
        parameters=[CUSTOMER_HEADER],
        request=AddActivationRequestSerializer,
        responses={
            201: AddActivationResponseSerializer,
            400: {"description": "Invalid domain or IP address"},
            403: {"description": "Activation limit reached"},
            404: {"description": "License not found or access denied"},
        },
    )
    def post(self, request: Request, license_id: uuid.UUID) -> Response:
        """Activate a license on a domain."""
        return async_to_sync(self._handle_add)(request, license_id)

    async def _handle_add(self, request: Request, license_id: uuid.UUID) -> Response:
        """Async handler for add activation."""
        with tracer.start_as_current_span("add_activation") as span:
            span.set_attribute("operation", "add_activation")
            span.set_attribute("license.id", str(license_id))

            serializer = AddActivationRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                raise ValidationError("Invalid activation request")

            command = AddActivationCommand(
                license_id=license_id,
                domain=serializer.validated_data.get("domain"),
                ip_address=serializer.validated_data.get("ipAddress") or None,
                customer_id=get_customer_id(request),
            )
            activation = await get_container().add_activation_handler.handle(command)

            span.set_attribute("activation.id", str(activation.id))
            span.set_attribute("activation.domain", activation.domain)
            span.set_status(Status(StatusCode.OK))
            return Response(
                {
                    "success": True,
                    "message": "Domain activated successfully.",
                    "activation": ActivationSerializer(activation).data,
                },
                status=status.HTTP_201_CREATED,
            )


class ActivationDetailView(APIView):
    """View for removing one activation."""

    @extend_schema(
        operation_id="remove_activation",
        summary="Deactivate Domain",
        tags=["License API"],
        parameters=[CUSTOMER_HEADER],
        responses={
            200: {"description": "Domain deactivated"},
            404: {"description": "License or activation not found"},
        },
    )
    def delete(self, request: Request, license_id: uuid.UUID, activation_id: uuid.UUID) -> Response:
        """Remove an activation from a license."""
        return async_to_sync(self._handle_remove)(request, license_id, activation_id)

    async def _handle_remove(
        self, request: Request, license_id: uuid.UUID, activation_id: uuid.UUID
    ) -> Response:
        with tracer.start_as_current_span("remove_activation") as span:
            span.set_attribute("license.id", str(license_id))
            span.set_attribute("activation.id", str(activation_id))

            await get_container().remove_activation_handler.handle(
                RemoveActivationCommand(
                    license_id=license_id,
                    activation_id=activation_id,
                    customer_id=get_customer_id(request),
                )
            )
            span.set_status(Status(StatusCode.OK))
            return Response(
                {"success": True, "message": "Domain deactivated successfully."},
                status=status.HTTP_200_OK,
            )


class CustomerLicensesView(APIView):
    """View for the licenses owned by the calling customer."""

    @extend_schema(
        operation_id="list_customer_licenses",
        summary="My Licenses",
        tags=["License API"],
        parameters=[
            OpenApiParameter(
                name="X-Customer-Id",
                type=str,
                location=OpenApiParameter.HEADER,
                required=True,
                description="Owning customer id",
            ),
        ],
        responses={200: CustomerLicenseListResponseSerializer},
    )
    def get(self, request: Request) -> Response:
        """List the caller's licenses with activation usage."""
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_customer_licenses") as span:
            customer_id = get_customer_id(request, required=True)
            span.set_attribute("customer.id", str(customer_id))

            result = await get_container().list_customer_licenses_handler.handle(
                ListCustomerLicensesQuery(customer_id=customer_id)
            )
            licenses = [
                CustomerLicenseSerializer(
                    {
                        "id": dto.id,
                        "key": dto.key,
                        "product_id": dto.product_id,
                        "status": dto.status,
                        "is_valid": dto.is_valid,
                        "expires_on": dto.expires_on,
                        "usage": dto.usage,
                        "usage_percent": dto.usage_percent,
                    }
                ).data
                for dto in result.licenses
            ]
            span.set_status(Status(StatusCode.OK))
            return Response({"success": True, "licenses": licenses}, status=status.HTTP_200_OK)
