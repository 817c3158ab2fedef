"""
Admin API views.

License administration and webhook log administration. Authentication
for these endpoints is handled outside this service.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.admin.serializers import (
    CreateLicenseRequestSerializer,
    LicenseListQuerySerializer,
    LicenseSerializer,
    PaginationSerializer,
    UpdateLicenseRequestSerializer,
    UpdateLicenseStatusRequestSerializer,
    WebhookLogListQuerySerializer,
    WebhookLogSerializer,
    WebhookStatsResponseSerializer,
)
from core.container import get_container
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.commands.delete_license import DeleteLicenseCommand
from licenses.application.commands.reset_activations import ResetActivationsCommand
from licenses.application.commands.update_license import UpdateLicenseCommand
from licenses.application.commands.update_license_status import (
    UpdateLicenseStatusCommand,
)
from licenses.application.queries.get_license import GetLicenseQuery
from licenses.application.queries.list_licenses import ListLicensesQuery
from webhooks.application.commands.purge_webhook_logs import ClearWebhookLogsCommand
from webhooks.application.commands.retry_webhook import RetryWebhookCommand
from webhooks.application.queries.list_webhook_logs import (
    ListWebhookLogsQuery,
    WebhookStatsQuery,
)

tracer = get_tracer(__name__)


def _pagination(result) -> dict:
    return PaginationSerializer(
        {
            "page": result.page,
            "limit": result.limit,
            "total": result.total,
            "pages": result.pages,
        }
    ).data


class LicenseCollectionView(APIView):
    """View for listing and creating licenses."""

    @extend_schema(
        operation_id="admin_list_licenses",
        summary="List Licenses",
        tags=["Admin Licenses"],
        parameters=[LicenseListQuerySerializer],
        responses={200: LicenseSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        """List licenses with activation counts."""
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("admin_list_licenses") as span:
            params = LicenseListQuerySerializer(data=request.query_params)
            params.is_valid(raise_exception=True)
            data = params.validated_data

            result = await get_container().list_licenses_handler.handle(
                ListLicensesQuery(
                    status=data.get("status"),
                    customer_id=data.get("customer_id"),
                    product_id=data.get("product_id"),
                    page=data["page"],
                    page_size=data["limit"],
                )
            )
            span.set_attribute("licenses.count", len(result.licenses))
            span.set_status(Status(StatusCode.OK))
            return Response(
                {
                    "success": True,
                    "licenses": LicenseSerializer(result.licenses, many=True).data,
                    "pagination": _pagination(result),
                },
                status=status.HTTP_200_OK,
            )

    @extend_schema(
        operation_id="admin_create_license",
        summary="Create License",
        description=(
            "Create a license for a product and customer. The key is generated "
            "when not supplied; max_activations defaults to the product's."
        ),
        tags=["Admin Licenses"],
        request=CreateLicenseRequestSerializer,
        responses={
            201: LicenseSerializer,
            400: {"description": "Bad Request"},
            404: {"description": "Product or customer not found"},
        },
    )
    def post(self, request: Request) -> Response:
        """Create a license."""
        return async_to_sync(self._handle_create)(request)

    async def _handle_create(self, request: Request) -> Response:
        with tracer.start_as_current_span("admin_create_license") as span:
            serializer = CreateLicenseRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            result = await get_container().create_license_handler.handle(
                CreateLicenseCommand(
                    product_id=data["product_id"],
                    customer_id=data["customer_id"],
                    expires_on=data.get("expires_on"),
                    max_activations=data.get("max_activations"),
                    status=data.get("status", "active"),
                    key=data.get("key"),
                )
            )
            span.set_attribute("license.id", str(result.id))
            span.set_status(Status(StatusCode.OK))
            return Response(
                {
                    "success": True,
                    "message": "License created successfully.",
                    "license": LicenseSerializer(result).data,
                },
                status=status.HTTP_201_CREATED,
            )


class LicenseDetailView(APIView):
    """View for one license."""

    @extend_schema(
        operation_id="admin_get_license",
        summary="Get License",
        tags=["Admin Licenses"],
        responses={200: LicenseSerializer, 404: {"description": "License not found"}},
    )
    def get(self, request: Request, license_id: uuid.UUID) -> Response:
        """Get a license with its activations."""
        return async_to_sync(self._handle_get)(license_id)

    async def _handle_get(self, license_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("admin_get_license") as span:
            span.set_attribute("license.id", str(license_id))
            result = await get_container().get_license_handler.handle(
                GetLicenseQuery(license_id=license_id)
            )
            span.set_status(Status(StatusCode.OK))
            return Response(
                {"success": True, "license": LicenseSerializer(result).data},
                status=status.HTTP_200_OK,
            )

    @extend_schema(
        operation_id="admin_update_license",
        summary="Update License",
        description="Partial update. Sending expires_on as null removes the expiry.",
        tags=["Admin Licenses"],
        request=UpdateLicenseRequestSerializer,
        responses={
            200: LicenseSerializer,
            400: {"description": "Bad Request"},
            404: {"description": "License, product or customer not found"},
        },
    )
    def put(self, request: Request, license_id: uuid.UUID) -> Response:
        """Update a license."""
        return async_to_sync(self._handle_update)(request, license_id)

    async def _handle_update(self, request: Request, license_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("admin_update_license") as span:
            span.set_attribute("license.id", str(license_id))
            serializer = UpdateLicenseRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            result = await get_container().update_license_handler.handle(
                UpdateLicenseCommand(
                    license_id=license_id,
                    product_id=data.get("product_id"),
                    customer_id=data.get("customer_id"),
                    expires_on=data.get("expires_on"),
                    max_activations=data.get("max_activations"),
                    clear_expiry="expires_on" in data and data["expires_on"] is None,
                )
            )
            span.set_status(Status(StatusCode.OK))
            return Response(
                {
                    "success": True,
                    "message": "License updated successfully.",
                    "license": LicenseSerializer(result).data,
                },
                status=status.HTTP_200_OK,
            )

    @extend_schema(
        operation_id="admin_delete_license",
        summary="Delete License",
        description="Delete a license and all of its activations.",
        tags=["Admin Licenses"],
        responses={200: {"description": "Deleted"}, 404: {"description": "License not found"}},
    )
    def delete(self, request: Request, license_id: uuid.UUID) -> Response:
        """Delete a license."""
        return async_to_sync(self._handle_delete)(license_id)

    async def _handle_delete(self, license_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("admin_delete_license") as span:
            span.set_attribute("license.id", str(license_id))
            await get_container().delete_license_handler.handle(
                DeleteLicenseCommand(license_id=license_id)
            )
            span.set_status(Status(StatusCode.OK))
            return Response(
                {"success": True, "message": "License deleted successfully."},
                status=status.HTTP_200_OK,
            )


class ResetLicenseView(APIView):
    """View for clearing the activations of a license."""

    @extend_schema(
        operation_id="admin_reset_license",
        summary="Reset Activations",
        description="Delete every activation of the license. The status is kept.",
        tags=["Admin Licenses"],
        request=None,
        responses={200: {"description": "Reset"}, 404: {"description": "License not found"}},
    )
    def post(self, request: Request, license_id: uuid.UUID) -> Response:
        """Reset a license's activations."""
        return async_to_sync(self._handle_reset)(license_id)

    async def _handle_reset(self, license_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("admin_reset_license") as span:
            span.set_attribute("license.id", str(license_id))
            result = await get_container().reset_activations_handler.handle(
                ResetActivationsCommand(license_id=license_id)
            )
            span.set_attribute("activations.deleted", result.deleted_count)
            span.set_status(Status(StatusCode.OK))
            return Response(
                {
                    "success": True,
                    "message": "License activations reset successfully.",
                    "deletedCount": result.deleted_count,
                },
                status=status.HTTP_200_OK,
            )


class LicenseStatusView(APIView):
    """View for overwriting a license status."""

    @extend_schema(
        operation_id="admin_update_license_status",
        summary="Update License Status",
        description="Set the status to pending, active, expired or revoked. Last write wins.",
        tags=["Admin Licenses"],
        request=UpdateLicenseStatusRequestSerializer,
        responses={
            200: LicenseSerializer,
            400: {"description": "Invalid status"},
            404: {"description": "License not found"},
        },
    )
    def put(self, request: Request, license_id: uuid.UUID) -> Response:
        """Update a license status."""
        return async_to_sync(self._handle_status)(request, license_id)

    async def _handle_status(self, request: Request, license_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("admin_update_license_status") as span:
            span.set_attribute("license.id", str(license_id))
            result = await get_container().update_license_status_handler.handle(
                UpdateLicenseStatusCommand(
                    license_id=license_id, status=request.data.get("status")
                )
            )
            span.set_attribute("license.status", result.status)
            span.set_status(Status(StatusCode.OK))
            return Response(
                {
                    "success": True,
                    "message": "License status updated successfully.",
                    "license": LicenseSerializer(result).data,
                },
                status=status.HTTP_200_OK,
            )


class WebhookLogListView(APIView):
    """View for listing webhook logs."""

    @extend_schema(
        operation_id="admin_list_webhooks",
        summary="List Webhook Logs",
        tags=["Admin Webhooks"],
        parameters=[WebhookLogListQuerySerializer],
        responses={200: WebhookLogSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        """List webhook logs, newest first."""
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("admin_list_webhooks") as span:
            params = WebhookLogListQuerySerializer(data=request.query_params)
            params.is_valid(raise_exception=True)
            data = params.validated_data

            result = await get_container().list_webhook_logs_handler.handle(
                ListWebhookLogsQuery(
                    page=data["page"],
                    limit=data["limit"],
                    provider=data.get("provider"),
                    status=data.get("status"),
                    event_type=data.get("eventType"),
                )
            )
            span.set_attribute("webhooks.count", len(result.logs))
            span.set_status(Status(StatusCode.OK))
            return Response(
                {
                    "success": True,
                    "logs": WebhookLogSerializer(result.logs, many=True).data,
                    "pagination": _pagination(result),
                },
                status=status.HTTP_200_OK,
            )


class WebhookRetryView(APIView):
    """View for reprocessing a webhook log."""

    @extend_schema(
        operation_id="admin_retry_webhook",
        summary="Retry Webhook",
        description=(
            "Reset a failed or stuck log to pending and schedule it again. "
            "Processed logs and logs being processed cannot be retried."
        ),
        tags=["Admin Webhooks"],
        request=None,
        responses={
            200: {"description": "Queued for reprocessing"},
            400: {"description": "Already processed or being processed"},
            404: {"description": "Webhook log not found"},
        },
    )
    def post(self, request: Request, log_id: uuid.UUID) -> Response:
        """Retry a webhook log."""
        return async_to_sync(self._handle_retry)(log_id)

    async def _handle_retry(self, log_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("admin_retry_webhook") as span:
            span.set_attribute("webhook.id", str(log_id))
            await get_container().retry_webhook_handler.handle(RetryWebhookCommand(log_id=log_id))
            span.set_status(Status(StatusCode.OK))
            return Response(
                {"success": True, "message": "Webhook queued for reprocessing"},
                status=status.HTTP_200_OK,
            )


class WebhookClearView(APIView):
    """View for deleting every webhook log."""

    @extend_schema(
        operation_id="admin_clear_webhooks",
        summary="Clear Webhook Logs",
        tags=["Admin Webhooks"],
        responses={200: {"description": "Cleared"}},
    )
    def delete(self, request: Request) -> Response:
        """Delete all webhook logs."""
        return async_to_sync(self._handle_clear)()

    async def _handle_clear(self) -> Response:
        with tracer.start_as_current_span("admin_clear_webhooks") as span:
            result = await get_container().clear_webhook_logs_handler.handle(
                ClearWebhookLogsCommand()
            )
            span.set_attribute("webhooks.deleted", result.deleted_count)
            span.set_status(Status(StatusCode.OK))
            return Response(
                {
                    "success": True,
                    "message": "All webhook logs cleared",
                    "deletedCount": result.deleted_count,
                },
                status=status.HTTP_200_OK,
            )


class WebhookStatsView(APIView):
    """View for webhook statistics."""

    @extend_schema(
        operation_id="admin_webhook_stats",
        summary="Webhook Statistics",
        tags=["Admin Webhooks"],
        responses={200: WebhookStatsResponseSerializer},
    )
    def get(self, request: Request) -> Response:
        """Totals overall, for the last 24 hours and per provider and status."""
        return async_to_sync(self._handle_stats)()

    async def _handle_stats(self) -> Response:
        with tracer.start_as_current_span("admin_webhook_stats") as span:
            result = await get_container().webhook_stats_handler.handle(WebhookStatsQuery())
            span.set_status(Status(StatusCode.OK))
            serializer = WebhookStatsResponseSerializer(
                {
                    "success": True,
                    "total": result.total,
                    "last24Hours": result.last_24_hours,
                    "byProviderAndStatus": result.by_provider_and_status,
                }
            )
            return Response(serializer.data, status=status.HTTP_200_OK)
