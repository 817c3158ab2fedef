"""
Webhook receiver view.

Billing providers post events here. Every delivery is stored before it is
acknowledged; processing happens afterwards through the task scheduler.
"""

import json
from typing import Any

from asgiref.sync import async_to_sync
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.webhook.serializers import WebhookReceivedResponseSerializer
from core.container import get_container
from core.instrumentation import Status, StatusCode, get_tracer
from webhooks.application.commands.ingest_webhook import IngestWebhookCommand

tracer = get_tracer(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-finite number {name} in payload")


def read_payload(request: Request) -> Any:
    """
    Raw request body as JSON, or as text when it is not strict JSON.

    NaN and Infinity are not valid JSON for the payload column, so such
    bodies are kept as text.
    """
    body = request.body.decode("utf-8", errors="replace")
    if not body.strip():
        return {}
    try:
        return json.loads(body, parse_constant=_reject_constant)
    except ValueError:
        return body


class WebhookReceiverView(APIView):
    """View for inbound provider webhooks."""

    # The body is read raw so that no payload is rejected by a parser
    parser_classes = []

    @extend_schema(
        operation_id="receive_webhook",
        summary="Receive Webhook",
        description=(
            "Store a provider event and acknowledge it. Processing is asynchronous; "
            "malformed payloads are stored as-is."
        ),
        tags=["Webhooks"],
        request=OpenApiTypes.OBJECT,
        responses={
            200: WebhookReceivedResponseSerializer,
            400: {"description": "Invalid provider name"},
        },
    )
    def post(self, request: Request, provider: str) -> Response:
        """Receive a provider webhook."""
        return async_to_sync(self._handle_receive)(request, provider)

    async def _handle_receive(self, request: Request, provider: str) -> Response:
        """Async handler for webhook ingestion."""
        with tracer.start_as_current_span("receive_webhook") as span:
            span.set_attribute("webhook.provider", provider)

            webhook_log = await get_container().ingest_webhook_handler.handle(
                IngestWebhookCommand(provider=provider, payload=read_payload(request))
            )

            span.set_attribute("webhook.id", str(webhook_log.id))
            span.set_attribute("webhook.event_type", webhook_log.event_type)
            span.set_status(Status(StatusCode.OK))
            serializer = WebhookReceivedResponseSerializer(
                {
                    "success": True,
                    "message": "Webhook received successfully",
                    "webhookId": webhook_log.id,
                }
            )
            return Response(serializer.data, status=status.HTTP_200_OK)
