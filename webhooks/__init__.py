"""
Webhooks module - inbound billing events.

This module handles:
- WebhookLog write-ahead log (every delivery is stored before processing)
- Ingestion, dispatch through a fixed (provider, event type) routing table
- Provider event processors (Chargebee, custom)
- Retry, admin listing and statistics, retention cleanup
"""
