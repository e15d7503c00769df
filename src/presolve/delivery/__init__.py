"""Outbound delivery of submitted filings."""

from presolve.delivery.webhook import DeliveryError, SheetWebhook, WebhookDelivery

__all__ = ["DeliveryError", "SheetWebhook", "WebhookDelivery"]
