"""Outbound webhook configuration and delivery."""

from dryconomy.webhooks.models import WebhookConfig, WebhookDelivery
from dryconomy.webhooks.dispatcher import WebhookDispatcher, build_payload

__all__ = ['WebhookConfig', 'WebhookDelivery', 'WebhookDispatcher', 'build_payload']
