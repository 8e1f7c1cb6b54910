"""
Outbound webhook delivery.

Each event is POSTed once to every active subscriber. Outcomes (status
code, body, error) are logged and kept in an in-memory delivery log;
transport failures never reach the caller and nothing is retried.
"""

import logging
import threading
import time
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

import requests
from pydantic import ValidationError

from dryconomy.core.constants import WEBHOOK_BODY_LOG_LIMIT, WEBHOOK_TIMEOUT_S
from dryconomy.core.enums import WebhookEvent
from dryconomy.core.exceptions import WebhookError
from dryconomy.webhooks.models import WebhookConfig, WebhookDelivery

logger = logging.getLogger(__name__)


def build_payload(event: WebhookEvent, data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": WebhookEvent(event).value,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "data": data,
    }


class WebhookDispatcher:
    """
    Fire-and-forget webhook sender.

    Example:
        dispatcher = WebhookDispatcher()
        dispatcher.register(WebhookConfig(name="CRM", url="https://crm.example/hook",
                                          events=[WebhookEvent.SIMULATION_CREATED]))
        dispatcher.dispatch(WebhookEvent.SIMULATION_CREATED, {"leadId": "..."})
    """

    def __init__(
        self,
        configs: Iterable[WebhookConfig] = (),
        enabled: bool = True,
        timeout: float = WEBHOOK_TIMEOUT_S,
    ):
        self.enabled = enabled
        self.timeout = timeout
        self._configs: Dict[str, WebhookConfig] = {}
        self._deliveries: List[WebhookDelivery] = []
        self._lock = threading.Lock()
        for config in configs:
            self.register(config)

    def register(self, config: WebhookConfig | Dict[str, Any]) -> WebhookConfig:
        """
        Add or replace a webhook configuration.

        Raises:
            WebhookError: if the configuration is invalid
        """
        if not isinstance(config, WebhookConfig):
            try:
                config = WebhookConfig.model_validate(config)
            except ValidationError as e:
                raise WebhookError(f"Invalid webhook configuration: {e}")
        self._configs[config.id] = config
        logger.info(f"Webhook '{config.name}' registered for {[e.value for e in config.events]}")
        return config

    def unregister(self, config_id: str) -> bool:
        return self._configs.pop(config_id, None) is not None

    def configs(self, event: Optional[WebhookEvent] = None) -> List[WebhookConfig]:
        configs = list(self._configs.values())
        if event is not None:
            configs = [c for c in configs if event in c.events]
        return configs

    def dispatch(self, event: WebhookEvent, data: Dict[str, Any]) -> List[WebhookDelivery]:
        """
        Send an event to every active subscriber.

        Returns:
            One WebhookDelivery per attempted endpoint (empty when disabled
            or nobody is subscribed).
        """
        event = WebhookEvent(event)
        if not self.enabled:
            logger.debug(f"Webhooks disabled; '{event.value}' not sent")
            return []

        targets = [c for c in self._configs.values() if c.subscribed_to(event)]
        if not targets:
            logger.debug(f"No active webhook subscribed to '{event.value}'")
            return []

        payload = build_payload(event, data)
        return [self._send(config, event, payload) for config in targets]

    def test(self, config: WebhookConfig) -> WebhookDelivery:
        """Send a test event to one endpoint regardless of its subscriptions."""
        payload = build_payload(WebhookEvent.TEST, {"message": f"Test delivery for '{config.name}'"})
        return self._send(config, WebhookEvent.TEST, payload)

    def logs(self, config_id: Optional[str] = None) -> List[WebhookDelivery]:
        """Recorded deliveries, newest first."""
        with self._lock:
            deliveries = list(self._deliveries)
        if config_id is not None:
            deliveries = [d for d in deliveries if d.config_id == config_id]
        return deliveries[::-1]

    def _send(self, config: WebhookConfig, event: WebhookEvent, payload: Dict[str, Any]) -> WebhookDelivery:
        headers = {"Content-Type": "application/json", **config.headers}
        delivery = WebhookDelivery(config_id=config.id, event=event, url=config.url)
        start = time.perf_counter()
        try:
            response = requests.post(config.url, json=payload, headers=headers, timeout=self.timeout)
            delivery.status_code = response.status_code
            delivery.response_body = (response.text or "")[:WEBHOOK_BODY_LOG_LIMIT]
            delivery.success = response.ok
            if response.ok:
                logger.info(f"Webhook '{config.name}' accepted '{event.value}' ({response.status_code})")
            else:
                logger.warning(
                    f"Webhook '{config.name}' rejected '{event.value}': "
                    f"{response.status_code} {delivery.response_body}"
                )
        except requests.RequestException as e:
            delivery.error = str(e)
            logger.error(f"Webhook '{config.name}' delivery failed: {e}")
        delivery.duration_ms = (time.perf_counter() - start) * 1000.0

        with self._lock:
            self._deliveries.append(delivery)
        return delivery
