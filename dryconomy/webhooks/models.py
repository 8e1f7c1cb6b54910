"""
Webhook configuration and delivery log models.
"""

import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from dryconomy.core.enums import WebhookEvent


class WebhookConfig(BaseModel):
    """An external endpoint subscribed to one or more events."""
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str
    url: str
    events: List[WebhookEvent] = Field(..., min_length=1)
    headers: Dict[str, str] = Field(default_factory=dict)
    is_active: bool = True

    @field_validator("url")
    @classmethod
    def _http_url(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("url must start with http:// or https://")
        return v

    def subscribed_to(self, event: WebhookEvent) -> bool:
        return self.is_active and event in self.events


class WebhookDelivery(BaseModel):
    """Outcome of a single POST attempt."""
    config_id: str
    event: WebhookEvent
    url: str
    success: bool = False
    status_code: Optional[int] = None
    response_body: Optional[str] = None
    error: Optional[str] = None
    duration_ms: float = 0.0
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
