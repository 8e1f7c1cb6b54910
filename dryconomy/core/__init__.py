"""Core building blocks: exceptions, constants and enums."""

from dryconomy.core.exceptions import (
    DryconomyError,
    InvalidInputError,
    CityNotFoundError,
    ConfigurationError,
    LeadStoreError,
    PersistenceError,
    WebhookError,
)
from dryconomy.core.enums import ScheduleBasis, LeadStatus, WebhookEvent

__all__ = [
    'DryconomyError',
    'InvalidInputError',
    'CityNotFoundError',
    'ConfigurationError',
    'LeadStoreError',
    'PersistenceError',
    'WebhookError',
    'ScheduleBasis',
    'LeadStatus',
    'WebhookEvent',
]
