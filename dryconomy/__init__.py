"""
Dryconomy - DryCooler Water Savings Simulator

This package compares the water consumption and running cost of a DryCooler
evaporative installation against a conventional cooling tower:
- Typed city and tariff reference data loaded from YAML/JSON
- Stateless savings calculator (module sizing, consumption, payback, ROI)
- Lead capture with pluggable persistence
- Fire-and-forget webhook notifications
"""

__version__ = "1.0.0"
__author__ = "Dryconomy Team"

from .core import *
from .config import *
from .economics import *
from .leads import *
from .webhooks import *

__all__ = [
    # Core
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

    # Config
    'CityParameters',
    'TariffConstants',
    'ConfigLoader',
    'CityCatalog',
    'TariffConfig',

    # Economics
    'SavingsCalculator',
    'SimulationInput',
    'SimulationResult',

    # Leads
    'LeadContact',
    'LeadRecord',
    'LeadPage',
    'LeadStore',
    'InMemoryLeadStore',
    'JsonLinesLeadStore',
    'SimulationService',
    'FinishOutcome',

    # Webhooks
    'WebhookConfig',
    'WebhookDelivery',
    'WebhookDispatcher',
]
