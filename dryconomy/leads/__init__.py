"""Lead capture, persistence and the wizard's finish action."""

from dryconomy.leads.models import LeadContact, LeadPage, LeadRecord, SimulationRecord
from dryconomy.leads.store import LeadStore, InMemoryLeadStore, JsonLinesLeadStore
from dryconomy.leads.service import SimulationService, FinishOutcome

__all__ = [
    'LeadContact',
    'LeadRecord',
    'LeadPage',
    'SimulationRecord',
    'LeadStore',
    'InMemoryLeadStore',
    'JsonLinesLeadStore',
    'SimulationService',
    'FinishOutcome',
]
