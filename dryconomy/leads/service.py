"""
Finish action of the simulation wizard.

Computes the result for a completed input, persists the lead and forwards
the event to webhooks. All collaborators are injected.

Save policy:
    1. Compute (validation errors propagate, nothing is saved).
    2. Save to the LeadStore.
    3. Dispatch 'lead.created' when the store accepted the lead, then
       'simulation.created' whether or not the store succeeded, so webhooks
       act as a fallback destination.
    4. Succeed if at least one destination accepted the record, otherwise
       raise PersistenceError.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from dryconomy.config.catalog import CityCatalog, TariffConfig
from dryconomy.core.enums import LeadStatus, WebhookEvent
from dryconomy.core.exceptions import InvalidInputError, LeadStoreError, PersistenceError
from dryconomy.economics.calculator import SavingsCalculator
from dryconomy.economics.models import SimulationInput, SimulationResult
from dryconomy.leads.models import LeadContact, LeadRecord
from dryconomy.leads.store import LeadStore
from dryconomy.webhooks.dispatcher import WebhookDispatcher

logger = logging.getLogger(__name__)


@dataclass
class FinishOutcome:
    """Result of SimulationService.finish()."""
    result: SimulationResult
    lead_id: Optional[str] = None
    saved_to_store: bool = False
    saved_to_webhook: bool = False

    @property
    def success(self) -> bool:
        return self.saved_to_store or self.saved_to_webhook


class SimulationService:
    """
    Orchestrates compute -> persist -> notify.

    Example:
        service = SimulationService(CityCatalog.default(), TariffConfig.default(),
                                    store=InMemoryLeadStore())
        outcome = service.finish(contact, inputs)
    """

    def __init__(
        self,
        catalog: CityCatalog,
        tariff_config: TariffConfig,
        store: LeadStore,
        dispatcher: Optional[WebhookDispatcher] = None,
        calculator: Optional[SavingsCalculator] = None,
    ):
        self.catalog = catalog
        self.tariff_config = tariff_config
        self.store = store
        self.dispatcher = dispatcher
        self.calculator = calculator or SavingsCalculator()

    def preview(self, inputs: SimulationInput | Mapping[str, Any]) -> SimulationResult:
        """Compute without saving (the wizard's live results step)."""
        if not isinstance(inputs, SimulationInput):
            inputs = SimulationInput.from_request(inputs)
        return self.calculator.simulate(inputs, self.catalog, self.tariff_config)

    def finish(
        self,
        contact: LeadContact | Mapping[str, Any],
        inputs: SimulationInput | Mapping[str, Any],
    ) -> FinishOutcome:
        """
        Compute, save and notify.

        Raises:
            InvalidInputError: on invalid contact or simulation input
            PersistenceError: if neither the store nor any webhook accepted it
        """
        if not isinstance(contact, LeadContact):
            contact = LeadContact.from_form(contact)
        if not isinstance(inputs, SimulationInput):
            inputs = SimulationInput.from_request(inputs)

        result = self.preview(inputs)
        outcome = FinishOutcome(result=result)

        try:
            record = self.store.save(contact, result, inputs)
            outcome.lead_id = record.id
            outcome.saved_to_store = True
        except LeadStoreError as e:
            logger.warning(f"Lead store failed for {contact.email}: {e}; falling back to webhooks")
        else:
            self._notify(WebhookEvent.LEAD_CREATED, {
                "leadId": record.id,
                "status": record.status.value,
                "createdAt": record.created_at.isoformat(),
                "userData": contact.model_dump(mode="json"),
            })

        if self.dispatcher is not None:
            deliveries = self.dispatcher.dispatch(
                WebhookEvent.SIMULATION_CREATED,
                {
                    "userData": contact.model_dump(mode="json"),
                    "inputs": inputs.model_dump(mode="json"),
                    "results": result.to_dict(),
                    "leadId": outcome.lead_id,
                },
            )
            outcome.saved_to_webhook = any(d.success for d in deliveries)

        if not outcome.success:
            logger.error(f"Simulation for {contact.email} could not be saved to any destination")
            raise PersistenceError(
                "Simulation could not be saved to any destination; check connectivity and try again"
            )

        logger.info(
            f"Simulation finished for {contact.email} "
            f"(store={outcome.saved_to_store}, webhook={outcome.saved_to_webhook})"
        )
        return outcome

    def update_status(self, lead_id: str, status: LeadStatus | str) -> LeadRecord:
        """
        Move a lead along the pipeline and announce it as 'lead.updated'.

        Raises:
            InvalidInputError: if status is not a known LeadStatus
            LeadStoreError: if the lead does not exist or cannot be written
        """
        try:
            status = LeadStatus(status)
        except ValueError:
            raise InvalidInputError("status", f"unknown lead status {status!r}")

        previous = self.store.get(lead_id)
        record = self.store.update_status(lead_id, status)
        self._notify(WebhookEvent.LEAD_UPDATED, {
            "leadId": record.id,
            "status": record.status.value,
            "previousStatus": previous.status.value if previous is not None else None,
            "userData": record.contact.model_dump(mode="json"),
        })
        return record

    def _notify(self, event: WebhookEvent, data: Dict[str, Any]) -> None:
        if self.dispatcher is not None:
            self.dispatcher.dispatch(event, data)
