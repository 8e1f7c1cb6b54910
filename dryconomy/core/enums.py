"""
Enumerations shared across the simulator.

String-valued so they serialise directly into JSON records and webhook
payloads.
"""

from enum import Enum


class ScheduleBasis(str, Enum):
    """
    Unit in which the operating days of a simulation were expressed.

    The operating factor is derived from exactly one basis per calculation:
        WEEKLY: hours/24 * days_per_week/7
        YEARLY: hours/24 * days_per_year/365
    """
    WEEKLY = "weekly"
    YEARLY = "yearly"


class LeadStatus(str, Enum):
    """
    Sales pipeline status of a captured lead.

    Values match the status column of the admin leads table. The English
    names are accepted on lookup, e.g. LeadStatus("contacted").
    """
    NEW = "novo"
    CONTACTED = "em_atendimento"
    QUALIFIED = "qualificado"
    CONVERTED = "convertido"
    LOST = "perdido"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            member = cls.__members__.get(value.strip().upper())
            if member is not None:
                return member
        return None


class WebhookEvent(str, Enum):
    """Events that can be forwarded to external webhooks."""
    LEAD_CREATED = "lead.created"
    LEAD_UPDATED = "lead.updated"
    SIMULATION_CREATED = "simulation.created"
    TEST = "webhook.test"
