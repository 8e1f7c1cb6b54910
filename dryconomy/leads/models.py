"""
Lead and simulation record models.
"""

import math
import re
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from dryconomy.core.enums import LeadStatus
from dryconomy.core.exceptions import InvalidInputError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LeadContact(BaseModel):
    """Prospect contact data as captured by the wizard."""
    name: str
    email: str
    phone: Optional[str] = None
    company: Optional[str] = None
    state: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name is required")
        return v

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if not _EMAIL_RE.match(v):
            raise ValueError("a valid email address is required")
        return v

    @field_validator("phone", "company", "state", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @classmethod
    def from_form(cls, payload: Mapping[str, Any]) -> "LeadContact":
        """
        Raises:
            InvalidInputError: naming the first invalid contact field
        """
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first.get("loc", ())) or "contact"
            raise InvalidInputError(field, first.get("msg", "invalid value"))


class SimulationRecord(BaseModel):
    """Stored simulation attached to a lead."""
    input_data: Dict[str, Any] = Field(default_factory=dict)
    results: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=_utcnow)


class LeadRecord(BaseModel):
    """A persisted lead with its simulation."""
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    contact: LeadContact
    status: LeadStatus = LeadStatus.NEW
    simulation: Optional[SimulationRecord] = None
    created_at: datetime = Field(default_factory=_utcnow)

    def matches(self, search: str) -> bool:
        """Case-insensitive substring search over the contact fields."""
        needle = search.strip().lower()
        haystack = (self.contact.name, self.contact.email, self.contact.company, self.contact.phone)
        return any(needle in value.lower() for value in haystack if value)


class LeadPage(BaseModel):
    """One page of a filtered lead listing, with the filtered total."""
    items: List[LeadRecord] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    per_page: int = 10

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.per_page) if self.total else 0
