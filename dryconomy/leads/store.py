"""
Lead persistence backends.

LeadStore is the seam to the hosted database; the package ships an
in-memory store (tests, single-process use) and a JSON-lines file store.
"""

import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError

from dryconomy.core.enums import LeadStatus
from dryconomy.core.exceptions import InvalidInputError, LeadStoreError
from dryconomy.economics.models import SimulationInput, SimulationResult
from dryconomy.leads.models import LeadContact, LeadPage, LeadRecord, SimulationRecord

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 10


def build_record(
    lead: LeadContact,
    result: SimulationResult,
    inputs: Optional[SimulationInput] = None,
) -> LeadRecord:
    simulation = SimulationRecord(
        input_data=inputs.model_dump(mode="json") if inputs is not None else {},
        results=result.to_dict(),
    )
    return LeadRecord(contact=lead, simulation=simulation)


class LeadStore(ABC):
    """Abstract lead repository."""

    @abstractmethod
    def save(
        self,
        lead: LeadContact,
        result: SimulationResult,
        inputs: Optional[SimulationInput] = None,
    ) -> LeadRecord:
        """
        Persist a lead together with its simulation.

        Raises:
            LeadStoreError: if the record could not be written
        """
        pass

    @abstractmethod
    def get(self, lead_id: str) -> Optional[LeadRecord]:
        pass

    @abstractmethod
    def list(self, status: Optional[LeadStatus] = None, search: Optional[str] = None) -> List[LeadRecord]:
        """Leads newest first, optionally filtered by status and contact search."""
        pass

    @abstractmethod
    def update_status(self, lead_id: str, status: LeadStatus) -> LeadRecord:
        pass

    def list_page(
        self,
        status: Optional[LeadStatus] = None,
        search: Optional[str] = None,
        page: int = 1,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> LeadPage:
        """
        One page of the filtered listing (pages start at 1).

        Pages past the end are empty but still report the filtered total.

        Raises:
            InvalidInputError: if page or per_page is below 1
        """
        if isinstance(page, bool) or not isinstance(page, int) or page < 1:
            raise InvalidInputError("page", f"must be an integer >= 1, got {page!r}")
        if isinstance(per_page, bool) or not isinstance(per_page, int) or per_page < 1:
            raise InvalidInputError("per_page", f"must be an integer >= 1, got {per_page!r}")

        records = self.list(status=status, search=search)
        start = (page - 1) * per_page
        return LeadPage(
            items=records[start:start + per_page],
            total=len(records),
            page=page,
            per_page=per_page,
        )

    @staticmethod
    def _filter(records: List[LeadRecord], status: Optional[LeadStatus], search: Optional[str]) -> List[LeadRecord]:
        if status is not None:
            status = LeadStatus(status)
            records = [r for r in records if r.status == status]
        if search:
            records = [r for r in records if r.matches(search)]
        return sorted(records, key=lambda r: r.created_at, reverse=True)


class InMemoryLeadStore(LeadStore):
    """Thread-safe dictionary-backed store."""

    def __init__(self):
        self._records: Dict[str, LeadRecord] = {}
        self._lock = threading.Lock()

    def save(self, lead, result, inputs=None) -> LeadRecord:
        record = build_record(lead, result, inputs)
        with self._lock:
            self._records[record.id] = record
        logger.info(f"Lead {record.id} saved ({lead.email})")
        return record

    def get(self, lead_id: str) -> Optional[LeadRecord]:
        return self._records.get(lead_id)

    def list(self, status=None, search=None) -> List[LeadRecord]:
        with self._lock:
            records = list(self._records.values())
        return self._filter(records, status, search)

    def update_status(self, lead_id: str, status: LeadStatus) -> LeadRecord:
        with self._lock:
            record = self._records.get(lead_id)
            if record is None:
                raise LeadStoreError(f"Lead not found: {lead_id}")
            updated = record.model_copy(update={"status": LeadStatus(status)})
            self._records[lead_id] = updated
        return updated


class JsonLinesLeadStore(LeadStore):
    """
    Append-only file store, one JSON document per line.

    Status updates rewrite the whole file into a temporary sibling and swap
    it in with os.replace, so a failed rewrite leaves the previous file
    intact. Reads and writes share one re-entrant lock.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._lock = threading.RLock()

    def _read_all(self) -> List[LeadRecord]:
        with self._lock:
            if not self.path.exists():
                return []
            records = []
            try:
                with open(self.path, 'r', encoding='utf-8') as f:
                    for line_no, line in enumerate(f, start=1):
                        if not line.strip():
                            continue
                        try:
                            records.append(LeadRecord.model_validate_json(line))
                        except ValidationError as e:
                            raise LeadStoreError(f"Corrupt lead record at {self.path}:{line_no}: {e}")
            except OSError as e:
                raise LeadStoreError(f"Failed to read {self.path}: {e}")
            return records

    def _rewrite(self, records: List[LeadRecord]) -> None:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                for record in records:
                    f.write(record.model_dump_json() + "\n")
            os.replace(tmp_name, self.path)
        except OSError as e:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise LeadStoreError(f"Failed to rewrite {self.path}: {e}")

    def save(self, lead, result, inputs=None) -> LeadRecord:
        record = build_record(lead, result, inputs)
        try:
            with self._lock:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with open(self.path, 'a', encoding='utf-8') as f:
                    f.write(record.model_dump_json() + "\n")
        except OSError as e:
            raise LeadStoreError(f"Failed to write lead to {self.path}: {e}")
        logger.info(f"Lead {record.id} appended to {self.path}")
        return record

    def get(self, lead_id: str) -> Optional[LeadRecord]:
        for record in self._read_all():
            if record.id == lead_id:
                return record
        return None

    def list(self, status=None, search=None) -> List[LeadRecord]:
        return self._filter(self._read_all(), status, search)

    def update_status(self, lead_id: str, status: LeadStatus) -> LeadRecord:
        with self._lock:
            records = self._read_all()
            updated = None
            for i, record in enumerate(records):
                if record.id == lead_id:
                    updated = record.model_copy(update={"status": LeadStatus(status)})
                    records[i] = updated
            if updated is None:
                raise LeadStoreError(f"Lead not found: {lead_id}")
            self._rewrite(records)
        logger.info(f"Lead {lead_id} status set to '{updated.status.value}'")
        return updated
