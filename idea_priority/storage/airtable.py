"""
Airtable storage backend for Idea Priority.

Implements the repository interfaces using Airtable as the persistence layer.
Uses the Airtable REST API for all operations.

Airtable API Documentation: https://airtable.com/developers/web/api/introduction

=============================================================================
AIRTABLE SCHEMA
=============================================================================

Ideas table (AIRTABLE_IDEAS_TABLE):

| Column Name    | Field Type      | Description                          |
|----------------|-----------------|--------------------------------------|
| idea_id        | Number          | Idea identifier                      |
| creator_id     | Number          | Owning creator                       |
| votes          | Number          | Community vote count                 |
| status         | Single select   | pending/approved/completed/rejected  |
| title          | Single line text| Idea title                           |
| description    | Long text       | Idea description                     |
| niche          | Single line text| Content niche (optional)             |
| created_at     | Date            | When the idea was suggested          |

Creators table (AIRTABLE_CREATORS_TABLE):

| creator_id     | Number          | Creator identifier                   |
| priority_weight| Number          | Vote share of the blend (30-70)      |

Opportunity scores table (AIRTABLE_SIGNALS_TABLE), written by the external
analysis job only:

| idea_id           | Number       | Idea identifier                    |
| opportunity_score | Number       | 0-100, empty until analysed        |
| updated_at        | Date         | Last analysis refresh              |
| demand_score, competition_score (Number), demand_label,               |
| competition_label, opportunity_label, composite_label (Text)          |

Request failures are not caught here: requests exceptions and HTTP errors
propagate to the caller.
=============================================================================
"""

import logging
import time
from typing import Any, Dict, Iterable, List, Optional

import requests

from idea_priority.config import (
    AIRTABLE_API_KEY,
    AIRTABLE_BASE_ID,
    AIRTABLE_IDEAS_TABLE,
    AIRTABLE_CREATORS_TABLE,
    AIRTABLE_SIGNALS_TABLE,
    REQUEST_TIMEOUT,
)
from idea_priority.models.idea import Idea, parse_timestamp
from idea_priority.models.signal import OpportunitySignal
from idea_priority.storage.base import IdeaRepository, SignalRepository, WeightRepository

logger = logging.getLogger(__name__)


def _optional_int(value) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


def formula_string(value: str) -> str:
    """Quote a value as an Airtable formula string literal."""
    escaped = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


class AirtableClient:
    """
    Thin Airtable REST client shared by the repositories.

    Configuration is pulled from environment variables via idea_priority.config
    unless given explicitly.
    """

    # Airtable API base URL
    API_BASE = "https://api.airtable.com/v0"

    # Airtable allows 5 requests per second
    REQUEST_DELAY = 0.25

    def __init__(
        self,
        api_key: str = None,
        base_id: str = None,
        timeout: int = None,
    ):
        # Use provided values, or fall back to config if None (not empty string)
        self.api_key = api_key if api_key is not None else AIRTABLE_API_KEY
        self.base_id = base_id if base_id is not None else AIRTABLE_BASE_ID
        self.timeout = timeout if timeout is not None else REQUEST_TIMEOUT

        self._last_request_time = 0.0

    @property
    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def table_url(self, table: str) -> str:
        return f"{self.API_BASE}/{self.base_id}/{table}"

    def _rate_limit(self) -> None:
        """Enforce rate limiting between requests."""
        now = time.time()
        elapsed = now - self._last_request_time
        if elapsed < self.REQUEST_DELAY:
            time.sleep(self.REQUEST_DELAY - elapsed)
        self._last_request_time = time.time()

    def validate_config(self) -> None:
        """Raise ValueError if credentials are missing."""
        if not self.api_key:
            raise ValueError("AIRTABLE_API_KEY is not configured")
        if not self.base_id:
            raise ValueError("AIRTABLE_BASE_ID is not configured")

    def list_records(
        self,
        table: str,
        filter_formula: str = None,
        sort_field: str = None,
        sort_direction: str = "desc",
        max_records: int = None,
    ) -> List[Dict[str, Any]]:
        """
        List records from a table with optional filtering and sorting.

        Follows Airtable's pagination offset, so one logical query may span
        several pages of up to 100 records.

        Args:
            table: Table name.
            filter_formula: Airtable formula for filtering.
            sort_field: Field name to sort by.
            sort_direction: "asc" or "desc".
            max_records: Maximum number of records to return.

        Returns:
            List of Airtable record dicts.

        Raises:
            requests.RequestException: On network or HTTP errors.
        """
        self.validate_config()

        params: Dict[str, Any] = {}
        if filter_formula:
            params["filterByFormula"] = filter_formula
        if sort_field:
            params["sort[0][field]"] = sort_field
            params["sort[0][direction]"] = sort_direction
        if max_records:
            params["maxRecords"] = max_records

        records: List[Dict[str, Any]] = []
        while True:
            self._rate_limit()
            response = requests.get(
                self.table_url(table),
                headers=self._headers,
                params=params,
                timeout=self.timeout,
            )
            response.raise_for_status()

            data = response.json()
            records.extend(data.get("records", []))

            offset = data.get("offset")
            if not offset:
                break
            params["offset"] = offset

        return records

    def query_records(self, table: str, filter_formula: str) -> List[Dict[str, Any]]:
        """
        List records through the POST listRecords endpoint.

        The formula travels in the JSON body instead of the URL, so it is not
        bound by Airtable's 16k URL limit. Pagination offsets are followed.

        Args:
            table: Table name.
            filter_formula: Airtable formula for filtering.

        Returns:
            List of Airtable record dicts.

        Raises:
            requests.RequestException: On network or HTTP errors.
        """
        self.validate_config()

        body: Dict[str, Any] = {"filterByFormula": filter_formula}

        records: List[Dict[str, Any]] = []
        while True:
            self._rate_limit()
            response = requests.post(
                f"{self.table_url(table)}/listRecords",
                headers=self._headers,
                json=dict(body),
                timeout=self.timeout,
            )
            response.raise_for_status()

            data = response.json()
            records.extend(data.get("records", []))

            offset = data.get("offset")
            if not offset:
                break
            body["offset"] = offset

        return records

    def update_record(self, table: str, record_id: str, fields: Dict[str, Any]) -> None:
        """
        Patch fields of an existing record.

        Raises:
            requests.RequestException: On network or HTTP errors.
        """
        self.validate_config()
        self._rate_limit()

        response = requests.patch(
            f"{self.table_url(table)}/{record_id}",
            headers=self._headers,
            json={"fields": fields},
            timeout=self.timeout,
        )
        response.raise_for_status()


class AirtableIdeaRepository(IdeaRepository):
    """Ideas stored in an Airtable table."""

    def __init__(self, client: AirtableClient = None, table_name: str = None):
        self.client = client or AirtableClient()
        self.table_name = table_name if table_name is not None else AIRTABLE_IDEAS_TABLE

    @property
    def name(self) -> str:
        return "airtable"

    @staticmethod
    def record_to_idea(record: Dict[str, Any]) -> Optional[Idea]:
        """
        Convert an Airtable record to an Idea.

        Returns None for records missing idea_id or creator_id.
        """
        fields = record.get("fields", {})

        if fields.get("idea_id") is None or fields.get("creator_id") is None:
            return None

        data = {
            "id": int(fields["idea_id"]),
            "creator_id": int(fields["creator_id"]),
            "votes": int(fields.get("votes") or 0),
            "status": fields.get("status", ""),
            "title": fields.get("title", ""),
            "description": fields.get("description", ""),
            "niche": fields.get("niche"),
        }
        created_at = parse_timestamp(fields.get("created_at"))
        if created_at:
            data["created_at"] = created_at

        return Idea(**data)

    def _records_to_ideas(self, records: List[Dict[str, Any]]) -> List[Idea]:
        ideas = []
        for record in records:
            idea = self.record_to_idea(record)
            if idea is None:
                logger.warning("Skipping idea record %s with missing ids", record.get("id"))
                continue
            ideas.append(idea)
        return ideas

    def list_ideas(self, creator_id: int, status: str) -> List[Idea]:
        formula = f"AND({{creator_id}}={int(creator_id)}, {{status}}={formula_string(status)})"
        records = self.client.list_records(
            self.table_name,
            filter_formula=formula,
            sort_field="votes",
            sort_direction="desc",
        )
        return self._records_to_ideas(records)

    def get_idea(self, idea_id: int, creator_id: int) -> Optional[Idea]:
        formula = f"AND({{idea_id}}={int(idea_id)}, {{creator_id}}={int(creator_id)})"
        records = self.client.list_records(
            self.table_name,
            filter_formula=formula,
            max_records=1,
        )
        ideas = self._records_to_ideas(records)
        return ideas[0] if ideas else None


class AirtableWeightRepository(WeightRepository):
    """Priority weights stored on the creators table."""

    FIELD = "priority_weight"

    def __init__(self, client: AirtableClient = None, table_name: str = None):
        self.client = client or AirtableClient()
        self.table_name = table_name if table_name is not None else AIRTABLE_CREATORS_TABLE

    @property
    def name(self) -> str:
        return "airtable"

    def _find_creator(self, creator_id: int) -> Optional[Dict[str, Any]]:
        records = self.client.list_records(
            self.table_name,
            filter_formula=f"{{creator_id}}={int(creator_id)}",
            max_records=1,
        )
        return records[0] if records else None

    def get_weight(self, creator_id: int) -> Optional[int]:
        record = self._find_creator(creator_id)
        if record is None:
            return None
        return _optional_int(record.get("fields", {}).get(self.FIELD))

    def set_weight(self, creator_id: int, weight: int) -> None:
        record = self._find_creator(creator_id)
        if record is None:
            # Nothing to update; mirrors an UPDATE matching zero rows
            logger.info("No creator %s in %s; weight not stored", creator_id, self.table_name)
            return
        self.client.update_record(self.table_name, record["id"], {self.FIELD: weight})


class AirtableSignalRepository(SignalRepository):
    """Opportunity signals read from the analysis job's table."""

    def __init__(self, client: AirtableClient = None, table_name: str = None):
        self.client = client or AirtableClient()
        self.table_name = table_name if table_name is not None else AIRTABLE_SIGNALS_TABLE

    @property
    def name(self) -> str:
        return "airtable"

    @staticmethod
    def record_to_signal(record: Dict[str, Any]) -> Optional[OpportunitySignal]:
        """Convert an Airtable record to an OpportunitySignal (None without idea_id)."""
        fields = record.get("fields", {})
        if fields.get("idea_id") is None:
            return None

        return OpportunitySignal(
            idea_id=int(fields["idea_id"]),
            opportunity_score=_optional_int(fields.get("opportunity_score")),
            updated_at=parse_timestamp(fields.get("updated_at")),
            demand_score=_optional_int(fields.get("demand_score")),
            demand_label=fields.get("demand_label"),
            competition_score=_optional_int(fields.get("competition_score")),
            competition_label=fields.get("competition_label"),
            opportunity_label=fields.get("opportunity_label"),
            composite_label=fields.get("composite_label"),
        )

    def get_signal(self, idea_id: int) -> Optional[OpportunitySignal]:
        records = self.client.list_records(
            self.table_name,
            filter_formula=f"{{idea_id}}={int(idea_id)}",
            max_records=1,
        )
        if not records:
            return None
        return self.record_to_signal(records[0])

    def get_signals(self, idea_ids: Iterable[int]) -> Dict[int, OpportunitySignal]:
        ids = sorted({int(i) for i in idea_ids})
        if not ids:
            return {}

        formula = "OR(" + ", ".join(f"{{idea_id}}={i}" for i in ids) + ")"
        records = self.client.query_records(self.table_name, formula)

        signals: Dict[int, OpportunitySignal] = {}
        for record in records:
            signal = self.record_to_signal(record)
            if signal is not None:
                signals[signal.idea_id] = signal
        return signals
