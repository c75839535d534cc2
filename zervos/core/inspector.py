"""
Store inspection - decodes every known record and reports what is unusable.

Read-only: corrupt records are reported, never repaired.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from .codecs import (
    Decoded,
    decode_company,
    decode_members,
    decode_onboarding,
    decode_selected_id,
    decode_session,
    decode_workspaces,
)
from .config import (
    COMPANY_KEY,
    MEMBER_DIRECTORY_KEY,
    ONBOARDING_KEY,
    SELECTED_WORKSPACE_KEY,
    TEAM_SESSION_KEY,
    WORKSPACES_KEY,
)
from .store import STATUS_ABSENT, STATUS_OK, SafeStore

DECODERS: Dict[str, Callable[[Any], Decoded]] = {
    WORKSPACES_KEY: decode_workspaces,
    SELECTED_WORKSPACE_KEY: decode_selected_id,
    TEAM_SESSION_KEY: decode_session,
    ONBOARDING_KEY: decode_onboarding,
    MEMBER_DIRECTORY_KEY: decode_members,
    COMPANY_KEY: decode_company,
}


@dataclass
class RecordStatus:
    key: str
    status: str  # ok|absent|malformed|unavailable|degraded
    errors: List[str] = field(default_factory=list)


@dataclass
class InspectionReport:
    """Outcome of a store inspection."""
    started_at: datetime
    completed_at: Optional[datetime] = None
    records: List[RecordStatus] = field(default_factory=list)
    unknown_keys: List[str] = field(default_factory=list)
    dangling_selection: bool = False

    @property
    def issues_found(self) -> int:
        issues = sum(1 for r in self.records if r.status not in (STATUS_OK, STATUS_ABSENT))
        return issues + (1 if self.dangling_selection else 0)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "started_at": self.started_at.isoformat(),
            "issues_found": self.issues_found,
            "records": [
                {"key": r.key, "status": r.status, "errors": list(r.errors)} for r in self.records
            ],
            "unknown_keys": list(self.unknown_keys),
            "dangling_selection": self.dangling_selection,
        }
        if self.completed_at:
            data["completed_at"] = self.completed_at.isoformat()
        return data


def inspect_store(store: SafeStore) -> InspectionReport:
    report = InspectionReport(started_at=datetime.now())

    decoded_values = {}
    for key, decoder in DECODERS.items():
        result = store.read(key, None)
        if result.used_fallback:
            report.records.append(RecordStatus(key, result.status))
            continue
        decoded = decoder(result.value)
        decoded_values[key] = decoded.value
        status = STATUS_OK if decoded.ok else "degraded"
        report.records.append(RecordStatus(key, status, list(decoded.errors)))

    selected_id = decoded_values.get(SELECTED_WORKSPACE_KEY)
    if selected_id is not None:
        ids = {ws.id for ws in decoded_values.get(WORKSPACES_KEY) or []}
        report.dangling_selection = selected_id not in ids

    report.unknown_keys = [k for k in store.keys() if k not in DECODERS]
    report.completed_at = datetime.now()
    return report
