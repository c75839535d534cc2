"""
Encode/decode pairs for every persisted record.

Decoders accept whatever JSON SafeStore produced and never raise: they return
a Decoded result carrying the usable value, whether it decoded cleanly, and
the problems found along the way. Problems are logged as warnings.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import ValidationError

from .schema import (
    MAX_STEP,
    MIN_STEP,
    CompanyProfile,
    OnboardingState,
    TeamMember,
    TeamSession,
    Workspace,
    is_step,
)

from util.logging import logger

T = TypeVar("T")


@dataclass
class Decoded(Generic[T]):
    value: T
    ok: bool = True
    errors: List[str] = field(default_factory=list)


def _result(record: str, value, errors: List[str]) -> Decoded:
    if errors:
        logger.log_decode_issues(record, errors)
    return Decoded(value=value, ok=not errors, errors=errors)


# ----------------------------------------------------------------------
# Workspaces
# ----------------------------------------------------------------------
def encode_workspaces(workspaces: List[Workspace]) -> List[Dict[str, Any]]:
    return [ws.to_record() for ws in workspaces]


def decode_workspaces(raw: Any) -> Decoded[List[Workspace]]:
    """Decode the workspace list, dropping invalid entries and repeated ids."""
    if raw is None:
        return Decoded([])
    if not isinstance(raw, list):
        return _result("workspaces", [], [f"expected a list, got {type(raw).__name__}"])

    errors = []
    workspaces = []
    seen = set()
    for index, item in enumerate(raw):
        try:
            ws = Workspace.model_validate(item)
        except ValidationError as e:
            errors.append(f"entry {index}: {e.error_count()} validation error(s)")
            continue
        if ws.id in seen:
            errors.append(f"entry {index}: duplicate id {ws.id}")
            continue
        seen.add(ws.id)
        workspaces.append(ws)
    return _result("workspaces", workspaces, errors)


def encode_selected_id(workspace: Optional[Workspace]) -> Optional[str]:
    return workspace.id if workspace is not None else None


def decode_selected_id(raw: Any) -> Decoded[Optional[str]]:
    if raw is None:
        return Decoded(None)
    if isinstance(raw, int) and not isinstance(raw, bool):
        return Decoded(str(raw))
    if isinstance(raw, str) and raw.strip():
        return Decoded(raw)
    return _result("selectedWorkspaceId", None, [f"unusable selection id {raw!r}"])


# ----------------------------------------------------------------------
# Team session and member directory
# ----------------------------------------------------------------------
def encode_session(session: TeamSession) -> Dict[str, Any]:
    return session.to_record()


def decode_session(raw: Any) -> Decoded[Optional[TeamSession]]:
    """Decode a session; a record without an id counts as no session."""
    if raw is None:
        return Decoded(None)
    if not isinstance(raw, dict):
        return _result("team_session", None, [f"expected an object, got {type(raw).__name__}"])
    try:
        return Decoded(TeamSession.model_validate(raw))
    except ValidationError as e:
        return _result("team_session", None, [f"{e.error_count()} validation error(s)"])


def decode_members(raw: Any) -> Decoded[List[TeamMember]]:
    if raw is None:
        return Decoded([])
    if not isinstance(raw, list):
        return _result("member_directory", [], [f"expected a list, got {type(raw).__name__}"])

    errors = []
    members = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            errors.append(f"entry {index}: expected an object")
            continue
        try:
            members.append(TeamMember.model_validate(item))
        except ValidationError as e:
            errors.append(f"entry {index}: {e.error_count()} validation error(s)")
    return _result("member_directory", members, errors)


def decode_company(raw: Any) -> Decoded[Optional[CompanyProfile]]:
    if raw is None:
        return Decoded(None)
    if not isinstance(raw, dict):
        return _result("company", None, [f"expected an object, got {type(raw).__name__}"])
    try:
        return Decoded(CompanyProfile.model_validate(raw))
    except ValidationError as e:
        return _result("company", None, [f"{e.error_count()} validation error(s)"])


# ----------------------------------------------------------------------
# Onboarding
# ----------------------------------------------------------------------
def encode_onboarding(state: OnboardingState) -> Dict[str, Any]:
    return state.to_record()


def decode_onboarding(raw: Any) -> Decoded[OnboardingState]:
    """Decode wizard progress, repairing each field independently."""
    if raw is None:
        return Decoded(OnboardingState())
    if not isinstance(raw, dict):
        return _result("onboarding", OnboardingState(), [f"expected an object, got {type(raw).__name__}"])

    errors = []

    current = raw.get("currentStep")
    if not is_step(current):
        errors.append(f"currentStep {current!r} outside {MIN_STEP}..{MAX_STEP}")
        current = MIN_STEP

    highest = raw.get("highestStep", current)
    if not is_step(highest):
        errors.append(f"highestStep {highest!r} outside {MIN_STEP}..{MAX_STEP}")
        highest = current

    step_data = {}
    raw_data = raw.get("stepData", {})
    if not isinstance(raw_data, dict):
        errors.append("stepData is not an object")
        raw_data = {}
    for key, payload in raw_data.items():
        try:
            step = int(key)
        except (TypeError, ValueError):
            errors.append(f"stepData key {key!r} is not a step number")
            continue
        if not is_step(step):
            errors.append(f"stepData key {step} outside {MIN_STEP}..{MAX_STEP}")
            continue
        if not isinstance(payload, dict):
            errors.append(f"stepData[{step}] is not an object")
            continue
        step_data[step] = dict(payload)

    state = OnboardingState(
        current_step=current,
        highest_step=max(highest, current),
        step_data=step_data,
    )
    return _result("onboarding", state, errors)
