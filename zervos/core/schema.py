"""
Entity models for the dashboard state layer.
Persisted field names are camelCase; Python attributes are snake_case.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

MIN_STEP = 1
MAX_STEP = 4


def is_step(value: Any) -> bool:
    """True for an integer wizard step in range; bools and floats are rejected."""
    return isinstance(value, int) and not isinstance(value, bool) and MIN_STEP <= value <= MAX_STEP


class WorkspaceStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class TeamRole(str, Enum):
    STAFF = "Staff"
    MANAGER = "Manager"
    ADMIN = "Admin"
    SUPER_ADMIN = "Super Admin"


ADMIN_ROLES = {TeamRole.MANAGER, TeamRole.ADMIN, TeamRole.SUPER_ADMIN}


def _coerce_id(v):
    if isinstance(v, bool):
        raise ValueError('id must be a string')
    if isinstance(v, int):
        v = str(v)
    if not isinstance(v, str) or not v.strip():
        raise ValueError('id cannot be empty')
    return v


class Workspace(BaseModel):
    """A tenant / business unit with its booking configuration."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    initials: str = ""
    color: str = ""
    email: str = ""
    description: str = ""
    status: WorkspaceStatus = WorkspaceStatus.ACTIVE
    booking_link: str = Field(default="", alias="bookingLink")
    prefix: str = ""
    max_digits: int = Field(default=4, alias="maxDigits", ge=0)

    @field_validator('id', mode='before')
    @classmethod
    def id_must_not_be_empty(cls, v):
        return _coerce_id(v)

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class TeamIdentity(BaseModel):
    """Identity and role shared by directory members and sessions."""

    id: str
    name: str = ""
    email: str = ""
    role: TeamRole = TeamRole.STAFF

    @model_validator(mode='before')
    @classmethod
    def fill_display_name(cls, data):
        if isinstance(data, dict):
            data = dict(data)
            if not isinstance(data.get('email'), str):
                data['email'] = ""
            if not isinstance(data.get('name'), str) or not data['name'].strip():
                data['name'] = data['email'] or "Member"
        return data

    @field_validator('id', mode='before')
    @classmethod
    def id_must_not_be_empty(cls, v):
        return _coerce_id(v)

    @field_validator('role', mode='before')
    @classmethod
    def unknown_role_is_staff(cls, v):
        valid_roles = [r.value for r in TeamRole]
        if isinstance(v, TeamRole):
            return v
        if v not in valid_roles:
            return TeamRole.STAFF
        return v

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class TeamMember(TeamIdentity):
    """A member of the team directory (read-only input to sign-in)."""


class TeamSession(TeamIdentity):
    """An authenticated team-member session held client-side."""

    @classmethod
    def from_member(cls, member: TeamMember) -> "TeamSession":
        return cls(id=member.id, name=member.name, email=member.email, role=member.role)

    @property
    def can_access_admin(self) -> bool:
        return self.role in ADMIN_ROLES


class CompanyProfile(BaseModel):
    """Company details captured at sign-up, used to seed a default workspace."""
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    email: Optional[str] = None
    industry: Optional[str] = None


class OnboardingState(BaseModel):
    """Wizard position and the payload each step has captured."""
    model_config = ConfigDict(populate_by_name=True)

    current_step: int = Field(default=MIN_STEP, alias="currentStep", ge=MIN_STEP, le=MAX_STEP)
    highest_step: int = Field(default=MIN_STEP, alias="highestStep", ge=MIN_STEP, le=MAX_STEP)
    step_data: Dict[int, Dict[str, Any]] = Field(default_factory=dict, alias="stepData")

    @model_validator(mode='after')
    def highest_covers_current(self):
        if self.highest_step < self.current_step:
            self.highest_step = self.current_step
        return self

    def to_record(self) -> Dict[str, Any]:
        return {
            "currentStep": self.current_step,
            "highestStep": self.highest_step,
            "stepData": {str(step): dict(data) for step, data in sorted(self.step_data.items())},
        }
