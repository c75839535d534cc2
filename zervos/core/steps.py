"""
Payload models owned by the individual wizard steps.

The machine stores step data opaquely; these models give each step its
defaults and its "can I continue" check.
"""

import re
from typing import Any, Dict, List, Type
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, ValidationError

_URL_FALLBACK = re.compile(r"^https?://.+\..+")


def is_valid_url(url: str) -> bool:
    """http(s) URL with a host; loose pattern match as a second chance."""
    if not url:
        return False
    parsed = urlparse(url)
    if parsed.scheme in ("http", "https") and parsed.netloc:
        return True
    return _URL_FALLBACK.match(url) is not None


class StepPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def is_valid(self) -> bool:
        return True

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class BusinessDetails(StepPayload):
    business_name: str = Field(default="", alias="businessName")
    website_url: str = Field(default="", alias="websiteUrl")
    currency: str = "INR"

    def is_valid(self) -> bool:
        return bool(self.business_name.strip()) and is_valid_url(self.website_url) and self.currency != ""


class IndustryNeeds(StepPayload):
    industries: List[str] = Field(default_factory=list)
    business_needs: List[str] = Field(default_factory=list, alias="businessNeeds")

    def is_valid(self) -> bool:
        return len(self.industries) > 0


class Availability(StepPayload):
    timezone: str = "Asia/Kolkata - IST (+05:30)"
    available_days: List[str] = Field(default_factory=list, alias="availableDays")
    available_time_start: str = Field(default="09:00 am", alias="availableTimeStart")
    available_time_end: str = Field(default="06:00 pm", alias="availableTimeEnd")

    def is_valid(self) -> bool:
        return (
            bool(self.timezone)
            and bool(self.available_time_start)
            and bool(self.available_time_end)
            and len(self.available_days) > 0
        )


class CustomLabels(StepPayload):
    event_type_label: str = Field(default="Properties Management", alias="eventTypeLabel")
    team_member_label: str = Field(default="Agents", alias="teamMemberLabel")

    def is_valid(self) -> bool:
        return bool(self.event_type_label.strip()) and bool(self.team_member_label.strip())


STEP_PAYLOADS: Dict[int, Type[StepPayload]] = {
    1: BusinessDetails,
    2: IndustryNeeds,
    3: Availability,
    4: CustomLabels,
}


def load_step_payload(step: int, data: Dict[str, Any]) -> StepPayload:
    """Payload for step built from stored data; unusable data yields defaults."""
    model = STEP_PAYLOADS[step]
    try:
        return model.model_validate(data or {})
    except ValidationError:
        return model()
