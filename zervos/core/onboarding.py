"""
OnboardingMachine - the four-step setup wizard.

Steps run 1 (business details) to 4 (custom labels); completion is a redirect,
not a fifth state. Position and every step's captured fields are written to
SafeStore on each transition so a reload resumes where the user left off.
Transitions never fail: targets are clamped into range.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .codecs import decode_onboarding, encode_onboarding
from .config import ONBOARDING_KEY, VALID_JUMP_POLICIES, get_onboarding_jump_policy
from .events import StateNotifier
from .navigation import DASHBOARD, Navigator, noop_navigator
from .schema import MAX_STEP, MIN_STEP, OnboardingState, is_step
from .steps import StepPayload, load_step_payload
from .store import SafeStore

from util.logging import logger

JUMP_ANY = "any"
JUMP_VISITED = "visited"


@dataclass(frozen=True)
class StepInfo:
    number: int
    title: str
    description: str


STEPS: List[StepInfo] = [
    StepInfo(1, "Business details", "Tell us about your business, and we'll work our magic."),
    StepInfo(2, "Industry details", "Based on your industry, we set up your dashboard to align with your business."),
    StepInfo(3, "Set up your availability", "Share your availability and start getting booked."),
    StepInfo(4, "Update your custom labels", "Rename certain modules in the product to match with your business terminologies."),
]


def clamp_step(step: int, upper: int = MAX_STEP) -> int:
    return max(MIN_STEP, min(int(step), upper))


class OnboardingMachine:
    """Linear wizard controller with persisted, resumable state."""

    def __init__(self, store: SafeStore, *, jump_policy: Optional[str] = None,
                 navigate: Optional[Navigator] = None):
        self.store = store
        policy = (jump_policy or get_onboarding_jump_policy()).lower()
        if policy not in VALID_JUMP_POLICIES:
            logger.warning(f"Unknown onboarding jump policy '{policy}', using '{JUMP_ANY}'")
            policy = JUMP_ANY
        self.jump_policy = policy
        self.navigate = navigate or noop_navigator
        self.notifier = StateNotifier("onboarding")
        self._state = OnboardingState()

    # ------------------------------------------------------------------
    # Readers
    # ------------------------------------------------------------------
    @property
    def current_step(self) -> int:
        return self._state.current_step

    @property
    def highest_step(self) -> int:
        return self._state.highest_step

    @property
    def step_data(self) -> Dict[int, Dict[str, Any]]:
        return {step: dict(data) for step, data in self._state.step_data.items()}

    @property
    def current_step_info(self) -> StepInfo:
        return STEPS[self.current_step - 1]

    @property
    def is_last_step(self) -> bool:
        return self.current_step == MAX_STEP

    @property
    def data(self) -> Dict[str, Any]:
        """All captured fields merged in step order."""
        merged: Dict[str, Any] = {}
        for step in sorted(self._state.step_data):
            merged.update(self._state.step_data[step])
        return merged

    def get_step_data(self, step: int) -> Dict[str, Any]:
        return dict(self._state.step_data.get(step, {}))

    def step_payload(self, step: Optional[int] = None) -> StepPayload:
        """Typed payload for step (default: the current one) with its form defaults."""
        step = self.current_step if step is None else clamp_step(step)
        return load_step_payload(step, self._state.step_data.get(step, {}))

    def can_continue(self) -> bool:
        """Whether the current step's captured fields satisfy its form checks."""
        return self.step_payload().is_valid()

    def subscribe(self, listener):
        return self.notifier.subscribe(listener)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def hydrate(self) -> None:
        """Restore position and step data; anything unusable starts over at step 1."""
        self._state = decode_onboarding(self.store.get(ONBOARDING_KEY, None)).value
        self.notifier.notify("hydrated", {"current_step": self.current_step})

    def next(self) -> int:
        return self._move_to(clamp_step(self.current_step + 1), "next")

    def back(self) -> int:
        return self._move_to(clamp_step(self.current_step - 1), "back")

    def go_to(self, step: int) -> int:
        """Jump to step; previously captured data is kept."""
        upper = self.highest_step if self.jump_policy == JUMP_VISITED else MAX_STEP
        return self._move_to(clamp_step(step, upper), "go_to")

    def save_step_data(self, step: int, data: Dict[str, Any]) -> None:
        """Merge data into the payload owned by step."""
        if not is_step(step):
            logger.warning(f"Ignoring data for unknown onboarding step {step}")
            return
        merged = dict(self._state.step_data.get(step, {}))
        merged.update(data)
        self._state.step_data[step] = merged
        self._persist()
        self.notifier.notify("step_data_saved", {"step": step, "fields": sorted(data)})

    def complete(self) -> Dict[str, Any]:
        """Finish the wizard: persist, announce, redirect to the dashboard."""
        self._persist()
        captured = self.data
        self.notifier.notify("completed", {"fields": sorted(captured)})
        self.navigate(DASHBOARD)
        return captured

    def reset(self) -> None:
        """Drop all progress, in memory and in the store."""
        self._state = OnboardingState()
        self.store.remove(ONBOARDING_KEY)
        self.notifier.notify("reset", {"current_step": self.current_step})

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _move_to(self, step: int, action: str) -> int:
        previous = self.current_step
        self._state.current_step = step
        if step > self._state.highest_step:
            self._state.highest_step = step
        self._persist()
        self.notifier.notify(action, {"from": previous, "to": step})
        return step

    def _persist(self) -> bool:
        return self.store.set(ONBOARDING_KEY, encode_onboarding(self._state))
