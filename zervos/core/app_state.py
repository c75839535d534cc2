"""
Composition root for the dashboard state layer.

AppState owns one SafeStore and the containers built on it. Consumers receive
the AppState (or a single container) explicitly; nothing is looked up globally.
"""

from dataclasses import dataclass
from typing import Optional

from .medium import Medium, get_medium
from .navigation import Navigator, noop_navigator
from .onboarding import OnboardingMachine
from .session import SessionStore
from .store import SafeStore
from .workspaces import WorkspaceRegistry

from util.logging import logger


@dataclass
class AppState:
    store: SafeStore
    workspaces: WorkspaceRegistry
    session: SessionStore
    onboarding: OnboardingMachine

    def hydrate(self) -> None:
        self.workspaces.hydrate()
        self.onboarding.hydrate()

    def reset_all(self) -> bool:
        """Clear the whole namespace and return every container to its initial state."""
        cleared = self.store.clear()
        self.workspaces.reset()
        self.onboarding.reset()
        self.session.sign_out()
        logger.info(f"State reset (store cleared: {cleared})")
        return cleared


def create_app_state(medium: Optional[Medium] = None, *, navigate: Optional[Navigator] = None,
                     seed_default: Optional[bool] = None, auto_select_first: Optional[bool] = None,
                     jump_policy: Optional[str] = None, hydrate: bool = True) -> AppState:
    """Build and (by default) hydrate the state containers over one store."""
    store = SafeStore(medium if medium is not None else get_medium())
    navigate = navigate or noop_navigator

    state = AppState(
        store=store,
        workspaces=WorkspaceRegistry(store, seed_default=seed_default, auto_select_first=auto_select_first),
        session=SessionStore(store, navigate=navigate),
        onboarding=OnboardingMachine(store, jump_policy=jump_policy, navigate=navigate),
    )
    if hydrate:
        state.hydrate()
    return state
