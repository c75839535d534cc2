"""
WorkspaceRegistry - the workspace list and the current selection.

The selection is always None or a member of the list. Persistence goes
through SafeStore and is advisory: in-memory state stays authoritative for the
life of the process even when writes fail.
"""

from datetime import datetime
from typing import List, Optional

from .codecs import decode_company, decode_selected_id, decode_workspaces, encode_workspaces
from .config import (
    COMPANY_KEY,
    SELECTED_WORKSPACE_KEY,
    WORKSPACES_KEY,
    auto_select_first_enabled,
    get_booking_base_url,
    seed_default_workspace_enabled,
)
from .events import StateNotifier
from .schema import CompanyProfile, Workspace, WorkspaceStatus
from .store import SafeStore

from util.logging import logger

DEFAULT_WORKSPACE_COLOR = "bg-purple-500"
DEFAULT_BOOKING_PREFIX = "BK"
DEFAULT_MAX_DIGITS = 4


def build_default_workspace(workspace_id: str, company: Optional[CompanyProfile] = None,
                            base_url: Optional[str] = None) -> Workspace:
    """Default workspace derived from the company profile, if any."""
    name = (company.name if company and company.name else None) or "My Workspace"
    initials_source = (company.name if company and company.name else None) or "MW"
    base_url = (base_url or get_booking_base_url()).rstrip("/")
    return Workspace(
        id=workspace_id,
        name=name,
        initials=initials_source[:2].upper(),
        color=DEFAULT_WORKSPACE_COLOR,
        email=(company.email if company and company.email else ""),
        description=(company.industry if company and company.industry else None) or "Default workspace",
        status=WorkspaceStatus.ACTIVE,
        booking_link=f"{base_url}/book/default",
        prefix=DEFAULT_BOOKING_PREFIX,
        max_digits=DEFAULT_MAX_DIGITS,
    )


class WorkspaceRegistry:
    """Shared workspace state mirrored into SafeStore."""

    def __init__(self, store: SafeStore, *, seed_default: Optional[bool] = None,
                 auto_select_first: Optional[bool] = None, id_factory=None):
        self.store = store
        self.seed_default = seed_default_workspace_enabled() if seed_default is None else seed_default
        self.auto_select_first = auto_select_first_enabled() if auto_select_first is None else auto_select_first
        self.id_factory = id_factory or _timestamp_id
        self.notifier = StateNotifier("workspaces")
        self._workspaces: List[Workspace] = []
        self._selected: Optional[Workspace] = None

    # ------------------------------------------------------------------
    # Readers
    # ------------------------------------------------------------------
    @property
    def workspaces(self) -> List[Workspace]:
        return list(self._workspaces)

    @property
    def selected_workspace(self) -> Optional[Workspace]:
        return self._selected

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected.id if self._selected is not None else None

    def get_workspace(self, workspace_id: str) -> Optional[Workspace]:
        for ws in self._workspaces:
            if ws.id == workspace_id:
                return ws
        return None

    def subscribe(self, listener):
        return self.notifier.subscribe(listener)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def hydrate(self) -> None:
        """Restore list and selection from the store; dangling selections become None."""
        workspaces = decode_workspaces(self.store.get(WORKSPACES_KEY, [])).value

        if not workspaces and self.seed_default:
            company = decode_company(self.store.get(COMPANY_KEY, None)).value
            workspaces = [build_default_workspace(self.id_factory(), company)]
            self.store.set(WORKSPACES_KEY, encode_workspaces(workspaces))
            logger.info(f"Seeded default workspace {workspaces[0].id}")

        selected = None
        if workspaces:
            selected_id = decode_selected_id(self.store.get(SELECTED_WORKSPACE_KEY, None)).value
            if selected_id is not None:
                selected = next((ws for ws in workspaces if ws.id == selected_id), None)
                if selected is None:
                    logger.info(f"Selected workspace {selected_id} no longer exists, clearing selection")

            if selected is None and self.auto_select_first:
                selected = workspaces[0]
                self.store.set(SELECTED_WORKSPACE_KEY, selected.id)

        self._workspaces = workspaces
        self._selected = selected
        self.notifier.notify("hydrated", {"count": len(workspaces), "selected_id": self.selected_id})

    def set_selected_workspace(self, workspace: Optional[Workspace]) -> None:
        """Select workspace (or clear with None) and persist its id.

        The selection is resolved by id against the current list; a workspace
        that is not in the list clears the selection instead.
        """
        selected = None
        if workspace is not None:
            selected = self.get_workspace(workspace.id)
            if selected is None:
                logger.warning(f"Workspace {workspace.id} is not in the list, clearing selection")

        self._selected = selected
        if selected is not None:
            self.store.set(SELECTED_WORKSPACE_KEY, selected.id)
        else:
            self.store.remove(SELECTED_WORKSPACE_KEY)
        self.notifier.notify("selection_changed", {"selected_id": self.selected_id})

    def set_workspaces(self, workspaces: List[Workspace]) -> None:
        """Replace the list wholesale and re-validate the current selection."""
        unique = []
        seen = set()
        for ws in workspaces:
            if ws.id in seen:
                logger.warning(f"Dropping duplicate workspace id {ws.id}")
                continue
            seen.add(ws.id)
            unique.append(ws)

        self._workspaces = unique
        self.store.set(WORKSPACES_KEY, encode_workspaces(unique))

        if self._selected is not None:
            refreshed = self.get_workspace(self._selected.id)
            if refreshed is not None:
                self._selected = refreshed
            else:
                self._selected = None
                self.store.remove(SELECTED_WORKSPACE_KEY)

        self.notifier.notify("workspaces_changed", {"count": len(unique), "selected_id": self.selected_id})

    def reset(self) -> None:
        """Forget every workspace and the selection, in memory and in the store."""
        self._workspaces = []
        self._selected = None
        self.store.remove(WORKSPACES_KEY)
        self.store.remove(SELECTED_WORKSPACE_KEY)
        self.notifier.notify("reset")


def _timestamp_id() -> str:
    return str(int(datetime.now().timestamp() * 1000))
