"""
SessionStore - the signed-in team member.

The persisted record is the only copy; reads happen at page load, so there is
no in-memory cache. A corrupted record reads as "not signed in".
"""

from typing import Iterable, List, Optional

from .codecs import decode_members, decode_session, encode_session
from .config import MEMBER_DIRECTORY_KEY, TEAM_SESSION_KEY
from .events import StateNotifier
from .navigation import ADMIN_CENTER, TEAM_HOME, TEAM_LOGIN, Navigator, noop_navigator
from .schema import TeamMember, TeamSession
from .store import SafeStore


def filter_members(members: Iterable[TeamMember], query: str) -> List[TeamMember]:
    """Case-insensitive substring match over "name email"."""
    needle = (query or "").lower()
    return [m for m in members if needle in f"{m.name} {m.email}".lower()]


def can_access_admin(session: Optional[TeamSession]) -> bool:
    """Managers and admins may open the admin center."""
    return session is not None and session.can_access_admin


class SessionStore:
    """Team portal session persisted under a single key."""

    def __init__(self, store: SafeStore, navigate: Optional[Navigator] = None):
        self.store = store
        self.navigate = navigate or noop_navigator
        self.notifier = StateNotifier("session")

    def subscribe(self, listener):
        return self.notifier.subscribe(listener)

    def load_directory(self) -> List[TeamMember]:
        """Team members available for sign-in."""
        return decode_members(self.store.get(MEMBER_DIRECTORY_KEY, [])).value

    def search(self, query: str) -> List[TeamMember]:
        return filter_members(self.load_directory(), query)

    def sign_in(self, member: TeamMember) -> TeamSession:
        """Persist a session for member and move to the team area."""
        session = TeamSession.from_member(member)
        self.store.set(TEAM_SESSION_KEY, encode_session(session))
        self.notifier.notify("signed_in", {"id": session.id, "role": session.role.value})
        self.navigate(TEAM_HOME)
        return session

    def current_session(self) -> Optional[TeamSession]:
        return decode_session(self.store.get(TEAM_SESSION_KEY, None)).value

    def require_session(self) -> Optional[TeamSession]:
        """Current session, or None after sending the user to the login page."""
        session = self.current_session()
        if session is None:
            self.navigate(TEAM_LOGIN)
        return session

    def open_admin_center(self) -> bool:
        """Send managers and admins to the admin center; others stay put."""
        if not can_access_admin(self.current_session()):
            return False
        self.navigate(ADMIN_CENTER)
        return True

    def sign_out(self) -> bool:
        removed = self.store.remove(TEAM_SESSION_KEY)
        self.notifier.notify("signed_out")
        self.navigate(TEAM_LOGIN)
        return removed
