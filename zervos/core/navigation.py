"""Routes the state layer hands to the host router after sign-in, sign-out and onboarding."""

from typing import Callable

TEAM_HOME = "/team"
TEAM_LOGIN = "/team/login"
DASHBOARD = "/dashboard"
ADMIN_CENTER = "/dashboard/admin-center"

# Fire-and-forget: the core never waits on or inspects the result
Navigator = Callable[[str], None]


def noop_navigator(path: str) -> None:
    return None
