"""
Persistent state containers - advisory persistence over a local key-value medium.
"""

# Package initialization for core module
from .store import SafeStore, ReadResult
from .medium import Medium, MemoryMedium, SQLiteMedium, get_medium
from .schema import Workspace, WorkspaceStatus, TeamMember, TeamSession, TeamRole, OnboardingState
from .workspaces import WorkspaceRegistry
from .session import SessionStore, filter_members, can_access_admin
from .onboarding import OnboardingMachine, STEPS
from .steps import STEP_PAYLOADS, StepPayload, load_step_payload
from .app_state import AppState, create_app_state

__all__ = [
    'SafeStore',
    'ReadResult',
    'Medium',
    'MemoryMedium',
    'SQLiteMedium',
    'get_medium',
    'Workspace',
    'WorkspaceStatus',
    'TeamMember',
    'TeamSession',
    'TeamRole',
    'OnboardingState',
    'WorkspaceRegistry',
    'SessionStore',
    'filter_members',
    'can_access_admin',
    'OnboardingMachine',
    'STEPS',
    'STEP_PAYLOADS',
    'StepPayload',
    'load_step_payload',
    'AppState',
    'create_app_state'
]
