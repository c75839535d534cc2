"""
Configuration for the dashboard state layer.
Values come from the environment (optionally a .env file); getters re-read it.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Persistence medium configuration
STORE_BACKEND = os.getenv("ZERVOS_STORE_BACKEND", "sqlite")  # sqlite|memory
STORE_PATH = os.getenv("ZERVOS_STORE_PATH", "./data/zervos_store.db")

# Debug flag
DEBUG = os.getenv("DEBUG", "false").lower() == "true"

# Workspace registry behaviour (both default off)
SEED_DEFAULT_WORKSPACE = os.getenv("ZERVOS_SEED_DEFAULT_WORKSPACE", "false").lower() == "true"
AUTO_SELECT_FIRST = os.getenv("ZERVOS_AUTO_SELECT_FIRST", "false").lower() == "true"
BOOKING_BASE_URL = os.getenv("ZERVOS_BOOKING_BASE_URL", "http://localhost:5000")

# Onboarding wizard behaviour
ONBOARDING_JUMP_POLICY = os.getenv("ZERVOS_ONBOARDING_JUMP_POLICY", "any")  # any|visited

# Persisted record keys
WORKSPACES_KEY = "workspaces"
SELECTED_WORKSPACE_KEY = "selectedWorkspaceId"
TEAM_SESSION_KEY = "zervos_team_session"
ONBOARDING_KEY = "zervos_onboarding"
MEMBER_DIRECTORY_KEY = "zervos_salespersons"
COMPANY_KEY = "zervos_company"

KNOWN_KEYS = [
    WORKSPACES_KEY,
    SELECTED_WORKSPACE_KEY,
    TEAM_SESSION_KEY,
    ONBOARDING_KEY,
    MEMBER_DIRECTORY_KEY,
    COMPANY_KEY,
]

VALID_BACKENDS = ["sqlite", "memory"]
VALID_JUMP_POLICIES = ["any", "visited"]

VERSION = "0.1.0"


def get_store_backend():
    """Get the configured persistence backend (sqlite|memory)."""
    return os.getenv("ZERVOS_STORE_BACKEND", "sqlite").lower()


def get_store_path():
    """Get the SQLite file path used by the sqlite backend."""
    return os.getenv("ZERVOS_STORE_PATH", "./data/zervos_store.db")


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "false").lower() == "true"


def seed_default_workspace_enabled():
    """Check if an empty registry should be seeded with a default workspace."""
    return os.getenv("ZERVOS_SEED_DEFAULT_WORKSPACE", "false").lower() == "true"


def auto_select_first_enabled():
    """Check if hydration should auto-select the first workspace."""
    return os.getenv("ZERVOS_AUTO_SELECT_FIRST", "false").lower() == "true"


def get_booking_base_url():
    """Get the origin used to build default booking links."""
    return os.getenv("ZERVOS_BOOKING_BASE_URL", "http://localhost:5000").rstrip("/")


def get_onboarding_jump_policy():
    """Get onboarding jump policy (any|visited)."""
    return os.getenv("ZERVOS_ONBOARDING_JUMP_POLICY", "any").lower()


def ensure_store_directory(path=None):
    """Ensure the directory holding the SQLite store exists."""
    Path(path or get_store_path()).parent.mkdir(parents=True, exist_ok=True)


def validate_config():
    """Validate state-layer configuration and return any issues."""
    issues = []

    backend = get_store_backend()
    if backend not in VALID_BACKENDS:
        issues.append(f"Invalid ZERVOS_STORE_BACKEND: {backend}")

    if backend == "sqlite" and not get_store_path().strip():
        issues.append("ZERVOS_STORE_PATH must not be empty when ZERVOS_STORE_BACKEND=sqlite")

    policy = get_onboarding_jump_policy()
    if policy not in VALID_JUMP_POLICIES:
        issues.append(f"Invalid ZERVOS_ONBOARDING_JUMP_POLICY: {policy}")

    base_url = get_booking_base_url()
    if not base_url.startswith(("http://", "https://")):
        issues.append(f"ZERVOS_BOOKING_BASE_URL must be an http(s) origin: {base_url}")

    return issues
