"""Role provider Protocol and fixture-backed implementation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import yaml

from landscore.auth.models import TokenValidation
from landscore.core.types import UserRole

logger = logging.getLogger(__name__)

_DEFAULT_FIXTURES_PATH = Path(__file__).resolve().parents[3] / "config" / "auth_fixtures.yml"


@runtime_checkable
class RoleProvider(Protocol):
    """Resolves a verified bearer token to a caller role."""

    def validate_token(self, token: str) -> TokenValidation: ...


class FixtureRoleProvider:
    """Role provider with static tokens loaded from YAML.

    Expected layout::

        tokens:
          - token: dev-analyst
            user_id: analyst@example.com
            role: analyst
    """

    def __init__(self, fixtures_path: str | Path | None = None) -> None:
        self._tokens: dict[str, dict[str, Any]] = {}
        self._load_fixtures(Path(fixtures_path) if fixtures_path else _DEFAULT_FIXTURES_PATH)

    def _load_fixtures(self, path: Path) -> None:
        if not path.exists():
            logger.info("No auth fixtures at %s; all callers are anonymous", path)
            return
        with open(path) as fh:
            data = yaml.safe_load(fh) or {}
        for entry in data.get("tokens", []):
            self._tokens[entry["token"]] = entry

    def register(self, token: str, user_id: str, role: UserRole) -> None:
        self._tokens[token] = {"token": token, "user_id": user_id, "role": role.value}

    def validate_token(self, token: str) -> TokenValidation:
        entry = self._tokens.get(token)
        if entry is None:
            return TokenValidation(valid=False)
        try:
            role = UserRole(entry.get("role", UserRole.VIEWER))
        except ValueError:
            logger.warning("Token for %s has unknown role %r", entry.get("user_id"), entry.get("role"))
            return TokenValidation(valid=False)
        return TokenValidation(valid=True, user_id=entry.get("user_id"), role=role)
