import json
import os
import shutil
from dataclasses import asdict
from typing import Any

from .models import ServiceRecord

SYSTEMCTL_ENV = "UNIT_PANEL_SYSTEMCTL"
USER_ENV = "UNIT_PANEL_USER"

_TRUTHY = {"1", "true", "yes", "on"}


def json_line(obj: dict[str, Any]) -> str:
    return json.dumps(obj, separators=(",", ":"))


def record_to_dict(record: ServiceRecord) -> dict[str, Any]:
    d = asdict(record)
    d["followed_by"] = list(record.followed_by)
    return d


def resolve_systemctl_bin(override: str | None = None) -> str:
    """Resolve the systemctl binary. Honors UNIT_PANEL_SYSTEMCTL, falls back to PATH lookup."""
    prefer = (override or os.getenv(SYSTEMCTL_ENV, "systemctl")).strip() or "systemctl"
    if os.path.sep in prefer:
        return prefer
    return shutil.which(prefer) or prefer


def user_scope_default() -> bool:
    return os.getenv(USER_ENV, "").strip().lower() in _TRUTHY


def unit_name(ident: str) -> str:
    """Append .service when the identifier carries no unit type suffix."""
    ident = ident.strip()
    if "." in ident.rsplit("@", 1)[-1]:
        return ident
    return f"{ident}.service"
