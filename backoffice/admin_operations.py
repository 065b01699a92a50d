"""Privileged user administration — create, delete and reset-password actions.

``run_admin_action`` is the single entry point used by the User Management page.
It never raises: failures come back as ``{"error": msg, "status": code}``.
"""

from __future__ import annotations

import logging

from auth import hash_password, is_admin, validate_password
from backoffice import accounts
from config import ROLES

logger = logging.getLogger(__name__)


def _require_admin(caller: dict | None):
    if not caller:
        raise PermissionError("Unauthorized")
    if not is_admin(caller):
        raise PermissionError("Admin access required")


def _create_user(payload: dict) -> dict:
    email = (payload.get("email") or "").strip()
    password = payload.get("password") or ""
    full_name = (payload.get("full_name") or "").strip()
    role = payload.get("role") or "user"
    if not email or not password or not full_name:
        raise ValueError("email, password, and full_name are required")
    if role not in ROLES:
        raise ValueError(f"Unknown role: {role}")
    validate_password(password)
    user_id = accounts.create_user(email, hash_password(password), full_name, role)
    return {"success": True, "user_id": user_id}


def _delete_user(payload: dict) -> dict:
    user_id = payload.get("user_id")
    if not user_id:
        raise ValueError("user_id is required")
    if not accounts.delete_user(int(user_id)):
        raise ValueError("User not found")
    return {"success": True}


def _reset_password(payload: dict) -> dict:
    user_id = payload.get("user_id")
    password = payload.get("password") or ""
    if not user_id or not password:
        raise ValueError("user_id and password are required")
    validate_password(password)
    if not accounts.set_password_hash(int(user_id), hash_password(password)):
        raise ValueError("User not found")
    return {"success": True}


ACTIONS = {
    "create_user": _create_user,
    "delete_user": _delete_user,
    "reset_password": _reset_password,
}


def run_admin_action(caller: dict | None, action: str, payload: dict | None = None) -> dict:
    """Run *action* on behalf of *caller*.

    Status codes: 401 no caller, 403 not an admin, 400 bad input or unknown
    action, 500 anything unexpected.
    """
    try:
        _require_admin(caller)
    except PermissionError as e:
        logger.warning("Rejected admin action %r: %s", action, e)
        return {"error": str(e), "status": 401 if not caller else 403}

    handler = ACTIONS.get(action)
    if handler is None:
        return {"error": "Unknown action", "status": 400}

    try:
        result = handler(payload or {})
    except ValueError as e:
        return {"error": str(e), "status": 400}
    except Exception as e:
        logger.exception("Admin action %s failed", action)
        return {"error": str(e) or "Unknown error", "status": 500}

    logger.info("Admin %s ran %s", caller["email"], action)
    return result
