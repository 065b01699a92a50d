"""Authentication module — email/password auth, roles and persistent sessions."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta

import bcrypt
import streamlit as st

from config import MIN_PASSWORD_LENGTH, SESSION_EXPIRY_DAYS
from db import get_db

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------

def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


def validate_password(password: str):
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")


# ---------------------------------------------------------------------------
# User lookup
# ---------------------------------------------------------------------------

def _row_to_user(row) -> dict:
    return {
        "id": row["id"],
        "email": row["email"],
        "full_name": row["full_name"],
        "role": row["role"],
    }


def authenticate_user(email: str, password: str) -> dict | None:
    """Validate credentials. Returns user dict or None."""
    email = email.strip().lower()
    with get_db() as conn:
        row = conn.execute(
            "SELECT id, email, password_hash, full_name, role FROM users WHERE email = ?",
            (email,),
        ).fetchone()

    if row and verify_password(password, row["password_hash"]):
        return _row_to_user(row)
    return None


def get_user_by_id(user_id: int) -> dict | None:
    with get_db() as conn:
        row = conn.execute(
            "SELECT id, email, full_name, role FROM users WHERE id = ?",
            (user_id,),
        ).fetchone()
    return _row_to_user(row) if row else None


def is_admin(user: dict | None) -> bool:
    return bool(user) and user.get("role") == "admin"


def change_password(user_id: int, current_password: str, new_password: str):
    """Change a user's own password after verifying the current one."""
    validate_password(new_password)
    with get_db() as conn:
        row = conn.execute(
            "SELECT password_hash FROM users WHERE id = ?", (user_id,)
        ).fetchone()
        if not row or not verify_password(current_password, row["password_hash"]):
            raise ValueError("Current password is incorrect.")
        conn.execute(
            "UPDATE users SET password_hash = ? WHERE id = ?",
            (hash_password(new_password), user_id),
        )
    logger.info("User %s changed their password", user_id)


# ---------------------------------------------------------------------------
# Persistent session tokens
# ---------------------------------------------------------------------------

def _create_session_token(user_id: int) -> str:
    """Create a persistent session token stored in the DB."""
    token = uuid.uuid4().hex
    expires = datetime.utcnow() + timedelta(days=SESSION_EXPIRY_DAYS)
    with get_db() as conn:
        conn.execute(
            "DELETE FROM session_tokens WHERE expires_at < ?",
            (datetime.utcnow().isoformat(),),
        )
        conn.execute(
            "INSERT INTO session_tokens (token, user_id, expires_at) VALUES (?, ?, ?)",
            (token, user_id, expires.isoformat()),
        )
    return token


def _get_user_by_token(token: str) -> dict | None:
    with get_db() as conn:
        row = conn.execute(
            """SELECT u.id, u.email, u.full_name, u.role
               FROM session_tokens t JOIN users u ON t.user_id = u.id
               WHERE t.token = ? AND t.expires_at > ?""",
            (token, datetime.utcnow().isoformat()),
        ).fetchone()
    return _row_to_user(row) if row else None


def _delete_session_token(token: str):
    with get_db() as conn:
        conn.execute("DELETE FROM session_tokens WHERE token = ?", (token,))


# ---------------------------------------------------------------------------
# Session management (persistent across page refreshes)
# ---------------------------------------------------------------------------

def get_current_user() -> dict | None:
    """Check for logged-in user: session_state first, then persistent token."""
    user = st.session_state.get("user")
    if user:
        return user

    token = st.query_params.get("session")
    if token:
        user = _get_user_by_token(token)
        if user:
            st.session_state["user"] = user
            return user
        del st.query_params["session"]
    return None


def login_user(user: dict):
    st.session_state["user"] = user
    st.query_params["session"] = _create_session_token(user["id"])
    logger.info("User %s signed in", user["email"])


def logout_user():
    token = st.query_params.get("session")
    if token:
        _delete_session_token(token)
        del st.query_params["session"]
    st.session_state.pop("user", None)


# ---------------------------------------------------------------------------
# UI components
# ---------------------------------------------------------------------------

def render_sidebar_user_info():
    """Show logged-in user info + logout button in sidebar."""
    user = get_current_user()
    if not user:
        return
    with st.sidebar:
        st.markdown(f"**{user['full_name']}**")
        st.caption(f"{user['email']} · {user['role']}")
        if st.button("Logout", key="sidebar_logout"):
            logout_user()
            st.rerun()


def _render_login_form():
    with st.form("login_form"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Login", use_container_width=True)

    if submitted:
        if not email or not password:
            st.error("Please enter both email and password.")
            return
        user = authenticate_user(email, password)
        if user:
            login_user(user)
            st.rerun()
        else:
            st.error("Invalid email or password.")


# ---------------------------------------------------------------------------
# Page protection
# ---------------------------------------------------------------------------

def require_auth() -> dict:
    """Call at the top of any protected page.

    If logged in: returns user dict, renders sidebar info.
    If not logged in: renders the login form, then st.stop().
    Accounts are created by administrators; there is no self-registration.
    """
    user = get_current_user()
    if user:
        render_sidebar_user_info()
        return user

    st.title("Employee Login")
    st.caption("Sign in with the credentials provided by your administrator.")
    _render_login_form()
    st.stop()


def require_admin() -> dict:
    """Like require_auth, but stops rendering for non-admin users."""
    user = require_auth()
    if not is_admin(user):
        st.error("Access denied. This page is restricted to administrators.")
        st.stop()
    return user
