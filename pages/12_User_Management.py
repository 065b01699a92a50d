"""User Management — employees, roles, passwords and trading accounts."""

import streamlit as st

from backoffice.accounts import (
    assign_account,
    create_account,
    delete_account,
    get_accounts,
    get_users,
)
from backoffice.admin_operations import run_admin_action
from auth import require_admin
from config import MIN_PASSWORD_LENGTH, ROLES
from db import init_db
import ui_theme

ui_theme.setup_page("User Management", "👥")
init_db()
admin = require_admin()

ui_theme.page_header("User Management", "Employees and trading accounts")


def _show_result(result: dict, success_message: str) -> bool:
    if result.get("success"):
        st.toast(success_message)
        return True
    st.error(result.get("error", "Unknown error"))
    return False


tab_users, tab_accounts = st.tabs(["Users", "Trading Accounts"])

# =====================================================================
# Users
# =====================================================================
with tab_users:
    users = get_users()
    st.dataframe(
        users[["full_name", "email", "role", "created_at"]],
        hide_index=True,
        use_container_width=True,
    )
    labels = {int(r.id): f"{r.full_name} ({r.email})" for r in users.itertuples()}

    col_new, col_manage = st.columns(2)
    with col_new:
        ui_theme.section_header("Create User")
        with st.form("create_user_form", clear_on_submit=True):
            full_name = st.text_input("Full name")
            email = st.text_input("Email")
            password = st.text_input(f"Password (min {MIN_PASSWORD_LENGTH} chars)", type="password")
            role = st.selectbox("Role", ROLES, index=ROLES.index("user"))
            created = st.form_submit_button("Create", use_container_width=True)
        if created:
            result = run_admin_action(admin, "create_user", {
                "email": email, "password": password, "full_name": full_name, "role": role,
            })
            if _show_result(result, f"Created {email}"):
                st.rerun()

    with col_manage:
        ui_theme.section_header("Reset Password")
        with st.form("reset_password_form", clear_on_submit=True):
            target = st.selectbox("User", list(labels), format_func=labels.get, key="reset_user")
            new_password = st.text_input("New password", type="password")
            reset = st.form_submit_button("Reset", use_container_width=True)
        if reset:
            result = run_admin_action(admin, "reset_password",
                                      {"user_id": target, "password": new_password})
            _show_result(result, "Password reset.")

        ui_theme.section_header("Delete User")
        others = [uid for uid in labels if uid != admin["id"]]
        victim = st.selectbox("User", others, format_func=labels.get, index=None,
                              placeholder="Select user", key="delete_user")
        confirm = st.checkbox("Also deletes their trading data, leave and attendance")
        if st.button("Delete User", type="primary", disabled=victim is None or not confirm):
            if _show_result(run_admin_action(admin, "delete_user", {"user_id": victim}), "User deleted."):
                st.rerun()

# =====================================================================
# Trading accounts
# =====================================================================
with tab_accounts:
    accounts = get_accounts()
    if accounts.empty:
        st.caption("No trading accounts yet.")
    else:
        st.dataframe(
            accounts[["account_name", "account_number", "owner"]],
            hide_index=True,
            use_container_width=True,
        )

    users = get_users()
    owners = {int(r.id): r.full_name for r in users.itertuples()}
    owner_options = [None] + list(owners)

    col_add, col_edit = st.columns(2)
    with col_add:
        ui_theme.section_header("Add Account")
        with st.form("create_account_form", clear_on_submit=True):
            account_name = st.text_input("Account name")
            account_number = st.text_input("Account number (optional)")
            owner = st.selectbox("Owner", owner_options,
                                 format_func=lambda v: "Unassigned" if v is None else owners[v])
            added = st.form_submit_button("Add", use_container_width=True)
        if added:
            try:
                create_account(account_name, account_number, owner)
                st.toast(f"Added {account_name}")
                st.rerun()
            except ValueError as e:
                st.error(str(e))

    with col_edit:
        if not accounts.empty:
            acct_labels = {int(r.id): r.account_name for r in accounts.itertuples()}
            ui_theme.section_header("Assign / Delete")
            acct = st.selectbox("Account", list(acct_labels), format_func=acct_labels.get)
            new_owner = st.selectbox("New owner", owner_options, key="assign_owner",
                                     format_func=lambda v: "Unassigned" if v is None else owners[v])
            a1, a2 = st.columns(2)
            if a1.button("Assign", use_container_width=True):
                assign_account(acct, new_owner)
                st.toast("Owner updated.")
                st.rerun()
            if a2.button("Delete Account", use_container_width=True):
                delete_account(acct)
                st.toast("Account deleted.")
                st.rerun()
