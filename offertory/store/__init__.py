"""Database store layer - provides persistence for the application.

This module re-exports all public database functions for easy importing.
"""

# Re-export schema functions
# Re-export all query functions
from offertory.store.queries import (
    get_church_name,
    get_expense_categories,
    get_members,
    get_pin_hash,
    get_slot,
    get_snapshots,
    get_transactions,
    load_state,
    save_data,
    save_expense_categories,
    save_members,
    save_snapshots,
    save_transactions,
    seed_defaults,
    set_church_name,
    set_pin_hash,
    set_slot,
    set_slots,
)
from offertory.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "get_church_name",
    "get_expense_categories",
    "get_members",
    "get_pin_hash",
    "get_slot",
    "get_snapshots",
    "get_transactions",
    "load_state",
    "save_data",
    "save_expense_categories",
    "save_members",
    "save_snapshots",
    "save_transactions",
    "seed_defaults",
    "set_church_name",
    "set_pin_hash",
    "set_slot",
    "set_slots",
]
