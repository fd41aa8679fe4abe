"""Pure functions for the member roster.

The roster is kept sorted by name in Korean-locale order. Transactions hold
member ids as weak references, so removing a member never touches them;
name lookups fall back to a placeholder instead.
"""

from dataclasses import dataclass, replace
from typing import Any

from offertory.domain.collation import collation_key
from offertory.domain.models import (
    ANONYMOUS_MEMBER_NAME,
    POSITIONS,
    UNSPECIFIED_MEMBER_NAME,
    MemberId,
)


@dataclass(frozen=True)
class Member:
    """Immutable roster entry."""

    id: MemberId
    name: str
    position: str


def sort_members(members: list[Member]) -> list[Member]:
    """Return the roster sorted by name, then id."""
    return sorted(members, key=lambda m: (collation_key(m.name), m.id))


def validate_member(name: str, position: str) -> str | None:
    """Validate roster fields.

    Returns:
        Error message, or None if the fields are acceptable.
    """
    if not name.strip():
        return "Member name is required"
    if position not in POSITIONS:
        return f"Unknown position: {position}"
    return None


def add_member(members: list[Member], member: Member) -> list[Member]:
    """Return a new sorted roster including the member."""
    return sort_members([*members, member])


def update_member(members: list[Member], member_id: int, name: str, position: str) -> list[Member]:
    """Return a new sorted roster with one member's name and position changed."""
    return sort_members([replace(m, name=name, position=position) if m.id == member_id else m for m in members])


def remove_member(members: list[Member], member_id: int) -> list[Member]:
    """Return a new roster without the member. Transactions are not affected."""
    return [m for m in members if m.id != member_id]


def find_member(members: list[Member], member_id: int | None) -> Member | None:
    """Look up a member by id."""
    if member_id is None:
        return None
    return next((m for m in members if m.id == member_id), None)


def match_members(members: list[Member], query: str) -> list[Member]:
    """Find members referred to by id or by exact name.

    Names are not unique, so more than one member can match.
    """
    query = query.strip()
    if query.isdigit():
        by_id = find_member(members, int(query))
        if by_id is not None:
            return [by_id]
    return [m for m in members if m.name == query]


def resolve_member_name(members: list[Member], member_id: int | None) -> str:
    """Resolve a member id to a display name.

    Args:
        members: Current roster.
        member_id: Weak reference from a transaction.

    Returns:
        The member's name, or the "unspecified" placeholder when the id is
        missing or no longer resolves.
    """
    member = find_member(members, member_id)
    if member is None or not member.name:
        return UNSPECIFIED_MEMBER_NAME
    return member.name


def member_names_by_id(members: list[Member]) -> dict[MemberId, str]:
    """Index the roster by id for repeated name lookups."""
    return {m.id: m.name for m in members}


def sort_name_for(names: dict[MemberId, str], member_id: int | None) -> str:
    """Resolve the name used to order income rows.

    A transaction without a member id orders as anonymous; one whose member
    was deleted orders as unspecified.
    """
    if member_id is None:
        return ANONYMOUS_MEMBER_NAME
    return names.get(MemberId(member_id)) or UNSPECIFIED_MEMBER_NAME


def member_from_dict(raw: Any) -> Member | None:
    """Parse a stored or imported member record.

    Returns:
        Member, or None if the record lacks an integer id or a name.
    """
    if not isinstance(raw, dict):
        return None
    member_id = raw.get("id")
    name = raw.get("name")
    if not isinstance(member_id, int) or isinstance(member_id, bool) or not isinstance(name, str):
        return None
    position = raw.get("position")
    return Member(id=MemberId(member_id), name=name, position=position if isinstance(position, str) else "")


def member_to_dict(member: Member) -> dict[str, Any]:
    """Serialize a member to its JSON record shape."""
    return {"id": member.id, "name": member.name, "position": member.position}
