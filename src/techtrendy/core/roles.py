"""The fixed cast of the podcast and the speaker alias table."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class Role(str, Enum):
    """Dialogue participants. ``NARRATOR`` is the fallback for unknown speakers."""

    PETR = "petr"
    LUBO = "lubo"
    JARDA = "jarda"
    NARRATOR = "narrator"

    @property
    def is_host(self) -> bool:
        return self is not Role.NARRATOR


@dataclass(frozen=True, slots=True)
class Persona:
    """Static description of one podcast host."""

    role: Role
    name: str
    surname_alias: str
    title: str
    focus: str
    voice_id: str


PERSONAS: Dict[Role, Persona] = {
    Role.PETR: Persona(
        role=Role.PETR,
        name="Petr Mára",
        surname_alias="mára",
        title="Analytik trendů",
        focus="Makro trendy v AI, automatizaci, průmyslu 4.0, Web3 a kvantových technologiích",
        voice_id="petr_czech_voice",
    ),
    Role.LUBO: Persona(
        role=Role.LUBO,
        name="Lubo Smid",
        surname_alias="smid",
        title="Technický expert",
        focus="Nové nástroje, frameworky, API, knihovny, pokroky v modelování a hardware",
        voice_id="lubo_czech_voice",
    ),
    Role.JARDA: Persona(
        role=Role.JARDA,
        name="Jarda Beck",
        surname_alias="beck",
        title="UX/Produkt specialista",
        focus="Praktické využití, uživatelské chování, reálné případovky a nové startupy",
        voice_id="jarda_czech_voice",
    ),
}

HOST_ROLES = tuple(role for role in Role if role.is_host)


def _build_alias_table() -> Dict[str, Role]:
    table: Dict[str, Role] = {}
    for role, persona in PERSONAS.items():
        table[role.value] = role
        table[persona.surname_alias] = role
    # accent-free spelling produced by some models
    table["mara"] = Role.PETR
    return table


_ALIASES = _build_alias_table()


def resolve_role(name: str) -> Role:
    """Map a speaker name from a generated transcript to a :class:`Role`.

    The lookup is case-insensitive. A full display name such as
    ``"Petr Mára"`` resolves through its first known token. Anything that is
    not recognised belongs to the narrator.
    """

    normalized = name.strip().lower()
    role: Optional[Role] = _ALIASES.get(normalized)
    if role is not None:
        return role
    for token in normalized.split():
        role = _ALIASES.get(token.strip(".,"))
        if role is not None:
            return role
    return Role.NARRATOR


__all__ = ["HOST_ROLES", "PERSONAS", "Persona", "Role", "resolve_role"]
