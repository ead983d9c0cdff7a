"""
Domain: Branch (external aggregate, referenced only).
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Branch:
    branch_id: UUID
    name: str
    code: str = ""
    address: str = ""
    active: bool = True
