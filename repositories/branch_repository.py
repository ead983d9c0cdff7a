"""
Branch repository.

Read-only Supabase-backed BranchStore.
"""

from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

from domain.branch import Branch
from domain.stores import BranchStore
from repositories.serialization import rows_or_raise

_BRANCHES_TABLE: str = "branches"


class SupabaseBranchStore(BranchStore):

    def __init__(self, client: Any = None) -> None:
        if client is None:
            from repositories.client import supabase as client
        self._client = client

    def get_by_id(self, branch_id: UUID) -> Optional[Branch]:
        response = (
            self._client.table(_BRANCHES_TABLE)
            .select("*")
            .eq("branch_id", str(branch_id))
            .limit(1)
            .execute()
        )
        rows = rows_or_raise(response, "fetch branch")
        if not rows:
            return None

        row = rows[0]
        return Branch(
            branch_id=UUID(str(row["branch_id"])),
            name=str(row["name"]),
            code=str(row.get("code") or ""),
            address=str(row.get("address") or ""),
            active=bool(row.get("active", True)),
        )


__all__ = ["SupabaseBranchStore"]
