from __future__ import annotations

from typing import Optional, Protocol

from .model import Staff


class StaffDirectory(Protocol):
    """Lookup of staff members; attendance never writes to it."""

    def get_by_id(self, *, tenant_id: int, staff_id: int) -> Optional[Staff]:
        raise NotImplementedError
