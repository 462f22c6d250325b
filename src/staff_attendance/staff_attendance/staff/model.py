from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Staff:
    """Read-only view of a staff member owned by the staff directory."""

    staff_id: int
    tenant_id: int
    branch_id: Optional[int]
    department_id: Optional[int]
    employee_id: str
    first_name: str
    last_name: str
