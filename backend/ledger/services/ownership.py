"""Read-only ownership capability shared between registries."""
from __future__ import annotations

from typing import Protocol


class OwnershipLookup(Protocol):
    def get_device_owner(self, device_id: int) -> str | None:
        """Current owner identity, or ``None`` when the device has no owner record."""
        ...
