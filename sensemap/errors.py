"""Exception types raised by the sense mapping layer."""

from __future__ import annotations


class SenseMappingError(Exception):
    """Base class for every fatal error raised while mapping sense labels."""


class ResourceLoadError(SenseMappingError):
    """A mapping resource is missing, unreadable, or does not fit its configuration."""

    def __init__(self, locator: str, reason: str) -> None:
        self.locator = locator
        self.reason = reason
        super().__init__(f"Cannot load resource '{locator}': {reason}")


class UnknownSenseError(SenseMappingError):
    """A label has no entry in the mapping table and unknown senses are not tolerated."""

    def __init__(self, item_id: str, label: str, inventory: str) -> None:
        self.item_id = item_id
        self.label = label
        self.inventory = inventory
        super().__init__(f"Item '{item_id}': no mapping for sense '{label}' from inventory '{inventory}'")


class PipelineConfigurationError(SenseMappingError):
    """Stages were configured or chained inconsistently."""


__all__ = [
    "PipelineConfigurationError",
    "ResourceLoadError",
    "SenseMappingError",
    "UnknownSenseError",
]
