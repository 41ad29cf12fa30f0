"""Data models for the Holmes attribute catalogue."""

from __future__ import annotations

import json
from enum import Enum
from functools import cache
from pathlib import Path

from pydantic import BaseModel, Field

from .device_types.base import DeviceVariant

_DEFAULT_DATA_PATH = Path(__file__).parent / "data" / "attribute_catalog.json"


class AttributeKind(str, Enum):
    """How a wire value is turned into a channel value."""

    ENUM = "enum"
    SWITCH = "switch"
    PERCENT = "percent"
    FILTER_LIFE = "filter_life"
    PASSTHROUGH = "passthrough"


class AttributeEntry(BaseModel):
    """Map one device attribute onto one channel."""

    attribute: str
    channel: str
    kind: AttributeKind
    values: dict[str, str] = Field(default_factory=dict)
    variants: list[DeviceVariant] | None = Field(
        default=None, description="Variants the entry applies to; None means all"
    )
    writable: bool = False
    description: str | None = None

    def applies_to(self, variant: DeviceVariant) -> bool:
        """Return True when the entry is valid for ``variant``."""

        return self.variants is None or variant in self.variants

    def wire_value(self, label: str) -> str | None:
        """Return the wire value encoding ``label``, if any."""

        for wire, candidate in self.values.items():
            if candidate == label:
                return wire
        return None


class AttributeCatalog(BaseModel):
    """Collection of attribute definitions keyed by (attribute, variant)."""

    attributes: list[AttributeEntry]

    def decoder_for(self, attribute: str, variant: DeviceVariant) -> AttributeEntry | None:
        """Return the entry decoding ``attribute`` for ``variant``."""

        for entry in self.attributes:
            if entry.attribute == attribute and entry.applies_to(variant):
                return entry
        return None

    def encoder_for(self, channel: str, variant: DeviceVariant) -> AttributeEntry | None:
        """Return the writable entry that controls ``channel`` on ``variant``."""

        for entry in self.attributes:
            if entry.writable and entry.channel == channel and entry.applies_to(variant):
                return entry
        return None


def load_attribute_catalog(path: Path | None = None) -> AttributeCatalog:
    """Load the attribute catalogue definition from JSON."""

    data_path = path or _DEFAULT_DATA_PATH
    with data_path.open("r", encoding="utf-8") as fp:
        payload = json.load(fp)
    return AttributeCatalog.model_validate(payload)


@cache
def default_catalog() -> AttributeCatalog:
    """Return the bundled catalogue, parsed once per process."""

    return load_attribute_catalog()
