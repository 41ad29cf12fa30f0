"""Attribute list codec for the Belkin ``deviceevent`` service.

Holmes appliances expose their state as an *attribute list*: pseudo-XML of
``<attribute><name/><value/></attribute>`` records transported as
entity-escaped text inside a SOAP envelope. The device escapes that text
twice, so decoding unescapes twice before parsing.
"""

from __future__ import annotations

import html
import logging
import math
import re
import xml.etree.ElementTree as ET
from collections.abc import Iterable
from enum import Enum
from typing import Any, NamedTuple

from .catalog import AttributeCatalog, AttributeEntry, AttributeKind, default_catalog
from .const import (
    DEFAULT_FILTER_LIFE_MINUTES,
    PURIFIER_FILTER_LIFE_MINUTES,
)
from .device_types.base import DeviceVariant

_LOGGER = logging.getLogger(__name__)

_SOAP_ENVELOPE_OPEN = (
    '<?xml version="1.0"?>'
    '<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/"'
    ' s:encodingStyle="http://schemas.xmlsoap.org/soap/encoding/">'
    "<s:Body>"
)
_SOAP_ENVELOPE_CLOSE = "</s:Body></s:Envelope>"

_ATTRIBUTE_LIST_OPEN = "<attributeList>"
_ATTRIBUTE_LIST_CLOSE = "</attributeList>"

_FORBIDDEN_MARKUP = re.compile(r"<!(DOCTYPE|ENTITY)", re.IGNORECASE)


class OnOff(str, Enum):
    """Binary channel value."""

    ON = "ON"
    OFF = "OFF"


ChannelValue = str | int | OnOff


class AttributePair(NamedTuple):
    """Single ``name``/``value`` record of an attribute list."""

    name: str
    value: str


class AttributeListError(ValueError):
    """Raised when a device response cannot be parsed as an attribute list."""


def build_soap_action(service: str, action: str) -> str:
    """Return the quoted SOAPACTION header for ``action`` on ``service``."""

    return f'"urn:Belkin:service:{service}:1#{action}"'


def build_state_request(action: str, service: str) -> str:
    """Return the SOAP body requesting ``action`` without arguments."""

    return (
        f"{_SOAP_ENVELOPE_OPEN}"
        f'<u:{action} xmlns:u="urn:Belkin:service:{service}:1">'
        f"</u:{action}>"
        f"{_SOAP_ENVELOPE_CLOSE}"
    )


def _escape_text(text: str) -> str:
    """Escape ``text`` for the pseudo-XML and again for the SOAP body."""

    return html.escape(html.escape(text, quote=False), quote=False)


def build_set_attributes_request(command: AttributePair | None, service: str) -> str:
    """Return the SetAttributes SOAP body carrying ``command``.

    ``None`` produces an attribute record with empty name and value.
    """

    name = _escape_text(command.name) if command is not None else ""
    value = _escape_text(command.value) if command is not None else ""
    return (
        f"{_SOAP_ENVELOPE_OPEN}"
        f'<u:SetAttributes xmlns:u="urn:Belkin:service:{service}:1">'
        f"{_ATTRIBUTE_LIST_OPEN}"
        f"&lt;attribute&gt;&lt;name&gt;{name}&lt;/name&gt;"
        f"&lt;value&gt;{value}&lt;/value&gt;&lt;/attribute&gt;"
        f"{_ATTRIBUTE_LIST_CLOSE}"
        "</u:SetAttributes>"
        f"{_SOAP_ENVELOPE_CLOSE}"
    )


def _command_text(command: Any) -> str:
    """Normalise a command value to the label used by the catalogue."""

    if isinstance(command, bool):
        return OnOff.ON.value if command else OnOff.OFF.value
    if isinstance(command, Enum):
        return str(command.value)
    return str(command).strip()


def encode_command(
    channel: str,
    command: Any,
    variant: DeviceVariant,
    *,
    catalog: AttributeCatalog | None = None,
) -> AttributePair | None:
    """Map a channel command onto the attribute/value pair sent to the device.

    Returns ``None`` when the channel or the command value is not mapped for
    ``variant``.
    """

    entry = (catalog or default_catalog()).encoder_for(channel, variant)
    if entry is None:
        return None
    label = _command_text(command)
    if entry.kind is AttributeKind.PASSTHROUGH:
        return AttributePair(entry.attribute, label) if label else None
    wire = entry.wire_value(label)
    if wire is None:
        return None
    return AttributePair(entry.attribute, wire)


def extract_attribute_list(response: str) -> str:
    """Return the raw text between ``<attributeList>`` tags of ``response``."""

    start = response.find(_ATTRIBUTE_LIST_OPEN)
    if start < 0:
        return ""
    start += len(_ATTRIBUTE_LIST_OPEN)
    end = response.find(_ATTRIBUTE_LIST_CLOSE, start)
    if end < 0:
        return ""
    return response[start:end]


def unescape_attribute_list(text: str) -> str:
    """Undo the device's double entity encoding."""

    return html.unescape(html.unescape(text))


def parse_attribute_list(text: str) -> list[AttributePair]:
    """Parse unescaped attribute list markup into name/value pairs.

    Documents declaring a DTD or entities are rejected so that no external
    or recursive entity is ever expanded.
    """

    if _FORBIDDEN_MARKUP.search(text):
        raise AttributeListError("attribute list contains forbidden markup")

    try:
        root = ET.fromstring(f"<data>{text}</data>")
    except ET.ParseError as err:
        raise AttributeListError(f"malformed attribute list: {err}") from err

    pairs: list[AttributePair] = []
    for element in root.iter("attribute"):
        name = element.findtext("name")
        if name is None:
            continue
        pairs.append(AttributePair(name.strip(), (element.findtext("value") or "").strip()))
    return pairs


def filter_life_total(variant: DeviceVariant) -> int:
    """Return the full filter lifetime in minutes for ``variant``."""

    if variant is DeviceVariant.PURIFIER:
        return PURIFIER_FILTER_LIFE_MINUTES
    return DEFAULT_FILTER_LIFE_MINUTES


def _filter_life_percent(raw: str, variant: DeviceVariant) -> int | None:
    try:
        minutes = int(raw)
    except ValueError:
        return None
    percent = math.floor(minutes / filter_life_total(variant) * 100 + 0.5)
    if 0 <= percent <= 100:
        return percent
    return None


def _decode_value(entry: AttributeEntry, raw: str, variant: DeviceVariant) -> ChannelValue | None:
    if entry.kind is AttributeKind.PASSTHROUGH:
        return raw
    if entry.kind is AttributeKind.FILTER_LIFE:
        return _filter_life_percent(raw, variant)

    label = entry.values.get(raw)
    if label is None:
        return None
    if entry.kind is AttributeKind.SWITCH:
        return OnOff(label)
    if entry.kind is AttributeKind.PERCENT:
        return int(label)
    return label


def decode_pairs(
    pairs: Iterable[AttributePair],
    variant: DeviceVariant,
    *,
    catalog: AttributeCatalog | None = None,
) -> list[tuple[str, ChannelValue]]:
    """Translate attribute pairs into channel updates for ``variant``.

    Unknown attributes and unmapped values are skipped.
    """

    lookup = catalog or default_catalog()
    updates: list[tuple[str, ChannelValue]] = []
    for pair in pairs:
        entry = lookup.decoder_for(pair.name, variant)
        if entry is None:
            _LOGGER.debug("Ignoring unknown attribute %s=%s", pair.name, pair.value)
            continue
        value = _decode_value(entry, pair.value, variant)
        if value is None:
            _LOGGER.debug(
                "Skipping unmapped value %r for attribute %s (%s)",
                pair.value,
                pair.name,
                variant.value,
            )
            continue
        updates.append((entry.channel, value))
    return updates


def decode_attributes(
    attribute_list: str,
    variant: DeviceVariant,
    *,
    catalog: AttributeCatalog | None = None,
) -> list[tuple[str, ChannelValue]]:
    """Decode an escaped attribute list into channel updates."""

    markup = unescape_attribute_list(attribute_list)
    _LOGGER.debug("Attribute list for %s: %s", variant.value, markup)
    return decode_pairs(parse_attribute_list(markup), variant, catalog=catalog)


def decode_response(
    response: str,
    variant: DeviceVariant,
    *,
    catalog: AttributeCatalog | None = None,
) -> list[tuple[str, ChannelValue]]:
    """Decode the attribute list embedded in a GetAttributes ``response``."""

    return decode_attributes(extract_attribute_list(response), variant, catalog=catalog)
