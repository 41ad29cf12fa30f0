"""Thing status values reported to consumers of the handler."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ThingStatus(str, Enum):
    """Coarse availability of the appliance."""

    UNKNOWN = "unknown"
    ONLINE = "online"
    OFFLINE = "offline"


class StatusDetail(str, Enum):
    """Reason attached to a status change."""

    NONE = "none"
    CONFIGURATION_ERROR = "configuration_error"
    CONFIGURATION_PENDING = "configuration_pending"
    COMMUNICATION_ERROR = "communication_error"


@dataclass(frozen=True, slots=True)
class DeviceStatus:
    """Snapshot of the appliance status and the reason for it."""

    status: ThingStatus
    detail: StatusDetail = StatusDetail.NONE
    description: str | None = None

    @classmethod
    def online(cls) -> DeviceStatus:
        """Return a plain online status."""

        return cls(ThingStatus.ONLINE)

    @classmethod
    def offline(cls, detail: StatusDetail, description: str | None = None) -> DeviceStatus:
        """Return an offline status carrying ``detail``."""

        return cls(ThingStatus.OFFLINE, detail, description)

    @classmethod
    def pending(cls, udn: str | None) -> DeviceStatus:
        """Return the status used while the device is not yet registered."""

        return cls(
            ThingStatus.ONLINE,
            StatusDetail.CONFIGURATION_PENDING,
            f"device {udn} not yet registered",
        )

    @property
    def is_online(self) -> bool:
        """Return True when the appliance is reachable without caveats."""

        return self.status is ThingStatus.ONLINE and self.detail is StatusDetail.NONE


UNKNOWN_STATUS = DeviceStatus(ThingStatus.UNKNOWN)
