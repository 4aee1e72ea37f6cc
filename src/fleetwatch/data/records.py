from __future__ import annotations

from datetime import UTC, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

VehicleStatus = Literal["Online", "Parking/Garage", "Dashcam Issue", "Technical Problem"]

STATUS_VALUES: tuple[str, ...] = ("Online", "Parking/Garage", "Dashcam Issue", "Technical Problem")


class SheetRecord(BaseModel):
    """Rows parsed from a sheet export; serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)


class OfflineReport(SheetRecord):
    client: str = ""
    vehicle_number: str = ""
    last_online: str = ""
    offline_since: float = 0.0
    rn: str = ""
    remarks: str = ""


class SpeedEvent(SheetRecord):
    plate_no: str = ""
    company: str = ""
    starting_time: str = ""
    speed: float = 0.0


class AIAlert(SheetRecord):
    plate_no: str = ""
    company: str = ""
    alarm_type: str = ""
    starting_time: str = ""
    image_link: str = ""


class VehicleStatusOverride(BaseModel):
    vehicle_number: str = Field(min_length=1)
    current_status: VehicleStatus
    reason: Optional[str] = ""
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_by: Optional[str] = None

    def to_row(self) -> dict:
        return {
            "vehicle_number": self.vehicle_number,
            "current_status": self.current_status,
            "reason": self.reason or "",
            "updated_at": self.updated_at.isoformat(),
            "updated_by": self.updated_by,
        }


class StatusUpdate(BaseModel):
    status: VehicleStatus
    reason: Optional[str] = ""
