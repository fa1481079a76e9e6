"""
Command schemas - request bodies and success envelopes for command endpoints

Request models validate with hand-written before-validators rather than
pydantic coercion: "true", 1 or "85" are rejected, as is a bool where a
number is expected. The ValueError text becomes the 400 error message.
"""

from datetime import datetime
from typing import ClassVar, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from plunge.models.commands import MAX_SET_POINT, MIN_SET_POINT, is_integer, is_number
from plunge.models.enums import HeatMode


class CommandRequest(BaseModel):
    """Base for command bodies; invalid_message is used when a field is missing"""
    invalid_message: ClassVar[str] = "Invalid request"


class CircuitStateRequest(CommandRequest):
    invalid_message: ClassVar[str] = "state must be a boolean"

    state: bool = Field(description="Circuit on (true) / off (false)")

    @field_validator("state", mode="before")
    @classmethod
    def _strict_bool(cls, value):
        if not isinstance(value, bool):
            raise ValueError(cls.invalid_message)
        return value


class TemperatureRequest(CommandRequest):
    invalid_message: ClassVar[str] = f"temp must be a number between {MIN_SET_POINT} and {MAX_SET_POINT}"

    temp: Union[int, float] = Field(description=f"Set point, {MIN_SET_POINT}-{MAX_SET_POINT} °F")

    @field_validator("temp", mode="before")
    @classmethod
    def _number_in_range(cls, value):
        if not is_number(value) or not MIN_SET_POINT <= value <= MAX_SET_POINT:
            raise ValueError(cls.invalid_message)
        return value


class HeatModeRequest(CommandRequest):
    invalid_message: ClassVar[str] = (
        f"mode must be a number between {min(m.value for m in HeatMode)} and {max(m.value for m in HeatMode)}"
    )

    mode: int = Field(description="0 off, 1 solar, 2 solar preferred, 3 heater, 4 unchanged")

    @field_validator("mode", mode="before")
    @classmethod
    def _known_mode(cls, value):
        if not is_integer(value) or value not in [m.value for m in HeatMode]:
            raise ValueError(cls.invalid_message)
        return value


class LightCommandRequest(CommandRequest):
    invalid_message: ClassVar[str] = "command must be a number"

    command: int = Field(description="Color light command code")

    @field_validator("command", mode="before")
    @classmethod
    def _non_negative_int(cls, value):
        if not is_integer(value) or value < 0:
            raise ValueError(cls.invalid_message)
        return value


class SystemTimeRequest(CommandRequest):
    """
    New controller clock. syncWithDevice (or no date at all) uses the
    server's clock; adjustForDST left out keeps the controller's setting.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
    invalid_message: ClassVar[str] = "date must be an ISO 8601 date-time"

    date: Optional[datetime] = Field(None, description="ISO 8601 date-time")
    adjust_for_dst: Optional[bool] = Field(None, alias="adjustForDST")
    sync_with_device: bool = Field(False, description="Use the server clock instead of date")

    @field_validator("date", mode="before")
    @classmethod
    def _iso_date(cls, value):
        if value is None:
            return None
        if not isinstance(value, str):
            raise ValueError(cls.invalid_message)
        try:
            # fromisoformat() only accepts a trailing Z from Python 3.11
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            raise ValueError(cls.invalid_message)

    @field_validator("adjust_for_dst", mode="before")
    @classmethod
    def _strict_dst(cls, value):
        if value is not None and not isinstance(value, bool):
            raise ValueError("adjustForDST must be a boolean")
        return value

    @field_validator("sync_with_device", mode="before")
    @classmethod
    def _strict_sync(cls, value):
        if not isinstance(value, bool):
            raise ValueError("syncWithDevice must be a boolean")
        return value


# ============================================================================
# Responses
# ============================================================================

class CommandResponse(BaseModel):
    """Success envelope; demo is omitted for live commands"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    demo: Optional[bool] = Field(None, description="Present (true) when served by the demo backend")


class CircuitCommandResponse(CommandResponse):
    circuit_id: int
    state: bool


class TemperatureCommandResponse(CommandResponse):
    body: int
    temp: Union[int, float]


class HeatModeCommandResponse(CommandResponse):
    body: int
    mode: int


class LightCommandResponse(CommandResponse):
    command: int


class SystemTimeCommandResponse(CommandResponse):
    date: datetime
    adjust_for_dst: Optional[bool] = Field(None, alias="adjustForDST")
