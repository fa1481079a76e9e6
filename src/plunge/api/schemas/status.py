"""
Status schemas - pool snapshot and connection info
"""

from datetime import datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BodyResponse(CamelModel):
    index: int
    name: str
    current_temp: Union[int, float]
    set_point: Union[int, float]
    heat_mode: int
    heat_status: bool


class CircuitResponse(CamelModel):
    id: int
    name: str
    state: bool


class PoolStatusResponse(CamelModel):
    """Current pool state (GET /api/status)"""
    connected: bool
    last_updated: datetime
    air_temp: Union[int, float]
    bodies: List[BodyResponse]
    circuits: List[CircuitResponse]
    freeze_mode: bool
    connection_type: Literal["local", "remote", "demo"]


class ConnectionInfoResponse(CamelModel):
    """How the bridge reaches the controller (GET /api/connection)"""
    type: Literal["local", "remote", "demo"]
    system_name: str
    address: Optional[str] = None
    port: Optional[int] = None
    gateway_name: Optional[str] = None


class SuccessResponse(BaseModel):
    success: bool = True


class SystemTimeResponse(CamelModel):
    """Controller clock against the server clock (GET /api/system-time)"""
    controller_time: datetime
    server_time: datetime
    offset_hours: int
    adjust_for_dst: bool = Field(alias="adjustForDST")
