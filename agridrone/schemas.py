# =============================================================================
# AgriDrone Backend
# schemas.py - Request Schemas
#
# pydantic models validating request bodies before they reach storage.
# Bodies arrive in camelCase; model_dump() yields snake_case column names.
# Create schemas drop unknown keys, update schemas reject them.
# =============================================================================

import json
import re
from datetime import datetime, timezone
from typing import Annotated, ClassVar, List, Literal, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field as PField,
    StringConstraints,
    field_validator,
)
from pydantic.alias_generators import to_camel

from agridrone import constants


EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')
DATE_ONLY_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')


def _date_only_to_midnight(value):
    # Date pickers send plain YYYY-MM-DD
    if isinstance(value, str) and DATE_ONLY_PATTERN.match(value.strip()):
        return f'{value.strip()}T00:00:00'
    return value


def _to_naive_utc(value):
    # Stored naive; an explicit offset is converted to UTC first
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _check_email(value):
    if not EMAIL_PATTERN.match(value):
        raise ValueError('Invalid email format')
    return value.lower()


NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Email = Annotated[NonEmptyStr, PField(max_length=120), AfterValidator(_check_email)]
Percent = Annotated[int, PField(ge=0, le=100)]
Latitude = Annotated[float, PField(ge=-90, le=90)]
Longitude = Annotated[float, PField(ge=-180, le=180)]
Hectares = Annotated[float, PField(gt=0)]
Liters = Annotated[float, PField(ge=0)]
Timestamp = Annotated[
    datetime,
    BeforeValidator(_date_only_to_midnight),
    AfterValidator(_to_naive_utc),
]

ConnectionType = Literal[constants.CONNECTION_TYPES]
DroneStatus = Literal[constants.DRONE_STATUSES]
Severity = Literal[constants.SEVERITY_LEVELS]
ApplicationStatus = Literal[constants.APPLICATION_STATUSES]


class CreateSchema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
        extra='ignore',
    )


class UpdateSchema(CreateSchema):
    """
    Partial update body. Only keys the client actually sent are applied.

    An explicit null is ignored unless the column is listed in
    `clearable`, since most columns are NOT NULL.
    """
    model_config = ConfigDict(extra='forbid')

    clearable: ClassVar[frozenset] = frozenset()

    def changes(self):
        data = self.model_dump(exclude_unset=True)
        return {
            key: value for key, value in data.items()
            if value is not None or key in self.clearable
        }


# =============================================================================
# Authentication
# =============================================================================

class SignupRequest(CreateSchema):
    username: Annotated[NonEmptyStr, PField(max_length=80)]
    email: Email
    password: Annotated[str, PField(min_length=1)]
    full_name: Annotated[NonEmptyStr, PField(max_length=120)]


class LoginRequest(CreateSchema):
    username: NonEmptyStr
    password: Annotated[str, PField(min_length=1)]


# =============================================================================
# Crops
# =============================================================================

class CropCreate(CreateSchema):
    name: NonEmptyStr
    type: NonEmptyStr
    planted_date: Timestamp
    expected_harvest_date: Timestamp
    growth_stage: NonEmptyStr = constants.DEFAULT_GROWTH_STAGE
    area: Hectares
    is_active: bool = True


class CropUpdate(UpdateSchema):
    name: Optional[NonEmptyStr] = None
    type: Optional[NonEmptyStr] = None
    planted_date: Optional[Timestamp] = None
    expected_harvest_date: Optional[Timestamp] = None
    growth_stage: Optional[NonEmptyStr] = None
    area: Optional[Hectares] = None
    is_active: Optional[bool] = None


# =============================================================================
# Fields
# =============================================================================

class FieldCreate(CreateSchema):
    name: NonEmptyStr
    crop_id: Optional[NonEmptyStr] = None
    latitude: Latitude
    longitude: Longitude
    area: Hectares
    boundaries: Optional[List[List[float]]] = None

    @field_validator('boundaries', mode='before')
    @classmethod
    def parse_boundaries(cls, value):
        """Accept a polygon as a list of [lat, lon] pairs or its JSON text."""
        if isinstance(value, str):
            try:
                return json.loads(value)
            except ValueError:
                raise ValueError('Boundaries must be a JSON array of [lat, lon] pairs')
        return value

    @field_validator('boundaries')
    @classmethod
    def check_polygon(cls, value):
        if value is None:
            return value
        for point in value:
            if len(point) != 2:
                raise ValueError('Each boundary point must be a [lat, lon] pair')
            lat, lon = point
            if not (-90 <= lat <= 90 and -180 <= lon <= 180):
                raise ValueError('Boundary point out of range')
        return value

    def to_record(self):
        data = self.model_dump()
        if data['boundaries'] is not None:
            data['boundaries'] = json.dumps(data['boundaries'])
        return data


# =============================================================================
# Drones
# =============================================================================

class DroneCreate(CreateSchema):
    drone_name: NonEmptyStr
    connection_type: ConnectionType
    status: DroneStatus = constants.DEFAULT_DRONE_STATUS
    battery_level: Percent = constants.DEFAULT_BATTERY_LEVEL


class DroneUpdate(UpdateSchema):
    drone_name: Optional[NonEmptyStr] = None
    connection_type: Optional[ConnectionType] = None
    status: Optional[DroneStatus] = None
    battery_level: Optional[Percent] = None


# =============================================================================
# Plant Health Records
# =============================================================================

class HealthRecordCreate(CreateSchema):
    field_id: NonEmptyStr
    drone_id: Optional[NonEmptyStr] = None
    health_score: Percent
    infection_rate: Annotated[float, PField(ge=0, le=100)]
    infection_type: Optional[NonEmptyStr] = None
    severity: Severity
    latitude: Optional[Latitude] = None
    longitude: Optional[Longitude] = None
    detection_confidence: Percent


# =============================================================================
# Pesticide Applications
# =============================================================================

class PesticideApplicationCreate(CreateSchema):
    field_id: NonEmptyStr
    health_record_id: Optional[NonEmptyStr] = None
    pesticide_type: NonEmptyStr
    volume_per_hectare: Liters
    total_volume: Liters
    application_method: NonEmptyStr = constants.DEFAULT_APPLICATION_METHOD
    status: ApplicationStatus = constants.DEFAULT_APPLICATION_STATUS
    recommended_by: NonEmptyStr = constants.DEFAULT_RECOMMENDED_BY
    confidence: Percent
    scheduled_for: Optional[Timestamp] = None
    applied_at: Optional[Timestamp] = None


class PesticideApplicationUpdate(UpdateSchema):
    clearable: ClassVar[frozenset] = frozenset({'scheduled_for', 'applied_at'})

    pesticide_type: Optional[NonEmptyStr] = None
    volume_per_hectare: Optional[Liters] = None
    total_volume: Optional[Liters] = None
    application_method: Optional[NonEmptyStr] = None
    status: Optional[ApplicationStatus] = None
    confidence: Optional[Percent] = None
    scheduled_for: Optional[Timestamp] = None
    applied_at: Optional[Timestamp] = None


# =============================================================================
# Contact
# =============================================================================

class ContactMessageCreate(CreateSchema):
    name: NonEmptyStr
    email: Email
    message: NonEmptyStr
