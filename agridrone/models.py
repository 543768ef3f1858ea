# =============================================================================
# AgriDrone Backend
# models.py - Database Models
#
# SQLAlchemy ORM models for the application database.
# Users own crops, fields and drones directly; plant health records and
# pesticide applications belong to a user through their field.
# =============================================================================

import json
import uuid
from datetime import datetime, timezone

from agridrone.extensions import db
from agridrone import constants


def generate_id():
    """Opaque, UUID-shaped primary key generated by the data-access layer."""
    return str(uuid.uuid4())


def utcnow():
    return datetime.now(timezone.utc)


def isoformat(value):
    """Serialize a (possibly naive, UTC) datetime for API responses."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


class User(db.Model):
    """
    User model for authentication and authorization.

    Stores credentials and profile information. Every owned resource
    traces back to a User through user_id, directly or via its field.
    """
    __tablename__ = 'users'

    # Primary Key
    id = db.Column(db.String(36), primary_key=True, default=generate_id)

    # Authentication Fields
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    # Profile Fields
    full_name = db.Column(db.String(120), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=constants.DEFAULT_ROLE)

    # Timestamps
    created_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        """
        Serialize user object to dictionary for API responses.

        The password hash is never part of the output.

        Returns:
            dict: User data dictionary
        """
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'fullName': self.full_name,
            'role': self.role,
            'createdAt': isoformat(self.created_at)
        }

    def __repr__(self):
        return f'<User {self.username}>'


class Crop(db.Model):
    """
    A crop planting tracked by a farmer.

    Area is in hectares. Mutable and deletable by its owner only.
    """
    __tablename__ = 'crops'

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    user_id = db.Column(
        db.String(36),
        db.ForeignKey('users.id'),
        nullable=False,
        index=True
    )

    name = db.Column(db.String(120), nullable=False)
    type = db.Column(db.String(50), nullable=False)  # rice, wheat, cotton, corn
    planted_date = db.Column(db.DateTime, nullable=False)
    expected_harvest_date = db.Column(db.DateTime, nullable=False)
    growth_stage = db.Column(
        db.String(50),
        nullable=False,
        default=constants.DEFAULT_GROWTH_STAGE
    )
    area = db.Column(db.Float, nullable=False)
    is_active = db.Column(db.Boolean, default=True)

    created_at = db.Column(db.DateTime, default=utcnow)

    # Deleting a crop clears cropId on its fields
    fields = db.relationship('Field', backref='crop')

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'name': self.name,
            'type': self.type,
            'plantedDate': isoformat(self.planted_date),
            'expectedHarvestDate': isoformat(self.expected_harvest_date),
            'growthStage': self.growth_stage,
            'area': self.area,
            'isActive': self.is_active,
            'createdAt': isoformat(self.created_at)
        }

    def __repr__(self):
        return f'<Crop {self.name}>'


class Field(db.Model):
    """
    A georeferenced field, optionally planted with one of the owner's crops.

    Boundaries are stored as a JSON array of [lat, lon] pairs.
    """
    __tablename__ = 'fields'

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    user_id = db.Column(
        db.String(36),
        db.ForeignKey('users.id'),
        nullable=False,
        index=True
    )
    crop_id = db.Column(
        db.String(36),
        db.ForeignKey('crops.id', ondelete='SET NULL'),
        nullable=True
    )

    name = db.Column(db.String(120), nullable=False)
    latitude = db.Column(db.Float, nullable=False)
    longitude = db.Column(db.Float, nullable=False)
    area = db.Column(db.Float, nullable=False)
    boundaries = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, default=utcnow)

    # Relationships
    health_records = db.relationship('PlantHealthRecord', backref='field', lazy='dynamic')
    pesticide_applications = db.relationship(
        'PesticideApplication',
        backref='field',
        lazy='dynamic'
    )

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'cropId': self.crop_id,
            'name': self.name,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'area': self.area,
            'boundaries': json.loads(self.boundaries) if self.boundaries else None,
            'createdAt': isoformat(self.created_at)
        }

    def __repr__(self):
        return f'<Field {self.name}>'


class DroneConnection(db.Model):
    """
    A drone paired with a farmer's account over wifi or bluetooth.

    last_seen is refreshed by the data-access layer on every update.
    """
    __tablename__ = 'drone_connections'

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    user_id = db.Column(
        db.String(36),
        db.ForeignKey('users.id'),
        nullable=False,
        index=True
    )

    drone_name = db.Column(db.String(120), nullable=False)
    connection_type = db.Column(db.String(20), nullable=False)
    status = db.Column(
        db.String(20),
        nullable=False,
        default=constants.DEFAULT_DRONE_STATUS
    )
    battery_level = db.Column(db.Integer, default=constants.DEFAULT_BATTERY_LEVEL)
    last_seen = db.Column(db.DateTime, default=utcnow)

    created_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'droneName': self.drone_name,
            'connectionType': self.connection_type,
            'status': self.status,
            'batteryLevel': self.battery_level,
            'lastSeen': isoformat(self.last_seen),
            'createdAt': isoformat(self.created_at)
        }

    def __repr__(self):
        return f'<DroneConnection {self.drone_name}>'


class PlantHealthRecord(db.Model):
    """
    A plant health observation captured over a field, usually by a drone.

    Owned transitively: the owner is the owner of the field.
    """
    __tablename__ = 'plant_health_records'

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    field_id = db.Column(
        db.String(36),
        db.ForeignKey('fields.id'),
        nullable=False,
        index=True
    )
    drone_id = db.Column(
        db.String(36),
        db.ForeignKey('drone_connections.id'),
        nullable=True
    )

    health_score = db.Column(db.Integer, nullable=False)  # 0-100
    infection_rate = db.Column(db.Float, nullable=False)  # percentage
    infection_type = db.Column(db.String(50), nullable=True)  # aphid, fungal, ...
    severity = db.Column(db.String(20), nullable=False)  # low, medium, high
    latitude = db.Column(db.Float, nullable=True)
    longitude = db.Column(db.Float, nullable=True)
    detection_confidence = db.Column(db.Integer, nullable=False)  # 0-100

    recorded_at = db.Column(db.DateTime, default=utcnow, index=True)

    def to_dict(self):
        return {
            'id': self.id,
            'fieldId': self.field_id,
            'droneId': self.drone_id,
            'healthScore': self.health_score,
            'infectionRate': self.infection_rate,
            'infectionType': self.infection_type,
            'severity': self.severity,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'detectionConfidence': self.detection_confidence,
            'recordedAt': isoformat(self.recorded_at)
        }

    def __repr__(self):
        return f'<PlantHealthRecord {self.id}: {self.health_score}>'


class PesticideApplication(db.Model):
    """
    A pesticide treatment for a field, from recommendation to completion.

    Owned transitively through its field. Volumes are in liters.
    """
    __tablename__ = 'pesticide_applications'

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    field_id = db.Column(
        db.String(36),
        db.ForeignKey('fields.id'),
        nullable=False,
        index=True
    )
    health_record_id = db.Column(
        db.String(36),
        db.ForeignKey('plant_health_records.id'),
        nullable=True
    )

    pesticide_type = db.Column(db.String(120), nullable=False)
    volume_per_hectare = db.Column(db.Float, nullable=False)
    total_volume = db.Column(db.Float, nullable=False)
    application_method = db.Column(
        db.String(50),
        nullable=False,
        default=constants.DEFAULT_APPLICATION_METHOD
    )
    status = db.Column(
        db.String(20),
        nullable=False,
        default=constants.DEFAULT_APPLICATION_STATUS
    )
    recommended_by = db.Column(db.String(50), default=constants.DEFAULT_RECOMMENDED_BY)
    confidence = db.Column(db.Integer, nullable=False)  # 0-100
    scheduled_for = db.Column(db.DateTime, nullable=True)
    applied_at = db.Column(db.DateTime, nullable=True)

    created_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'fieldId': self.field_id,
            'healthRecordId': self.health_record_id,
            'pesticideType': self.pesticide_type,
            'volumePerHectare': self.volume_per_hectare,
            'totalVolume': self.total_volume,
            'applicationMethod': self.application_method,
            'status': self.status,
            'recommendedBy': self.recommended_by,
            'confidence': self.confidence,
            'scheduledFor': isoformat(self.scheduled_for),
            'appliedAt': isoformat(self.applied_at),
            'createdAt': isoformat(self.created_at)
        }

    def __repr__(self):
        return f'<PesticideApplication {self.pesticide_type} ({self.status})>'


class ContactMessage(db.Model):
    """Message left through the public contact form. Not owned by any user."""
    __tablename__ = 'contact_messages'

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120), nullable=False)
    message = db.Column(db.Text, nullable=False)
    status = db.Column(db.String(20), default=constants.DEFAULT_CONTACT_STATUS)

    created_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'message': self.message,
            'status': self.status,
            'createdAt': isoformat(self.created_at)
        }

    def __repr__(self):
        return f'<ContactMessage {self.email}>'
