# =============================================================================
# AgriDrone Backend
# storage.py - Data-Access Layer
#
# Uniform create/read/update/delete/list primitives over the SQLAlchemy
# models. Ids and timestamps are always assigned here, never by callers.
# This layer does not validate input; schemas.py does that one layer up.
# =============================================================================

from agridrone.extensions import db
from agridrone.models import (
    User,
    Crop,
    Field,
    DroneConnection,
    PlantHealthRecord,
    PesticideApplication,
    ContactMessage,
    generate_id,
    utcnow,
)


class Repository:
    """
    CRUD access to one entity type.

    Args:
        model: SQLAlchemy model class
        owned_via_field: True when ownership is resolved through field_id
            (health records, pesticide applications) instead of user_id
        touch_on_update: Timestamp column refreshed on every update
    """

    # Stamped by this layer on create; caller values are discarded
    SERVER_MANAGED = frozenset({'id', 'created_at', 'recorded_at', 'last_seen'})

    # Never changed through update()
    IMMUTABLE = frozenset({'id', 'user_id', 'field_id', 'created_at', 'recorded_at'})

    def __init__(self, model, owned_via_field=False, touch_on_update=None):
        self.model = model
        self.owned_via_field = owned_via_field
        self.touch_on_update = touch_on_update
        self.columns = frozenset(model.__table__.columns.keys())

    def create(self, data):
        """
        Insert a new record.

        Unknown keys and server-managed keys are dropped. Omitted optional
        columns receive their declared defaults.
        """
        values = {
            key: value for key, value in data.items()
            if key in self.columns and key not in self.SERVER_MANAGED
        }
        record = self.model(**values)
        record.id = generate_id()

        db.session.add(record)
        db.session.commit()
        return record

    def get_by_id(self, record_id):
        """Return the record or None; absence is not an error here."""
        if not record_id:
            return None
        return db.session.get(self.model, record_id)

    def list_by_owner(self, user_id, field_id=None):
        """
        List records owned by a user. No ordering is guaranteed.

        Args:
            user_id: Owning user's id
            field_id: Optional filter for field-scoped entities
        """
        query = self.model.query

        if self.owned_via_field:
            query = query.join(Field, self.model.field_id == Field.id)\
                         .filter(Field.user_id == user_id)
            if field_id:
                query = query.filter(self.model.field_id == field_id)
        else:
            query = query.filter(self.model.user_id == user_id)

        return query.all()

    def update(self, record_id, changes):
        """
        Merge the supplied fields into an existing record.

        Keys not present in changes are left untouched. Returns None when
        the record does not exist; nothing is created in that case.
        """
        record = self.get_by_id(record_id)
        if record is None:
            return None

        for key, value in changes.items():
            if key in self.IMMUTABLE or key not in self.columns:
                continue
            setattr(record, key, value)

        if self.touch_on_update:
            setattr(record, self.touch_on_update, utcnow())

        db.session.commit()
        return record

    def delete(self, record_id):
        """Delete a record. Returns whether anything was removed."""
        record = self.get_by_id(record_id)
        if record is None:
            return False

        db.session.delete(record)
        db.session.commit()
        return True

    def owner_id_of(self, record):
        """User id that owns the record, following the field for transitive entities."""
        if self.owned_via_field:
            return record.field.user_id if record.field else None
        return record.user_id


class UserRepository:
    """
    Credential store. Users own records but are not owned themselves, so
    only creation and lookups are offered.
    """

    def __init__(self):
        self._records = Repository(User)

    def create(self, data):
        return self._records.create(data)

    def get_by_id(self, user_id):
        return self._records.get_by_id(user_id)

    def get_by_username(self, username):
        return User.query.filter_by(username=username).first()

    def get_by_email(self, email):
        return User.query.filter_by(email=email).first()


class Storage:
    """One repository per entity type."""

    def __init__(self):
        self.users = UserRepository()
        self.crops = Repository(Crop)
        self.fields = Repository(Field)
        self.drones = Repository(DroneConnection, touch_on_update='last_seen')
        self.health_records = Repository(PlantHealthRecord, owned_via_field=True)
        self.pesticide_applications = Repository(PesticideApplication, owned_via_field=True)
        self.contact_messages = Repository(ContactMessage)


storage = Storage()
