# =============================================================================
# AgriDrone Backend
# authorization.py - Ownership Checks
#
# Every read-single, update or delete of an owned resource goes through
# get_owned_or_404: existence is checked first (404), then ownership (403).
# Nothing is cached; each request is authorized on its own.
# =============================================================================

from flask import current_app

from agridrone.errors import Forbidden, NotFound, ValidationError


def get_owned_or_404(repository, record_id, identity, label):
    """
    Fetch a record the caller must own.

    Args:
        repository: storage.Repository for the entity type
        record_id: Id from the URL
        identity: Verified caller Identity
        label: Human name used in messages (e.g. 'Crop')

    Returns:
        The record

    Raises:
        NotFound: No record with that id
        Forbidden: The record belongs to another user
    """
    record = repository.get_by_id(record_id)
    if record is None:
        raise NotFound(f'{label} not found')

    if repository.owner_id_of(record) != identity.user_id:
        current_app.logger.warning(
            f"Ownership denied: user={identity.user_id} {label.lower()}={record_id}"
        )
        raise Forbidden(f'You can only access your own {label.lower()} records')

    return record


def require_owned_reference(repository, record_id, identity, field_name):
    """
    Validate an id referenced from a request body (fieldId, cropId, ...).

    Unknown ids are a validation problem with that body field; ids that
    exist but belong to someone else are Forbidden.
    """
    record = repository.get_by_id(record_id)
    if record is None:
        raise ValidationError({field_name: 'Referenced record does not exist'})

    if repository.owner_id_of(record) != identity.user_id:
        current_app.logger.warning(
            f"Ownership denied: user={identity.user_id} {field_name}={record_id}"
        )
        raise Forbidden(f'{field_name} refers to a record you do not own')

    return record
