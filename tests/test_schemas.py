from datetime import datetime

import pytest
from pydantic import ValidationError

from agridrone.schemas import (
    CropCreate,
    CropUpdate,
    FieldCreate,
    PesticideApplicationUpdate,
    SignupRequest,
)


def test_camel_case_body_maps_to_columns():
    crop = CropCreate.model_validate({
        'name': 'Paddy',
        'type': 'rice',
        'plantedDate': '2024-03-15',
        'expectedHarvestDate': '2024-08-20T00:00:00',
        'area': 2.5
    })

    assert crop.model_dump()['planted_date'] == datetime(2024, 3, 15)
    assert crop.growth_stage == 'seedling'


def test_create_schema_ignores_unknown_keys():
    signup = SignupRequest.model_validate({
        'username': 'alice',
        'email': 'alice@example.com',
        'password': 'x',
        'fullName': 'Alice',
        'role': 'admin'
    })

    assert 'role' not in signup.model_dump()


def test_strings_are_stripped_and_must_be_non_empty():
    with pytest.raises(ValidationError):
        SignupRequest.model_validate({
            'username': '   ',
            'email': 'alice@example.com',
            'password': 'x',
            'fullName': 'Alice'
        })


def test_update_changes_only_contains_sent_keys():
    update = CropUpdate.model_validate({'growthStage': 'flowering', 'name': None})

    assert update.changes() == {'growth_stage': 'flowering'}


def test_update_rejects_unknown_keys():
    with pytest.raises(ValidationError):
        CropUpdate.model_validate({'userId': 'someone'})


def test_clearable_columns_keep_explicit_null():
    update = PesticideApplicationUpdate.model_validate({'appliedAt': None, 'status': None})

    assert update.changes() == {'applied_at': None}


def test_field_record_serializes_boundaries():
    field = FieldCreate.model_validate({
        'name': 'Zone A',
        'latitude': 30.5,
        'longitude': 75.9,
        'area': 1.2,
        'boundaries': '[[30.5, 75.9], [30.6, 75.9], [30.6, 76.0]]'
    })

    assert field.to_record()['boundaries'] == '[[30.5, 75.9], [30.6, 75.9], [30.6, 76.0]]'


def test_field_boundaries_reject_invalid_json():
    with pytest.raises(ValidationError):
        FieldCreate.model_validate({
            'name': 'Zone A',
            'latitude': 30.5,
            'longitude': 75.9,
            'area': 1.2,
            'boundaries': '[[30.5, 75.9'
        })
