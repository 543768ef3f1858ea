# =============================================================================
# AgriDrone Backend
# init_db.py - Database Initialization Script
#
# Creates the tables and seeds a demo farmer account with one crop, field,
# drone, health record and pesticide recommendation.
# Usage: python -m agridrone.init_db [--reset]
# =============================================================================

import json
import sys
from datetime import datetime

from flask import current_app

from agridrone.extensions import db
from agridrone.services.auth_service import hash_password
from agridrone.storage import storage


SAMPLE_USERNAME = 'farmer1'
SAMPLE_PASSWORD = 'password123'


def init_database(app, seed=False):
    """
    Create all tables and optionally seed the demo data.

    Safe to call repeatedly; existing tables and data are left alone.
    """
    with app.app_context():
        db.create_all()
        current_app.logger.info("Database tables created")

        if seed:
            seed_sample_data()


def seed_sample_data():
    """
    Insert the demo farmer and their records. Must run in an app context.

    Returns:
        User: The demo user (existing or newly created)
    """
    existing = storage.users.get_by_username(SAMPLE_USERNAME)
    if existing is not None:
        current_app.logger.info(f"Sample user '{SAMPLE_USERNAME}' already exists")
        return existing

    user = storage.users.create({
        'username': SAMPLE_USERNAME,
        'email': 'farmer1@example.com',
        'password_hash': hash_password(SAMPLE_PASSWORD),
        'full_name': 'Rajesh Kumar',
        'role': 'farmer'
    })

    crop = storage.crops.create({
        'user_id': user.id,
        'name': 'Main Rice Field',
        'type': 'rice',
        'planted_date': datetime(2024, 3, 15),
        'expected_harvest_date': datetime(2024, 8, 20),
        'growth_stage': 'flowering',
        'area': 2.5,
        'is_active': True
    })

    field = storage.fields.create({
        'user_id': user.id,
        'crop_id': crop.id,
        'name': 'Punjab Field Zone A',
        'latitude': 30.5795555,
        'longitude': 75.9249285,
        'area': 1.2,
        'boundaries': json.dumps([
            [30.577888, 75.921646],
            [30.581223, 75.921646],
            [30.581223, 75.928211],
            [30.577888, 75.928211]
        ])
    })

    drone = storage.drones.create({
        'user_id': user.id,
        'drone_name': 'Drone Alpha-1',
        'connection_type': 'wifi',
        'status': 'connected',
        'battery_level': 87
    })

    record = storage.health_records.create({
        'field_id': field.id,
        'drone_id': drone.id,
        'health_score': 94,
        'infection_rate': 3.2,
        'infection_type': 'aphid',
        'severity': 'low',
        'latitude': 30.5798,
        'longitude': 75.9252,
        'detection_confidence': 85
    })

    storage.pesticide_applications.create({
        'field_id': field.id,
        'health_record_id': record.id,
        'pesticide_type': 'Neem oil spray',
        'volume_per_hectare': 2.5,
        'total_volume': 3.0,
        'application_method': 'drone',
        'status': 'recommended',
        'recommended_by': 'ai_system',
        'confidence': 85
    })

    current_app.logger.info(
        f"Sample data seeded (username: {SAMPLE_USERNAME}, password: {SAMPLE_PASSWORD})"
    )
    return user


def reset_database(app):
    """
    Drop all tables and reinitialize the database.

    WARNING: This will delete all data!
    """
    with app.app_context():
        db.drop_all()
        current_app.logger.warning("All tables dropped")

    init_database(app, seed=True)


# =============================================================================
# Script Entry Point
# =============================================================================

if __name__ == '__main__':
    from agridrone.app import create_app

    app = create_app()

    if '--reset' in sys.argv[1:]:
        confirm = input("This will DELETE ALL DATA. Type 'yes' to confirm: ")
        if confirm.lower() != 'yes':
            print("Operation cancelled")
            sys.exit(1)
        reset_database(app)
    else:
        init_database(app, seed=True)

    print("Database initialization completed successfully!")
    print(f"  Username: {SAMPLE_USERNAME}")
    print(f"  Password: {SAMPLE_PASSWORD}")
