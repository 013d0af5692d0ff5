# health_registry/models.py

from datetime import datetime, timezone
from .extensions import db

AUTHORITY_KEY = "authority"

# Bounds of Integer and BigInteger columns
MAX_ID = 2 ** 31 - 1
MIN_BIGINT = -(2 ** 63)
MAX_BIGINT = 2 ** 63 - 1


class User(db.Model):
    __tablename__ = "users"
    id             = db.Column(db.Integer, primary_key=True)
    username       = db.Column(db.String(50), unique=True, nullable=False)
    email          = db.Column(db.String(100), unique=True, nullable=False)
    password_hash  = db.Column(db.Text, nullable=False)
    account        = db.Column(db.String(255), unique=True, nullable=False)
    created_at     = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))


class RegistrySetting(db.Model):
    __tablename__ = "registry_settings"
    key            = db.Column(db.String(50), primary_key=True)
    value          = db.Column(db.String(255), nullable=False)


class Patient(db.Model):
    __tablename__ = "patients"

    # Ids are assigned by the registry: zero-based insertion index
    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    name = db.Column(db.Text, nullable=False)
    birthdate = db.Column(db.BigInteger, nullable=False)
    patient_identity = db.Column(db.String(255), nullable=False)
    is_valid = db.Column(db.Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<Patient {self.id} {self.name!r}>"


class MedicalRecord(db.Model):
    __tablename__ = 'medical_records'

    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    # Logical reference to patients.id, intentionally without a foreign key
    patient_id = db.Column(db.BigInteger, nullable=False)
    record_data = db.Column(db.Text, nullable=False)
    is_valid = db.Column(db.Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<MedicalRecord {self.id} patient={self.patient_id} valid={self.is_valid}>"
