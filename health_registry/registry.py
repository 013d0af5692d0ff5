"""
health_registry.registry
~~~~~~~~~~~~~~~~~~~~~~~~

The single-authority registry of patients and medical records.

One identity, the *authority*, is the only caller allowed to register
patients, issue records or invalidate them. Everybody else can read.
Patients and records get dense, zero-based ids equal to their insertion
index; records are never deleted, only flagged invalid.

All methods must run inside a Flask application context because state
lives in the SQLAlchemy session of :mod:`health_registry.extensions`.
"""

from __future__ import annotations

import threading
from typing import List, Optional

from flask import current_app

from .errors import OutOfRange, Unauthorized
from .extensions import db
from .models import AUTHORITY_KEY, MAX_ID, MedicalRecord, Patient, RegistrySetting


class Registry:
    """Guarded access to the patient and medical-record tables."""

    def __init__(self):
        # Serializes every read-modify-write (id assignment, flag update)
        self._lock = threading.RLock()

    # === AUTHORITY ===

    def set_authority(self, identity: str) -> None:
        """Overwrite the stored authority. Deliberately unchecked: bootstrap."""
        with self._lock:
            setting = db.session.get(RegistrySetting, AUTHORITY_KEY)
            previous = setting.value if setting else None
            if setting is None:
                setting = RegistrySetting(key=AUTHORITY_KEY, value=identity)
                db.session.add(setting)
            else:
                setting.value = identity
            self._commit()
        current_app.logger.info(f"Authority changed from '{previous}' to '{identity}'")

    def get_authority(self) -> Optional[str]:
        setting = db.session.get(RegistrySetting, AUTHORITY_KEY)
        return setting.value if setting else None

    def is_authority(self, caller: Optional[str]) -> bool:
        authority = self.get_authority()
        return authority is not None and caller == authority

    def _require_authority(self, caller: Optional[str], action: str) -> None:
        if not self.is_authority(caller):
            current_app.logger.warning(f"Rejected {action} by non-authority caller '{caller}'")
            raise Unauthorized()

    # === MUTATIONS ===

    def register_patient(self, caller: Optional[str], name: str, birthdate: int,
                         patient_identity: str) -> Patient:
        with self._lock:
            self._require_authority(caller, "register_patient")
            patient = Patient(
                id=self._next_id(Patient),
                name=name,
                birthdate=birthdate,
                patient_identity=patient_identity,
                is_valid=True,
            )
            db.session.add(patient)
            self._commit()
        current_app.logger.info(f"Registered patient {patient.id} for identity '{patient_identity}'")
        return patient

    def issue_medical_record(self, caller: Optional[str], patient_id: int,
                             record_data: str) -> MedicalRecord:
        """Append a record. ``patient_id`` is stored as given, never checked."""
        with self._lock:
            self._require_authority(caller, "issue_medical_record")
            record = MedicalRecord(
                id=self._next_id(MedicalRecord),
                patient_id=patient_id,
                record_data=record_data,
                is_valid=True,
            )
            db.session.add(record)
            self._commit()
        current_app.logger.info(f"Issued medical record {record.id} for patient {patient_id}")
        return record

    def invalidate_medical_record(self, caller: Optional[str], record_number: int) -> MedicalRecord:
        """Flag a record invalid and return it.

        Records are addressed by their 1-based issue number, so number ``n``
        is the record with id ``n - 1``. Invalidating twice is a successful
        no-op.
        """
        with self._lock:
            self._require_authority(caller, "invalidate_medical_record")
            try:
                record = self.get_medical_record(record_number - 1)
            except OutOfRange:
                raise OutOfRange(f"Medical record number {record_number} is out of range") from None
            if record.is_valid:
                record.is_valid = False
                self._commit()
        current_app.logger.info(f"Invalidated medical record {record.id} (number {record_number})")
        return record

    # === QUERIES ===

    def get_patient(self, patient_id: int) -> Patient:
        return self._lookup(Patient, patient_id)

    def get_medical_record(self, record_id: int) -> MedicalRecord:
        return self._lookup(MedicalRecord, record_id)

    def get_valid_medical_records(self) -> List[MedicalRecord]:
        return self._records_by_validity(True)

    def get_invalid_medical_records(self) -> List[MedicalRecord]:
        return self._records_by_validity(False)

    # === HELPERS ===

    def _records_by_validity(self, is_valid: bool) -> List[MedicalRecord]:
        return (MedicalRecord.query
                .filter_by(is_valid=is_valid)
                .order_by(MedicalRecord.id)
                .all())

    def _lookup(self, model, entity_id: int):
        if entity_id < 0 or entity_id > MAX_ID:
            raise OutOfRange(f"{model.__name__} id {entity_id} is out of range")
        entity = db.session.get(model, entity_id)
        if entity is None:
            raise OutOfRange(f"{model.__name__} id {entity_id} is out of range")
        return entity

    @staticmethod
    def _next_id(model) -> int:
        # Rows are never deleted, so the row count is the next dense id
        return db.session.query(db.func.count(model.id)).scalar()

    @staticmethod
    def _commit() -> None:
        try:
            db.session.commit()
        except Exception as e:
            # Driver errors (OverflowError) fail the flush as well
            db.session.rollback()
            current_app.logger.error(f"Registry commit failed, rolled back: {e}")
            raise


registry = Registry()
