# -*- coding: utf-8 -*-
"""
File: routes/registry.py
------------------------
JSON endpoints of the patient / medical-record registry.

- Reads are public.
- Mutations need a JWT; the token identity is the caller identity that the
  registry compares against the stored authority.
"""

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from marshmallow import ValidationError

from ..errors import RegistryError, Unauthorized
from ..registry import registry
from ..schemas import (AuthoritySchema, MedicalRecordIssueSchema,
                       MedicalRecordSchema, PatientRegisterSchema,
                       PatientSchema)

registry_bp = Blueprint('registry', __name__, url_prefix='/api/registry')

authority_schema = AuthoritySchema()
patient_register_schema = PatientRegisterSchema()
record_issue_schema = MedicalRecordIssueSchema()
patient_schema = PatientSchema()
record_schema = MedicalRecordSchema()
records_schema = MedicalRecordSchema(many=True)


@registry_bp.errorhandler(RegistryError)
def handle_registry_error(e):
    return jsonify({"msg": e.message}), e.status_code


@registry_bp.errorhandler(ValidationError)
def handle_validation_error(e):
    return jsonify(e.messages), 400


def _load(schema):
    # load() raises ValidationError, rendered as 400 above
    return schema.load(request.get_json(silent=True) or {})


# === AUTHORITY ===

@registry_bp.route('/authority', methods=['GET'])
def get_authority():
    return jsonify({"identity": registry.get_authority()}), 200


@registry_bp.route('/authority', methods=['PUT'])
@jwt_required()
def set_authority():
    data = _load(authority_schema)
    uid = get_jwt_identity()
    # Any account may bootstrap; once set, only the authority hands it over
    if registry.get_authority() is not None and not registry.is_authority(uid):
        current_app.logger.warning(f"User {uid} tried to take over the authority")
        raise Unauthorized()
    current_app.logger.info(f"User {uid} setting authority to '{data['identity']}'")
    registry.set_authority(data['identity'])
    return jsonify({"identity": registry.get_authority()}), 200


# === PATIENTS ===

@registry_bp.route('/patients', methods=['POST'])
@jwt_required()
def register_patient():
    data = _load(patient_register_schema)
    patient = registry.register_patient(
        get_jwt_identity(),
        data['name'],
        data['birthdate'],
        data['patient_identity'],
    )
    return jsonify(patient_schema.dump(patient)), 201


@registry_bp.route('/patients/<int(signed=True):patient_id>', methods=['GET'])
def get_patient(patient_id):
    return jsonify(patient_schema.dump(registry.get_patient(patient_id))), 200


# === MEDICAL RECORDS ===

@registry_bp.route('/records', methods=['POST'])
@jwt_required()
def issue_medical_record():
    data = _load(record_issue_schema)
    record = registry.issue_medical_record(
        get_jwt_identity(),
        data['patient_id'],
        data['record_data'],
    )
    return jsonify(record_schema.dump(record)), 201


@registry_bp.route('/records/<int(signed=True):record_id>', methods=['GET'])
def get_medical_record(record_id):
    return jsonify(record_schema.dump(registry.get_medical_record(record_id))), 200


@registry_bp.route('/records/<int(signed=True):record_number>/invalidate', methods=['POST'])
@jwt_required()
def invalidate_medical_record(record_number):
    # 1-based issue number: 1 addresses the record with id 0
    record = registry.invalidate_medical_record(get_jwt_identity(), record_number)
    return jsonify(record_schema.dump(record)), 200


@registry_bp.route('/records/valid', methods=['GET'])
def list_valid_records():
    return jsonify({"records": records_schema.dump(registry.get_valid_medical_records())}), 200


@registry_bp.route('/records/invalid', methods=['GET'])
def list_invalid_records():
    return jsonify({"records": records_schema.dump(registry.get_invalid_medical_records())}), 200
