from marshmallow import Schema, fields, validate

from .models import MAX_BIGINT, MIN_BIGINT

bigint_range = validate.Range(min=MIN_BIGINT, max=MAX_BIGINT)

class ChangePasswordSchema(Schema):
    old_password = fields.String(required=True)
    new_password = fields.String(required=True)

class LoginSchema(Schema):
    email    = fields.Email(required=True)
    password = fields.Str(required=True)

class AuthoritySchema(Schema):
    identity = fields.Str(required=True)

class PatientRegisterSchema(Schema):
    # Only types and column bounds are checked
    name             = fields.Str(required=True)
    birthdate        = fields.Int(required=True, strict=True, validate=bigint_range)
    patient_identity = fields.Str(required=True)

class MedicalRecordIssueSchema(Schema):
    patient_id  = fields.Int(required=True, strict=True, validate=bigint_range)
    record_data = fields.Str(required=True)

class PatientSchema(Schema):
    id               = fields.Int(dump_only=True)
    name             = fields.Str()
    birthdate        = fields.Int()
    patient_identity = fields.Str()
    is_valid         = fields.Bool()

class MedicalRecordSchema(Schema):
    id          = fields.Int(dump_only=True)
    patient_id  = fields.Int()
    record_data = fields.Str()
    is_valid    = fields.Bool()
