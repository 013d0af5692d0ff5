"""Failures raised by the registry.

Each error carries the message surfaced to the caller and the HTTP status
the API answers with. Errors are raised before any state is touched.
"""


class RegistryError(Exception):
    status_code = 400
    message = "Registry operation failed"

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class Unauthorized(RegistryError):
    """Caller identity differs from the stored authority."""
    status_code = 403
    message = "Only institution can manage records"


class OutOfRange(RegistryError):
    """Lookup by an id that does not index an existing row."""
    status_code = 404
    message = "Id out of range"


class DanglingReference(RegistryError):
    # Not raised: issue_medical_record accepts any patient_id.
    status_code = 422
    message = "Referenced patient does not exist"
