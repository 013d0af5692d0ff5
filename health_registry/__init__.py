"""Single-authority registry of patients and medical records.

A Flask service backed by SQLAlchemy: one institution identity issues and
invalidates records, every caller may read them.
"""

from .app import create_app
from .registry import Registry, registry

__all__ = ["create_app", "Registry", "registry"]
