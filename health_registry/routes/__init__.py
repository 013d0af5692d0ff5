from .auth import auth_bp
from .registry import registry_bp

__all__ = ["auth_bp", "registry_bp"]
