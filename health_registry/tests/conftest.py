import pytest
from flask_jwt_extended import create_access_token

from health_registry.app import create_app
from health_registry.config import TestConfig
from health_registry.extensions import db
from health_registry.models import User
from health_registry.registry import registry as registry_instance
from health_registry.routes.auth import hash_password

INSTITUTION = "0xInstitution"
OTHER = "0xOtherAccount"
PATIENT = "0xPatientAccount"


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def registry(app):
    registry_instance.set_authority(INSTITUTION)
    return registry_instance


@pytest.fixture
def make_user(app):
    def _make_user(username, account, password="s3cret-pass"):
        user = User(
            username=username,
            email=f"{username}@example.org",
            account=account,
            password_hash=hash_password(password),
        )
        db.session.add(user)
        db.session.commit()
        return user
    return _make_user


def auth_header(account):
    return {"Authorization": f"Bearer {create_access_token(identity=account)}"}


@pytest.fixture
def institution_headers(registry):
    return auth_header(INSTITUTION)


@pytest.fixture
def other_headers(registry):
    return auth_header(OTHER)
