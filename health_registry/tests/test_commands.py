from health_registry.app import create_app
from health_registry.config import TestConfig
from health_registry.extensions import db
from health_registry.models import User
from health_registry.registry import registry

from .conftest import INSTITUTION


def test_set_authority_command(app):
    result = app.test_cli_runner().invoke(args=["set-authority", INSTITUTION])

    assert result.exit_code == 0
    assert registry.get_authority() == INSTITUTION


def test_create_user_command(app):
    runner = app.test_cli_runner()
    args = ["create-user", "institution", "inst@example.org", INSTITUTION, "--password", "pw"]

    result = runner.invoke(args=args)
    assert result.exit_code == 0
    assert User.query.filter_by(account=INSTITUTION).one().username == "institution"

    result = runner.invoke(args=args)
    assert result.exit_code != 0
    assert "already exists" in result.output


def test_init_db_command(app):
    db.drop_all()

    result = app.test_cli_runner().invoke(args=["init-db"])

    assert result.exit_code == 0
    assert registry.get_authority() is None


class BootstrapConfig(TestConfig):
    REGISTRY_AUTHORITY = INSTITUTION


def test_authority_bootstrapped_from_config_only_when_unset(tmp_path):
    class FileConfig(BootstrapConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'registry.db'}"

    # No tables yet: bootstrap is skipped
    app = create_app(FileConfig)
    with app.app_context():
        db.create_all()
        assert registry.get_authority() is None

    app = create_app(FileConfig)
    with app.app_context():
        assert registry.get_authority() == INSTITUTION
        registry.set_authority("0xRotated")

    app = create_app(FileConfig)
    with app.app_context():
        assert registry.get_authority() == "0xRotated"
        db.drop_all()
