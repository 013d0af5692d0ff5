"""Flask CLI commands for bootstrapping a registry deployment."""

import click
from flask import Flask

from .extensions import db
from .models import User
from .registry import registry
from .routes.auth import hash_password


def register_commands(app: Flask) -> None:

    @app.cli.command("init-db")
    def init_db():
        """Create all tables that do not exist yet."""
        db.create_all()
        click.echo("Database initialized.")

    @app.cli.command("create-user")
    @click.argument("username")
    @click.argument("email")
    @click.argument("account")
    @click.password_option()
    def create_user(username, email, account, password):
        """Provision a login whose token identity is ACCOUNT."""
        if User.query.filter((User.email == email) | (User.account == account)).first():
            raise click.ClickException(f"A user with email '{email}' or account '{account}' already exists.")
        db.session.add(User(
            username=username,
            email=email,
            account=account,
            password_hash=hash_password(password),
        ))
        db.session.commit()
        click.echo(f"User '{username}' created for account '{account}'.")

    @app.cli.command("set-authority")
    @click.argument("identity")
    def set_authority(identity):
        """Store IDENTITY as the only caller allowed to mutate the registry."""
        registry.set_authority(identity)
        click.echo(f"Authority set to '{identity}'.")
