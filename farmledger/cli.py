# farmledger/cli.py
import click
from flask import Flask

from .extensions import db
from .models import User


def register_cli(app: Flask) -> None:
    @app.cli.command("init-db")
    def init_db():
        """Create all tables."""
        db.create_all()
        click.echo("Tables created")

    @app.cli.command("create-user")
    @click.argument("email")
    @click.argument("password")
    def create_user(email, password):
        """Create or reset a confirmed user."""
        email = email.strip().lower()
        u = User.query.filter_by(email=email).first()
        if not u:
            u = User(email=email)
            db.session.add(u)
        u.set_password(password)
        u.is_active = True
        u.confirm_email()
        db.session.commit()
        click.echo(f"Upserted: {email}")
