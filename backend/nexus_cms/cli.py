import click
from flask import current_app
from flask.cli import with_appcontext

from nexus_cms.domain.permissions import DEMO_PERMISSIONS, PERMISSIONS, WILDCARD
from nexus_cms.extensions import db
from nexus_cms.models.user import Permission, Role, User
from nexus_cms.utils.transaction import transactional


def seed_database(*, super_admin_password=None, demo_password=None):
    """
    Idempotent bootstrap.

    - permission catalogue plus the ``*`` wildcard
    - the ``admin`` role (no permissions of its own)
    - the super-admin holding ``*``
    - optionally a demo admin with view-only permissions
    """
    with transactional():
        catalogue = {name: Permission.get_or_create(name) for name in PERMISSIONS}
        wildcard = Permission.get_or_create(WILDCARD)

        role = Role.query.filter_by(name="admin").first()
        if role is None:
            role = Role(name="admin")
            db.session.add(role)

        email = current_app.config["SUPER_ADMIN_EMAIL"].lower()
        super_admin = User.query.filter_by(email=email).first()
        if super_admin is None:
            password = super_admin_password or current_app.config.get("SUPER_ADMIN_PASSWORD")
            if not password:
                raise click.UsageError("Set SUPER_ADMIN_PASSWORD or pass --password")
            super_admin = User(name="Super Admin", email=email)
            super_admin.set_password(password)
            db.session.add(super_admin)

        if wildcard not in super_admin.permissions:
            super_admin.permissions.append(wildcard)
        if role not in super_admin.roles:
            super_admin.roles.append(role)

        if demo_password:
            demo = User.query.filter_by(email="demo@nexusengineering.com").first()
            if demo is None:
                demo = User(name="Demo Admin", email="demo@nexusengineering.com")
                db.session.add(demo)
            demo.set_password(demo_password)
            demo.permissions = [catalogue[name] for name in DEMO_PERMISSIONS]
            demo.roles = [role]

    return super_admin


@click.command("seed")
@click.option("--password", help="Password for a newly created super-admin.")
@click.option("--demo-password", help="Also create a view-only demo admin with this password.")
@with_appcontext
def seed_command(password, demo_password):
    """Create permissions, the admin role and the super-admin."""
    user = seed_database(super_admin_password=password, demo_password=demo_password)
    click.echo(f"Seeded permissions; super-admin is {user.email}")


def register_commands(app):
    app.cli.add_command(seed_command)
