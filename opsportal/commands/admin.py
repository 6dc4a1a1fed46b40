"""Admin account CLI commands."""

import click
from flask.cli import with_appcontext
from sqlalchemy import select

from opsportal.extensions import db
from opsportal.models import AdminUser
from opsportal.services.accounts import admin_user_service
from opsportal.services.errors import ServiceError


@click.group('admin')
def admin_commands():
    """Admin account management commands."""
    pass


@admin_commands.command('create')
@click.option('--email', required=True, help='Admin email')
@click.option('--password', required=True, prompt=True, hide_input=True, confirmation_prompt=True, help='Admin password')
@with_appcontext
def create_admin(email, password):
    """Create a dashboard admin."""
    try:
        user = admin_user_service.create_admin(email, password)
    except ServiceError as e:
        click.echo(click.style(f'Error: {e.message}', fg='red'))
        raise click.exceptions.Exit(1)

    click.echo(click.style('Admin created successfully!', fg='green'))
    click.echo(f'  Email: {user.email}')


@admin_commands.command('set-password')
@click.option('--email', required=True, help='Admin email')
@click.option('--password', required=True, prompt=True, hide_input=True, confirmation_prompt=True, help='New password')
@with_appcontext
def set_password(email, password):
    """Set or reset an admin's password."""
    user = admin_user_service.find_by_email(email)
    if not user:
        click.echo(click.style(f'Error: No admin {email} found', fg='red'))
        raise click.exceptions.Exit(1)

    admin_user_service.set_password(user, password)
    click.echo(click.style('Password updated.', fg='green'))


@admin_commands.command('list')
@with_appcontext
def list_admins():
    """List dashboard admins."""
    admins = db.session.scalars(select(AdminUser).order_by(AdminUser.email)).all()
    if not admins:
        click.echo('No admins found.')
        return

    for user in admins:
        status = 'active' if user.is_active else 'disabled'
        last_login = user.last_login_at.isoformat() if user.last_login_at else 'never'
        click.echo(f'  {user.email}  [{status}]  last login: {last_login}')
