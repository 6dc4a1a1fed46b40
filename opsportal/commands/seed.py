"""Data seeding CLI commands."""

import click
from flask import current_app
from flask.cli import with_appcontext

from opsportal.services.accounts import admin_user_service


@click.group('seed')
def seed_commands():
    """Data seeding commands."""
    pass


@seed_commands.command('admin')
@click.option('--email', default=None, help='Admin email (defaults to DEFAULT_ADMIN_EMAIL)')
@click.option('--password', default=None, help='Admin password (defaults to DEFAULT_ADMIN_PASSWORD)')
@with_appcontext
def seed_admin(email, password):
    """Create or reset the default dashboard admin.

    Example:
        flask seed admin
        flask seed admin --email ops@example.com --password 's3cret!'
    """
    email = email or current_app.config['DEFAULT_ADMIN_EMAIL']
    password = password or current_app.config.get('DEFAULT_ADMIN_PASSWORD')
    if not password:
        click.echo(click.style('Error: pass --password or set DEFAULT_ADMIN_PASSWORD', fg='red'))
        raise click.exceptions.Exit(1)

    click.echo('Seeding admin user...')
    user, created = admin_user_service.upsert_admin(email, password)
    verb = 'created' if created else 'updated'
    click.echo(click.style(f'Admin user {verb}: {user.email}', fg='green'))
