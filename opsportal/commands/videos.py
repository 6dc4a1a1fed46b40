"""Channel video CLI commands."""

import click
from flask.cli import with_appcontext

from opsportal.services.errors import ServiceError
from opsportal.services.youtube import sync_channel_videos


@click.group('videos')
def video_commands():
    """Channel video library commands."""
    pass


@video_commands.command('sync')
@with_appcontext
def sync_videos():
    """Fetch the latest channel videos from the YouTube Data API."""
    try:
        result = sync_channel_videos()
    except ServiceError as e:
        click.echo(click.style(f'Error: {e.message}', fg='red'))
        if e.details:
            click.echo(f'  Details: {e.details}')
        raise click.exceptions.Exit(1)

    click.echo(click.style(result.message, fg='green'))
    click.echo(f'  Videos updated: {result.videos_updated}')
    click.echo(f'  Videos on channel: {result.total_on_channel}')
