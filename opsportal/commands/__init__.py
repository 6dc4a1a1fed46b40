"""CLI commands for the operations portal."""

from .admin import admin_commands
from .seed import seed_commands
from .videos import video_commands


def register_commands(app):
    """Register all CLI command groups with the Flask app."""
    app.cli.add_command(admin_commands)
    app.cli.add_command(seed_commands)
    app.cli.add_command(video_commands)
