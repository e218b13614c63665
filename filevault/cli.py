# filevault/cli.py
import json
import click
from flask import current_app
from filevault.extensions import db
from filevault.services.reconcile_service import reconcile_storage


def register_commands(app):

    @app.cli.command('init-db')
    def init_db():
        """Create all tables (development only, use `flask db upgrade` elsewhere)."""
        db.create_all()
        click.echo("Database tables created")

    @app.cli.command('reconcile-storage')
    @click.option('--grace-seconds', type=int, default=None,
                  help='Skip unrecorded objects younger than this (defaults to RECONCILE_GRACE_SECONDS).')
    def reconcile_storage_command(grace_seconds):
        """Delete stored objects that have no upload record."""
        if grace_seconds is None:
            grace_seconds = current_app.config['RECONCILE_GRACE_SECONDS']
        summary = reconcile_storage(
            current_app.extensions['object_storage'],
            prefix=current_app.config['UPLOAD_PREFIX'],
            grace_seconds=grace_seconds,
        )
        click.echo(json.dumps(summary, indent=2))
