import logging
from apscheduler.schedulers.background import BackgroundScheduler
from filevault.extensions import db
from filevault.services.reconcile_service import reconcile_storage

logger = logging.getLogger(__name__)

scheduler = BackgroundScheduler(daemon=True)


def init_reconciliation(app):
    """Starts the periodic orphaned-object cleanup when RECONCILE_ENABLED is set."""
    if not app.config.get('RECONCILE_ENABLED'):
        app.logger.info("Storage reconciliation disabled.")
        return

    if scheduler.running:
        app.logger.info("Reconciliation scheduler already running.")
        return

    scheduler.add_job(
        id='storage_reconciliation',
        func=_reconcile_job,
        args=[app],
        trigger='interval',
        minutes=app.config['RECONCILE_INTERVAL_MINUTES'],
        max_instances=1,
        coalesce=True,
        misfire_grace_time=60,
        replace_existing=True,
    )
    scheduler.start()
    app.logger.info(f"Storage reconciliation scheduled every {app.config['RECONCILE_INTERVAL_MINUTES']} minutes.")


def _reconcile_job(app):
    """Wrapper function to run reconciliation within app context."""
    with app.app_context():
        try:
            summary = reconcile_storage(
                app.extensions['object_storage'],
                prefix=app.config['UPLOAD_PREFIX'],
                grace_seconds=app.config['RECONCILE_GRACE_SECONDS'],
            )
            logger.info(f"Storage reconciliation finished: {summary}")
        except Exception as e:
            logger.error(f"Error during storage reconciliation: {e}", exc_info=True)
            db.session.rollback()
        finally:
            db.session.remove()
