import logging
from datetime import datetime, timedelta, timezone
from filevault.models.upload import Upload

logger = logging.getLogger(__name__)


def _as_utc(value):
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def reconcile_storage(storage, prefix, grace_seconds=3600, now=None):
    """
    Delete stored objects under `prefix` that no upload record points to.

    Objects younger than `grace_seconds` are skipped so an upload still between
    its object write and its record insert is never removed. Records whose object
    is missing are only reported.
    """
    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(seconds=grace_seconds)
    known_keys = {key for (key,) in Upload.query.with_entities(Upload.storage_key).all()}

    scanned = 0
    orphans_deleted = 0
    stored_keys = set()
    for key, last_modified in storage.list_objects(prefix=f"{prefix}/"):
        scanned += 1
        stored_keys.add(key)
        if key in known_keys:
            continue
        if _as_utc(last_modified) > cutoff:
            logger.debug(f"Skipping recent unrecorded object {key}")
            continue
        storage.delete(key)
        orphans_deleted += 1
        logger.info(f"Deleted orphaned object {key}")

    missing_objects = sorted(known_keys - stored_keys)
    for key in missing_objects:
        logger.warning(f"Upload record points to missing object {key}")

    return {
        "scanned": scanned,
        "orphans_deleted": orphans_deleted,
        "missing_objects": missing_objects,
    }
