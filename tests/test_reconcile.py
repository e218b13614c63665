# tests/test_reconcile.py
import io
import json
from datetime import datetime, timedelta, timezone

from filevault.extensions import db
from filevault.models.upload import Upload
from filevault.services.reconcile_service import reconcile_storage

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def put_object(storage, key, age):
    storage.put(key, io.BytesIO(b'data'))
    storage.objects[key]['last_modified'] = NOW - age


def test_reconcile_removes_old_orphans_only(app, storage):
    put_object(storage, 'uploads/a_recorded.pdf', timedelta(days=2))
    put_object(storage, 'uploads/b_orphan.pdf', timedelta(hours=2))
    put_object(storage, 'uploads/c_in_flight.pdf', timedelta(seconds=30))
    put_object(storage, 'other/d_outside_prefix.pdf', timedelta(days=2))
    db.session.add(Upload(filename='recorded.pdf', storage_key='uploads/a_recorded.pdf'))
    db.session.commit()

    summary = reconcile_storage(storage, prefix='uploads', grace_seconds=3600, now=NOW)

    assert summary == {'scanned': 3, 'orphans_deleted': 1, 'missing_objects': []}
    assert sorted(storage.objects) == [
        'other/d_outside_prefix.pdf',
        'uploads/a_recorded.pdf',
        'uploads/c_in_flight.pdf',
    ]


def test_reconcile_reports_missing_objects(app, storage):
    db.session.add(Upload(filename='gone.pdf', storage_key='uploads/x_gone.pdf'))
    db.session.commit()

    summary = reconcile_storage(storage, prefix='uploads', grace_seconds=0, now=NOW)

    assert summary['missing_objects'] == ['uploads/x_gone.pdf']
    assert Upload.query.count() == 1


def test_reconcile_cli(app, storage):
    put_object(storage, 'uploads/z_orphan.pdf', timedelta(days=1))

    result = app.test_cli_runner().invoke(args=['reconcile-storage', '--grace-seconds', '0'])

    assert result.exit_code == 0
    assert json.loads(result.output)['orphans_deleted'] == 1
    assert storage.objects == {}
