import os
import uuid
import magic
from flask import current_app
from filevault.extensions import db
from filevault.models.upload import Upload

FIELD_REQUIRED = "The file field is required."
FIELD_NOT_A_FILE = "The file must be a file."

DOCX_MIME_TYPE = 'application/vnd.openxmlformats-officedocument.wordprocessingml.document'
# libmagic builds without the OOXML rules only see the zip container
ZIP_MIME_TYPES = ('application/zip', 'application/x-zip-compressed')


def build_storage_key(prefix, original_filename):
    return f"{prefix}/{uuid.uuid4().hex}_{original_filename}"


def client_basename(filename):
    """Last path component of a client-supplied name, either separator style"""
    return (filename or '').replace('\\', '/').rsplit('/', 1)[-1]


def file_size(file_storage):
    """Size in bytes of an uploaded werkzeug FileStorage, stream left at 0"""
    stream = file_storage.stream
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


def detect_content_type(file_storage):
    """MIME type sniffed from the file's first bytes, stream left at 0"""
    stream = file_storage.stream
    stream.seek(0)
    mime_type = magic.from_buffer(stream.read(2048), mime=True)
    stream.seek(0)

    if mime_type in ZIP_MIME_TYPES and client_basename(file_storage.filename).lower().endswith('.docx'):
        return DOCX_MIME_TYPE
    return mime_type


class UploadService:

    @staticmethod
    def validate(files, form, allowed_mime_types, display_extensions, max_kilobytes):
        """Return the list of error messages for the `file` field, empty when valid"""
        file = files.get('file')
        if file is None:
            # A plain form field named `file` is present but is not an upload
            if form.get('file'):
                return [FIELD_NOT_A_FILE]
            return [FIELD_REQUIRED]
        if not client_basename(file.filename):
            return [FIELD_REQUIRED]

        errors = []
        if detect_content_type(file) not in allowed_mime_types:
            errors.append(f"The file must be a file of type: {', '.join(display_extensions)}.")

        if file_size(file) > max_kilobytes * 1024:
            errors.append(f"The file must not be greater than {max_kilobytes} kilobytes.")
        return errors

    @staticmethod
    def store(storage, file, prefix):
        """Write the object, make it public, then record it. The object is removed again if recording fails."""
        original_name = client_basename(file.filename)
        storage_key = build_storage_key(prefix, original_name)

        storage.put(storage_key, file.stream, content_type=detect_content_type(file))
        try:
            storage.set_visibility(storage_key, 'public')
            upload = Upload(filename=original_name, storage_key=storage_key)
            db.session.add(upload)
            db.session.commit()
        except Exception:
            db.session.rollback()
            current_app.logger.error(f"Failed to record upload {storage_key}, removing stored object", exc_info=True)
            try:
                storage.delete(storage_key)
            except Exception as cleanup_error:
                # Left for the reconciliation job
                current_app.logger.error(f"Failed to remove orphaned object {storage_key}: {cleanup_error}")
            raise

        current_app.logger.info(f"Stored upload {upload.id} '{original_name}' as {storage_key}")
        return upload

    @staticmethod
    def list_all(storage):
        return [upload.to_dict(storage) for upload in Upload.query.order_by(Upload.id.asc()).all()]

    @staticmethod
    def delete(storage, filename):
        """Delete the oldest upload named `filename` and its object. Returns None when there is no such upload."""
        upload = Upload.first_by_filename(filename)
        if not upload:
            return None

        upload_id, storage_key = upload.id, upload.storage_key
        db.session.delete(upload)
        db.session.flush()
        try:
            storage.delete(storage_key)
        except Exception:
            db.session.rollback()
            current_app.logger.error(f"Failed to delete object {storage_key}, keeping upload {upload_id}", exc_info=True)
            raise

        db.session.commit()
        current_app.logger.info(f"Deleted upload {upload_id} '{filename}' ({storage_key})")
        return storage_key
