from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required
from filevault.services.storage_service import get_storage
from filevault.services.upload_service import UploadService

bp = Blueprint('uploads', __name__, url_prefix='/api')


@bp.route('/upload', methods=['POST'])
@jwt_required()
def upload():
    """Validate the `file` part, store it and record its metadata"""
    config = current_app.config
    errors = UploadService.validate(
        request.files,
        request.form,
        allowed_mime_types=config['UPLOAD_ALLOWED_MIME_TYPES'],
        display_extensions=config['UPLOAD_DISPLAY_EXTENSIONS'],
        max_kilobytes=config['UPLOAD_MAX_KILOBYTES'],
    )
    if errors:
        return jsonify({
            "message": "Validation Error",
            "errors": {"file": errors}
        }), 422

    UploadService.store(get_storage(), request.files['file'], prefix=config['UPLOAD_PREFIX'])
    return jsonify({"message": "File uploaded successfully"}), 201


@bp.route('/files', methods=['GET'])
@jwt_required()
def list_files():
    return jsonify(UploadService.list_all(get_storage())), 200


@bp.route('/files/<path:filename>', methods=['DELETE'])
@jwt_required()
def delete_file(filename):
    deleted = UploadService.delete(get_storage(), filename)
    if deleted is None:
        return jsonify({"message": "File not found"}), 404

    return jsonify({"message": "File deleted successfully"}), 200
