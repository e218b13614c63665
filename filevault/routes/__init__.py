# filevault/routes/__init__.py
from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge
from filevault.extensions import db


def register_blueprints(app):
    from filevault.routes import auth, uploads, docs

    app.register_blueprint(auth.bp)
    app.register_blueprint(uploads.bp)
    app.register_blueprint(docs.bp)


def register_error_handlers(app):
    @app.errorhandler(RequestEntityTooLarge)
    def payload_too_large(error):
        return jsonify({"message": "Payload Too Large"}), 413

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"message": "Not Found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({"message": "Method Not Allowed"}), 405

    @app.errorhandler(Exception)
    def unhandled_exception(error):
        if isinstance(error, HTTPException):
            return error
        current_app.logger.error(f"Unhandled error: {error}", exc_info=True)
        try:
            db.session.rollback()
        except Exception as rollback_error:
            current_app.logger.error(f"Session rollback failed after unhandled error: {rollback_error}")
        return jsonify({"message": "Server Error"}), 500
