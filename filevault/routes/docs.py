# filevault/routes/docs.py
"""
OpenAPI description of the file endpoints, served as static JSON
"""
from flask import Blueprint, jsonify

bp = Blueprint('docs', __name__, url_prefix='/api')

_MESSAGE = {
    "type": "object",
    "properties": {"message": {"type": "string"}},
    "required": ["message"],
}


def _message_response(description, example):
    return {
        "description": description,
        "content": {"application/json": {
            "schema": {"$ref": "#/components/schemas/Message"},
            "example": {"message": example},
        }},
    }


UNAUTHORIZED = _message_response("Unauthorized", "Unauthenticated.")

OPENAPI_SPEC = {
    "openapi": "3.0.3",
    "info": {"title": "filevault", "version": "1.0.0"},
    "components": {
        "securitySchemes": {
            "bearerAuth": {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"},
        },
        "schemas": {
            "Message": _MESSAGE,
            "ValidationError": {
                "type": "object",
                "properties": {
                    "message": {"type": "string"},
                    "errors": {
                        "type": "object",
                        "additionalProperties": {"type": "array", "items": {"type": "string"}},
                    },
                },
                "required": ["message", "errors"],
            },
            "StoredFile": {
                "type": "object",
                "properties": {
                    "filename": {"type": "string"},
                    "url": {"type": "string", "format": "uri"},
                },
                "required": ["filename", "url"],
            },
        },
    },
    "security": [{"bearerAuth": []}],
    "paths": {
        "/api/upload": {
            "post": {
                "summary": "Upload a file",
                "tags": ["Uploads"],
                "requestBody": {
                    "required": True,
                    "content": {"multipart/form-data": {"schema": {
                        "type": "object",
                        "required": ["file"],
                        "properties": {"file": {
                            "type": "string",
                            "format": "binary",
                            "description": "jpg, png, pdf or docx, at most 5120 KiB",
                        }},
                    }}},
                },
                "responses": {
                    "201": _message_response("File uploaded successfully", "File uploaded successfully"),
                    "401": UNAUTHORIZED,
                    "422": {
                        "description": "Validation error",
                        "content": {"application/json": {
                            "schema": {"$ref": "#/components/schemas/ValidationError"},
                            "example": {"message": "Validation Error",
                                        "errors": {"file": ["The file field is required."]}},
                        }},
                    },
                },
            },
        },
        "/api/files": {
            "get": {
                "summary": "List uploaded files",
                "tags": ["Uploads"],
                "responses": {
                    "200": {
                        "description": "List of uploaded files",
                        "content": {"application/json": {"schema": {
                            "type": "array",
                            "items": {"$ref": "#/components/schemas/StoredFile"},
                        }}},
                    },
                    "401": UNAUTHORIZED,
                },
            },
        },
        "/api/files/{filename}": {
            "delete": {
                "summary": "Delete a file by its original name",
                "tags": ["Uploads"],
                "parameters": [{
                    "name": "filename",
                    "in": "path",
                    "required": True,
                    "schema": {"type": "string"},
                    "example": "document.pdf",
                }],
                "responses": {
                    "200": _message_response("File deleted successfully", "File deleted successfully"),
                    "401": UNAUTHORIZED,
                    "404": _message_response("File not found", "File not found"),
                },
            },
        },
    },
}


@bp.route('/openapi.json', methods=['GET'])
def openapi_spec():
    return jsonify(OPENAPI_SPEC), 200
