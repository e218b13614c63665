# filevault/routes/auth.py
from datetime import datetime, timezone
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import create_access_token, jwt_required, get_jwt, get_jwt_identity
from filevault.extensions import db, jwt
from filevault.models.user import User
from filevault.models.token import TokenBlocklist

bp = Blueprint('auth', __name__, url_prefix='/auth')

UNAUTHENTICATED = {"message": "Unauthenticated."}


# Setup the JWT loaders
@jwt.user_lookup_loader
def user_lookup_callback(_jwt_header, jwt_data):
    identity = jwt_data["sub"]
    return User.query.filter_by(id=int(identity)).first()


@jwt.token_in_blocklist_loader
def check_if_token_revoked(jwt_header, jwt_payload):
    return TokenBlocklist.is_token_revoked(jwt_payload["jti"])


@jwt.unauthorized_loader
def missing_token_callback(reason):
    return jsonify(UNAUTHENTICATED), 401


@jwt.invalid_token_loader
def invalid_token_callback(reason):
    current_app.logger.info(f"Rejected invalid token: {reason}")
    return jsonify(UNAUTHENTICATED), 401


@jwt.expired_token_loader
def expired_token_callback(jwt_header, jwt_payload):
    return jsonify(UNAUTHENTICATED), 401


@jwt.revoked_token_loader
def revoked_token_callback(jwt_header, jwt_payload):
    return jsonify(UNAUTHENTICATED), 401


@jwt.user_lookup_error_loader
def user_lookup_error_callback(jwt_header, jwt_payload):
    return jsonify(UNAUTHENTICATED), 401


@bp.route('/register', methods=['POST'])
def register():
    data = request.get_json(silent=True) or {}

    username = (data.get('username') or '').strip()
    password = data.get('password') or ''
    if not username or not password:
        return jsonify({"message": "Username and password are required"}), 400

    if len(username) < 3:
        return jsonify({"message": "Username must be at least 3 characters"}), 400

    if len(password) < 6:
        return jsonify({"message": "Password must be at least 6 characters"}), 400

    if User.query.filter_by(username=username).first():
        return jsonify({"message": "Username already exists"}), 400

    user = User(username=username)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    current_app.logger.info(f"Registered user {user.id} ({username})")

    return jsonify({"message": "User registered successfully", "user": user.to_dict()}), 201


@bp.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}
    username = (data.get('username') or '').strip()
    password = data.get('password') or ''

    user = User.query.filter_by(username=username).first()
    if not user or not user.check_password(password):
        current_app.logger.warning(f"Failed login attempt for username '{username}'")
        return jsonify({"message": "Invalid username or password"}), 401

    access_token = create_access_token(identity=str(user.id))
    return jsonify({"access_token": access_token, "token_type": "Bearer"}), 200


@bp.route('/logout', methods=['POST'])
@jwt_required()
def logout():
    """Revoke the access token used for this request"""
    token = get_jwt()
    db.session.add(TokenBlocklist(
        jti=token["jti"],
        token_type=token["type"],
        user_id=int(get_jwt_identity()),
        expires=datetime.fromtimestamp(token["exp"], tz=timezone.utc),
    ))
    db.session.commit()
    return jsonify({"message": "Successfully logged out"}), 200
