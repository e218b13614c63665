# filevault/config.py
import os
from datetime import timedelta
from dotenv import load_dotenv

# Load .env from the root project directory
basedir = os.path.abspath(os.path.dirname(__file__))
load_dotenv(os.path.join(basedir, '..', '.env'))


def _env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'your_default_secret_key')
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'postgresql:///filevault')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JWT Configuration
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'your_jwt_secret_key')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=int(os.getenv('JWT_ACCESS_TOKEN_MINUTES', 60)))
    JWT_TOKEN_LOCATION = ['headers']

    # S3-compatible object storage
    AWS_ACCESS_KEY_ID = os.getenv('AWS_ACCESS_KEY_ID')
    AWS_SECRET_ACCESS_KEY = os.getenv('AWS_SECRET_ACCESS_KEY')
    S3_BUCKET = os.getenv('S3_BUCKET')
    S3_REGION = os.getenv('S3_REGION', os.getenv('AWS_REGION', 'us-east-1'))
    S3_ENDPOINT_URL = os.getenv('S3_ENDPOINT_URL')  # MinIO / LocalStack
    S3_PUBLIC_URL = os.getenv('S3_PUBLIC_URL')  # CDN or custom domain in front of the bucket

    # Upload rules
    UPLOAD_PREFIX = os.getenv('UPLOAD_PREFIX', 'uploads')
    UPLOAD_MAX_KILOBYTES = int(os.getenv('UPLOAD_MAX_KILOBYTES', 5120))
    # Checked against the type sniffed from the file's first bytes
    UPLOAD_ALLOWED_MIME_TYPES = (
        'image/jpeg',
        'image/png',
        'application/pdf',
        'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    )
    # Names shown in validation messages
    UPLOAD_DISPLAY_EXTENSIONS = ('jpg', 'png', 'pdf', 'docx')
    MAX_CONTENT_LENGTH = int(os.getenv('MAX_CONTENT_LENGTH', 16 * 1024 * 1024))

    # Orphaned object reconciliation
    RECONCILE_ENABLED = _env_bool('RECONCILE_ENABLED', False)
    RECONCILE_INTERVAL_MINUTES = int(os.getenv('RECONCILE_INTERVAL_MINUTES', 60))
    RECONCILE_GRACE_SECONDS = int(os.getenv('RECONCILE_GRACE_SECONDS', 3600))

    LOG_LEVEL = os.getenv('LOG_LEVEL')


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    JWT_SECRET_KEY = 'test-jwt-secret-key-with-enough-length'
    S3_BUCKET = 'filevault-test'
    RECONCILE_ENABLED = False
