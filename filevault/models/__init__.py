# filevault/models/__init__.py
from .user import User
from .token import TokenBlocklist
from .upload import Upload
