import os
import dotenv
dotenv.load_dotenv()
basedir = os.path.abspath(os.path.dirname(__file__))

# Flask configuration
SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-key-please-change-in-production'
DEBUG = os.environ.get('FLASK_DEBUG', '0') == '1'
ENV_NAME = os.environ.get('APP_ENV', 'development')

# Database configuration
SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///' + os.path.join(basedir, 'admin_panel.db')
SQLALCHEMY_TRACK_MODIFICATIONS = False

# All API blueprints are mounted under this prefix
API_PREFIX = os.environ.get('API_PREFIX', '/api/v1')

# Uploads are stored on disk and served back under /uploads
UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or os.path.join(basedir, 'public', 'uploads')
MAX_CONTENT_LENGTH = int(os.environ.get('MAX_UPLOAD_MB', '25')) * 1024 * 1024
ALLOWED_UPLOAD_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp', 'svg', 'pdf', 'doc', 'docx', 'txt'}

# Logging
LOG_DIR = os.environ.get('LOG_DIR') or os.path.join(basedir, 'logs')
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

# Auth
TOKEN_MAX_AGE = int(os.environ.get('TOKEN_MAX_AGE', '3600'))  # seconds
ADMIN_ROLE_NAME = 'Administrator'
