"""
Configuration management for the Flask application.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Base directory
BASE_DIR = Path(__file__).parent.parent


class Config:
    """Base configuration class."""

    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = False
    TESTING = False

    # Document storage
    DATA_PATH = BASE_DIR / os.getenv('CMS_DATA_PATH', 'data')
    HISTORY_PATH = DATA_PATH / 'history'
    HISTORY_LEDGER_FILE = HISTORY_PATH / 'history.json'

    # Credentials
    USERS_FILE = BASE_DIR / os.getenv('CMS_USERS_FILE', 'users.json')
    BCRYPT_ROUNDS = int(os.getenv('BCRYPT_ROUNDS', '12'))

    # Upload settings
    MAX_IMAGE_SIZE_MB = int(os.getenv('MAX_IMAGE_SIZE_MB', '15'))
    IMAGE_FOLDER = BASE_DIR / os.getenv('CMS_IMAGE_FOLDER', 'uploads/images')

    # Allowed file extensions
    ALLOWED_DOCUMENT_EXTENSIONS = {'txt', 'md'}
    ALLOWED_IMAGE_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif'}

    # Markdown rendering
    MARKDOWN_EXTENSIONS = ['fenced_code', 'tables']


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    FLASK_ENV = 'development'


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    FLASK_ENV = 'production'


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    FLASK_ENV = 'testing'
    SECRET_KEY = 'testing-secret-key'
    BCRYPT_ROUNDS = 4


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(config_name=None):
    """Get configuration based on environment."""
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')
    return config.get(config_name, DevelopmentConfig)
