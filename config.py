"""
Lombok Heritage - Configuration Module
Handles all application configuration settings
"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

class Config:
    """Base configuration"""

    # Flask Core
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    FLASK_APP = os.environ.get('FLASK_APP') or 'wsgi.py'
    JSON_SORT_KEYS = False

    # Database
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///lombok_heritage.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = False

    # Spatial analysis (buffer radius in meters)
    BUFFER_RADIUS_MIN = int(os.environ.get('BUFFER_RADIUS_MIN', 100))
    BUFFER_RADIUS_MAX = int(os.environ.get('BUFFER_RADIUS_MAX', 2000))
    BUFFER_RADIUS_DEFAULT = int(os.environ.get('BUFFER_RADIUS_DEFAULT', 500))

    # Dashboard
    GROWTH_WINDOWS = (6, 12)  # months
    GROWTH_DEFAULT_MONTHS = 12
    RECENT_ACTIVITY_LIMIT = int(os.environ.get('RECENT_ACTIVITY_LIMIT', 10))

    # Preservation recommendations
    TOP_PRIORITY_LIMIT = int(os.environ.get('TOP_PRIORITY_LIMIT', 10))
    TIER_LIST_LIMIT = int(os.environ.get('TIER_LIST_LIMIT', 20))

    # Image tagging (minimum classifier score for a suggested tag)
    TAG_MIN_SCORE = float(os.environ.get('TAG_MIN_SCORE', 0.2))

    # Application Settings
    ORGANIZATION_NAME = "Dinas Kebudayaan Lombok"
    PROJECT_NAME = "Lombok Cultural Heritage Catalogue"
    VERSION = "1.0.0"

    @staticmethod
    def init_app(app):
        pass


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False
    SQLALCHEMY_ECHO = True


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False

    @staticmethod
    def init_app(app):
        # Log to file in production
        import logging
        from logging.handlers import RotatingFileHandler

        if not os.path.exists('logs'):
            os.mkdir('logs')

        file_handler = RotatingFileHandler(
            'logs/lombok_heritage.log',
            maxBytes=10240000,
            backupCount=10
        )
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)
        app.logger.setLevel(logging.INFO)
        app.logger.info('Lombok Heritage startup')


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
