"""
Lombok Heritage - Application Factory
Initializes and configures the Flask application
"""
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_cors import CORS
from config import config
import os

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()

def create_app(config_name=None, classifier_loader=None):
    """Application factory pattern"""

    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    config_class = config.get(config_name, config['default'])

    app = Flask(__name__)
    app.config.from_object(config_class)
    config_class.init_app(app)

    # Initialize extensions with app
    db.init_app(app)
    migrate.init_app(app, db)
    CORS(app)

    # Image tagging classifier, one handle per application
    from lombok_heritage.services.image_tagging import ClassifierHandle
    app.extensions['classifier'] = ClassifierHandle(classifier_loader)

    # Register blueprints
    from lombok_heritage.controllers.main import main_bp
    from lombok_heritage.controllers.dashboard import dashboard_bp
    from lombok_heritage.controllers.recommendations import recommendations_bp
    from lombok_heritage.controllers.spatial import spatial_bp
    from lombok_heritage.controllers.routes import routes_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(recommendations_bp)
    app.register_blueprint(spatial_bp)
    app.register_blueprint(routes_bp)

    # CLI commands (flask init-db, flask seed-demo)
    from lombok_heritage.cli import register_commands
    register_commands(app)

    # Shell context for flask shell command
    @app.shell_context_processor
    def make_shell_context():
        from lombok_heritage.models import (
            HeritageCategory, CulturalSite, TourismRoute, RouteSite, SiteReview
        )
        return {
            'db': db,
            'HeritageCategory': HeritageCategory,
            'CulturalSite': CulturalSite,
            'TourismRoute': TourismRoute,
            'RouteSite': RouteSite,
            'SiteReview': SiteReview
        }

    return app
