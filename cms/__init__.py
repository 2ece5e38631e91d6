"""
Flask application factory.
"""
from flask import Flask, g
import logging
from pathlib import Path


def _derive_paths(app, overrides):
    """Keep history locations under DATA_PATH unless set explicitly."""
    data_path = Path(app.config['DATA_PATH'])
    app.config['DATA_PATH'] = data_path
    if 'HISTORY_PATH' not in overrides:
        app.config['HISTORY_PATH'] = data_path / 'history'
    if 'HISTORY_LEDGER_FILE' not in overrides:
        app.config['HISTORY_LEDGER_FILE'] = Path(app.config['HISTORY_PATH']) / 'history.json'


def create_app(config_name=None, config_overrides=None):
    """
    Create and configure Flask application.

    Args:
        config_name: Configuration name ('development', 'production', 'testing')
        config_overrides: Optional mapping applied on top of the configuration

    Returns:
        Configured Flask application
    """
    app = Flask(__name__)

    # Load configuration
    from cms.config import get_config
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    overrides = dict(config_overrides or {})
    app.config.update(overrides)
    _derive_paths(app, overrides)

    # Configure logging
    logging.basicConfig(
        level=logging.INFO if not app.config['DEBUG'] else logging.DEBUG,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Initialize storage
    try:
        from cms.services import init_services
        init_services(app)
        Path(app.config['IMAGE_FOLDER']).mkdir(parents=True, exist_ok=True)
        app.logger.info(f"Document storage initialized at {app.config['DATA_PATH']}")
    except OSError as e:
        app.logger.error(f"Storage initialization failed: {e}")
        raise

    # Request-scoped identity
    from cms.routes.shared import load_signed_in_user
    app.before_request(load_signed_in_user)

    # Register blueprints
    from cms.routes import main, documents, users, images

    app.register_blueprint(main.bp)
    app.register_blueprint(documents.bp)
    app.register_blueprint(users.bp)
    app.register_blueprint(images.bp)

    app.logger.info("All blueprints registered")

    # Error handlers
    @app.errorhandler(404)
    def not_found(error):
        return {'error': 'Not found'}, 404

    @app.errorhandler(500)
    def internal_error(error):
        app.logger.error(f"Internal error: {error}", exc_info=True)
        return {'error': 'Internal server error'}, 500

    # Template context processors
    @app.context_processor
    def utility_processor():
        """Expose the signed-in user to templates."""
        return {
            'current_user': g.get('user')
        }

    app.logger.info(f"Flask app created successfully in {app.config.get('FLASK_ENV', 'development')} mode")

    return app
