"""Flask application serving the workspace JSON API."""

import logging
import os
from flask import Flask, request, jsonify
from .blueprints.api import api_bp, handle_api_error
from ..core.exceptions import ImagesManagerError


def create_app(config=None):
    """
    Create and configure the Flask application.

    Args:
        config: Configuration dictionary

    Returns:
        Configured Flask application
    """
    app = Flask(__name__)

    app.config.update({
        'MAX_CONTENT_LENGTH': 16 * 1024 * 1024,
    })

    if config:
        app.config.update(config)

    app.register_blueprint(api_bp, url_prefix='/api')

    if not app.debug and not app.testing:
        from logging.handlers import RotatingFileHandler

        log_dir = os.path.join(os.path.expanduser('~'), '.images_manager', 'logs')
        os.makedirs(log_dir, exist_ok=True)

        file_handler = RotatingFileHandler(
            os.path.join(log_dir, 'web_app.log'),
            maxBytes=10240000,  # 10MB
            backupCount=10
        )
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)
        app.logger.setLevel(logging.INFO)
        app.logger.info('Images Manager API startup')

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'Not found', 'message': f'No endpoint at {request.path}'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'error': 'Method not allowed', 'message': f'{request.method} {request.path}'}), 405

    @app.errorhandler(ImagesManagerError)
    def workspace_error(error):
        response_data, status_code = handle_api_error(error, request.path)
        return jsonify(response_data), status_code

    @app.errorhandler(500)
    def internal_error(error):
        app.logger.error(f'Server Error: {error}', exc_info=True)
        return jsonify({
            'error': 'Internal server error',
            'message': 'An unexpected error occurred'
        }), 500

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(debug=True, host='127.0.0.1', port=5000)
