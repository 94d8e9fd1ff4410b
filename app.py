from flask import Flask, jsonify, send_from_directory
from werkzeug.exceptions import HTTPException

from models import db
from models.database import init_app as init_db
from routes import (
    auth_bp, users_bp, pages_bp, permissions_bp, logs_bp,
    notifications_bp, banners_bp, gallery_bp, important_links_bp, faculty_bp,
)
from utils.logger import configure_logging, log_exception


def create_app(config_overrides=None):
    app = Flask(__name__)
    app.config.from_object('config')
    if config_overrides:
        app.config.update(config_overrides)

    configure_logging(app)

    # Initialize database
    init_db(app)

    # Register blueprints
    prefix = app.config['API_PREFIX']
    app.register_blueprint(auth_bp, url_prefix=prefix)
    app.register_blueprint(users_bp, url_prefix=prefix)
    app.register_blueprint(pages_bp, url_prefix=prefix)
    app.register_blueprint(permissions_bp, url_prefix=prefix)
    app.register_blueprint(logs_bp, url_prefix=f'{prefix}/logs')
    app.register_blueprint(notifications_bp, url_prefix=f'{prefix}/notifications')
    app.register_blueprint(banners_bp, url_prefix=f'{prefix}/banner')
    app.register_blueprint(gallery_bp, url_prefix=f'{prefix}/gallery')
    app.register_blueprint(important_links_bp, url_prefix=f'{prefix}/important-links')
    app.register_blueprint(faculty_bp, url_prefix=f'{prefix}/faculty')

    @app.route('/uploads/<path:filename>')
    def uploaded_file(filename):
        return send_from_directory(app.config['UPLOAD_FOLDER'], filename)

    @app.route('/')
    def index():
        return jsonify({'message': 'Admin panel API', 'api': prefix})

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'message': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        log_exception(error)
        body = {'message': 'Internal Server Error'}
        if app.config.get('ENV_NAME') != 'production':
            body['error'] = str(error)
        return jsonify(body), 500

    @app.after_request
    def add_header(response):
        """Add headers to prevent caching."""
        response.headers['Cache-Control'] = 'no-cache, no-store, must-revalidate'
        response.headers['Pragma'] = 'no-cache'
        response.headers['Expires'] = '0'
        return response

    # Create tables
    with app.app_context():
        db.create_all()

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(debug=app.config['DEBUG'], port=3002)
