"""
UNICAB Travel & Tours - Tour booking service
Flask application factory and initialization
"""

import os
import click
import logging
from flask import Flask, g
from dotenv import load_dotenv
from werkzeug.exceptions import HTTPException

# Load environment variables
load_dotenv()

# Import configuration
from config import config

# Import extensions
from extensions import login_manager, csrf

# Import database functions
from database import close_db, init_db

from models.errors import BookingError
from utils.api_response import api_error, api_exception
from utils.messages import get_message


def create_app(config_name=None):
    """
    Application factory for Flask app.

    Args:
        config_name: Configuration name ('development', 'production', 'test')

    Returns:
        Flask application instance
    """
    # Determine config
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    # Create Flask app
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config[config_name])
    if config_name == 'production':
        config[config_name].validate()

    # Initialize extensions
    initialize_extensions(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register CLI commands
    register_cli_commands(app)

    # Register teardown handlers
    register_teardown_handlers(app)

    # Configure logging
    configure_logging(app)

    return app


def initialize_extensions(app):
    """Initialize Flask extensions."""
    # Initialize Flask-Login
    login_manager.init_app(app)
    # Initialize CSRF Protection
    csrf.init_app(app)


def register_blueprints(app):
    """Register Flask blueprints."""
    # Import blueprints
    from blueprints.auth.routes import auth_bp
    from blueprints.api import api_bp
    from blueprints.admin.routes import admin_bp
    from blueprints.driver.routes import driver_bp
    from blueprints.member.routes import member_bp

    # Register blueprints
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(api_bp, url_prefix='/api')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')
    app.register_blueprint(driver_bp, url_prefix='/api/driver')
    app.register_blueprint(member_bp, url_prefix='/api/member')


def register_error_handlers(app):
    """Register error handlers. Every error answers with the JSON envelope."""

    @app.errorhandler(BookingError)
    def booking_error(error):
        """Domain errors carry their own kind and status."""
        return api_exception(error)

    @app.errorhandler(HTTPException)
    def http_error(error):
        """404, 405, CSRF failures and other werkzeug errors."""
        kinds = {
            400: 'BadRequest',
            401: 'Unauthorized',
            403: 'Forbidden',
            404: 'NotFound',
            405: 'MethodNotAllowed',
        }
        message = get_message('not_found') if error.code == 404 else error.description
        return api_error(kinds.get(error.code, error.name.replace(' ', '')), error.code, message=message)

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        # Rollback database on error
        db = g.get('db')
        if db:
            db.rollback()
        app.logger.exception('Unhandled error: %s', error)
        return api_error('InternalError', 500, message=get_message('internal_error'))


def register_cli_commands(app):
    """Register Flask CLI commands."""

    @app.cli.command('init-db')
    def init_db_command():
        """Initialize database with schema and seed data."""
        click.echo('Initializing database...')
        with app.app_context():
            init_db()
        click.echo('Database initialized successfully!')

    @app.cli.command('create-user')
    @click.argument('email')
    @click.option('--role', type=click.Choice(['admin', 'driver', 'member']), default='admin',
                  show_default=True)
    @click.option('--driver-id', type=int, default=None, help='Driver profile to link (driver role)')
    @click.option('--full-name', default=None)
    @click.password_option()
    def create_user_command(email, role, driver_id, full_name, password):
        """Create a new user."""
        import sqlite3
        from models.driver import get_driver_by_id
        from models.role import Role
        from models.user import create_user

        with app.app_context():
            if role == 'driver' and (driver_id is None or not get_driver_by_id(driver_id)):
                raise click.UsageError('--driver-id must name an existing driver for driver accounts')

            try:
                user_id = create_user(
                    email=email,
                    password=password,
                    full_name=full_name,
                    role=Role(role),
                    driver_id=driver_id if role == 'driver' else None
                )
                click.echo(f'User created successfully! ID: {user_id}')
            except sqlite3.IntegrityError as e:
                click.echo(f'Error creating user: {str(e)}', err=True)


def register_teardown_handlers(app):
    """Register teardown handlers."""

    @app.teardown_appcontext
    def teardown_db(error):
        """Close database connection at end of request."""
        close_db(error)


def configure_logging(app):
    """Configure application logging."""
    if not app.debug and not app.testing:
        # Production logging
        if not os.path.exists('logs'):
            os.mkdir('logs')

        file_handler = logging.FileHandler('logs/unicab.log')
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)
        # Module loggers (models.*, utils.*) share the same file
        logging.getLogger().addHandler(file_handler)
        logging.getLogger().setLevel(logging.INFO)

        app.logger.setLevel(logging.INFO)
        app.logger.info('UNICAB booking service startup')
    else:
        # Development logging
        app.logger.setLevel(logging.DEBUG)


# Create application instance for development server
if __name__ == '__main__':
    app = create_app()
    # host='0.0.0.0' allows access from other devices on the network
    app.run(host='0.0.0.0', debug=True)
