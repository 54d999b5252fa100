"""
Public booking API package.
Split into smaller modules by entity for maintainability.
"""

from flask import Blueprint, current_app

from utils.api_response import api_success

# Create the API blueprint
api_bp = Blueprint('api', __name__)


@api_bp.route('/health')
def health_check():
    """
    Health check endpoint (no authentication required).

    Returns:
        JSON with status and version
    """
    return api_success(
        status=200,
        app=current_app.config.get('APP_NAME'),
        version=current_app.config.get('APP_VERSION'),
        state='ok'
    )


# Import and register routes from submodules
from blueprints.api import tours
from blueprints.api import availability
from blueprints.api import bookings
from blueprints.api import unavailability
from blueprints.api import reviews
from blueprints.api import enquiries

# Register all route functions on the blueprint
tours.register_routes(api_bp)
availability.register_routes(api_bp)
bookings.register_routes(api_bp)
unavailability.register_routes(api_bp)
reviews.register_routes(api_bp)
enquiries.register_routes(api_bp)
