"""
Tour catalogue API routes.
"""

from flask import request, current_app

from models.errors import InvalidGroupSize, TourNotFound
from models.tour import get_all_tours, get_tour_by_id, get_tour_price_brackets, calculate_price
from utils.api_response import api_success
from utils.messages import get_message
from utils.validators import validate_group_size


def group_size_arg(required: bool = True):
    """Read groupSize (or group_size) from the query string."""
    raw = request.args.get('groupSize', request.args.get('group_size'))
    if raw is None and not required:
        return None

    max_size = current_app.config['MAX_GROUP_SIZE']
    valid, size, _ = validate_group_size(raw, max_size)
    if not valid:
        raise InvalidGroupSize(get_message('invalid_group_size', max_size=max_size), field='groupSize')
    return size


def register_routes(bp):
    """Register tour API routes on the blueprint."""

    @bp.route('/tours')
    def tour_list():
        """Active tours with their price brackets."""
        return api_success(data=get_all_tours(active_only=True))

    @bp.route('/tours/<int:tour_id>')
    def tour_detail(tour_id):
        """Single active tour with its price brackets."""
        tour = get_tour_by_id(tour_id, active_only=True)
        if not tour:
            raise TourNotFound(get_message('tour_not_found'))

        tour['price_brackets'] = get_tour_price_brackets(tour_id)
        return api_success(data=tour)

    @bp.route('/tours/<int:tour_id>/price')
    def tour_price(tour_id):
        """
        Price quote for a group.

        Query params:
            groupSize: Number of guests (1-22)
        """
        group_size = group_size_arg()
        price = calculate_price(tour_id, group_size)
        return api_success(data={'tour_id': tour_id, 'group_size': group_size, **price})
