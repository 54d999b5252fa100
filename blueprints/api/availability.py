"""
Driver availability API route.
"""

from flask import request

from blueprints.api.tours import group_size_arg
from models.availability import get_available_drivers
from models.driver import get_all_drivers
from utils.api_response import api_success
from utils.datetime_helpers import parse_request_date


def register_routes(bp):
    """Register availability API routes on the blueprint."""

    @bp.route('/availability')
    def availability():
        """
        Drivers free on a date.

        Query params:
            date: YYYY-MM-DD (today or later, required)
            groupSize: Number of guests (optional, 1-22)

        Returns:
            JSON with drivers list and the number of unavailable drivers
        """
        day = parse_request_date(request.args.get('date'), allow_past=False).isoformat()
        group_size = group_size_arg(required=False)

        drivers = get_available_drivers(day, group_size)
        public_fields = ('id', 'name')

        return api_success(
            date=day,
            group_size=group_size,
            drivers=[{key: driver[key] for key in public_fields} for driver in drivers],
            unavailable_count=len(get_all_drivers(active_only=True)) - len(drivers)
        )
