"""Admin services package."""

from blueprints.admin.services.driver_service import (  # noqa: F401
    validate_driver_creation,
    create_driver_with_account,
)
