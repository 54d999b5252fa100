"""
Authentication routes: login, logout, current user, registration.
Session-based authentication with Flask-Login, JSON in and out.
"""

import logging
import sqlite3

from flask import Blueprint
from flask_login import login_user, logout_user, login_required, current_user
from flask_wtf.csrf import generate_csrf

from blueprints.auth.forms import LoginForm, RegisterForm, form_errors
from models.role import Role
from models.user import User, get_user_by_email, get_user_by_id, create_user, update_last_login, check_password
from utils.api_response import api_success, api_error
from utils.messages import get_message

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/csrf-token', methods=['GET'])
def csrf_token():
    """Issue a CSRF token for the X-CSRFToken header."""
    return api_success(data={'csrf_token': generate_csrf()})


@auth_bp.route('/login', methods=['POST'])
def login():
    """
    Log in with email and password.

    Request body:
        {"email": "...", "password": "...", "remember_me": false}
    """
    form = LoginForm()

    if not form.validate_on_submit():
        return api_error('ValidationError', 400, message=get_message('invalid_credentials'),
                         errors=form_errors(form))

    user_dict = get_user_by_email(form.email.data)

    if user_dict is None or not check_password(user_dict, form.password.data):
        logger.info("Failed login for %s", form.email.data)
        return api_error('Unauthorized', 401, message=get_message('invalid_credentials'))

    if not user_dict.get('active'):
        return api_error('Forbidden', 403, message=get_message('account_inactive'))

    user = User(user_dict)
    login_user(user, remember=form.remember_me.data)
    update_last_login(user.id)

    return api_success(
        data=user.to_dict(),
        message=get_message('login_success', name=user.full_name or user.email)
    )


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    """Logout current user."""
    logout_user()
    return api_success(message=get_message('logout_success'))


@auth_bp.route('/me', methods=['GET'])
@login_required
def me():
    """Current user profile."""
    return api_success(data=current_user.to_dict())


@auth_bp.route('/register', methods=['POST'])
def register():
    """
    Create a member account and log it in.

    Request body:
        {"email": "...", "password": "...", "full_name": "..."}
    """
    form = RegisterForm()

    if not form.validate_on_submit():
        errors = form_errors(form)
        return api_error('ValidationError', 400, message=errors[0]['message'], errors=errors)

    if get_user_by_email(form.email.data):
        return api_error('Conflict', 409, message=get_message('email_exists'))

    try:
        user_id = create_user(
            email=form.email.data,
            password=form.password.data,
            full_name=form.full_name.data or None,
            role=Role.MEMBER
        )
    except sqlite3.IntegrityError:
        return api_error('Conflict', 409, message=get_message('email_exists'))

    user = User(get_user_by_id(user_id))
    login_user(user)

    logger.info("Member account created: %s", user.email)
    return api_success(data=user.to_dict(), message=get_message('register_success'), status=201)
