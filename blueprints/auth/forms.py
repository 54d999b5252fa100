"""
Authentication forms using Flask-WTF.
Forms read JSON request bodies; CSRF is checked through the X-CSRFToken header.
"""

from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, BooleanField
from wtforms.validators import DataRequired, Email, Length, Optional, Regexp


class LoginForm(FlaskForm):
    """Login form with email and password."""

    email = StringField('Email', validators=[
        DataRequired(message='Email is required'),
        Email(message='Invalid email format')
    ])

    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required')
    ])

    remember_me = BooleanField('Remember me')


class RegisterForm(FlaskForm):
    """Member self-registration form."""

    email = StringField('Email', validators=[
        DataRequired(message='Email is required'),
        Email(message='Invalid email format')
    ])

    full_name = StringField('Full name', validators=[
        Optional(),
        Length(max=200)
    ])

    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required'),
        Length(min=8, message='Password must be at least 8 characters'),
        Regexp(r'(?=.*[A-Za-z])', message='Password must contain a letter'),
        Regexp(r'(?=.*\d)', message='Password must contain a number'),
    ])


def form_errors(form) -> list:
    """Flatten WTForms errors into the API's field error list."""
    return [
        {'kind': 'ValidationError', 'field': field, 'message': message}
        for field, messages in form.errors.items()
        for message in messages
    ]
