"""
Public enquiry forms using Flask-WTF.
Like the auth forms they read JSON request bodies.
"""

from flask_wtf import FlaskForm
from wtforms import StringField, IntegerField, ValidationError
from wtforms.validators import AnyOf, DataRequired, Email, Length, NumberRange, Optional

from utils.validators import validate_phone as is_valid_phone


class ContactForm(FlaskForm):
    """Tour or quote enquiry from the website contact section."""

    name = StringField('Name', validators=[
        DataRequired(message='Please provide your full name.'),
        Length(min=2, max=120, message='Please provide your full name.')
    ])

    email = StringField('Email', validators=[
        DataRequired(message='Please provide a valid email address.'),
        Email(message='Please provide a valid email address.')
    ])

    phone = StringField('Phone', validators=[
        DataRequired(message='Please provide a contact number.')
    ])

    message = StringField('Message', validators=[
        DataRequired(message='Please provide a message (at least 10 characters).'),
        Length(min=10, max=5000, message='Please provide a message (at least 10 characters).')
    ])

    def validate_phone(self, field):
        if not is_valid_phone(field.data):
            raise ValidationError('Please provide a valid contact number.')


class ReviewEnquiryForm(FlaskForm):
    """Website review of a driver or tour, forwarded to the operator."""

    type = StringField('Type', validators=[
        DataRequired(message='Review type is required'),
        AnyOf(['driver', 'tour'], message='Review type must be driver or tour')
    ])

    target_name = StringField('Reviewed driver or tour', validators=[
        DataRequired(message='Please say which driver or tour you are reviewing.'),
        Length(max=200)
    ])

    name = StringField('Name', validators=[
        DataRequired(message='Please provide your name.'),
        Length(min=2, max=120, message='Please provide your name.')
    ])

    email = StringField('Email', validators=[
        Optional(),
        Email(message='Please provide a valid email address.')
    ])

    rating = IntegerField('Rating', validators=[
        DataRequired(message='Rating must be a whole number from 1 to 5'),
        NumberRange(min=1, max=5, message='Rating must be a whole number from 1 to 5')
    ])

    text = StringField('Review', validators=[
        DataRequired(message='Review must be at least 10 characters'),
        Length(min=10, max=5000, message='Review must be at least 10 characters')
    ])
