from wtforms import StringField, PasswordField
from wtforms.validators import DataRequired, Email, Length, Optional
from luggageshare.forms import ApiForm


class RegistrationForm(ApiForm):
    name = StringField('Name', validators=[DataRequired(), Length(max=64)])
    last_name = StringField('Last Name', validators=[Optional(), Length(max=64)])
    email = StringField('Email', validators=[DataRequired(), Email(), Length(max=120)])
    password = PasswordField('Password', validators=[DataRequired(), Length(min=8, max=128)])


class LoginForm(ApiForm):
    email = StringField('Email', validators=[DataRequired(), Email()])
    password = PasswordField('Password', validators=[DataRequired()])


class VerifyEmailForm(ApiForm):
    email = StringField('Email', validators=[DataRequired(), Email()])
    code = StringField('Verification Code', validators=[
        DataRequired(), Length(min=6, max=6, message='Verification code must be 6 digits')])


class ResendVerificationForm(ApiForm):
    email = StringField('Email', validators=[DataRequired(), Email()])
