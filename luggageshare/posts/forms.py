from datetime import datetime
from wtforms import StringField, FloatField, DateTimeField, TextAreaField
from wtforms.validators import DataRequired, InputRequired, Length, Optional, ValidationError
from luggageshare.forms import ApiForm, positive

DATETIME_FORMATS = ['%Y-%m-%dT%H:%M:%S', '%Y-%m-%dT%H:%M', '%Y-%m-%d %H:%M', '%Y-%m-%d']


class PostForm(ApiForm):
    def post_fields(self):
        """Form data as model kwargs, blank optional strings stored as NULL."""
        return {
            name: (value or None) if isinstance(value, str) else value
            for name, value in self.data.items()
        }


class TravellerPostForm(PostForm):
    departure_country = StringField('Departure Country', validators=[DataRequired(), Length(max=64)])
    departure_city = StringField('Departure City', validators=[Optional(), Length(max=128)])
    departure_airport = StringField('Departure Airport', validators=[Optional(), Length(max=128)])
    departure_date = DateTimeField('Departure Date', format=DATETIME_FORMATS, validators=[DataRequired()])
    arrival_country = StringField('Arrival Country', validators=[DataRequired(), Length(max=64)])
    arrival_city = StringField('Arrival City', validators=[Optional(), Length(max=128)])
    arrival_airport = StringField('Arrival Airport', validators=[Optional(), Length(max=128)])
    arrival_date = DateTimeField('Arrival Date', format=DATETIME_FORMATS, validators=[DataRequired()])
    available_weight = FloatField('Available Weight (kg)', validators=[InputRequired(), positive('Available weight')])
    price_per_kg = FloatField('Price per kg', validators=[InputRequired(), positive('Price per kg')])
    special_notes = TextAreaField('Special Notes', validators=[Optional(), Length(max=2000)])
    pickup_location = StringField('Pickup Location', validators=[Optional(), Length(max=255)])
    delivery_location = StringField('Delivery Location', validators=[Optional(), Length(max=255)])

    def validate_departure_date(self, field):
        if field.data and field.data <= datetime.utcnow():
            raise ValidationError('Departure date must be in the future')

    def validate_arrival_date(self, field):
        departure = self.departure_date.data
        if field.data and departure and departure >= field.data:
            raise ValidationError('Departure date must be before arrival date')


class SenderPostForm(PostForm):
    origin_country = StringField('Origin Country', validators=[DataRequired(), Length(max=64)])
    origin_city = StringField('Origin City', validators=[DataRequired(), Length(max=128)])
    origin_address = StringField('Origin Address', validators=[Optional(), Length(max=255)])
    destination_country = StringField('Destination Country', validators=[DataRequired(), Length(max=64)])
    destination_city = StringField('Destination City', validators=[DataRequired(), Length(max=128)])
    destination_address = StringField('Destination Address', validators=[Optional(), Length(max=255)])
    item_category = StringField('Item Category', validators=[DataRequired(), Length(max=64)])
    item_description = TextAreaField('Item Description', validators=[DataRequired(), Length(max=2000)])
    weight = FloatField('Weight (kg)', validators=[InputRequired(), positive('Weight')])
    max_price = FloatField('Max Price', validators=[Optional(), positive('Max price')])
    special_notes = TextAreaField('Special Notes', validators=[Optional(), Length(max=2000)])
    pickup_notes = TextAreaField('Pickup Notes', validators=[Optional(), Length(max=2000)])
    delivery_notes = TextAreaField('Delivery Notes', validators=[Optional(), Length(max=2000)])
