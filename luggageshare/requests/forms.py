from wtforms import IntegerField, FloatField, SelectField, TextAreaField
from wtforms.validators import DataRequired, Length, Optional
from luggageshare.models.request import RequestStatus
from luggageshare.forms import ApiForm, positive


class CreateRequestForm(ApiForm):
    sender_post_id = IntegerField('Sender Post', validators=[DataRequired(message='Sender post ID is required')])
    traveller_post_id = IntegerField('Traveller Post', validators=[DataRequired(message='Traveller post ID is required')])
    message = TextAreaField('Message', validators=[Optional(), Length(max=2000)])
    proposed_price = FloatField('Proposed Price', validators=[Optional(), positive('Proposed price')])


class UpdateRequestForm(ApiForm):
    status = SelectField('Status', choices=[
        (s.value, s.value) for s in (RequestStatus.ACCEPTED, RequestStatus.REJECTED,
                                     RequestStatus.COMPLETED, RequestStatus.CANCELLED)
    ], validators=[DataRequired()])
    agreed_price = FloatField('Agreed Price', validators=[Optional(), positive('Agreed price')])
