import math

from flask_wtf import FlaskForm
from werkzeug.datastructures import ImmutableMultiDict
from wtforms.validators import ValidationError


class ApiForm(FlaskForm):
    """Form fed from a JSON body, where ``null`` means the field was left out."""

    class Meta(FlaskForm.Meta):
        def wrap_formdata(self, form, formdata):
            formdata = super().wrap_formdata(form, formdata)
            if formdata is None:
                return None
            return ImmutableMultiDict([
                (key, value) for key, value in formdata.items(multi=True) if value is not None
            ])


def positive(label):
    def check(form, field):
        if field.data is None:
            return
        if not math.isfinite(field.data):
            raise ValidationError(f'{label} must be a finite number')
        if field.data <= 0:
            raise ValidationError(f'{label} must be greater than 0')
    return check
