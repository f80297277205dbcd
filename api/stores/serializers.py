import decimal
from rest_framework import serializers
from .hours import DAY_KEYS, TIME_FIELDS, DayHours, WeekHours, normalize_time
from .models import Store, ContactSubmission
from .services import ScheduleService
from .utils import format_phone_number

US_STATES = [
    'Alabama', 'Alaska', 'Arizona', 'Arkansas', 'California', 'Colorado', 'Connecticut', 'Delaware',
    'Florida', 'Georgia', 'Hawaii', 'Idaho', 'Illinois', 'Indiana', 'Iowa', 'Kansas', 'Kentucky',
    'Louisiana', 'Maine', 'Maryland', 'Massachusetts', 'Michigan', 'Minnesota', 'Mississippi',
    'Missouri', 'Montana', 'Nebraska', 'Nevada', 'New Hampshire', 'New Jersey', 'New Mexico',
    'New York', 'North Carolina', 'North Dakota', 'Ohio', 'Oklahoma', 'Oregon', 'Pennsylvania',
    'Rhode Island', 'South Carolina', 'South Dakota', 'Tennessee', 'Texas', 'Utah', 'Vermont',
    'Virginia', 'Washington', 'West Virginia', 'Wisconsin', 'Wyoming'
]


class WeekHoursField(serializers.Field):
    """
    Weekly hours as ``{"monday": {"open": "07:00", "close": "17:00", "closed": false}, ...}``.

    All seven days are required and nothing else is accepted. Times must be
    empty or ``HH:MM`` and are zero padded on the way in.
    """
    default_error_messages = {
        'not_a_dict': 'Expected an object keyed by day of the week.',
        'days': 'Hours must contain exactly the seven days monday to sunday.',
        'day_not_a_dict': 'Hours for {day} must be an object with open, close and closed.',
        'closed': 'The closed flag for {day} must be true or false.',
        'time': 'Invalid {field} time for {day}: {error}',
    }

    def to_internal_value(self, data):
        if not isinstance(data, dict):
            self.fail('not_a_dict')
        if set(data) != set(DAY_KEYS):
            self.fail('days')

        days = {}
        for day in DAY_KEYS:
            entry = data[day]
            if not isinstance(entry, dict):
                self.fail('day_not_a_dict', day=day)
            closed = entry.get('closed', False)
            if not isinstance(closed, bool):
                self.fail('closed', day=day)
            times = {}
            for field in TIME_FIELDS:
                value = entry.get(field) or ''
                if not isinstance(value, str):
                    self.fail('time', field=field, day=day, error='expected a string.')
                try:
                    times[field] = normalize_time(value.strip())
                except ValueError as e:
                    self.fail('time', field=field, day=day, error=str(e))
            days[day] = DayHours(closed=closed, **times)
        return WeekHours(**days)

    def to_representation(self, value):
        if isinstance(value, WeekHours):
            return value.to_dict()
        return WeekHours.from_dict(value).to_dict()


class OptionalDecimalField(serializers.DecimalField):
    """
    Decimal field that reads an empty string as null, as sent by blank form
    inputs. Extra decimal places (coordinates pasted from a map) are rounded
    to ``decimal_places`` instead of rejected.
    """

    def validate_empty_values(self, data):
        if data == '':
            data = None
        return super().validate_empty_values(data)

    def to_internal_value(self, data):
        try:
            value = decimal.Decimal(str(data).strip())
            if value.is_finite():
                data = value.quantize(
                    decimal.Decimal(1).scaleb(-self.decimal_places), rounding=decimal.ROUND_HALF_UP
                )
        except decimal.InvalidOperation:
            # Left to DecimalField to report
            pass
        return super().to_internal_value(data)


class StoreSerializer(serializers.ModelSerializer):
    """Store settings as loaded into the admin form."""
    hours_of_operation = serializers.SerializerMethodField()
    hours_preview = serializers.SerializerMethodField()

    class Meta:
        model = Store
        fields = [
            'id', 'location', 'store_name', 'phone', 'email', 'details',
            'address', 'city', 'state', 'zip_code', 'country',
            'latitude', 'longitude', 'is_primary', 'status',
            'hours_of_operation', 'hours_preview', 'updated_at',
        ]
        read_only_fields = [
            'id', 'location', 'store_name', 'phone', 'email', 'details',
            'address', 'city', 'state', 'zip_code', 'country',
            'latitude', 'longitude', 'is_primary', 'status', 'updated_at',
        ]

    def get_hours_of_operation(self, obj):
        return obj.week_hours.to_dict()

    def get_hours_preview(self, obj):
        return obj.week_hours.preview()


class StoreFormSerializer(serializers.Serializer):
    """
    Store settings submitted from the admin form. The form guards (required
    name, email, phone and address) are checked by StoreService.save so that
    only the first violation is reported.
    """
    store_name = serializers.CharField(max_length=255, allow_blank=True, default='')
    phone = serializers.CharField(max_length=30, allow_blank=True, default='')
    email = serializers.CharField(max_length=254, allow_blank=True, default='')
    details = serializers.CharField(allow_blank=True, default='')
    address = serializers.CharField(max_length=255, allow_blank=True, default='')
    city = serializers.CharField(max_length=100, allow_blank=True, default='')
    state = serializers.ChoiceField(choices=US_STATES, allow_blank=True, default='')
    zip_code = serializers.CharField(max_length=20, allow_blank=True, default='')
    country = serializers.CharField(max_length=100, default='USA')
    latitude = OptionalDecimalField(max_digits=9, decimal_places=6, allow_null=True, default=None)
    longitude = OptionalDecimalField(max_digits=9, decimal_places=6, allow_null=True, default=None)
    is_primary = serializers.BooleanField(default=False)
    status = serializers.ChoiceField(choices=Store.STATUS_CHOICES, default=Store.ACTIVE)
    hours_of_operation = WeekHoursField(required=False)

    def validate_phone(self, value):
        return format_phone_number(value)


class LocationListSerializer(serializers.Serializer):
    """Entry of the admin store selector"""
    id = serializers.IntegerField(read_only=True)
    location = serializers.CharField(read_only=True)
    label = serializers.CharField(read_only=True)


class HoursRowSerializer(serializers.Serializer):
    day = serializers.CharField(read_only=True)
    label = serializers.CharField(read_only=True)
    display = serializers.CharField(read_only=True)


class LocationSerializer(serializers.Serializer):
    """Location block rendered on the public contact page"""
    location = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    address_line_1 = serializers.CharField(read_only=True)
    address_line_2 = serializers.CharField(read_only=True)
    phone = serializers.CharField(read_only=True)
    phone_display = serializers.CharField(read_only=True)
    tel_link = serializers.CharField(read_only=True)
    sms_link = serializers.CharField(read_only=True)
    email = serializers.CharField(read_only=True)
    is_primary = serializers.BooleanField(read_only=True)
    description = serializers.CharField(read_only=True, required=False)
    map_embed_url = serializers.CharField(read_only=True)
    hours = HoursRowSerializer(many=True, read_only=True)


class HoursEditSerializer(serializers.Serializer):
    """One edit applied by the hours editor to the hours it currently shows."""
    hours = WeekHoursField()
    action = serializers.ChoiceField(choices=ScheduleService.ACTIONS)
    day = serializers.ChoiceField(choices=DAY_KEYS, required=False)
    field = serializers.ChoiceField(choices=list(TIME_FIELDS), required=False)
    value = serializers.CharField(allow_blank=True, trim_whitespace=True, required=False)
    source = serializers.ChoiceField(choices=DAY_KEYS, default='monday')

    def validate_value(self, value):
        try:
            return normalize_time(value)
        except ValueError as e:
            raise serializers.ValidationError(str(e))

    def validate(self, data):
        action = data['action']
        if action in ('toggle_closed', 'set_time') and 'day' not in data:
            raise serializers.ValidationError({'day': f"A day is required for {action}."})
        if action == 'set_time':
            if 'field' not in data:
                raise serializers.ValidationError({'field': "A time field is required for set_time."})
            if 'value' not in data:
                raise serializers.ValidationError({'value': "A time value is required for set_time."})
        return data


class ContactSubmissionSerializer(serializers.ModelSerializer):
    class Meta:
        model = ContactSubmission
        fields = ['id', 'location', 'name', 'phone', 'message', 'created_at']
        read_only_fields = ['id', 'location', 'created_at']
