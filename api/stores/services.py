import logging
from django.db import transaction
from django.core.exceptions import ValidationError
from django.utils import timezone
from .hours import WeekHours
from .models import Store, ContactSubmission
from .utils import (
    build_map_embed_url,
    format_phone_number,
    sms_link,
    split_address,
    strip_non_digits,
    tel_link,
)

logger = logging.getLogger("stores_services")

STORE_FIELDS = [
    'store_name', 'phone', 'email', 'details', 'address', 'city', 'state',
    'zip_code', 'country', 'latitude', 'longitude', 'is_primary', 'status',
]


class StoreService:
    """
    Load, validate and save the store settings edited from the admin
    back-office. A store row is created the first time a location is saved.
    """

    @staticmethod
    def list_locations():
        """
        List the known store locations for the admin store selector.

        Returns:
            list[dict]: ``id``, ``location`` and a display ``label`` per store,
            ordered by location key.
        """
        rows = Store.objects.order_by('location').values('id', 'location')
        return [
            {
                'id': row['id'],
                'location': row['location'],
                'label': row['location'][:1].upper() + row['location'][1:],
            }
            for row in rows
        ]

    @staticmethod
    def load(location):
        """
        Fetch the store saved for ``location``.

        When nothing has been saved yet an unsaved ``Store`` carrying the
        initial form values and the default weekly schedule is returned, so
        the form can be filled in and saved.
        """
        store = Store.objects.filter(location=location).first()
        if store is None:
            logger.info(f"No store saved for '{location}', returning initial values.")
            store = Store(location=location, hours_of_operation=WeekHours.default().to_dict())
        return store

    @staticmethod
    def validate(data):
        """
        Check the form guards in order and stop at the first violation.

        Raises:
            ValidationError: With a single message for the first failed guard.
        """
        if not (data.get('store_name') or '').strip():
            raise ValidationError("Store name is required")
        if '@' not in (data.get('email') or ''):
            raise ValidationError("A valid email address is required")
        if not (data.get('phone') or '').strip():
            raise ValidationError("Phone number is required")
        if not (data.get('address') or '').strip():
            raise ValidationError("Street address is required")

    @staticmethod
    @transaction.atomic
    def save(location, data):
        """
        Upsert the full store record for ``location``.

        Args:
            location (str): Location key, the conflict key of the upsert.
            data (dict): Validated form data. ``hours_of_operation`` may be a
                WeekHours; when it is missing the stored hours are kept.

        Returns:
            Store: The saved store.

        Raises:
            ValidationError: If a form guard fails. Nothing is written.
        """
        data = dict(data)
        if 'phone' in data:
            data['phone'] = format_phone_number(data['phone'])
        StoreService.validate(data)

        defaults = {field: data[field] for field in STORE_FIELDS if field in data}
        hours = data.get('hours_of_operation')
        if hours is not None:
            defaults['hours_of_operation'] = hours.to_dict() if isinstance(hours, WeekHours) else hours
        elif not Store.objects.filter(location=location).exists():
            defaults['hours_of_operation'] = WeekHours.default().to_dict()
        defaults['updated_at'] = timezone.now()

        store, created = Store.objects.update_or_create(location=location, defaults=defaults)
        logger.info(f"Store '{location}' {'created' if created else 'updated'}.")
        return store


class ScheduleService:
    """Applies one hours-editor action to a week without persisting it."""

    ACTIONS = ['toggle_closed', 'set_time', 'copy_to_weekdays', 'copy_to_all']

    @staticmethod
    def apply(hours, action, day=None, field=None, value=None, source='monday'):
        """
        Args:
            hours (WeekHours): Current hours shown in the editor.
            action (str): One of ``ACTIONS``.
            day (str, optional): Day to edit, for toggle_closed and set_time.
            field (str, optional): 'open' or 'close', for set_time.
            value (str, optional): New time, for set_time.
            source (str): Day copied by the copy actions.

        Returns:
            WeekHours: The edited week.
        """
        if action == 'toggle_closed':
            return hours.toggle_closed(day)
        if action == 'set_time':
            return hours.set_time(day, field, value)
        if action == 'copy_to_weekdays':
            return hours.copy_to_weekdays(source)
        if action == 'copy_to_all':
            return hours.copy_to_all(source)
        raise ValueError(f"Unknown hours action '{action}'")


class LocationDisplayService:
    """Builds the read-only location blocks of the public contact page."""

    @staticmethod
    def all():
        stores = Store.objects.filter(status=Store.ACTIVE).order_by('location')
        return [LocationDisplayService.build(store) for store in stores]

    @staticmethod
    def get(location):
        """
        Raises:
            Store.DoesNotExist: If no store is saved for ``location``.
        """
        return LocationDisplayService.build(Store.objects.get(location=location))

    @staticmethod
    def build(store):
        street, locality = split_address(store.full_address)
        block = {
            'location': store.location,
            'name': store.store_name or store.location.title(),
            'address_line_1': street,
            'address_line_2': locality,
            'phone': strip_non_digits(store.phone),
            'phone_display': format_phone_number(store.phone),
            'tel_link': tel_link(store.phone),
            'sms_link': sms_link(store.phone),
            'email': store.email,
            'is_primary': store.is_primary,
            'map_embed_url': build_map_embed_url(store.latitude, store.longitude, store.full_address),
            'hours': store.week_hours.preview(),
        }
        if store.details:
            block['description'] = store.details
        return block


class ContactService:
    """Records messages sent through a location's contact form."""

    @staticmethod
    def submit(location, name, phone, message):
        """
        Insert a contact submission and queue the e-mail to the store.

        Raises:
            Store.DoesNotExist: If ``location`` is not a known store.
        """
        store = Store.objects.get(location=location)
        submission = ContactSubmission.objects.create(
            location=store.location,
            name=name,
            phone=phone,
            message=message,
        )
        logger.info(f"Contact submission {submission.id} received for '{location}'.")

        try:
            from .tasks import notify_contact_submission
            notify_contact_submission.delay(submission.id)
        except Exception as e:
            logger.warning(f"Could not queue notification for submission {submission.id}: {e}")

        return submission
