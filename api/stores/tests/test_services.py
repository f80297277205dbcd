from unittest import mock
from django.core.exceptions import ValidationError
from django.test import TestCase
from ..hours import WeekHours
from ..models import Store, ContactSubmission
from ..services import (
    ContactService,
    LocationDisplayService,
    ScheduleService,
    StoreService,
)


def valid_form_data(**overrides):
    data = {
        'store_name': 'Waverly',
        'phone': '6158156734',
        'email': 'sales@example.com',
        'details': 'Full service location',
        'address': '1004 US-70',
        'city': 'Waverly',
        'state': 'Tennessee',
        'zip_code': '37185',
        'country': 'USA',
        'latitude': None,
        'longitude': None,
        'is_primary': True,
        'status': 'Active',
    }
    data.update(overrides)
    return data


class StoreServiceTests(TestCase):
    """
    Test suite for StoreService.
    Covers:
    - Listing locations for the store selector.
    - Loading saved and unsaved locations.
    - Form guards, reported one at a time in order.
    - Upsert semantics and hours handling on save.
    """

    def test_list_locations_ordered_with_labels(self):
        Store.objects.create(location="waverly")
        Store.objects.create(location="bonaqua")
        locations = StoreService.list_locations()
        self.assertEqual([l['location'] for l in locations], ["bonaqua", "waverly"])
        self.assertEqual([l['label'] for l in locations], ["Bonaqua", "Waverly"])

    def test_load_existing_store(self):
        Store.objects.create(location="waverly", store_name="Waverly")
        store = StoreService.load("waverly")
        self.assertIsNotNone(store.pk)
        self.assertEqual(store.store_name, "Waverly")

    def test_load_missing_store_returns_initial_values(self):
        store = StoreService.load("newtown")
        self.assertIsNone(store.pk)
        self.assertEqual(store.location, "newtown")
        self.assertEqual(store.country, "USA")
        self.assertEqual(store.status, "Active")
        self.assertEqual(store.week_hours, WeekHours.default())
        self.assertFalse(Store.objects.filter(location="newtown").exists())

    def test_validate_reports_first_violation_only(self):
        data = valid_form_data(store_name='', email='nope', phone='', address='')
        with self.assertRaises(ValidationError) as ctx:
            StoreService.validate(data)
        self.assertEqual(ctx.exception.messages, ["Store name is required"])

    def test_validate_guard_order(self):
        cases = [
            (valid_form_data(store_name='   '), "Store name is required"),
            (valid_form_data(email='sales.example.com'), "A valid email address is required"),
            (valid_form_data(phone=''), "Phone number is required"),
            (valid_form_data(address=''), "Street address is required"),
        ]
        for data, message in cases:
            with self.assertRaises(ValidationError) as ctx:
                StoreService.validate(data)
            self.assertEqual(ctx.exception.messages[0], message)

    def test_save_creates_store_on_first_save(self):
        with self.assertLogs(logger='stores_services', level='INFO') as log:
            store = StoreService.save("waverly", valid_form_data())
        self.assertTrue(any("created" in line for line in log.output))
        self.assertEqual(store.location, "waverly")
        self.assertEqual(store.phone, "(615) 815-6734")
        self.assertEqual(store.week_hours, WeekHours.default())
        self.assertEqual(Store.objects.count(), 1)

    def test_save_updates_existing_store(self):
        StoreService.save("waverly", valid_form_data())
        store = StoreService.save("waverly", valid_form_data(store_name="Waverly West"))
        self.assertEqual(Store.objects.count(), 1)
        self.assertEqual(store.store_name, "Waverly West")

    def test_save_refreshes_updated_at(self):
        first = StoreService.save("waverly", valid_form_data())
        second = StoreService.save("waverly", valid_form_data(details="Changed"))
        self.assertGreaterEqual(second.updated_at, first.updated_at)

    def test_save_stores_hours(self):
        hours = WeekHours.default().toggle_closed("saturday")
        store = StoreService.save("waverly", valid_form_data(hours_of_operation=hours))
        store.refresh_from_db()
        self.assertEqual(store.week_hours, hours)
        self.assertEqual(store.hours_of_operation["saturday"], {"open": "", "close": "", "closed": True})

    def test_save_without_hours_keeps_stored_hours(self):
        hours = WeekHours.default().copy_to_all()
        StoreService.save("waverly", valid_form_data(hours_of_operation=hours))
        store = StoreService.save("waverly", valid_form_data())
        self.assertEqual(store.week_hours, hours)

    def test_guard_violation_writes_nothing(self):
        with self.assertRaises(ValidationError):
            StoreService.save("waverly", valid_form_data(email=''))
        self.assertFalse(Store.objects.exists())

    def test_phone_without_digits_is_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            StoreService.save("waverly", valid_form_data(phone='call us'))
        self.assertEqual(ctx.exception.messages[0], "Phone number is required")


class ScheduleServiceTests(TestCase):

    def setUp(self):
        self.hours = WeekHours.default()

    def test_dispatches_each_action(self):
        self.assertTrue(ScheduleService.apply(self.hours, 'toggle_closed', day='monday').monday.closed)
        self.assertEqual(
            ScheduleService.apply(self.hours, 'set_time', day='monday', field='open', value='08:00').monday.open,
            '08:00'
        )
        self.assertTrue(ScheduleService.apply(self.hours, 'copy_to_weekdays', source='sunday').friday.closed)
        self.assertTrue(ScheduleService.apply(self.hours, 'copy_to_all', source='sunday').monday.closed)

    def test_unknown_action(self):
        with self.assertRaises(ValueError):
            ScheduleService.apply(self.hours, 'delete_week')


class LocationDisplayServiceTests(TestCase):

    def setUp(self):
        self.store = Store.objects.create(
            location="waverly",
            store_name="Waverly",
            phone="(615) 815-6734",
            email="sales@example.com",
            details="Full service location",
            address="1004 US-70",
            city="Waverly",
            state="Tennessee",
            zip_code="37185",
            latitude="36.085351",
            longitude="-87.759946",
            is_primary=True,
        )

    def test_build_location_block(self):
        block = LocationDisplayService.get("waverly")
        self.assertEqual(block['name'], "Waverly")
        self.assertEqual(block['address_line_1'], "1004 US-70")
        self.assertEqual(block['address_line_2'], "Waverly, Tennessee 37185")
        self.assertEqual(block['phone'], "6158156734")
        self.assertEqual(block['phone_display'], "(615) 815-6734")
        self.assertEqual(block['tel_link'], "tel:6158156734")
        self.assertEqual(block['sms_link'], "sms:6158156734")
        self.assertEqual(block['description'], "Full service location")
        self.assertIn("36.085351", block['map_embed_url'])
        self.assertEqual(block['hours'][6]['display'], "Closed")

    def test_description_omitted_when_blank(self):
        self.store.details = ""
        self.store.save()
        self.assertNotIn('description', LocationDisplayService.get("waverly"))

    def test_all_lists_only_active_stores(self):
        Store.objects.create(location="bonaqua", store_name="Bon Aqua")
        Store.objects.create(location="closedtown", status=Store.INACTIVE)
        names = [block['location'] for block in LocationDisplayService.all()]
        self.assertEqual(names, ["bonaqua", "waverly"])

    def test_all_survives_hand_edited_hours(self):
        self.store.hours_of_operation = {"monday": {"open": 9, "close": 17, "closed": False}}
        self.store.save()
        Store.objects.create(location="bonaqua", store_name="Bon Aqua", hours_of_operation=["not", "a", "week"])
        blocks = {block['location']: block for block in LocationDisplayService.all()}
        self.assertEqual(len(blocks['waverly']['hours']), 7)
        self.assertEqual(blocks['waverly']['hours'][1]['display'], "7:00 AM - 5:00 PM")
        self.assertEqual(blocks['bonaqua']['hours'][6]['display'], "Closed")

    def test_get_missing_store(self):
        with self.assertRaises(Store.DoesNotExist):
            LocationDisplayService.get("nowhere")


class ContactServiceTests(TestCase):

    def setUp(self):
        Store.objects.create(location="waverly", store_name="Waverly", email="sales@example.com")

    @mock.patch('stores.tasks.notify_contact_submission.delay')
    def test_submit_inserts_and_queues_notification(self, mock_delay):
        submission = ContactService.submit("waverly", "Jane", "(615) 555-1234", "Do you deliver?")
        self.assertEqual(ContactSubmission.objects.count(), 1)
        self.assertEqual(submission.location, "waverly")
        mock_delay.assert_called_once_with(submission.id)

    @mock.patch('stores.tasks.notify_contact_submission.delay', side_effect=ConnectionError("broker down"))
    def test_queue_failure_keeps_submission(self, mock_delay):
        with self.assertLogs(logger='stores_services', level='WARNING') as log:
            ContactService.submit("waverly", "Jane", "(615) 555-1234", "Hello")
        self.assertEqual(ContactSubmission.objects.count(), 1)
        self.assertTrue(any("broker down" in line for line in log.output))

    def test_submit_unknown_location(self):
        with self.assertRaises(Store.DoesNotExist):
            ContactService.submit("nowhere", "Jane", "(615) 555-1234", "Hello")
        self.assertFalse(ContactSubmission.objects.exists())
