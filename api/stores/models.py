from django.db import models
from .hours import WeekHours


class Store(models.Model):
    """
    Represents one physical store location shown on the contact page and
    edited from the admin store settings.
    Attributes:
        location (SlugField): Stable key of the store (e.g. "waverly"); unique, used for upserts.
        store_name (CharField): Display name of the store.
        phone (CharField): Phone number formatted as (XXX) XXX-XXXX.
        email (EmailField): Contact email address.
        details (TextField): Free-text description shown under the contact details.
        address, city, state, zip_code, country (CharField): Postal address.
        latitude, longitude (DecimalField): Optional coordinates used for the map embed.
        is_primary (BooleanField): Primary store when True, alternate store otherwise.
        status (CharField): 'Active' or 'Inactive'. Only active stores are listed publicly.
        hours_of_operation (JSONField): Serialized weekly hours, see stores.hours.WeekHours.
        created_at (DateTimeField): Timestamp when the store was first saved.
        updated_at (DateTimeField): Timestamp of the last save.
    Methods:
        week_hours: The stored hours as a WeekHours value, falling back to the default schedule.
        __str__(): Returns the store's name and location key.
    """
    ACTIVE = 'Active'
    INACTIVE = 'Inactive'
    STATUS_CHOICES = [
        (ACTIVE, 'Active'),
        (INACTIVE, 'Inactive'),
    ]

    class Meta:
        db_table = 'store_settings'
        ordering = ['location']
        verbose_name = "Store"
        verbose_name_plural = "Stores"

    location = models.SlugField(max_length=100, unique=True)
    store_name = models.CharField(max_length=255, blank=True, default='')
    phone = models.CharField(max_length=20, blank=True, default='')
    email = models.EmailField(blank=True, default='')
    details = models.TextField(blank=True, default='')
    address = models.CharField(max_length=255, blank=True, default='')
    city = models.CharField(max_length=100, blank=True, default='')
    state = models.CharField(max_length=100, blank=True, default='')
    zip_code = models.CharField(max_length=20, blank=True, default='')
    country = models.CharField(max_length=100, default='USA')
    latitude = models.DecimalField(max_digits=9, decimal_places=6, blank=True, null=True)
    longitude = models.DecimalField(max_digits=9, decimal_places=6, blank=True, null=True)
    is_primary = models.BooleanField(default=False)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=ACTIVE, db_index=True)
    hours_of_operation = models.JSONField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def week_hours(self):
        return WeekHours.from_dict(self.hours_of_operation)

    @property
    def full_address(self):
        locality = " ".join(part for part in (self.state, self.zip_code) if part)
        parts = [self.address, self.city, locality]
        return ", ".join(part for part in parts if part)

    def __str__(self):
        return f"{self.store_name or self.location} ({self.location})"


class ContactSubmission(models.Model):
    """
    A message left through the contact form of one store location. Rows are
    only ever inserted.
    """
    location = models.CharField(max_length=100, db_index=True)
    name = models.CharField(max_length=255)
    phone = models.CharField(max_length=30)
    message = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'contact_submissions'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.name} -> {self.location}"
