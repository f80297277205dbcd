import re
from urllib.parse import quote_plus

MAP_EMBED_URL = "https://maps.google.com/maps?q={query}&z=15&output=embed"


def strip_non_digits(value):
    return re.sub(r'\D', '', value or '')


def format_phone_number(value):
    """
    Re-group a phone number as ``(XXX) XXX-XXXX`` while it is being typed.

    Non-digits are dropped and anything past ten digits is cut off. Partial
    numbers are grouped as far as they go:

        >>> format_phone_number('615')
        '615'
        >>> format_phone_number('6158156')
        '(615) 815-6'
    """
    cleaned = strip_non_digits(value)
    if len(cleaned) <= 3:
        return cleaned
    if len(cleaned) <= 6:
        return f"({cleaned[:3]}) {cleaned[3:]}"
    return f"({cleaned[:3]}) {cleaned[3:6]}-{cleaned[6:10]}"


def split_address(address):
    """Split ``"street, city, state zip"`` into the street line and the rest."""
    first, _, rest = (address or '').partition(',')
    return first.strip(), rest.strip()


def build_map_embed_url(latitude=None, longitude=None, address=''):
    """
    Google Maps embed URL for a store. Coordinates win over the address when
    both are present.
    """
    if latitude not in (None, '') and longitude not in (None, ''):
        query = f"{latitude},{longitude}"
    else:
        query = address
    return MAP_EMBED_URL.format(query=quote_plus(str(query)))


def tel_link(phone):
    return f"tel:{strip_non_digits(phone)}"


def sms_link(phone):
    return f"sms:{strip_non_digits(phone)}"
