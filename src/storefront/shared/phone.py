"""PhoneNumber value object for the order contact number."""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from storefront.domain import storefront

# Optional leading +, up to two 1-4 digit groups (the first may be
# parenthesised), then the subscriber number. Whitespace is ignored.
_PHONE_PATTERN = re.compile(r"^[+]?[(]?[0-9]{1,4}[)]?[-.]?[(]?[0-9]{1,4}[)]?[-.]?[0-9]{1,9}$")


@storefront.value_object
class PhoneNumber:
    """A phone number the shop can call to confirm an order."""

    number: String(required=True, max_length=20)

    @invariant.post
    def validate_phone_format(self):
        compact = re.sub(r"\s", "", self.number or "")
        if not _PHONE_PATTERN.match(compact):
            raise ValidationError({"phone_number": [f"Invalid phone number: {self.number!r}"]})
