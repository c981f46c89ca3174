"""Customer aggregate root with the Address entity.

A customer signs in with a mobile number and keeps an address book. The
"at most one default address" rule spans every address of the customer, so
addresses live inside the aggregate and change together with it.
"""

import re
from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, DateTime, HasMany, String

from identity.domain import identity
from identity.shared.phone import ensure_mobile_number
from identity.shared.security import verify_password

# 2-20 letters, digits or CJK ideographs
_RECIPIENT_NAME_PATTERN = re.compile(r"[\u4e00-\u9fa5a-zA-Z0-9]{2,20}")

_ADDRESS_FIELDS = ("name", "phone", "province", "city", "district", "detail", "tag", "is_default")


def _validate_address(name, phone, province, city, district, detail, tag):
    """Shape checks for an address, mirroring the storefront form rules."""
    if not name or not _RECIPIENT_NAME_PATTERN.fullmatch(name):
        raise ValidationError({"name": ["Recipient name must be 2-20 letters, digits or Chinese characters"]})

    ensure_mobile_number(phone)

    if not province or not city or not district:
        raise ValidationError({"region": ["Please select a complete province, city and district"]})

    if not detail or not 5 <= len(detail.strip()) <= 100:
        raise ValidationError({"detail": ["Detailed address must be 5-100 characters"]})

    if tag and len(tag.strip()) > 10:
        raise ValidationError({"tag": ["Address tag cannot exceed 10 characters"]})


@identity.entity(part_of="Customer")
class Address:
    """A shipping destination in a customer's address book.

    Regions are stored by name (province, city, district); the free-form
    `detail` carries street and house number. `tag` is a short label such as
    "Home" or "Office".
    """

    name: String(required=True, max_length=20)
    phone: String(required=True, max_length=11)
    province: String(required=True, max_length=50)
    city: String(required=True, max_length=50)
    district: String(required=True, max_length=50)
    detail: String(required=True, max_length=100)
    is_default: Boolean(default=False)
    tag: String(max_length=10)


@identity.aggregate
class Customer:
    """A registered shopper, identified by a system ID and signing in by mobile number."""

    username: String(required=True, max_length=20)
    phone: String(required=True, max_length=11, unique=True)
    email: String(max_length=254)
    password_hash: String(required=True, max_length=255)
    addresses: HasMany(Address)
    registered_at: DateTime(default=lambda: datetime.now(UTC))
    last_login_at: DateTime()

    @invariant.post
    def phone_must_be_a_mobile_number(self):
        ensure_mobile_number(self.phone)

    @invariant.post
    def at_most_one_default_address(self):
        defaults = [a for a in self.addresses if a.is_default]
        if len(defaults) > 1:
            raise ValidationError({"addresses": ["Only one address can be marked as default"]})

    @classmethod
    def register(cls, username, phone, password_hash, email=None):
        """Create an account. The password arrives already hashed."""
        from identity.customer.events import CustomerRegistered

        username = (username or "").strip()
        if not 2 <= len(username) <= 20:
            raise ValidationError({"username": ["Username must be 2-20 characters"]})

        if email and email.count("@") != 1:
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        now = datetime.now(UTC)
        customer = cls(
            username=username,
            phone=phone,
            email=email or None,
            password_hash=password_hash,
            registered_at=now,
        )
        customer.raise_(
            CustomerRegistered(
                customer_id=customer.id,
                username=username,
                phone=phone,
                registered_at=now,
            )
        )
        return customer

    # -------------------------------------------------------------------
    # Credentials
    # -------------------------------------------------------------------
    def check_password(self, password):
        return bool(password) and verify_password(password, self.password_hash)

    def record_login(self):
        from identity.customer.events import CustomerLoggedIn

        now = datetime.now(UTC)
        self.last_login_at = now
        self.raise_(CustomerLoggedIn(customer_id=self.id, logged_in_at=now))

    # -------------------------------------------------------------------
    # Address book
    # -------------------------------------------------------------------
    def find_address(self, address_id):
        address = next((a for a in self.addresses if str(a.id) == str(address_id)), None)
        if address is None:
            raise ObjectNotFoundError(f"Address {address_id} not found")
        return address

    def _clear_default_flags(self, keep=None):
        for addr in self.addresses:
            if addr.is_default and addr is not keep:
                addr.is_default = False

    def add_address(self, name, phone, province, city, district, detail, is_default=False, tag=None):
        from identity.customer.events import AddressAdded

        _validate_address(name, phone, province, city, district, detail, tag)

        with atomic_change(self):
            if is_default:
                self._clear_default_flags()

            address = Address(
                name=name,
                phone=phone,
                province=province,
                city=city,
                district=district,
                detail=detail.strip(),
                is_default=bool(is_default),
                tag=tag.strip() if tag else None,
            )
            self.add_addresses(address)

        self.raise_(
            AddressAdded(
                customer_id=self.id,
                address_id=address.id,
                name=name,
                province=province,
                city=city,
                district=district,
                is_default=bool(is_default),
            )
        )
        return address

    def update_address(self, address_id, **changes):
        from identity.customer.events import AddressUpdated

        address = self.find_address(address_id)

        unknown = set(changes) - set(_ADDRESS_FIELDS)
        if unknown:
            raise ValidationError({field: ["Unknown address field"] for field in sorted(unknown)})

        merged = {field: changes.get(field, getattr(address, field)) for field in _ADDRESS_FIELDS}
        _validate_address(
            merged["name"],
            merged["phone"],
            merged["province"],
            merged["city"],
            merged["district"],
            merged["detail"],
            merged["tag"],
        )

        with atomic_change(self):
            if changes.get("is_default"):
                self._clear_default_flags(keep=address)
            for field, value in changes.items():
                if field == "detail":
                    value = value.strip()
                setattr(address, field, value)

        self.raise_(
            AddressUpdated(
                customer_id=self.id,
                address_id=address.id,
                **changes,
            )
        )
        return address

    def remove_address(self, address_id):
        from identity.customer.events import AddressRemoved

        address = self.find_address(address_id)
        self.remove_addresses(address)

        self.raise_(
            AddressRemoved(
                customer_id=self.id,
                address_id=address.id,
            )
        )

    def set_default_address(self, address_id):
        from identity.customer.events import DefaultAddressChanged

        address = self.find_address(address_id)
        previous_default = next((a for a in self.addresses if a.is_default), None)

        with atomic_change(self):
            self._clear_default_flags(keep=address)
            address.is_default = True

        self.raise_(
            DefaultAddressChanged(
                customer_id=self.id,
                address_id=address.id,
                previous_default_address_id=previous_default.id if previous_default else None,
            )
        )
        return address
