"""Domain events for the Customer aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String

from identity.domain import identity


@identity.event(part_of="Customer")
class CustomerRegistered:
    """A new customer account was created."""

    __version__ = 1

    customer_id: Identifier(required=True)
    username: String(required=True)
    phone: String(required=True)
    registered_at: DateTime(required=True)


@identity.event(part_of="Customer")
class CustomerLoggedIn:
    __version__ = 1

    customer_id: Identifier(required=True)
    logged_in_at: DateTime(required=True)


@identity.event(part_of="Customer")
class AddressAdded:
    """A new address was added to a customer's address book."""

    __version__ = 1

    customer_id: Identifier(required=True)
    address_id: Identifier(required=True)
    name: String(required=True)
    province: String(required=True)
    city: String(required=True)
    district: String(required=True)
    is_default: Boolean(default=False)


@identity.event(part_of="Customer")
class AddressUpdated:
    """An existing address was modified. Only the changed fields are set."""

    __version__ = 1

    customer_id: Identifier(required=True)
    address_id: Identifier(required=True)
    name: String()
    phone: String()
    province: String()
    city: String()
    district: String()
    detail: String()
    tag: String()
    is_default: Boolean()


@identity.event(part_of="Customer")
class AddressRemoved:
    __version__ = 1

    customer_id: Identifier(required=True)
    address_id: Identifier(required=True)


@identity.event(part_of="Customer")
class DefaultAddressChanged:
    """The customer picked a different default shipping address."""

    __version__ = 1

    customer_id: Identifier(required=True)
    address_id: Identifier(required=True)
    previous_default_address_id: Identifier()
