"""Shared BDD fixtures and step definitions for the Identity domain."""

import pytest
from identity.customer.customer import Customer
from identity.customer.events import (
    AddressAdded,
    AddressRemoved,
    AddressUpdated,
    CustomerLoggedIn,
    CustomerRegistered,
    DefaultAddressChanged,
)
from identity.shared.security import hash_password
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

# Map event name strings to classes for dynamic lookup
_EVENT_CLASSES = {
    "CustomerRegistered": CustomerRegistered,
    "CustomerLoggedIn": CustomerLoggedIn,
    "AddressAdded": AddressAdded,
    "AddressUpdated": AddressUpdated,
    "AddressRemoved": AddressRemoved,
    "DefaultAddressChanged": DefaultAddressChanged,
}

_BASE_ADDRESS = {
    "phone": "13812345678",
    "province": "浙江省",
    "city": "杭州市",
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@pytest.fixture()
def labels():
    """Scenario labels such as "addr-2" mapped to address ids."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a registered customer", target_fixture="customer")
def registered_customer():
    customer = Customer.register(
        username="Lin Yue",
        phone="13812345678",
        password_hash=hash_password("s3cret-pass"),
    )
    customer._events.clear()
    return customer


@given(parsers.cfparse('the customer has addresses "{first}", "{second}" and "{third}"'))
def customer_with_addresses(customer, labels, first, second, third):
    for index, label in enumerate((first, second, third)):
        address = customer.add_address(
            name=f"Name{index}",
            district="西湖区",
            detail=f"文三路 {90 + index} 号",
            **_BASE_ADDRESS,
        )
        labels[label] = address.id
    customer._events.clear()


@given(parsers.cfparse('"{label}" is the default address'))
def label_is_default(customer, labels, label):
    customer.set_default_address(labels[label])
    customer._events.clear()


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the customer has {count:d} address"))
@then(parsers.cfparse("the customer has {count:d} addresses"))
def customer_has_addresses(customer, count):
    assert len(customer.addresses) == count


@then("no address is the default")
def no_default(customer):
    assert not any(a.is_default for a in customer.addresses)


@then("exactly one address is the default")
def exactly_one_default(customer):
    assert len([a for a in customer.addresses if a.is_default]) == 1


@then(parsers.cfparse('the default address is "{label}"'))
def default_is(customer, labels, label):
    default = next(a for a in customer.addresses if a.is_default)
    assert default.id == labels[label]


@then(parsers.cfparse('the action fails with a "{field}" error'))
def action_fails(error, field):
    assert isinstance(error["exc"], ValidationError)
    assert field in error["exc"].messages


@then(parsers.cfparse("a {event_type} event is raised"))
def event_raised(customer, event_type):
    event_cls = _EVENT_CLASSES[event_type]
    assert any(isinstance(e, event_cls) for e in customer._events)


@pytest.fixture()
def base_address():
    """Address fields shared by every address a scenario creates."""
    return dict(_BASE_ADDRESS)
