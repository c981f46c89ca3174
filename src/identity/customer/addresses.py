"""Customer address management: commands and handler."""

from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from identity.customer.customer import Customer
from identity.domain import identity

_UPDATABLE_FIELDS = ("name", "phone", "province", "city", "district", "detail", "tag", "is_default")


@identity.command(part_of="Customer")
class AddAddress:
    """Add a new address to a customer's address book."""

    customer_id: Identifier(required=True)
    name: String(required=True, max_length=20)
    phone: String(required=True, max_length=11)
    province: String(required=True, max_length=50)
    city: String(required=True, max_length=50)
    district: String(required=True, max_length=50)
    detail: String(required=True, max_length=100)
    tag: String(max_length=10)
    is_default: Boolean(default=False)


@identity.command(part_of="Customer")
class UpdateAddress:
    """Modify fields of an existing address. Unset fields are left alone."""

    customer_id: Identifier(required=True)
    address_id: Identifier(required=True)
    name: String(max_length=20)
    phone: String(max_length=11)
    province: String(max_length=50)
    city: String(max_length=50)
    district: String(max_length=50)
    detail: String(max_length=100)
    tag: String(max_length=10)
    is_default: Boolean()


@identity.command(part_of="Customer")
class RemoveAddress:
    """Remove an address from a customer's address book."""

    customer_id: Identifier(required=True)
    address_id: Identifier(required=True)


@identity.command(part_of="Customer")
class SetDefaultAddress:
    """Designate an existing address as the customer's default."""

    customer_id: Identifier(required=True)
    address_id: Identifier(required=True)


@identity.command_handler(part_of=Customer)
class ManageAddressesHandler:
    @handle(AddAddress)
    def add_address(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)

        address = customer.add_address(
            name=command.name,
            phone=command.phone,
            province=command.province,
            city=command.city,
            district=command.district,
            detail=command.detail,
            is_default=bool(command.is_default),
            tag=command.tag,
        )
        repo.add(customer)
        return str(address.id)

    @handle(UpdateAddress)
    def update_address(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)

        updates = {}
        for field in _UPDATABLE_FIELDS:
            value = getattr(command, field, None)
            if value is not None:
                updates[field] = value

        customer.update_address(command.address_id, **updates)
        repo.add(customer)
        return str(command.address_id)

    @handle(RemoveAddress)
    def remove_address(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)
        customer.remove_address(command.address_id)
        repo.add(customer)

    @handle(SetDefaultAddress)
    def set_default_address(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)
        customer.set_default_address(command.address_id)
        repo.add(customer)
        return str(command.address_id)
