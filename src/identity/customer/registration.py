"""Customer registration: command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from identity.customer.customer import Customer
from identity.domain import identity


@identity.command(part_of="Customer")
class RegisterCustomer:
    """Create a new customer account. Carries the password hash, never the password."""

    username: String(required=True, max_length=20)
    phone: String(required=True, max_length=11)
    email: String(max_length=254)
    password_hash: String(required=True, max_length=255)


def find_customer_by_phone(phone):
    repo = current_domain.repository_for(Customer)
    matches = repo._dao.query.filter(phone=phone).all().items
    return matches[0] if matches else None


@identity.command_handler(part_of=Customer)
class RegisterCustomerHandler:
    @handle(RegisterCustomer)
    def register_customer(self, command):
        if find_customer_by_phone(command.phone) is not None:
            raise ValidationError({"phone": ["This phone number is already registered"]})

        customer = Customer.register(
            username=command.username,
            phone=command.phone,
            password_hash=command.password_hash,
            email=command.email,
        )
        current_domain.repository_for(Customer).add(customer)
        return str(customer.id)
