"""Customer sign-in.

Credentials are checked here, outside any command, so that plain passwords
never travel through the command store. A successful check records the login
through the `RecordLogin` command.
"""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from identity.customer.customer import Customer
from identity.customer.registration import find_customer_by_phone
from identity.domain import identity
from identity.utils.logging import get_logger

logger = get_logger(__name__)


class AuthenticationFailed(Exception):
    """Phone number and password do not match a customer account."""

    def __init__(self, message="Invalid phone number or password"):
        super().__init__(message)
        self.message = message


@identity.command(part_of="Customer")
class RecordLogin:
    customer_id: Identifier(required=True)


@identity.command_handler(part_of=Customer)
class RecordLoginHandler:
    @handle(RecordLogin)
    def record_login(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)
        customer.record_login()
        repo.add(customer)


def authenticate(phone, password):
    """Return the customer owning `phone` if `password` matches, else raise AuthenticationFailed."""
    customer = find_customer_by_phone(phone)
    if customer is None or not customer.check_password(password):
        logger.info("login_rejected", phone_suffix=(phone or "")[-4:])
        raise AuthenticationFailed()

    current_domain.process(RecordLogin(customer_id=customer.id), asynchronous=False)
    return current_domain.repository_for(Customer).get(customer.id)
