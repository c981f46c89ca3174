"""Address book: the signed-in customer's shipping addresses.

The server owns the "one default address" rule. After each successful call
the local list is brought in line with what the server did, without asking
for the whole list again.
"""

import structlog
from protean.exceptions import ValidationError

from storefront.api.endpoints import StorefrontApi
from storefront.api.transport import ApiError
from storefront.models import Address, AddressDraft
from storefront.notifications import ToastService
from storefront.observable import Observable
from storefront.session import Session
from storefront.validation import first_error, validate_address_form

logger = structlog.get_logger(__name__)


class AddressBook(Observable):
    def __init__(self, api: StorefrontApi, session: Session, toasts: ToastService):
        super().__init__()
        self._api = api
        self._session = session
        self._toasts = toasts
        self._addresses: list[Address] = []
        self.loading = False

    def snapshot(self) -> list[Address]:
        return [a.model_copy() for a in self._addresses]

    @property
    def addresses(self) -> list[Address]:
        return self.snapshot()

    @property
    def default_address(self) -> Address | None:
        """The flagged default, else the first address, else None."""
        flagged = next((a for a in self._addresses if a.is_default), None)
        chosen = flagged or (self._addresses[0] if self._addresses else None)
        return chosen.model_copy() if chosen else None

    def get_address(self, address_id: str) -> Address | None:
        return next((a.model_copy() for a in self._addresses if a.id == address_id), None)

    def _replace(self, addresses: list[Address]) -> None:
        self._addresses = addresses
        self._notify()

    def _validate(self, draft: AddressDraft) -> None:
        try:
            validate_address_form(
                draft.name, draft.phone, draft.province, draft.city, draft.district, draft.detail, draft.tag
            )
        except ValidationError as exc:
            self._toasts.warning(first_error(exc))
            raise

    # -------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------
    def load(self) -> list[Address]:
        """Fetch the list. Signed-out users get an empty list and no request is made."""
        if not self._session.is_authenticated:
            self._replace([])
            return []

        self.loading = True
        try:
            addresses = self._api.list_addresses()
        except ApiError as exc:
            if not exc.is_unauthorized:
                logger.warning("address_load_failed", error=exc.message, status=exc.status_code)
                self._toasts.error("Failed to load addresses")
            addresses = []
        finally:
            self.loading = False

        self._replace(addresses)
        return self.addresses

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_address(self, draft: AddressDraft | dict) -> Address:
        draft = AddressDraft.model_validate(draft)
        self._validate(draft)

        try:
            created = self._api.create_address(draft)
        except ApiError:
            self._toasts.error("Failed to add address")
            raise

        addresses = list(self._addresses)
        if created.is_default:
            addresses = [a.model_copy(update={"is_default": False}) for a in addresses]
        self._replace([*addresses, created])
        self._toasts.success("Address added")
        return created.model_copy()

    def update_address(self, address_id: str, changes: dict) -> Address:
        """Send `changes` for one address.

        Changes to an address held locally are checked against the merged form
        first. Without a local copy there is nothing to merge with, so the
        server is left to validate the partial update.
        """
        current = next((a for a in self._addresses if a.id == address_id), None)
        if current is not None:
            self._validate(AddressDraft.model_validate({**current.model_dump(), **changes}))

        try:
            updated = self._api.update_address(address_id, changes)
        except ApiError:
            self._toasts.error("Failed to update address")
            raise

        addresses = []
        for address in self._addresses:
            if address.id == address_id:
                address = updated
            elif changes.get("is_default"):
                address = address.model_copy(update={"is_default": False})
            addresses.append(address)
        self._replace(addresses)
        self._toasts.success("Address updated")
        return updated.model_copy()

    def delete_address(self, address_id: str) -> None:
        try:
            self._api.delete_address(address_id)
        except ApiError:
            self._toasts.error("Failed to delete address")
            raise

        self._replace([a for a in self._addresses if a.id != address_id])
        self._toasts.success("Address deleted")

    def set_default_address(self, address_id: str) -> None:
        """Ask the server to make `address_id` the default, then mirror its answer locally."""
        try:
            self._api.set_default_address(address_id)
        except ApiError:
            self._toasts.error("Failed to set default address")
            raise

        self._replace([a.model_copy(update={"is_default": a.id == address_id}) for a in self._addresses])
        self._toasts.success("Default address updated")
