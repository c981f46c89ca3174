"""Shopping cart store.

Line items are keyed by a uid derived from the product id and the chosen
spec options, so adding the same product with the same options twice grows
one line instead of creating two.

The cart is written to durable storage after every change as a versioned
snapshot, `{"version": 1, "items": [...]}`. The older unversioned format, a
bare JSON list with camelCase keys, is still read and is rewritten in the
current format on the next change. Anything unreadable loads as an empty
cart.
"""

import json

import pydantic
import structlog
from pydantic import BaseModel, Field
from protean.exceptions import ValidationError

from storefront.catalogue import Product, SelectedSpec, ensure_specs_selected
from storefront.observable import Observable
from storefront.storage.port import CART_KEY, StoragePort

logger = structlog.get_logger(__name__)

SNAPSHOT_VERSION = 1

# camelCase keys of the unversioned format
_V0_KEYS = {"productId": "product_id", "selectedSpecs": "selected_specs", "specName": "spec_name"}


def build_uid(product_id: str, selected_specs: dict | None = None) -> str:
    """Deterministic line-item key.

    `"{product_id}-default"` without selections, otherwise
    `"{product_id}-{spec_name}:{option_id}|..."` ordered by spec name.
    """
    if not selected_specs:
        return f"{product_id}-default"

    specs = [SelectedSpec.model_validate(spec) for spec in selected_specs.values()]
    parts = [f"{spec.spec_name}:{spec.id}" for spec in sorted(specs, key=lambda s: s.spec_name)]
    return f"{product_id}-{'|'.join(parts)}"


class CartItem(BaseModel):
    uid: str
    product_id: str
    name: str
    image: str
    price: float
    quantity: int = Field(gt=0)
    selected_specs: dict[str, SelectedSpec] = Field(default_factory=dict)

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity


def _rename_keys(value):
    if isinstance(value, dict):
        return {_V0_KEYS.get(k, k): _rename_keys(v) for k, v in value.items()}
    return value


def decode_snapshot(raw: str | None) -> list[CartItem]:
    """Parse a stored cart. Unreadable or unknown payloads yield an empty list."""
    if not raw:
        return []

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.warning("cart_snapshot_unreadable", error=str(exc))
        return []

    if isinstance(payload, list):
        version, raw_items = 0, [_rename_keys(item) for item in payload]
    elif isinstance(payload, dict) and payload.get("version") == SNAPSHOT_VERSION:
        version, raw_items = SNAPSHOT_VERSION, payload.get("items") or []
    else:
        found = payload.get("version") if isinstance(payload, dict) else type(payload).__name__
        logger.warning("cart_snapshot_unknown_version", version=found)
        return []

    if not isinstance(raw_items, list):
        logger.warning("cart_snapshot_invalid", version=version, items_type=type(raw_items).__name__)
        return []

    try:
        items = [CartItem.model_validate(item) for item in raw_items]
    except pydantic.ValidationError as exc:
        logger.warning("cart_snapshot_invalid", version=version, errors=exc.error_count())
        return []

    # Older writers may have left stale keys behind
    return [item.model_copy(update={"uid": build_uid(item.product_id, item.selected_specs)}) for item in items]


def encode_snapshot(items: list[CartItem]) -> str:
    return json.dumps(
        {"version": SNAPSHOT_VERSION, "items": [item.model_dump() for item in items]},
        ensure_ascii=False,
    )


class CartStore(Observable):
    """The cart, backed by `storage` under the `luxury-mall-cart` key."""

    def __init__(self, storage: StoragePort):
        super().__init__()
        self._storage = storage
        self._items: list[CartItem] = self._load()

    def _load(self) -> list[CartItem]:
        try:
            raw = self._storage.get_item(CART_KEY)
        except OSError as exc:
            logger.warning("cart_storage_unavailable", error=str(exc))
            return []
        return decode_snapshot(raw)

    def _commit(self, items: list[CartItem]) -> None:
        self._items = items
        self._storage.set_item(CART_KEY, encode_snapshot(items))
        self._notify()

    def snapshot(self) -> list[CartItem]:
        return [item.model_copy(deep=True) for item in self._items]

    @property
    def items(self) -> list[CartItem]:
        return self.snapshot()

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self._items)

    @property
    def total_price(self) -> float:
        return round(sum(item.subtotal for item in self._items), 2)

    @property
    def is_empty(self) -> bool:
        return not self._items

    def get_item(self, uid: str) -> CartItem | None:
        return next((item.model_copy(deep=True) for item in self._items if item.uid == uid), None)

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_item(self, product: Product, quantity: int = 1, selected_specs: dict | None = None) -> CartItem:
        """Merge into the line with the same product and options, or append a new line."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        ensure_specs_selected(product, selected_specs)

        specs = {spec_id: SelectedSpec.model_validate(spec) for spec_id, spec in (selected_specs or {}).items()}
        uid = build_uid(product.id, specs)

        items = list(self._items)
        index = next((i for i, item in enumerate(items) if item.uid == uid), None)
        if index is not None:
            line = items[index].model_copy(update={"quantity": items[index].quantity + quantity})
            items[index] = line
        else:
            line = CartItem(
                uid=uid,
                product_id=product.id,
                name=product.name,
                image=product.cart_image,
                price=product.price,
                quantity=quantity,
                selected_specs=specs,
            )
            items.append(line)

        self._commit(items)
        logger.debug("cart_item_added", uid=uid, quantity=quantity)
        return line.model_copy(deep=True)

    def update_quantity(self, uid: str, quantity: int) -> None:
        """Set a line's quantity; zero or below removes the line."""
        items = []
        for item in self._items:
            if item.uid == uid:
                if quantity <= 0:
                    continue
                item = item.model_copy(update={"quantity": quantity})
            items.append(item)
        self._commit(items)

    def remove_item(self, uid: str) -> None:
        self._commit([item for item in self._items if item.uid != uid])

    def clear_cart(self) -> None:
        self._commit([])
