"""Product shapes the storefront receives from the catalogue.

The catalogue itself lives elsewhere; the client only needs enough of a
product to put it in the cart.
"""

from pydantic import BaseModel, Field
from protean.exceptions import ValidationError


class ProductSpecOption(BaseModel):
    id: str
    label: str
    sub_label: str | None = None


class ProductSpec(BaseModel):
    """A customization axis such as colour or size."""

    id: str
    name: str
    options: list[ProductSpecOption] = Field(default_factory=list)

    def option(self, option_id: str) -> ProductSpecOption | None:
        return next((o for o in self.options if o.id == option_id), None)


class SelectedSpec(BaseModel):
    """The option chosen for one spec. Selections are keyed by spec id."""

    id: str
    label: str
    spec_name: str


class Product(BaseModel):
    id: str
    name: str
    image: str
    price: float = Field(ge=0)
    original_price: float | None = None
    images: list[str] = Field(default_factory=list)
    specs: list[ProductSpec] = Field(default_factory=list)
    stock: int | None = None

    @property
    def cart_image(self) -> str:
        """First gallery image if there is one, else the main image."""
        return self.images[0] if self.images else self.image


def select_spec(
    selections: dict[str, SelectedSpec], spec: ProductSpec, option_id: str
) -> dict[str, SelectedSpec]:
    """Return a copy of `selections` with `option_id` chosen for `spec`."""
    option = spec.option(option_id)
    if option is None:
        raise ValidationError({"selected_specs": [f"Unknown option {option_id!r} for {spec.name}"]})
    return {**selections, spec.id: SelectedSpec(id=option.id, label=option.label, spec_name=spec.name)}


def specs_ready(product: Product, selections: dict[str, SelectedSpec] | None) -> bool:
    selections = selections or {}
    return all(spec.id in selections for spec in product.specs)


def ensure_specs_selected(product: Product, selections: dict[str, SelectedSpec] | None) -> None:
    if not specs_ready(product, selections):
        raise ValidationError({"selected_specs": ["Please select all product specifications"]})
