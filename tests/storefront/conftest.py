import pytest
from storefront.addresses import AddressBook
from storefront.api import ApiClient, StorefrontApi
from storefront.auth import AuthService
from storefront.cart import CartStore
from storefront.catalogue import Product, ProductSpec, ProductSpecOption, SelectedSpec
from storefront.navigation import Navigator
from storefront.notifications import ConfirmService, ToastService
from storefront.orders import Checkout, OrderClient
from storefront.scheduler import ManualScheduler
from storefront.session import Session
from storefront.storage.memory_storage import MemoryStorage


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def toasts(scheduler):
    service = ToastService(scheduler)
    yield service
    service.close()


@pytest.fixture
def confirms():
    return ConfirmService()


@pytest.fixture
def navigator():
    return Navigator()


@pytest.fixture
def session(storage):
    return Session(storage)


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
@pytest.fixture
def color_spec():
    return ProductSpec(
        id="color",
        name="Color",
        options=[
            ProductSpecOption(id="red", label="Red"),
            ProductSpecOption(id="blue", label="Blue"),
        ],
    )


@pytest.fixture
def scarf(color_spec):
    return Product(
        id="p-1001",
        name="Silk Scarf",
        image="https://cdn.example.com/p-1001.jpg",
        images=["https://cdn.example.com/p-1001-front.jpg"],
        price=1280.0,
        specs=[color_spec],
    )


@pytest.fixture
def gift_card():
    return Product(id="p-1004", name="Gift Card", image="https://cdn.example.com/p-1004.jpg", price=500.0)


@pytest.fixture
def red():
    return {"color": SelectedSpec(id="red", label="Red", spec_name="Color")}


@pytest.fixture
def blue():
    return {"color": SelectedSpec(id="blue", label="Blue", spec_name="Color")}


@pytest.fixture
def address_form():
    return {
        "name": "LinYue",
        "phone": "13812345678",
        "province": "浙江省",
        "city": "杭州市",
        "district": "西湖区",
        "detail": "文三路 90 号 5 幢 301",
    }


# ---------------------------------------------------------------------------
# Client wired to the in-process backend
# ---------------------------------------------------------------------------
@pytest.fixture
def backend(clean_domains):
    from fastapi.testclient import TestClient

    from app import app

    with TestClient(app) as client:
        yield client


@pytest.fixture
def api(backend, session, navigator):
    return StorefrontApi(ApiClient(session, navigator, http_client=backend))


@pytest.fixture
def auth(api, session, toasts):
    return AuthService(api, session, toasts)


@pytest.fixture
def shopper(auth):
    """A freshly registered customer, signed in on the client."""
    return auth.register("Lin Yue", "13812345678", "s3cret-pass", "s3cret-pass")


@pytest.fixture
def address_book(api, session, toasts):
    return AddressBook(api, session, toasts)


@pytest.fixture
def cart(storage):
    return CartStore(storage)


@pytest.fixture
def orders(api, toasts, confirms):
    return OrderClient(api, toasts, confirms)


@pytest.fixture
def checkout(cart, address_book, orders, session, toasts, navigator):
    return Checkout(cart, address_book, orders, session, toasts, navigator)
