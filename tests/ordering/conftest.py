import pytest


@pytest.fixture(scope="session")
def _ordering_domain():
    """The ordering domain, already initialized by the app at session start."""
    from ordering.domain import ordering

    return ordering


@pytest.fixture(autouse=True)
def run_around_tests(_ordering_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _ordering_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture
def items_data():
    return [
        {
            "product_id": "p-1001",
            "name": "Silk Scarf",
            "image": "https://cdn.example.com/p-1001.jpg",
            "price": 1280.0,
            "quantity": 2,
            "selected_specs": {"color": {"id": "red", "label": "Red", "spec_name": "Color"}},
        },
        {
            "product_id": "p-1004",
            "name": "Gift Card",
            "image": None,
            "price": 500.0,
            "quantity": 1,
            "selected_specs": {},
        },
    ]


@pytest.fixture
def shipping_address():
    return {
        "id": "addr-1",
        "name": "LinYue",
        "phone": "13812345678",
        "province": "浙江省",
        "city": "杭州市",
        "district": "西湖区",
        "detail": "文三路 90 号 5 幢 301",
        "tag": "Home",
    }
