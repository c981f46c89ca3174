import pytest


@pytest.fixture(scope="session")
def _identity_domain():
    """The identity domain, already initialized by the app at session start."""
    from identity.domain import identity

    return identity


@pytest.fixture(autouse=True)
def run_around_tests(_identity_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _identity_domain.domain_context()
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
def password_hash():
    from identity.shared.security import hash_password

    return hash_password("s3cret-pass")


@pytest.fixture
def address_fields():
    return {
        "name": "LinYue",
        "phone": "13812345678",
        "province": "浙江省",
        "city": "杭州市",
        "district": "西湖区",
        "detail": "文三路 90 号 5 幢 301",
    }
