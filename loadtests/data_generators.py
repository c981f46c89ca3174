"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the server's validation rules
(mobile number format, recipient name pattern, detail length, order total
matching its items) and use the field names of the API request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker("zh_CN")

# Region names from the bundled directory, so addresses resolve to real codes.
_REGIONS = [
    ("浙江省", "杭州市", "西湖区"),
    ("浙江省", "杭州市", "上城区"),
    ("上海市", "上海市", "浦东新区"),
    ("北京市", "北京市", "朝阳区"),
    ("广东省", "深圳市", "南山区"),
    ("四川省", "成都市", "武侯区"),
]

_PRODUCTS = [
    ("p-1001", "Silk Scarf", 1280.0, {"color": ("Color", ["red", "ivory", "navy"])}),
    ("p-1002", "Leather Tote", 4680.0, {"size": ("Size", ["small", "large"])}),
    ("p-1003", "Cashmere Coat", 8990.0, {"size": ("Size", ["s", "m", "l"]), "color": ("Color", ["camel", "black"])}),
    ("p-1004", "Gift Card", 500.0, {}),
]

# ---------- Identity ----------


def valid_phone() -> str:
    """Mobile numbers matching ^1[3-9]\\d{9}$."""
    return f"1{random.randint(3, 9)}{random.randint(0, 999_999_999):09d}"


def username() -> str:
    """2-20 characters after trimming."""
    return f"lt{uuid.uuid4().hex[:10]}"


def password() -> str:
    return f"pw-{uuid.uuid4().hex[:10]}"


def recipient_name() -> str:
    """Letters only, so the recipient name pattern always matches."""
    return fake.name().replace(" ", "")[:20]


def address_data(is_default: bool = False) -> dict:
    """AddressRequest payload."""
    province, city, district = random.choice(_REGIONS)
    return {
        "name": recipient_name(),
        "phone": valid_phone(),
        "province": province,
        "city": city,
        "district": district,
        "detail": f"{fake.street_address()} {random.randint(1, 30)}-{random.randint(101, 2801)}"[:100],
        "is_default": is_default,
        "tag": random.choice([None, "Home", "Office"]),
    }


# ---------- Ordering ----------


def order_items(count: int | None = None) -> list[dict]:
    """Order lines with a randomly chosen option for every spec."""
    lines = []
    for product_id, name, price, specs in random.sample(_PRODUCTS, count or random.randint(1, 3)):
        selected = {}
        for spec_id, (spec_name, options) in specs.items():
            option = random.choice(options)
            selected[spec_id] = {"id": option, "label": option.title(), "spec_name": spec_name}
        lines.append(
            {
                "product_id": product_id,
                "name": name,
                "image": f"https://cdn.example.com/images/{product_id}.jpg",
                "price": price,
                "quantity": random.randint(1, 3),
                "selected_specs": selected,
            }
        )
    return lines


def order_payload(address: dict) -> dict:
    """CreateOrderRequest payload whose total matches its lines."""
    items = order_items()
    total = round(sum(item["price"] * item["quantity"] for item in items), 2)
    order_address = {k: v for k, v in address.items() if k not in ("user_id", "is_default")}
    return {"items": items, "address": order_address, "total_price": total}
