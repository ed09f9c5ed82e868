"""
Shared fixtures.

``ControlledClient`` stands in for ``SearchClient`` when the order in
which responses arrive matters: every call parks on a future that the
test resolves (or fails) explicitly.
"""

import asyncio
import itertools

import pytest

from storefront.catalog.schemas import Product, SearchPage


_ids = itertools.count(1)


def make_product(title=None, **fields):
    n = next(_ids)
    data = {
        "id": str(n),
        "title": title or f"Product {n}",
        "price": 1999,
        "productType": "Shoes",
        "inventoryQuantity": 25,
        "image": {"src": f"https://cdn.example.com/{n}.jpg"},
    }
    data.update(fields)
    return Product.model_validate(data)


def make_products(count, prefix="Product"):
    return [make_product(f"{prefix} {i}") for i in range(1, count + 1)]


def hits_body(products, found):
    return {
        "found": found,
        "hits": [{"document": p.model_dump(by_alias=True, exclude_none=True)} for p in products],
    }


async def drain(rounds=10):
    """Let pending tasks and callbacks run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


class PendingCall:
    def __init__(self, query, page, page_size, future):
        self.query = query
        self.page = page
        self.page_size = page_size
        self.future = future

    def resolve(self, items, total_found):
        self.future.set_result(SearchPage(items=list(items), total_found=total_found))

    def fail(self, exc):
        self.future.set_exception(exc)


class ControlledClient:
    def __init__(self):
        self.calls = []

    async def search(self, query, page, page_size=None):
        future = asyncio.get_running_loop().create_future()
        self.calls.append(PendingCall(query, page, page_size, future))
        return await future


@pytest.fixture
def controlled_client():
    return ControlledClient()
