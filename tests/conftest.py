"""
Pytest configuration and shared fixtures.

Adds the project root to the Python path so tests can import the domain,
repositories and services packages, and wires a SaleService over in-memory
stores.
"""

import sys
from decimal import Decimal
from pathlib import Path

import pytest

# Add the project root to the Python path
# so tests can import domain, repositories, etc.
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from domain.branch import Branch  # noqa: E402
from domain.customer import Customer  # noqa: E402
from domain.product import Product  # noqa: E402
from services.event_emitter import SaleEventEmitter  # noqa: E402
from services.sale_service import SaleService  # noqa: E402

from fakes import (  # noqa: E402
    InMemoryBranchStore,
    InMemoryCustomerStore,
    InMemoryProductStore,
    InMemorySaleStore,
    RecordingPublisher,
)

from sample_data import (  # noqa: E402
    BRANCH_ID,
    CUSTOMER_ID,
    FIXED_NOW,
    INACTIVE_CUSTOMER_ID,
    INACTIVE_PRODUCT_ID,
    OTHER_PRODUCT_ID,
    PRODUCT_ID,
)


@pytest.fixture
def products() -> InMemoryProductStore:
    return InMemoryProductStore([
        Product(product_id=PRODUCT_ID, name="Pilsen 350ml", stock_quantity=50, price=Decimal("10.00")),
        Product(product_id=OTHER_PRODUCT_ID, name="Lager 600ml", stock_quantity=8, price=Decimal("7.50")),
        Product(product_id=INACTIVE_PRODUCT_ID, name="Discontinued Ale", stock_quantity=30, active=False),
    ])


@pytest.fixture
def customers() -> InMemoryCustomerStore:
    return InMemoryCustomerStore([
        Customer(customer_id=CUSTOMER_ID, name="Bar do Zé"),
        Customer(customer_id=INACTIVE_CUSTOMER_ID, name="Closed Pub", active=False),
    ])


@pytest.fixture
def branches() -> InMemoryBranchStore:
    return InMemoryBranchStore([Branch(branch_id=BRANCH_ID, name="Centro", code="BR-001")])


@pytest.fixture
def sales() -> InMemorySaleStore:
    return InMemorySaleStore()


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def service(products, customers, branches, sales, publisher) -> SaleService:
    return SaleService(
        products=products,
        customers=customers,
        branches=branches,
        sales=sales,
        events=SaleEventEmitter(publisher),
        clock=lambda: FIXED_NOW,
    )
