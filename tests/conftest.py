"""
tests/conftest.py
=================
Shared pytest fixtures. Every test gets its own SQLite file, so committed
writes from several sessions (or threads) are visible to each other.

SQLite write transactions begin IMMEDIATE: a session left inside a transaction
blocks every other session. Tests that mix sessions close theirs first.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

import market.models  # noqa: F401
from market.branch.models import Branch
from market.client.models import Client
from market.database import Base, get_db, make_engine, unit_of_work
from market.product.models import Product
from market.remainder import service as ledger
from market.sale.models import Sale


# ─── Engine / sessions ───────────────────────────────────────────────────────

@pytest.fixture
def db_engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'market.db'}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


# ─── Factories ───────────────────────────────────────────────────────────────

@pytest.fixture
def make_branch(db_session):
    def _make(name="Chilonzor"):
        branch = Branch(name=name, address="Tashkent", phone="+998900000000")
        db_session.add(branch)
        db_session.commit()
        return branch
    return _make


@pytest.fixture
def make_product(db_session):
    def _make(branch, name="Tea", price=100.0):
        product = Product(name=name, price=price, branch_id=branch.id)
        db_session.add(product)
        db_session.commit()
        return product
    return _make


@pytest.fixture
def make_client(db_session):
    def _make(first_name="Aziz", created_at=None, branch=None):
        client = Client(first_name=first_name, branch_id=branch.id if branch else None)
        if created_at is not None:
            client.created_at = created_at
        db_session.add(client)
        db_session.commit()
        return client
    return _make


@pytest.fixture
def make_sale(db_session):
    counter = {"n": 0}

    def _make(branch, total_price=0.0, increment_id=None):
        counter["n"] += 1
        sale = Sale(
            increment_id=increment_id or f"S-{counter['n']:07d}",
            branch_id=branch.id,
            total_price=total_price,
            paid=0,
            debt=total_price,
        )
        db_session.add(sale)
        db_session.commit()
        return sale
    return _make


@pytest.fixture
def stock(db_session):
    """Put ``quantity`` of ``product`` on the ledger of ``branch``."""
    def _stock(product, branch, quantity, coming_price=50.0):
        with unit_of_work(db_session):
            ledger.receive(
                db_session,
                product.id,
                branch.id,
                quantity,
                coming_price=coming_price,
                sale_price=product.price,
                name=product.name,
            )
    return _stock


@pytest.fixture
def quantity_of(db_session):
    def _quantity(product_id, branch_id):
        db_session.expire_all()
        row = ledger.get_remainder_orm(db_session, product_id, branch_id)
        return row.quantity if row else None
    return _quantity


# ─── HTTP ────────────────────────────────────────────────────────────────────

@pytest.fixture
def api(session_factory):
    """TestClient bound to the test database. The lifespan is not run."""
    from market.main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
