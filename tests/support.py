"""Shared fixtures for API tests: an app over a fresh in-memory SQLite database per test."""

import unittest

import bcrypt
from fastapi.testclient import TestClient
from pydantic import SecretStr

from chamalog.core.config import Settings
from chamalog.core.database import Database
from chamalog.core.permissions import Role
from chamalog.core.security import create_access_token
from chamalog.main import create_app
from chamalog.models import Order, OrderStatus, Store, User

TEST_PASSWORD = "correct-horse-battery"
# Low cost factor keeps the suite fast; verification works for any cost.
TEST_PASSWORD_HASH = bcrypt.hashpw(TEST_PASSWORD.encode("utf-8"), bcrypt.gensalt(rounds=4)).decode(
    "utf-8"
)


def make_settings(**overrides: object) -> Settings:
    """Settings isolated from the environment's .env file."""
    values: dict[str, object] = {
        "APP_ENV": "dev",
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET": SecretStr("test-secret"),
        "JWT_EXPIRE_MINUTES": 480,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class ApiTestCase(unittest.TestCase):
    """Builds the app, a client and seeding helpers for each test."""

    settings_overrides: dict[str, object] = {}

    def setUp(self) -> None:
        self.settings = make_settings(**self.settings_overrides)
        self.database = Database("sqlite://")
        self.database.create_all()
        self.app = create_app(database=self.database, settings=self.settings)
        self.client = TestClient(self.app)
        self.admin = self.add_user(Role.ADMIN, "admin@chamalog.com")

    def tearDown(self) -> None:
        self.client.close()
        self.database.dispose()

    def url(self, path: str) -> str:
        return f"{self.settings.API_PREFIX}{path}"

    def add_user(
        self,
        role: Role,
        email: str,
        name: str = "Test User",
        store_id: int | None = None,
    ) -> User:
        with self.database.session() as db:
            user = User(
                name=name,
                email=email,
                password_hash=TEST_PASSWORD_HASH,
                role=role.value,
                store_id=store_id,
            )
            db.add(user)
            db.commit()
            return user

    def add_store(self, name: str = "Loja Centro", address: str = "Rua A, 1") -> Store:
        with self.database.session() as db:
            store = Store(name=name, address=address)
            db.add(store)
            db.commit()
            return store

    def add_order(
        self,
        store: Store,
        owner: User,
        code: str,
        status: OrderStatus = OrderStatus.PENDING,
        courier: User | None = None,
    ) -> Order:
        with self.database.session() as db:
            order = Order(
                code=code,
                sender=store.name,
                recipient="Maria Silva",
                full_address="Rua B, 20, Centro, Recife - PE",
                weight="0-1kg",
                dimensions="20x20x20",
                declared_value=99.9,
                status=status.value,
                store_id=store.id,
                owner_id=owner.id,
                courier_id=courier.id if courier else None,
            )
            db.add(order)
            db.commit()
            return order

    def token_for(self, user: User) -> str:
        return create_access_token(
            sub=user.id,
            email=user.email,
            role=user.role,
            version=user.token_version or 0,
            settings=self.settings,
        )

    def auth(self, user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token_for(user)}"}

    def order_status(self, order_id: int) -> str | None:
        with self.database.session() as db:
            order = db.get(Order, order_id)
            return order.status if order else None
