"""Tests for admin user management and stores, including referential guards."""

import unittest

from chamalog.core.permissions import Role
from chamalog.core.security import verify_password
from chamalog.models import User
from support import TEST_PASSWORD, ApiTestCase


class TestUserManagement(ApiTestCase):
    def create_user(self, **overrides: object):
        body = {
            "name": "Carlos",
            "email": "carlos@chamalog.com",
            "password": "password123",
            "role": "staff",
        }
        body.update(overrides)
        return self.client.post(self.url("/usuarios"), json=body, headers=self.auth(self.admin))

    def test_create_hashes_password(self) -> None:
        response = self.create_user()
        self.assertEqual(response.status_code, 201)
        with self.database.session() as db:
            user = db.get(User, response.json()["id"])
            self.assertEqual(user.role, "staff")
            self.assertNotEqual(user.password_hash, "password123")
            self.assertTrue(verify_password("password123", user.password_hash))

    def test_create_duplicate_email(self) -> None:
        self.assertEqual(self.create_user().status_code, 201)
        response = self.create_user(email="CARLOS@chamalog.com")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Email is already in use.")

    def test_create_rejects_unknown_role(self) -> None:
        self.assertEqual(self.create_user(role="superuser").status_code, 400)

    def test_create_with_unknown_store(self) -> None:
        self.assertEqual(self.create_user(store_id=999).status_code, 404)

    def test_list_never_exposes_password_hash(self) -> None:
        users = self.client.get(self.url("/usuarios"), headers=self.auth(self.admin)).json()
        self.assertEqual([u["email"] for u in users], ["admin@chamalog.com"])
        self.assertNotIn("password_hash", users[0])

    def test_update_changes_profile_but_not_password(self) -> None:
        store = self.add_store()
        user = self.add_user(Role.CUSTOMER, "joana@chamalog.com")
        response = self.client.put(
            self.url(f"/usuarios/{user.id}"),
            json={
                "name": "Joana Souza",
                "email": "joana.souza@chamalog.com",
                "role": "staff",
                "store_id": store.id,
                "password": "ignored-password",
            },
            headers=self.auth(self.admin),
        )
        self.assertEqual(response.status_code, 200)
        with self.database.session() as db:
            updated = db.get(User, user.id)
            self.assertEqual(updated.name, "Joana Souza")
            self.assertEqual(updated.email, "joana.souza@chamalog.com")
            self.assertEqual(updated.role, "staff")
            self.assertEqual(updated.store_id, store.id)
            self.assertTrue(verify_password(TEST_PASSWORD, updated.password_hash))

    def test_update_to_taken_email(self) -> None:
        user = self.add_user(Role.CUSTOMER, "joana@chamalog.com")
        response = self.client.put(
            self.url(f"/usuarios/{user.id}"),
            json={"name": "Joana", "email": "admin@chamalog.com", "role": "customer"},
            headers=self.auth(self.admin),
        )
        self.assertEqual(response.status_code, 400)

    def test_update_missing_user(self) -> None:
        response = self.client.put(
            self.url("/usuarios/9999"),
            json={"name": "X", "email": "x@chamalog.com", "role": "customer"},
            headers=self.auth(self.admin),
        )
        self.assertEqual(response.status_code, 404)

    def test_delete_user(self) -> None:
        user = self.add_user(Role.CUSTOMER, "joana@chamalog.com")
        response = self.client.delete(self.url(f"/usuarios/{user.id}"), headers=self.auth(self.admin))
        self.assertEqual(response.status_code, 200)
        with self.database.session() as db:
            self.assertIsNone(db.get(User, user.id))

    def test_delete_missing_user(self) -> None:
        response = self.client.delete(self.url("/usuarios/9999"), headers=self.auth(self.admin))
        self.assertEqual(response.status_code, 404)

    def test_self_delete_always_rejected(self) -> None:
        for n in range(3):
            self.add_user(Role.ADMIN, f"admin{n}@chamalog.com")
            with self.subTest(other_admins=n + 1):
                response = self.client.delete(
                    self.url(f"/usuarios/{self.admin.id}"), headers=self.auth(self.admin)
                )
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.json()["detail"], "You cannot delete your own account.")

    def test_delete_user_referenced_by_orders(self) -> None:
        store = self.add_store()
        owner = self.add_user(Role.STAFF, "dono@chamalog.com")
        courier = self.add_user(Role.STAFF, "motoboy@chamalog.com")
        self.add_order(store, owner, "TR1", courier=courier)
        for user in (owner, courier):
            with self.subTest(email=user.email):
                response = self.client.delete(self.url(f"/usuarios/{user.id}"), headers=self.auth(self.admin))
                self.assertEqual(response.status_code, 409)
        with self.database.session() as db:
            self.assertIsNotNone(db.get(User, owner.id))

    def test_user_with_activity_history_can_be_deleted(self) -> None:
        self.client.post(
            self.url("/registro"),
            json={"name": "Ana", "email": "ana@chamalog.com", "password": "password123"},
        )
        users = self.client.get(self.url("/usuarios"), headers=self.auth(self.admin)).json()
        ana = next(u for u in users if u["email"] == "ana@chamalog.com")
        response = self.client.delete(self.url(f"/usuarios/{ana['id']}"), headers=self.auth(self.admin))
        self.assertEqual(response.status_code, 200)
        feed = self.client.get(self.url("/atividades-recentes"), headers=self.auth(self.admin)).json()
        self.assertIn("New customer registered: ana@chamalog.com", [a["action"] for a in feed])


class TestStores(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.staff = self.add_user(Role.STAFF, "staff@chamalog.com")

    def test_create_and_list(self) -> None:
        response = self.client.post(
            self.url("/lojas"),
            json={"name": "Loja Sul", "address": "Av. Sul, 500"},
            headers=self.auth(self.admin),
        )
        self.assertEqual(response.status_code, 201)
        stores = self.client.get(self.url("/lojas"), headers=self.auth(self.staff)).json()
        self.assertEqual(stores, [{"id": response.json()["id"], "name": "Loja Sul", "address": "Av. Sul, 500"}])

    def test_missing_or_blank_fields(self) -> None:
        for body in ({"name": "Loja"}, {"address": "Rua 1"}, {"name": "  ", "address": "Rua 1"}):
            with self.subTest(body=body):
                response = self.client.post(self.url("/lojas"), json=body, headers=self.auth(self.admin))
                self.assertEqual(response.status_code, 400)

    def test_update_store(self) -> None:
        store = self.add_store()
        response = self.client.put(
            self.url(f"/lojas/{store.id}"),
            json={"name": "Loja Renomeada", "address": "Rua Nova, 2"},
            headers=self.auth(self.admin),
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["name"], "Loja Renomeada")

    def test_update_missing_store(self) -> None:
        response = self.client.put(
            self.url("/lojas/999"),
            json={"name": "X", "address": "Y"},
            headers=self.auth(self.admin),
        )
        self.assertEqual(response.status_code, 404)

    def test_delete_unreferenced_store(self) -> None:
        store = self.add_store()
        response = self.client.delete(self.url(f"/lojas/{store.id}"), headers=self.auth(self.admin))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.get(self.url("/lojas"), headers=self.auth(self.admin)).json(), [])

    def test_delete_referenced_store_conflicts(self) -> None:
        store = self.add_store()
        self.add_order(store, self.admin, "TR1")
        response = self.client.delete(self.url(f"/lojas/{store.id}"), headers=self.auth(self.admin))
        self.assertEqual(response.status_code, 409)
        self.assertEqual(len(self.client.get(self.url("/lojas"), headers=self.auth(self.admin)).json()), 1)

    def test_delete_store_unassigns_its_users(self) -> None:
        store = self.add_store()
        clerk = self.add_user(Role.STAFF, "balcao@chamalog.com", store_id=store.id)
        response = self.client.delete(self.url(f"/lojas/{store.id}"), headers=self.auth(self.admin))
        self.assertEqual(response.status_code, 200)
        with self.database.session() as db:
            self.assertIsNone(db.get(User, clerk.id).store_id)

    def test_delete_missing_store(self) -> None:
        response = self.client.delete(self.url("/lojas/999"), headers=self.auth(self.admin))
        self.assertEqual(response.status_code, 404)


if __name__ == "__main__":
    unittest.main()
