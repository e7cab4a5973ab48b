"""CEP lookup against a mocked ViaCEP (no network for unit tests)."""

import asyncio
import unittest
from unittest.mock import AsyncMock, patch

import httpx

from chamalog.core.errors import NotFoundError, UpstreamError, ValidationFailedError
from chamalog.core.permissions import Role
from chamalog.schemas.postal_code import PostalAddress
from chamalog.services.postal_code import lookup_cep, normalize_cep
from support import ApiTestCase, make_settings

VIACEP_RECIFE = {
    "cep": "50050-000",
    "logradouro": "Rua da Aurora",
    "complemento": "",
    "bairro": "Boa Vista",
    "localidade": "Recife",
    "uf": "PE",
}


def _lookup(cep: str, handler) -> PostalAddress:
    """Run lookup_cep with a client whose transport is the given handler."""

    async def run() -> PostalAddress:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await lookup_cep(cep, make_settings(), client=client)

    return asyncio.run(run())


class TestNormalizeCep(unittest.TestCase):
    def test_strips_punctuation(self) -> None:
        self.assertEqual(normalize_cep("50050-000"), "50050000")
        self.assertEqual(normalize_cep(" 50.050-000 "), "50050000")

    def test_rejects_wrong_length_or_letters(self) -> None:
        for cep in ("5005000", "500500000", "5005O000", ""):
            with self.subTest(cep=cep):
                with self.assertRaises(ValidationFailedError):
                    normalize_cep(cep)


class TestLookupCep(unittest.TestCase):
    def test_maps_viacep_fields(self) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, json=VIACEP_RECIFE)

        address = _lookup("50050-000", handler)
        self.assertEqual(seen, ["https://viacep.com.br/ws/50050000/json/"])
        self.assertEqual(address.street, "Rua da Aurora")
        self.assertEqual(address.neighborhood, "Boa Vista")
        self.assertEqual(address.city, "Recife")
        self.assertEqual(address.state, "PE")

    def test_unknown_cep(self) -> None:
        with self.assertRaises(NotFoundError):
            _lookup("99999999", lambda request: httpx.Response(200, json={"erro": True}))

    def test_upstream_error_status(self) -> None:
        with self.assertRaises(UpstreamError):
            _lookup("50050000", lambda request: httpx.Response(503, text="unavailable"))

    def test_upstream_not_json(self) -> None:
        with self.assertRaises(UpstreamError):
            _lookup("50050000", lambda request: httpx.Response(200, text="<html>"))

    def test_connection_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with self.assertRaises(UpstreamError):
            _lookup("50050000", handler)

    def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with self.assertRaises(UpstreamError):
            _lookup("50050000", handler)

    def test_malformed_cep_never_reaches_upstream(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("upstream must not be called")

        with self.assertRaises(ValidationFailedError):
            _lookup("123", handler)


class TestCepEndpoint(ApiTestCase):
    def test_staff_lookup(self) -> None:
        staff = self.add_user(Role.STAFF, "staff@chamalog.com")
        address = PostalAddress(cep="50050-000", street="Rua da Aurora", city="Recife", state="PE")
        with patch(
            "chamalog.api.routes.postal_code.lookup_cep", new=AsyncMock(return_value=address)
        ) as mock_lookup:
            response = self.client.get(self.url("/cep/50050000"), headers=self.auth(staff))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["street"], "Rua da Aurora")
        self.assertEqual(mock_lookup.call_args.args[0], "50050000")

    def test_upstream_failure_is_bad_gateway(self) -> None:
        with patch(
            "chamalog.api.routes.postal_code.lookup_cep",
            new=AsyncMock(side_effect=UpstreamError("Postal code service is unreachable.")),
        ):
            response = self.client.get(self.url("/cep/50050000"), headers=self.auth(self.admin))
        self.assertEqual(response.status_code, 502)

    def test_customer_forbidden(self) -> None:
        customer = self.add_user(Role.CUSTOMER, "cliente@chamalog.com")
        response = self.client.get(self.url("/cep/50050000"), headers=self.auth(customer))
        self.assertEqual(response.status_code, 403)


if __name__ == "__main__":
    unittest.main()
