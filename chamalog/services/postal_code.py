"""CEP (Brazilian postal code) lookup through the ViaCEP API."""

import json
import logging
import re
import time
from typing import TYPE_CHECKING

import httpx

from chamalog.core.errors import NotFoundError, UpstreamError, ValidationFailedError
from chamalog.schemas.postal_code import PostalAddress

if TYPE_CHECKING:
    from chamalog.core.config import Settings

logger = logging.getLogger(__name__)

CEP_PATTERN = re.compile(r"^\d{8}$")


def normalize_cep(cep: str) -> str:
    """Strip the usual '12345-678' punctuation; the result must be 8 digits."""
    digits = re.sub(r"[\s.-]", "", cep)
    if not CEP_PATTERN.match(digits):
        raise ValidationFailedError("CEP must have exactly 8 digits.")
    return digits


async def lookup_cep(
    cep: str,
    settings: "Settings",
    client: httpx.AsyncClient | None = None,
) -> PostalAddress:
    """
    Resolve a CEP to a street address.

    Raises ValidationFailedError for malformed input, NotFoundError when ViaCEP
    does not know the code, and UpstreamError when ViaCEP is unreachable,
    times out, or answers with something other than a JSON 200.
    """
    digits = normalize_cep(cep)
    url = f"{settings.POSTAL_CODE_API_URL}/{digits}/json/"
    timeout = httpx.Timeout(settings.POSTAL_CODE_TIMEOUT_SEC)
    start = time.perf_counter()

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout) as own_client:
                response = await own_client.get(url)
        else:
            response = await client.get(url, timeout=timeout)
    except httpx.TimeoutException as e:
        logger.warning("CEP lookup timed out after %.2fs", time.perf_counter() - start)
        raise UpstreamError("Postal code service timed out.") from e
    except httpx.HTTPError as e:
        logger.warning("CEP lookup failed: %s", e)
        raise UpstreamError("Postal code service is unreachable.") from e

    logger.debug("CEP lookup %s -> %s in %.2fs", digits, response.status_code, time.perf_counter() - start)
    if response.status_code == 400:
        raise ValidationFailedError("CEP must have exactly 8 digits.")
    if response.status_code != 200:
        raise UpstreamError(f"Postal code service returned status {response.status_code}.")

    try:
        body = response.json()
    except json.JSONDecodeError as e:
        raise UpstreamError("Postal code service response is not valid JSON.") from e
    if not isinstance(body, dict):
        raise UpstreamError("Postal code service response has an unexpected shape.")
    # ViaCEP answers unknown codes with 200 and {"erro": true}.
    if body.get("erro"):
        raise NotFoundError("CEP not found.")

    return PostalAddress(
        cep=body.get("cep") or digits,
        street=body.get("logradouro") or "",
        neighborhood=body.get("bairro") or "",
        city=body.get("localidade") or "",
        state=body.get("uf") or "",
        complement=body.get("complemento") or "",
    )
