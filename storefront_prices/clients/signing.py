# storefront_prices/clients/signing.py

"""AWS Signature Version 4 for PA-API ``GetItems`` requests.

Everything here is a pure function of the request body, the request
timestamp and the configured credentials. The provider rejects a request
whose canonical form differs from its own by a single byte, so header
order, casing and the trailing newline of the header block are fixed.
"""

import hashlib
import hmac
from datetime import datetime, timezone

from storefront_prices.config.settings import Settings

ALGORITHM = "AWS4-HMAC-SHA256"
KEY_PREFIX = "AWS4"
TERMINATOR = "aws4_request"


def to_amz_date(moment: datetime) -> str:
    """Format a datetime as ``YYYYMMDDTHHMMSSZ`` in UTC."""
    return moment.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def sha256_hex(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def _hmac(key: bytes, value: str) -> bytes:
    return hmac.new(key, value.encode("utf-8"), hashlib.sha256).digest()


def canonical_headers(amz_date: str, settings: Settings) -> str:
    """Return the signed header block, one ``name:value\\n`` per header."""
    return (
        f"content-encoding:{settings.CONTENT_ENCODING}\n"
        f"content-type:{settings.CONTENT_TYPE}\n"
        f"host:{settings.host}\n"
        f"x-amz-date:{amz_date}\n"
        f"x-amz-target:{settings.TARGET}\n"
    )


def canonical_request(body: str, amz_date: str, settings: Settings) -> str:
    return "\n".join([
        "POST",
        settings.REQUEST_PATH,
        "",
        canonical_headers(amz_date, settings),
        settings.SIGNED_HEADERS,
        sha256_hex(body),
    ])


def credential_scope(date_stamp: str, settings: Settings) -> str:
    return f"{date_stamp}/{settings.region}/{settings.SERVICE}/{TERMINATOR}"


def string_to_sign(body: str, amz_date: str, settings: Settings) -> str:
    return "\n".join([
        ALGORITHM,
        amz_date,
        credential_scope(amz_date[:8], settings),
        sha256_hex(canonical_request(body, amz_date, settings)),
    ])


def derive_signing_key(
    secret: str, date_stamp: str, region: str, service: str
) -> bytes:
    """Chain HMAC-SHA256 over date, region, service and terminator."""
    k_date = _hmac(f"{KEY_PREFIX}{secret}".encode("utf-8"), date_stamp)
    k_region = _hmac(k_date, region)
    k_service = _hmac(k_region, service)
    return _hmac(k_service, TERMINATOR)


def build_authorization(body: str, amz_date: str, settings: Settings) -> str:
    """Compute the ``Authorization`` header value for one request.

    Args:
        body: The exact JSON text that will be sent.
        amz_date: Request timestamp as produced by :func:`to_amz_date`.
        settings: Credentials, region and host for the request.
    """
    date_stamp = amz_date[:8]
    key = derive_signing_key(
        settings.secret_access_key,
        date_stamp,
        settings.region,
        settings.SERVICE,
    )
    signature = hmac.new(
        key,
        string_to_sign(body, amz_date, settings).encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()
    scope = credential_scope(date_stamp, settings)
    return (
        f"{ALGORITHM} Credential={settings.access_key_id}/{scope}, "
        f"SignedHeaders={settings.SIGNED_HEADERS}, "
        f"Signature={signature}"
    )
