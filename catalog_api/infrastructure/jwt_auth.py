"""JWT Auth Provider — verifies bearer tokens and resolves the principal behind them.

Invariants:
    - Every verification failure raises AuthenticationError (never JoseError or ValueError)
    - Algorithm allowlist checked before signature verification
    - exp/nbf/iat validated with the configured leeway
    - sub is mandatory; the role claim is optional (no role = no permissions)

Design Decisions:
    - authlib.jose for decode + claims validation: same library the token issuer uses
    - Role extraction separate from verification (role_of) so authorization can be
      evaluated after authentication, and fail distinctly
"""

import json
import logging
import time
from base64 import urlsafe_b64decode
from typing import Any

from authlib.jose import JoseError, jwt

from catalog_api.config import Settings
from catalog_api.core.domain_types import OwnerId
from catalog_api.core.errors import AuthenticationError
from catalog_api.core.permissions import Principal

logger = logging.getLogger(__name__)


def _header_alg(token: str) -> str | None:
    """Read the alg header without verifying the token."""
    try:
        segment = token.split(".", 1)[0]
        padded = segment + "=" * (-len(segment) % 4)
        return json.loads(urlsafe_b64decode(padded)).get("alg")
    except (ValueError, IndexError, AttributeError):
        return None


class JwtAuthProvider:
    """Verifies HMAC-signed JWTs issued for the catalog."""

    def __init__(
        self,
        secret: str,
        algorithms: list[str],
        issuer: str | None = None,
        audience: str | None = None,
        leeway: int = 30,
        role_claim: str = "role",
    ):
        self._secret = secret
        self._algorithms = algorithms
        self._leeway = leeway
        self._role_claim = role_claim
        self._claims_options: dict[str, Any] = {"sub": {"essential": True}}
        if issuer:
            self._claims_options["iss"] = {"essential": True, "value": issuer}
        if audience:
            self._claims_options["aud"] = {"essential": True, "value": audience}

    @classmethod
    def from_settings(cls, settings: Settings) -> "JwtAuthProvider":
        return cls(
            secret=settings.jwt_secret,
            algorithms=settings.jwt_algorithms,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            leeway=settings.jwt_leeway_seconds,
            role_claim=settings.jwt_role_claim,
        )

    async def verify_credential(self, token: str) -> Principal:
        """Decode and validate a bearer token. Raises AuthenticationError."""
        alg = _header_alg(token)
        if alg not in self._algorithms:
            raise AuthenticationError("Disallowed or unreadable JWT algorithm")

        try:
            claims = jwt.decode(
                token, self._secret, claims_options=self._claims_options,
            )
            claims.validate(now=int(time.time()), leeway=self._leeway)
        except (JoseError, ValueError) as exc:
            logger.info(f"JWT rejected: {exc}")
            raise AuthenticationError(f"Invalid token: {exc}") from exc

        subject = claims.get("sub")
        if not subject:
            raise AuthenticationError("Token has no subject")

        role = claims.get(self._role_claim)
        return Principal(
            id=OwnerId(str(subject)),
            role=str(role) if role is not None else None,
        )

    def role_of(self, principal: Principal) -> str | None:
        return principal.role

    def issue_token(
        self,
        subject: str,
        role: str | None = None,
        expires_in_seconds: int = 3600,
        extra_claims: dict[str, Any] | None = None,
    ) -> str:
        """Sign a token for this provider (development and tests)."""
        now = int(time.time())
        payload: dict[str, Any] = {
            "sub": subject, "iat": now, "exp": now + expires_in_seconds,
        }
        if "iss" in self._claims_options:
            payload["iss"] = self._claims_options["iss"]["value"]
        if "aud" in self._claims_options:
            payload["aud"] = self._claims_options["aud"]["value"]
        if role is not None:
            payload[self._role_claim] = role
        payload.update(extra_claims or {})
        header = {"alg": self._algorithms[0], "typ": "JWT"}
        return jwt.encode(header, payload, self._secret).decode("utf-8")
