"""JWT authentication provider implementation.

Supports tokens issued by an external identity provider and signed with an
asymmetric key (RS256 or ES256, verified against the provider's JWKS) as
well as locally-created HS256 tokens for development and tests.

Expected payload:
    {
        "sub": "provider-user-id",
        "email": "user@example.com",
        "name": "Jane",                      # or user_metadata.display_name
        "exp": 1234567890
    }
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Optional

import httpx
from jose import JWTError, jwk, jwt

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = logging.getLogger(__name__)

ASYMMETRIC_ALGORITHMS = frozenset({"RS256", "ES256"})

# Module-level JWKS cache (fetched once, reused across requests)
_jwks_cache: dict[str, Any] | None = None


async def _get_jwks_keys() -> dict[str, Any]:
    """Fetch and cache the identity provider's JWKS keys by ``kid``."""
    global _jwks_cache
    if _jwks_cache is not None:
        return _jwks_cache

    jwks_url = settings.auth_jwks_url
    if not jwks_url:
        return {}

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(jwks_url, timeout=10.0)
            response.raise_for_status()
            jwks_data = response.json()
            _jwks_cache = {
                key_data["kid"]: key_data
                for key_data in jwks_data.get("keys", [])
                if key_data.get("kid")
            }
            logger.info("Fetched %d JWKS keys from %s", len(_jwks_cache), jwks_url)
            return _jwks_cache
    except Exception:
        logger.exception("Failed to fetch JWKS from %s", jwks_url)
        return {}


class JWTAuthProvider:
    """JWT-based authentication provider."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
        audience: str = settings.auth_audience,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes
        self._audience = audience or None

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a JWT token and extract user info.

        The signing algorithm is read from the token header: RS256/ES256
        tokens are verified with the matching JWKS public key, anything else
        with the shared secret and the configured algorithm.

        Args:
            token: The JWT to validate

        Returns:
            TokenUser if valid, None if invalid or expired
        """
        try:
            header = jwt.get_unverified_header(token)
            alg = header.get("alg", self._algorithm)

            if alg in ASYMMETRIC_ALGORITHMS:
                payload = await self._validate_asymmetric(token, header, alg)
            else:
                payload = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                    **self._decode_kwargs(),
                )

            if payload is None:
                return None

            user_id = payload.get("sub")
            email = payload.get("email")

            if not user_id or not email:
                return None

            user_metadata = payload.get("user_metadata") or {}
            display_name = (
                payload.get("name")
                or user_metadata.get("display_name")
                or user_metadata.get("name")
                or user_metadata.get("full_name")
            )

            return TokenUser(
                id=str(user_id),
                email=email,
                display_name=display_name,
                role=payload.get("role"),
            )

        except JWTError:
            return None

    async def _validate_asymmetric(
        self, token: str, header: dict, alg: str
    ) -> Optional[dict]:
        """Validate an RS256/ES256-signed JWT using JWKS public keys."""
        kid = header.get("kid")
        if not kid:
            return None

        jwks_keys = await _get_jwks_keys()
        key_data = jwks_keys.get(kid)
        if not key_data:
            # Unknown kid: refetch once in case the provider rotated keys
            global _jwks_cache
            _jwks_cache = None
            jwks_keys = await _get_jwks_keys()
            key_data = jwks_keys.get(kid)
            if not key_data:
                logger.warning("JWKS key not found for kid=%s", kid)
                return None

        public_key = jwk.construct(key_data, algorithm=alg)
        return jwt.decode(
            token,
            public_key,
            algorithms=[alg],
            **self._decode_kwargs(),
        )

    def _decode_kwargs(self) -> dict[str, Any]:
        if self._audience:
            return {"audience": self._audience}
        return {"options": {"verify_aud": False}}

    def create_token(self, user: TokenUser) -> str:
        """
        Create a JWT token for a user (HS256, used for tests).

        Args:
            user: The user to create a token for

        Returns:
            The generated JWT string
        """
        expire = datetime.utcnow() + timedelta(minutes=self._expire_minutes)

        payload: dict = {
            "sub": user.id,
            "email": user.email,
            "name": user.display_name,
            "exp": expire,
        }
        if self._audience:
            payload["aud"] = self._audience
        if user.role:
            payload["role"] = user.role

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
