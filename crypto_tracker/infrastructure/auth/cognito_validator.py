"""
Infrastructure adapter: AWS Cognito JWKS → ITokenValidator.

Validates RS256-signed Cognito tokens by fetching the public JWKS endpoint
and verifying signature, expiry, issuer and token_use. ID tokens must carry
the app client as audience; access tokens carry it in client_id instead.
JWKS are cached per-process via functools.lru_cache to avoid repeated HTTP calls.
"""

from functools import lru_cache

import httpx
from jose import JWTError, jwt

from crypto_tracker.domain.ports.token_validator_port import ITokenValidator

ACCEPTED_TOKEN_USES = ("id", "access")


class CognitoTokenValidator(ITokenValidator):
    """Validates Cognito ID and access tokens against the user pool's public JWKS."""

    def __init__(
        self,
        user_pool_id: str,
        client_id: str,
        region: str = "us-east-1",
    ) -> None:
        self._client_id = client_id
        self._issuer = f"https://cognito-idp.{region}.amazonaws.com/{user_pool_id}"
        self._jwks_url = f"{self._issuer}/.well-known/jwks.json"

    @lru_cache(maxsize=1)
    def _get_jwks(self) -> dict:
        response = httpx.get(self._jwks_url, timeout=10)
        response.raise_for_status()
        return response.json()

    def validate(self, token: str) -> dict:
        """Decode and validate a Cognito ID or access token.

        Raises:
            ValueError: on any validation failure (bad signature, expiry,
                        wrong issuer, wrong token_use, wrong client).
        """
        try:
            jwks = self._get_jwks()
            kid = jwt.get_unverified_header(token).get("kid")
            rsa_key = next(
                (key for key in jwks.get("keys", []) if key.get("kid") == kid),
                None,
            )
            if not rsa_key:
                raise ValueError("Matching key not found in JWKS, token may be stale.")

            claims = jwt.decode(
                token,
                rsa_key,
                algorithms=["RS256"],
                issuer=self._issuer,
                options={"verify_aud": False},
            )
        except (JWTError, httpx.HTTPError) as exc:
            raise ValueError(f"Token validation failed: {exc}") from exc

        token_use = claims.get("token_use")
        if token_use not in ACCEPTED_TOKEN_USES:
            raise ValueError(f"Invalid token_use: got {token_use!r}")

        client = claims.get("aud") if token_use == "id" else claims.get("client_id")
        if client != self._client_id:
            raise ValueError("Token was not issued for this client")
        return claims
