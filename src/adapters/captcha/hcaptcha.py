"""
hCaptcha adapter - Implements CaptchaVerifier protocol.

Posts the client token to the hCaptcha ``siteverify`` endpoint. Every
failure mode (missing token, network error, non-2xx, malformed body)
resolves to False so the domain only ever sees a boolean.
"""

import logging

import httpx

logger = logging.getLogger(__name__)

HCAPTCHA_VERIFY_URL = "https://hcaptcha.com/siteverify"


class HCaptchaVerifier:
    """
    Implements CaptchaVerifier protocol via httpx.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Owns its AsyncClient unless one is injected.
    """

    def __init__(
        self,
        secret: str,
        verify_url: str = HCAPTCHA_VERIFY_URL,
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._secret = secret
        self._verify_url = verify_url
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def verify(self, token: str | None) -> bool:
        """
        Validate a captcha token with hCaptcha.

        Args:
            token: Response token produced by the client widget

        Returns:
            True only if hCaptcha reports success
        """
        if not token:
            return False

        try:
            response = await self._client.post(
                self._verify_url,
                data={"response": token, "secret": self._secret},
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Captcha verification request failed: {e}")
            return False
        except ValueError:
            logger.warning("Captcha verification returned a non-JSON body")
            return False

        if not isinstance(payload, dict):
            return False
        if not payload.get("success"):
            logger.info("Captcha rejected: %s", payload.get("error-codes", []))
            return False
        return True

    async def aclose(self) -> None:
        await self._client.aclose()
