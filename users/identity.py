"""Google identity verification.

Wraps ``google-auth`` so the rest of the app deals with a plain
:class:`GoogleIdentity` and the shop's own error types.
"""

from dataclasses import dataclass

from common.exceptions import UpstreamError, ValidationError
from django.conf import settings
from google.auth.exceptions import GoogleAuthError, TransportError
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token


@dataclass(frozen=True)
class GoogleIdentity:
    subject: str
    email: str
    name: str
    picture: str


def verify_google_token(token: str) -> GoogleIdentity:
    """Verify a Google ID token against ``GOOGLE_CLIENT_ID``.

    Raises ``ValidationError`` for any token Google rejects, including one
    from the wrong issuer, and ``UpstreamError`` only when Google's
    certificates cannot be fetched.
    """
    if not token:
        raise ValidationError("Google token is required.")
    try:
        claims = id_token.verify_oauth2_token(token, google_requests.Request(), settings.GOOGLE_CLIENT_ID)
    except TransportError as exc:
        raise UpstreamError("Google sign-in is unavailable.") from exc
    except (ValueError, GoogleAuthError) as exc:
        raise ValidationError("Invalid Google token.") from exc

    email = (claims.get("email") or "").strip().lower()
    if not claims.get("sub") or not email:
        raise ValidationError("Google token is missing the account identity.")
    return GoogleIdentity(
        subject=str(claims["sub"]),
        email=email,
        name=claims.get("name") or "",
        picture=claims.get("picture") or "",
    )
