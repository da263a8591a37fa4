# shared/common/authentication.py
"""
JWT Authentication
"""

import jwt
import logging
from datetime import datetime, timezone
from typing import Optional, Dict, Any, Tuple
from django.conf import settings
from django.utils import timezone as dj_timezone
from rest_framework import authentication, exceptions
from rest_framework.request import Request

from .cache import get_token_blacklist
from .constants import is_administrative

logger = logging.getLogger(__name__)


class JWTAuthentication(authentication.BaseAuthentication):
    """
    JWT Token Authentication for API requests.
    Uses HS256 with a shared secret; revoked tokens are rejected.
    """

    keyword = 'Bearer'

    def authenticate(self, request: Request) -> Optional[Tuple[Any, Dict]]:
        auth_header = authentication.get_authorization_header(request)

        if not auth_header:
            return None

        try:
            auth_parts = auth_header.decode('utf-8').split()
        except UnicodeDecodeError:
            raise exceptions.AuthenticationFailed('Invalid token header encoding')

        if len(auth_parts) != 2:
            raise exceptions.AuthenticationFailed('Invalid token header format')

        if auth_parts[0].lower() != self.keyword.lower():
            return None

        token = auth_parts[1]
        return self.authenticate_token(token)

    def authenticate_token(self, token: str) -> Tuple[Any, Dict]:
        """Validate and decode JWT token"""
        if get_token_blacklist().is_blacklisted(token):
            raise exceptions.AuthenticationFailed('Token has been revoked')

        try:
            payload = JWTTokenGenerator.decode_token(token)
        except jwt.ExpiredSignatureError:
            raise exceptions.AuthenticationFailed('Token has expired')
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid token: {e}")
            raise exceptions.AuthenticationFailed('Invalid token')

        user = self._get_user_from_payload(payload, token)
        return (user, payload)

    def _get_user_from_payload(self, payload: Dict, token: str) -> 'TokenUser':
        """Create a user object from JWT payload"""
        return TokenUser(payload, token)

    def authenticate_header(self, request: Request) -> str:
        return self.keyword


class TokenUser:
    """
    User object created from JWT token payload.
    Provides a consistent interface for accessing user data.
    """

    def __init__(self, payload: Dict, token: str = None):
        self.payload = payload
        self.token = token
        self.id = payload.get('sub')
        self.email = payload.get('email')
        self.role = payload.get('role')
        self.is_active = True
        self.is_authenticated = True
        self.is_anonymous = False

    def __str__(self) -> str:
        return f"TokenUser({self.email})"

    @property
    def is_admin(self) -> bool:
        return is_administrative(self.role)

    @property
    def expires_at(self) -> Optional[datetime]:
        exp = self.payload.get('exp')
        if exp is None:
            return None
        return datetime.fromtimestamp(exp, tz=timezone.utc)


class JWTTokenGenerator:
    """
    Generate and decode JWT access tokens.
    """

    @staticmethod
    def generate_access_token(user_id: str, email: str, role: str, extra_claims: Dict = None) -> str:
        """Generate an access token"""
        now = dj_timezone.now()

        payload = {
            'sub': str(user_id),
            'email': email,
            'role': role,
            'iat': now,
            'exp': now + settings.JWT_SETTINGS['ACCESS_TOKEN_LIFETIME'],
            'iss': settings.JWT_SETTINGS['ISSUER'],
            'type': 'access',
        }

        if extra_claims:
            payload.update(extra_claims)

        return jwt.encode(
            payload,
            settings.JWT_SETTINGS['SIGNING_KEY'],
            algorithm=settings.JWT_SETTINGS['ALGORITHM']
        )

    @staticmethod
    def decode_token(token: str, verify_exp: bool = True) -> Dict:
        """Decode and verify a token"""
        return jwt.decode(
            token,
            settings.JWT_SETTINGS['VERIFYING_KEY'],
            algorithms=[settings.JWT_SETTINGS['ALGORITHM']],
            issuer=settings.JWT_SETTINGS['ISSUER'],
            options={
                'require': ['exp', 'iat', 'sub', 'iss'],
                'verify_exp': verify_exp,
            }
        )
