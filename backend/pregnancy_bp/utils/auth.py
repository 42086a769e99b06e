"""
Identity provider boundary.

Sign-in happens at the external identity provider, which issues an HS256 JWT
signed with JWT_SECRET_KEY. This module only verifies that token and exposes
the opaque subject and display name to the request.
"""
import os
import secrets
import jwt
from datetime import datetime, timedelta, timezone
from functools import wraps
from flask import request, jsonify, g


def _secret() -> str:
    secret = os.getenv('JWT_SECRET_KEY')
    if not secret:
        raise RuntimeError('JWT_SECRET_KEY environment variable is required')
    return secret


def generate_session_token(user_id: str, name: str = None, expires_in: int = None) -> str:
    """
    Mint a session token in the identity provider's format.
    Used by the issue-dev-token CLI command and by tests.
    """
    if expires_in is None:
        expires_in = int(os.getenv('JWT_ACCESS_TOKEN_EXPIRES', 3600))
    now = datetime.now(timezone.utc)

    payload = {
        'sub': str(user_id),
        'name': name or '',
        'jti': secrets.token_hex(16),
        'exp': now + timedelta(seconds=expires_in),
        'iat': now,
    }

    return jwt.encode(payload, _secret(), algorithm='HS256')


def decode_token(token: str) -> dict:
    """Decode and validate a JWT token. Returns None when invalid or expired."""
    try:
        payload = jwt.decode(token, _secret(), algorithms=['HS256'])
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None
    if not payload.get('sub'):
        return None
    return payload


def _bearer_token():
    auth_header = request.headers.get('Authorization')
    if not auth_header:
        return None
    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != 'bearer':
        return None
    return parts[1]


def current_identity():
    """
    Signed-in state for the current request: (signed_in, user_id, display_name).
    Never raises for a missing or bad token.
    """
    token = _bearer_token()
    payload = decode_token(token) if token else None
    if not payload:
        return False, None, None
    return True, payload['sub'], payload.get('name') or ''


def token_required(f):
    """Decorator to require a valid identity token for a route."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        auth_header = request.headers.get('Authorization')
        if not auth_header:
            return jsonify({'error': 'Missing authorization header'}), 401

        token = _bearer_token()
        if not token:
            return jsonify({'error': 'Invalid authorization header format'}), 401

        payload = decode_token(token)
        if not payload:
            return jsonify({'error': 'Invalid or expired token'}), 401

        g.user_id = payload['sub']
        g.display_name = payload.get('name') or ''

        return f(*args, **kwargs)
    return wrapper
