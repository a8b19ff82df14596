"""Shared authentication utilities.

Bearer tokens are HS256 JWTs signed with JWT_SECRET_KEY that carry a
``user_id`` claim. This module is the only place that verifies them.
"""

from functools import wraps
from flask import request, jsonify, current_app
import jwt

from app.errors import AuthError


def verify_token(token: str):
    """Verify a bearer token and return the user id it was issued for.

    Raises:
        AuthError: token is malformed, expired or has no user id
    """
    try:
        payload = jwt.decode(token, current_app.config['JWT_SECRET_KEY'], algorithms=['HS256'])
    except jwt.ExpiredSignatureError:
        raise AuthError('Token has expired')
    except jwt.InvalidTokenError:
        raise AuthError('Invalid or expired token')

    user_id = payload.get('user_id') or payload.get('sub')
    if not user_id:
        raise AuthError('Invalid or expired token')
    return user_id


def get_bearer_token():
    """Extract the token from an 'Authorization: Bearer <token>' header."""
    auth_header = request.headers.get('Authorization', '')
    if not auth_header.startswith('Bearer '):
        return None
    return auth_header[len('Bearer '):].strip() or None


def token_required(f):
    """
    Decorator to require valid JWT token.

    Extracts user_id from JWT token and passes it as the first argument
    to the decorated function.

    Usage:
        @bp.route('/protected')
        @token_required
        def protected_route(current_user_id):
            return jsonify({'user_id': current_user_id})
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        token = get_bearer_token()
        if not token:
            return jsonify({'error': 'Authorization token required'}), 401

        try:
            current_user_id = verify_token(token)
        except AuthError as e:
            return jsonify(e.to_dict()), 401

        return f(current_user_id, *args, **kwargs)
    return decorated
