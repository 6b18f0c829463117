# utils/auth.py
import jwt
from datetime import datetime, timedelta, timezone
from functools import wraps
from flask import current_app, request, jsonify
import logging

logger = logging.getLogger(__name__)

JWT_EXPIRATION_HOURS = 24
JWT_AUDIENCE = 'authenticated'


def generate_token(user_id, secret, expires_in_hours=JWT_EXPIRATION_HOURS):
    """Generate a Supabase-style JWT (sub + authenticated audience) for a user"""
    expiration = datetime.now(timezone.utc) + timedelta(hours=expires_in_hours)
    return jwt.encode(
        {
            'sub': user_id,
            'aud': JWT_AUDIENCE,
            'exp': expiration
        },
        secret,
        algorithm='HS256'
    )


def token_required(f):
    """Decorator to protect routes with JWT; passes the user id as first argument"""
    @wraps(f)
    def decorated(*args, **kwargs):
        token = None
        auth_header = request.headers.get('Authorization')

        if auth_header:
            try:
                token = auth_header.split(" ")[1]
            except IndexError:
                logger.warning("Invalid token format in Authorization header.")
                return jsonify({'error': 'Invalid token format'}), 401
        else:
            logger.warning(f"Authorization header missing for {request.path}")

        if not token:
            return jsonify({'error': 'Token is required'}), 401

        try:
            data = jwt.decode(
                token,
                current_app.config['JWT_SECRET'],
                algorithms=["HS256"],
                audience=JWT_AUDIENCE
            )
            current_user_id = data['sub']
        except jwt.ExpiredSignatureError:
            logger.warning("Token has expired.")
            return jsonify({'error': 'Token has expired'}), 401
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid token: {e}")
            return jsonify({'error': 'Invalid token'}), 401
        except KeyError:
            logger.warning("Token has no subject claim.")
            return jsonify({'error': 'Invalid token'}), 401

        return f(current_user_id, *args, **kwargs)

    return decorated
