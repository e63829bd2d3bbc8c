import logging
from flask import current_app
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

logger = logging.getLogger(__name__)

TOKEN_SALT = 'admin-auth-token'


def _serializer():
    return URLSafeTimedSerializer(current_app.config['SECRET_KEY'], salt=TOKEN_SALT)


def build_token(user):
    payload = {'userId': str(user.id), 'email': user.email, 'role': user.role}
    return _serializer().dumps(payload)


def read_token(token):
    """Return the token payload, or None when it is forged or expired."""
    max_age = current_app.config.get('ACCESS_TOKEN_EXPIRE_MINUTES', 60 * 24) * 60
    try:
        return _serializer().loads(token, max_age=max_age)
    except SignatureExpired:
        logger.info("Rejected expired admin token")
        return None
    except BadSignature:
        logger.warning("Rejected admin token with a bad signature")
        return None


def token_from_header(header):
    # Accept both "Bearer TOKEN" and a bare token
    if not header:
        return None
    if header.startswith('Bearer '):
        return header[len('Bearer '):].strip() or None
    return header.strip() or None
