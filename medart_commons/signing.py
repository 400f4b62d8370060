"""
HMAC signing shared by the image proxy URL builder
"""
import base64
import hashlib
import hmac


def urlsafe_b64(data: bytes) -> str:
    """Base64url without padding"""
    return base64.urlsafe_b64encode(data).rstrip(b'=').decode('ascii')


def sign(secret_key: bytes, secret_salt: bytes, canonical_path: str) -> str:
    """
    Sign a proxy path
    
    HMAC-SHA256 keyed by ``secret_key`` over the salt followed by the UTF-8
    path, base64url-encoded without padding. The proxy recomputes this
    exactly, so neither the ordering nor the encoding may change.
    
    Args:
        secret_key: Raw key bytes
        secret_salt: Raw salt bytes
        canonical_path: Path beginning with '/', excluding the signature
        
    Returns:
        Signature string
    """
    digest = hmac.new(secret_key, secret_salt + canonical_path.encode('utf-8'), hashlib.sha256).digest()
    return urlsafe_b64(digest)
