"""Security-related response headers, applied to every API server response by middleware."""
from secure import Secure
from secure.headers import (
    CacheControl,
    ContentSecurityPolicy,
    CrossOriginOpenerPolicy,
    PermissionsPolicy,
    ReferrerPolicy,
    Server,
    StrictTransportSecurity,
    XContentTypeOptions,
    XFrameOptions,
)

DOCUMENTATION_PATHS = ('/docs', '/redoc')

DOCUMENTATION_CDN = 'https://cdn.jsdelivr.net'


def _content_security_policy(documentation: bool) -> ContentSecurityPolicy:
    policy = ContentSecurityPolicy().default_src("'self'").object_src("'none'")
    if not documentation:
        return policy.script_src("'self'").style_src("'self'")
    return policy.script_src(
        "'self'", "'unsafe-inline'", DOCUMENTATION_CDN,
    ).style_src(
        "'self'", "'unsafe-inline'", DOCUMENTATION_CDN,
    ).img_src("'self'", 'data:', 'https://fastapi.tiangolo.com')


def _secure_headers(documentation: bool) -> Secure:
    return Secure(
        cache=CacheControl().no_store(),
        coop=CrossOriginOpenerPolicy().same_origin(),
        csp=_content_security_policy(documentation),
        hsts=StrictTransportSecurity().max_age(31536000),
        permissions=PermissionsPolicy().geolocation().camera().microphone(),
        referrer=ReferrerPolicy().strict_origin_when_cross_origin(),
        server=Server().set(''),
        xcto=XContentTypeOptions().nosniff(),
        xfo=XFrameOptions().sameorigin(),
    )


secure_headers = _secure_headers(documentation=False)
secure_headers_documentation = _secure_headers(documentation=True)


def select_secure_headers(path: str) -> Secure:
    """The interactive documentation pages load their scripts and styles from a CDN."""
    if path.startswith(DOCUMENTATION_PATHS):
        return secure_headers_documentation
    return secure_headers
