"""
Route gate for the web front end.

Given a page path and the signed-in identity (or None), decide whether the page
may render or where the browser should be sent instead. The API routes enforce
the same roles on their own; this only keeps the UI from flashing pages the
caller cannot use.
"""
from dataclasses import dataclass
from typing import Optional

from lepinet.models import User, UserRole, VerificationStatus

LOGIN_PATH = "/login"
DASHBOARD_PATH = "/dashboard"
ADMIN_DASHBOARD_PATH = "/admin/dashboard"

PROTECTED_PREFIXES = (
    "/dashboard",
    "/admin",
    "/records",
    "/review",
    "/expert-application",
    "/profile",
)
ADMIN_PREFIX = "/admin"
REVIEW_PREFIX = "/review"


@dataclass(frozen=True)
class RouteDecision:
    allowed: bool
    redirect_to: Optional[str] = None

    @classmethod
    def allow(cls) -> "RouteDecision":
        return cls(allowed=True)

    @classmethod
    def redirect(cls, target: str) -> "RouteDecision":
        return cls(allowed=False, redirect_to=target)


def _under(path: str, prefix: str) -> bool:
    """True when path is prefix itself or a page beneath it."""
    return path == prefix or path.startswith(prefix + "/")


def normalize_path(path: str) -> str:
    path = (path or "/").split("?", 1)[0].split("#", 1)[0]
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/")
    return path


def is_protected(path: str) -> bool:
    return any(_under(path, prefix) for prefix in PROTECTED_PREFIXES)


def resolve_route_access(path: str, identity: Optional[User]) -> RouteDecision:
    """
    Decide access to a front-end page.

    Rules, in order:
    - anonymous (or banned) callers on a protected page go to /login
    - /admin pages need the admin role, otherwise /dashboard
    - /review pages need a verified expert, otherwise /dashboard
    - admins opening /dashboard are sent to /admin/dashboard
    """
    path = normalize_path(path)

    if identity is None or identity.verification_status == VerificationStatus.BANNED:
        if is_protected(path):
            return RouteDecision.redirect(LOGIN_PATH)
        return RouteDecision.allow()

    if _under(path, ADMIN_PREFIX) and identity.role != UserRole.ADMIN:
        return RouteDecision.redirect(DASHBOARD_PATH)

    if _under(path, REVIEW_PREFIX) and identity.verification_status != VerificationStatus.VERIFIED:
        return RouteDecision.redirect(DASHBOARD_PATH)

    if path == DASHBOARD_PATH and identity.role == UserRole.ADMIN:
        return RouteDecision.redirect(ADMIN_DASHBOARD_PATH)

    return RouteDecision.allow()
