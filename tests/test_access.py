"""
Route gate tests.
"""
import pytest

from lepinet.models import User, UserRole, VerificationStatus
from lepinet.services.access import is_protected, normalize_path, resolve_route_access


def identity(role=UserRole.USER, status=VerificationStatus.NONE) -> User:
    return User(email="x@example.com", first_name="X", last_name="Y", role=role, verification_status=status)


class TestAnonymous:
    """Signed-out visitors."""

    @pytest.mark.parametrize(
        "path",
        ["/dashboard", "/admin/dashboard", "/records", "/records/123", "/review/abc",
         "/expert-application", "/profile"],
    )
    def test_protected_pages_redirect_to_login(self, path):
        decision = resolve_route_access(path, None)
        assert decision.allowed is False
        assert decision.redirect_to == "/login"

    @pytest.mark.parametrize("path", ["/", "/login", "/signup", "/reviewers", "/administration"])
    def test_public_pages_allowed(self, path):
        assert resolve_route_access(path, None).allowed is True

    def test_banned_user_treated_as_signed_out(self):
        banned = identity(status=VerificationStatus.BANNED)
        assert resolve_route_access("/dashboard", banned).redirect_to == "/login"


class TestRoles:
    """Role and verification checks for signed-in users."""

    def test_admin_pages_need_admin(self):
        decision = resolve_route_access("/admin/dashboard", identity(status=VerificationStatus.VERIFIED))
        assert decision.redirect_to == "/dashboard"

    def test_review_needs_verified(self):
        pending = identity(status=VerificationStatus.PENDING)
        assert resolve_route_access("/review", pending).redirect_to == "/dashboard"
        verified = identity(UserRole.EXPERT, VerificationStatus.VERIFIED)
        assert resolve_route_access("/review/123", verified).allowed is True

    def test_admin_sent_to_admin_dashboard(self):
        admin = identity(UserRole.ADMIN, VerificationStatus.VERIFIED)
        assert resolve_route_access("/dashboard", admin).redirect_to == "/admin/dashboard"
        assert resolve_route_access("/admin/dashboard", admin).allowed is True
        assert resolve_route_access("/admin/training", admin).allowed is True

    def test_unverified_admin_cannot_review(self):
        admin = identity(UserRole.ADMIN, VerificationStatus.NONE)
        assert resolve_route_access("/review", admin).redirect_to == "/dashboard"

    def test_regular_user_sees_dashboard(self):
        assert resolve_route_access("/dashboard/", identity()).allowed is True


class TestPaths:
    """Path normalisation."""

    def test_normalize(self):
        assert normalize_path("admin/dashboard/?tab=users") == "/admin/dashboard"
        assert normalize_path("") == "/"

    def test_prefix_matches_whole_segments(self):
        assert is_protected("/profile/abc")
        assert not is_protected("/profiles")
