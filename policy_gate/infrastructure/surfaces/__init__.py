"""Client surface profiles (web, admin, mobile)."""

from policy_gate.domain.enums import ClientSurface
from policy_gate.infrastructure.surfaces import admin, mobile, web
from policy_gate.infrastructure.surfaces.base import SurfaceProfile

PROFILES: dict[ClientSurface, SurfaceProfile] = {
    ClientSurface.WEB: web.PROFILE,
    ClientSurface.ADMIN: admin.PROFILE,
    ClientSurface.MOBILE: mobile.PROFILE,
}


def get_profile(surface: ClientSurface | str) -> SurfaceProfile:
    """Return the profile for surface (accepts the enum or its value)."""
    return PROFILES[ClientSurface(surface)]


__all__ = ["PROFILES", "SurfaceProfile", "get_profile"]
