from typing import NamedTuple, Optional

LANDING_PATH = "/"
SIGNIN_PATH = "/signin"
SIGNUP_PATH = "/signup"
DASHBOARD_PATH = "/dashboard"

# path -> page name
ROUTES = {
    LANDING_PATH: "landing",
    SIGNIN_PATH: "signin",
    SIGNUP_PATH: "signup",
    DASHBOARD_PATH: "dashboard",
    "/protected": "dashboard",
}

PROTECTED_PATHS = {DASHBOARD_PATH, "/protected"}

# Signed-in users have no business on these
GUEST_ONLY_PATHS = {SIGNIN_PATH, SIGNUP_PATH}

NOT_FOUND_PAGE = "not_found"


class RouteDecision(NamedTuple):
    page: str
    redirect: Optional[str] = None


def normalize_path(path: Optional[str]) -> str:
    if not path:
        return LANDING_PATH
    path = "/" + path.strip().strip("/")
    return path.lower()


def resolve_route(path: Optional[str], has_session: bool) -> RouteDecision:
    """
    Pick the page for a path, or the path to redirect to.

    Args:
        path: Requested path, e.g. '/dashboard'
        has_session: Whether a user is signed in

    Returns:
        RouteDecision: page to render, with redirect set when the user must go elsewhere
    """
    path = normalize_path(path)
    page = ROUTES.get(path)
    if page is None:
        return RouteDecision(NOT_FOUND_PAGE)
    if path in PROTECTED_PATHS and not has_session:
        return RouteDecision(ROUTES[LANDING_PATH], redirect=LANDING_PATH)
    if path in GUEST_ONLY_PATHS and has_session:
        return RouteDecision(ROUTES[DASHBOARD_PATH], redirect=DASHBOARD_PATH)
    return RouteDecision(page)
