"""Route authorization policy.

An ordered rule table maps (HTTP method, path pattern) to a requirement.
Rules are evaluated top-down and the first match wins; the last rule is a
catch-all that demands any authenticated identity. Patterns are either exact
paths or a prefix ending in ``/**``, which matches the prefix itself and
everything below it.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from anime_api.exceptions import ForbiddenError, UnauthenticatedError
from anime_api.logging import get_logger
from anime_api.security import Principal, Role

logger = get_logger(__name__)

ANY_ROLE: frozenset[Role] = frozenset()


def path_matches(pattern: str, path: str) -> bool:
    if pattern.endswith("/**"):
        prefix = pattern[:-3]
        return path == prefix or path.startswith(prefix + "/")
    return path == pattern


@dataclass(frozen=True, slots=True)
class Rule:
    patterns: tuple[str, ...]
    method: str | None = None  # None matches every method
    roles: frozenset[Role] = ANY_ROLE  # empty means any authenticated identity
    public: bool = False

    def matches(self, method: str, path: str) -> bool:
        if self.method is not None and self.method != method.upper():
            return False
        return any(path_matches(pattern, path) for pattern in self.patterns)


DEFAULT_RULES: tuple[Rule, ...] = (
    Rule(("/records/**",), "POST", roles=frozenset({Role.ADMIN})),
    Rule(("/records/**",), "PUT", roles=frozenset({Role.ADMIN})),
    Rule(("/records/**",), "DELETE", roles=frozenset({Role.ADMIN})),
    Rule(("/records/**",), "GET", roles=frozenset({Role.USER, Role.ADMIN})),
    Rule(("/docs/**", "/redoc/**", "/openapi.json", "/health"), public=True),
    Rule(("/**",)),
)


class AuthorizationPolicy:
    def __init__(self, rules: Sequence[Rule] = DEFAULT_RULES) -> None:
        if not rules:
            raise ValueError("an authorization policy needs at least one rule")
        self.rules = tuple(rules)

    def match(self, method: str, path: str) -> Rule:
        """Return the first rule matching the request.

        A request that no rule matches falls under the strictest reading of
        the fallback: any authenticated identity.
        """
        for rule in self.rules:
            if rule.matches(method, path):
                return rule
        return Rule(("/**",))

    def authorize(self, rule: Rule, principal: Principal | None) -> None:
        """Raise UnauthenticatedError or ForbiddenError unless ``principal`` satisfies ``rule``."""
        if rule.public:
            return
        if principal is None:
            raise UnauthenticatedError()
        if rule.roles and not principal.has_any_role(rule.roles):
            logger.warning(
                "access_denied",
                username=principal.username,
                required=sorted(rule.roles),
            )
            raise ForbiddenError()

    def check(self, method: str, path: str, principal: Principal | None) -> None:
        self.authorize(self.match(method, path), principal)


policy = AuthorizationPolicy()
