# newsdesk/services/auth_service.py
import hashlib
import hmac
from typing import Optional

from newsdesk.data_manager.models import Role, RoleRule
from newsdesk.utils.app_config import RolesBlock


def hash_secret(secret: str) -> str:
    """SHA-256 of the trimmed PIN, lowercase hex."""
    return hashlib.sha256(secret.strip().encode("utf-8")).hexdigest()


def build_role_rules(roles: RolesBlock, user_quota: int) -> list[RoleRule]:
    # order matters: admin is checked first
    return [
        RoleRule(Role.ADMIN, roles.admin_hash, roles.admin_name, None),
        RoleRule(Role.USER,  roles.user_hash,  roles.user_name,  user_quota),
    ]


class RoleAuthenticator:
    """Maps a publish PIN to a role by comparing digests against the rule table."""

    def __init__(self, rules: list[RoleRule], logger):
        self.rules = rules
        self.logger = logger

    def authenticate(self, secret: str) -> Role:
        digest = hash_secret(secret or "")
        for rule in self.rules:
            if rule.digest and hmac.compare_digest(digest, rule.digest):
                self.logger.debug("PIN accepted for role %s", rule.role.value)
                return rule.role
        self.logger.info("PIN rejected: no role matched")
        return Role.UNAUTHENTICATED

    def rule_for(self, role: Role) -> Optional[RoleRule]:
        return next((r for r in self.rules if r.role == role), None)
