from collections.abc import Sequence
from typing import Any

from src.domain.entities import Page, PageRow, User
from src.rules.models import Rules


def _owner_id(resource: Any) -> int | None:
    if isinstance(resource, Page):
        return resource.author.user.id
    if isinstance(resource, PageRow):
        return resource.user_id
    return getattr(resource, "user_id", None)


class PolicyEngine:
    def __init__(self, rules: Rules):
        self.rules = rules

    def check_permission(
        self,
        user: User | None,
        action: str,
        resource: Any = None,
    ) -> bool:
        """
        Check if the user is allowed to perform the action on the resource.

        Order of precedence:
        1. Public Permissions (Global)
        2. Role-Based Access Control (RBAC)
        3. Ownership rules on the resource (ABAC)
        """
        # 1. Public Permissions
        if action in self.rules.rbac.public_permissions:
            return True

        # Anything else needs an authenticated user
        if not user:
            return False

        # 2. RBAC
        for role in user.roles:
            allowed_actions = self.rules.rbac.roles.get(role, [])
            if "*" in allowed_actions or action in allowed_actions:
                return True

            # Scoped wildcards ("pages:*" matches "pages:edit")
            if ":" in action:
                scope = action.split(":")[0]
                if f"{scope}:*" in allowed_actions:
                    return True

        # 3. ABAC
        if resource is not None:
            for rule in self.rules.abac.page_rules:
                if action in rule.allow and self._evaluate_rule(
                    rule.if_condition, user, user.roles, resource
                ):
                    return True

        return False

    def _evaluate_rule(
        self,
        condition: dict[str, Any],
        user: User,
        user_roles: Sequence[str],
        resource: Any,
    ) -> bool:
        """
        Evaluate condition predicates from rules.yaml.
        Supported predicates:
        - role_in: list[str]
        - owns_page: bool
        """
        for predicate, args in condition.items():
            if predicate == "role_in":
                if not set(user_roles).intersection(set(args)):
                    return False

            elif predicate == "owns_page":
                if args and _owner_id(resource) != user.id:
                    return False

            else:
                # Unknown predicates never grant access
                return False

        return True

    def can_create_page(self, user: User | None) -> bool:
        return self.check_permission(user, "pages:create")

    def can_assign_author(self, user: User | None) -> bool:
        return self.check_permission(user, "pages:assign_author")

    def can_edit_page(self, user: User | None, page: Page | PageRow) -> bool:
        return self.check_permission(user, "pages:edit", resource=page)

    def can_delete_page(self, user: User | None, page: Page | PageRow) -> bool:
        return self.check_permission(user, "pages:delete", resource=page)

    def can_edit_website_name(self, user: User | None) -> bool:
        return self.check_permission(user, "website:edit")
