"""Precedence policy for auto-resolving dependencies within a module.

A policy maps a permission type to the types it conventionally requires
(e.g. 'edit' requires 'view'). It is configuration, not code: the default
comes from DEFAULT_PRECEDENCE_POLICY and can be replaced through
settings.dependency_precedence_policy or per request.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from permgraph.application.dtos.permission import PermissionResult
from permgraph.domain.constants import DEFAULT_PRECEDENCE_POLICY
from permgraph.domain.exceptions import ValidationException


@dataclass(frozen=True)
class PrecedencePolicy:
    """Type -> required types. Types without a rule require nothing."""

    rules: Mapping[str, tuple[str, ...]]

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Iterable[str]]) -> PrecedencePolicy:
        """Build a policy, dropping duplicate entries. Raises ValidationException on a self rule."""
        rules: dict[str, tuple[str, ...]] = {}
        for perm_type, required in mapping.items():
            ordered = tuple(dict.fromkeys(required))
            if perm_type in ordered:
                raise ValidationException(
                    f"Precedence rule for '{perm_type}' cannot require itself",
                    field="policy",
                )
            rules[perm_type] = ordered
        return cls(rules=rules)

    @classmethod
    def default(cls) -> PrecedencePolicy:
        return cls.from_mapping(DEFAULT_PRECEDENCE_POLICY)

    def required_types(self, perm_type: str) -> tuple[str, ...]:
        return self.rules.get(perm_type, ())

    def candidates_for(
        self,
        permission: PermissionResult,
        permissions: Iterable[PermissionResult],
        module: str | None = None,
    ) -> list[PermissionResult]:
        """Return permissions the given one should depend on, ordered by id.

        Candidates share the module (permission.module unless a module hint
        is given) and have one of the required types. The permission itself
        is never a candidate.
        """
        required = set(self.required_types(permission.type))
        if not required:
            return []
        scope = module or permission.module
        return sorted(
            (
                p
                for p in permissions
                if p.id != permission.id and p.module == scope and p.type in required
            ),
            key=lambda p: p.id,
        )
