"""
alicloud_admission/validation/capabilities.py

Capability sets select the right machine image id for a combination of
dimensions such as architecture. Sets are always compared after default
filling: a dimension that a set leaves out accepts every value its
definition lists.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, List, Mapping, Sequence

from alicloud_admission.models.cloudprofile import (
    Capabilities,
    CapabilityDefinition,
)
from alicloud_admission.models.field import ErrorList, FieldPath, not_supported


def apply_defaults(
    capabilities: Mapping[str, Sequence[str]],
    definitions: Sequence[CapabilityDefinition],
) -> Capabilities:
    """
    Return a capability set with every defined dimension filled in.

    Dimensions keep the definitions' order; an absent or empty dimension
    takes all values of its definition. Dimensions not covered by a
    definition are kept as given.
    """
    defaulted: Capabilities = {
        definition.name: list(capabilities.get(definition.name) or definition.values)
        for definition in definitions
    }
    defaulted.update(
        {name: list(values) for name, values in capabilities.items() if name not in defaulted}
    )
    return defaulted


def _as_sets(capabilities: Mapping[str, Sequence[str]]) -> Dict[str, FrozenSet[str]]:
    return {name: frozenset(values) for name, values in capabilities.items()}


def capabilities_equal(
    a: Mapping[str, Sequence[str]], b: Mapping[str, Sequence[str]]
) -> bool:
    """Structural equality: same dimensions, same value sets, order ignored."""
    return _as_sets(a) == _as_sets(b)


def defaulted_flavors(
    flavors: Sequence[Mapping[str, Sequence[str]]],
    definitions: Sequence[CapabilityDefinition],
) -> List[Capabilities]:
    """
    Default-fill a version's flavors.

    A version without flavors stands for a single, fully defaulted flavor.
    """
    if not flavors:
        return [apply_defaults({}, definitions)]
    return [apply_defaults(flavor, definitions) for flavor in flavors]


def find_matching_flavor(
    required: Mapping[str, Sequence[str]],
    available: Sequence[Mapping[str, Sequence[str]]],
) -> int:
    """Index of the first available set equal to `required`, or -1."""
    return next(
        (i for i, candidate in enumerate(available) if capabilities_equal(required, candidate)),
        -1,
    )


def format_capabilities(capabilities: Mapping[str, Sequence[str]]) -> str:
    """Stable rendering for messages, e.g. {architecture:[amd64]}."""
    body = ",".join(
        f"{name}:[{','.join(sorted(values))}]" for name, values in sorted(capabilities.items())
    )
    return "{" + body + "}"


def validate_capabilities(
    capabilities: Mapping[str, Sequence[str]],
    definitions: Sequence[CapabilityDefinition],
    fld_path: FieldPath,
) -> ErrorList:
    """Every dimension must be defined and every value must be allowed by it."""
    allowed = {definition.name: definition.values for definition in definitions}
    all_errs: ErrorList = [
        not_supported(fld_path.child(name), name, sorted(allowed))
        for name in capabilities
        if name not in allowed
    ]
    all_errs += [
        not_supported(fld_path.child(name).index(i), value, allowed[name])
        for name, values in capabilities.items()
        if name in allowed
        for i, value in enumerate(values)
        if value not in allowed[name]
    ]
    return all_errs


__all__ = [
    "apply_defaults",
    "capabilities_equal",
    "defaulted_flavors",
    "find_matching_flavor",
    "format_capabilities",
    "validate_capabilities",
]
