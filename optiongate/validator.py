"""Surface validation checks.

ERROR issues mean the surface cannot be evaluated as written:
- DUPLICATE_KEY: two options share a key
- MALFORMED_DEPENDENCY: a required-values payload does not parse

WARNING issues do not block evaluation:
- INVALID_PRIORITY: priority missing, non-numeric or < 1 (orders as 0)
- UNKNOWN_CONTROLLER: no control resolves the controller key
- SELF_DEPENDENCY / DEPENDENCY_CYCLE: options gate each other
- SCALAR_REQUIREMENT: a scalar payload only matches in the embedded context
- UNKNOWN_RULE_CONTROL: an aggregate rule names a control not on the surface
"""

from .core.errors import MalformedDependencyError
from .core.models import Option, SurfaceSpec, is_valid_priority
from .core.models.validation import ValidationResult
from .visibility.evaluator import Context, resolve_controller
from .visibility.surface import Surface


# =============================================================================
# Main Entry Point
# =============================================================================


def validate_surface(spec: SurfaceSpec) -> ValidationResult:
    """Run all checks on a surface spec."""
    result = ValidationResult()
    surface = Surface(controls=spec.controls, elements=spec.elements)

    _check_duplicate_keys(spec.options, result)

    for option in spec.options:
        _check_priority(option, result)
        if option.dependency is not None:
            _check_dependency(option, surface, result)

    _check_cycles(spec.options, result)
    _check_rules(spec, surface, result)

    return result


# =============================================================================
# Option checks
# =============================================================================


def _check_duplicate_keys(options: list[Option], result: ValidationResult) -> None:
    seen: set[str] = set()
    reported: set[str] = set()
    for option in options:
        if option.key in seen and option.key not in reported:
            reported.add(option.key)
            result.add_error(
                category="DUPLICATE_KEY",
                location=option.key,
                message=f"option key '{option.key}' is defined more than once",
                suggestion="Give each option a unique key",
            )
        seen.add(option.key)


def _check_priority(option: Option, result: ValidationResult) -> None:
    if is_valid_priority(option.raw_priority):
        return
    result.add_warning(
        category="INVALID_PRIORITY",
        location=option.key,
        message=f"priority {option.raw_priority!r} is not an integer greater than 0; ordering treats it as {option.priority}",
        suggestion="Set an integer priority >= 1",
        value=option.raw_priority,
    )


def _check_dependency(
    option: Option, surface: Surface, result: ValidationResult
) -> None:
    dependency = option.dependency
    try:
        required = dependency.required()
    except MalformedDependencyError as e:
        result.add_error(
            category="MALFORMED_DEPENDENCY",
            location=option.key,
            message=str(e),
            suggestion="data-dep_val must be a JSON array of strings/booleans",
            value=dependency.values,
        )
        return

    if required.scalar:
        result.add_warning(
            category="SCALAR_REQUIREMENT",
            location=option.key,
            message="required value is a scalar; it only matches in the embedded context",
            suggestion=f"Use a list: [{required.to_json()!r}]",
            value=required.to_json(),
        )

    found = any(
        resolve_controller(
            dependency.controller_key, context, surface, group=option.container
        )
        is not None
        for context in Context
    )
    if not found:
        result.add_warning(
            category="UNKNOWN_CONTROLLER",
            location=option.key,
            message=f"controller '{dependency.controller_key}' is not on this surface; the option will stay hidden",
            value=dependency.controller_key,
        )


def _check_cycles(options: list[Option], result: ValidationResult) -> None:
    edges = {
        o.key: o.dependency.controller_key
        for o in options
        if o.dependency is not None
    }
    reported: set[frozenset[str]] = set()

    for start, controller in edges.items():
        if controller == start:
            result.add_warning(
                category="SELF_DEPENDENCY",
                location=start,
                message="option depends on its own value",
            )
            continue

        path = [start]
        current = controller
        while current in edges and current not in path:
            path.append(current)
            current = edges[current]
        if current == start and len(path) > 1:
            members = frozenset(path)
            if members in reported:
                continue
            reported.add(members)
            result.add_warning(
                category="DEPENDENCY_CYCLE",
                location=start,
                message="dependency cycle: " + " -> ".join(path + [start]),
                suggestion="Break the cycle; visibility will depend on evaluation order",
            )


# =============================================================================
# Rule checks
# =============================================================================


def _check_rules(spec: SurfaceSpec, surface: Surface, result: ValidationResult) -> None:
    for rule in spec.rules:
        for name in rule.control_names():
            if surface.find_by_name(name) is None:
                result.add_warning(
                    category="UNKNOWN_RULE_CONTROL",
                    location=rule.target,
                    message=f"rule refers to control '{name}' which is not on this surface",
                    value=name,
                )
