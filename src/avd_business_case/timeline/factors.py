"""Complexity factor catalog for AVD migration projects."""

from avd_business_case.errors import InvalidFactorValueError, UnknownFactorError
from avd_business_case.timeline.models import ComplexityFactor, FactorDefinition

VALID_VALUES = (1, 2, 3)

# Weight table per factor, indexed by (value - 1). Modernization at 3 is
# deliberately dominant.
FACTOR_CATALOG: tuple[FactorDefinition, ...] = (
    FactorDefinition(
        "users", "User Scale", "Project Scope", (2, 2, 3),
        "User scale impacts testing scope, migration waves, and infrastructure sizing",
    ),
    FactorDefinition(
        "use_cases", "Use Cases", "Project Scope", (4, 4, 4),
        "Each use case requires different host pools, images, and configurations",
    ),
    FactorDefinition(
        "on_prem_to_cloud", "On-Prem to Cloud Migration", "Tech Stack", (1, 2, 3),
        "Net-new cloud migration adds infrastructure and migration complexity",
    ),
    FactorDefinition(
        "citrix_cloud", "Citrix/VMware Cloud", "Tech Stack", (1, 2, 3),
        "Citrix/VMware environments require migration planning and parallel testing",
    ),
    FactorDefinition(
        "citrix_hybrid", "Citrix/VMware Hybrid", "Tech Stack", (1, 2, 3),
        "Citrix/VMware environments require migration planning and parallel testing",
    ),
    FactorDefinition(
        "citrix_on_prem", "Citrix/VMware On-Prem", "Tech Stack", (1, 2, 3),
        "Citrix/VMware environments require migration planning and parallel testing",
    ),
    FactorDefinition(
        "cloud", "Cloud Platform", "Tech Stack", (1, 2, 3),
        "Azure is native platform for AVD. GCP/AWS requires additional migration effort",
        default_value=2,
    ),
    FactorDefinition(
        "landing_zone", "Landing Zone", "Tech Stack", (1, 2, 3),
        "Existing Azure landing zone reduces setup time significantly",
        default_value=2,
    ),
    FactorDefinition(
        "os", "Operating Systems", "Tech Stack", (1, 2, 3),
        "Legacy operating systems require upgrade/compatibility testing",
    ),
    FactorDefinition(
        "change_control", "Change Control", "Governance", (1, 2, 3),
        "Change control process directly impacts deployment velocity across all phases",
    ),
    FactorDefinition(
        "security", "Security Review", "Security", (1, 2, 3),
        "Security review processes gate deployments and add approval cycles",
    ),
    FactorDefinition(
        "apps", "Application Count", "Applications", (2, 2, 3),
        "More applications mean more testing, packaging, and validation effort",
    ),
    FactorDefinition(
        "modernization", "App Modernization", "Applications", (2, 2, 10),
        "Application modernization has 10x weight when required",
    ),
    FactorDefinition(
        "backend", "Backend Connections", "Applications", (0, 1, 3),
        "Backend system connections affect network design and latency requirements",
    ),
    FactorDefinition(
        "peripherals", "Peripheral Requirements", "Applications", (0, 2, 3),
        "Peripheral device requirements need special drivers and testing",
    ),
    FactorDefinition(
        "cloud_testing", "Cloud Testing Status", "Applications", (1, 2, 3),
        "Prior cloud testing reduces unknowns and accelerates deployment",
    ),
    FactorDefinition(
        "last_mod", "Last Modernization", "Applications", (1, 2, 3),
        "Recent modernization means less technical debt and faster migration",
    ),
)

_CATALOG_BY_ID = {definition.id: definition for definition in FACTOR_CATALOG}


def get_factor_definition(factor_id: str) -> FactorDefinition:
    """Look up a factor definition by id."""
    try:
        return _CATALOG_BY_ID[factor_id]
    except KeyError:
        raise UnknownFactorError(factor_id) from None


def default_factor_values() -> dict[str, int]:
    """Scale values used when a factor is not supplied."""
    return {d.id: d.default_value for d in FACTOR_CATALOG}


def parse_factor_value(factor_id: str, value: object) -> int:
    """
    Coerce a raw scale value (int or numeric string) and check its range.

    Raises:
        InvalidFactorValueError: If the value is not 1, 2 or 3
    """
    if isinstance(value, bool):
        raise InvalidFactorValueError(factor_id, value)
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise InvalidFactorValueError(factor_id, value) from None
    if not isinstance(value, int) or value not in VALID_VALUES:
        raise InvalidFactorValueError(factor_id, value)
    return value


def build_factors(values: dict[str, object] | None = None) -> list[ComplexityFactor]:
    """
    Build the full factor list in catalog order.

    Args:
        values: Selected scale values by factor id; missing ids use defaults

    Returns:
        One ComplexityFactor per catalog entry

    Raises:
        UnknownFactorError: If ``values`` names a factor not in the catalog
        InvalidFactorValueError: If a value is outside 1-3
    """
    values = values or {}
    for factor_id in values:
        get_factor_definition(factor_id)

    factors = []
    for definition in FACTOR_CATALOG:
        raw = values.get(definition.id, definition.default_value)
        factors.append(
            ComplexityFactor(
                id=definition.id,
                name=definition.name,
                category=definition.category,
                value=parse_factor_value(definition.id, raw),
                weights=definition.weights,
            )
        )
    return factors
