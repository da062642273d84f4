"""Clause reference text for display alongside rule checks.

Read-only lookup keyed by the citation strings the rule registry emits,
including the compound citations shared by the general rules.
"""

from types import MappingProxyType

from planright.engine.types import ClauseInfo

NOT_FOUND_TITLE = "Clause Not Found"

_HERITAGE = "Development is not exempt if the land is a heritage item or in a conservation area."
_OVERLAYS = (
    "On flood prone or bushfire prone land additional construction requirements "
    "apply and may remove the exemption."
)
_SERVICES = "must not be located on an easement or over any sewer main or water main."
_SETBACKS = (
    "must be at least 0.9 metres from any side or rear boundary in a residential "
    "zone, or 5 metres in a rural zone."
)

CLAUSES = MappingProxyType({
    # Subdivision 9 - sheds
    "2.9(1)(a)": ClauseInfo(
        "Maximum Height - Sheds",
        "The height of a shed must not exceed 3 metres above ground level (existing).",
    ),
    "2.9(1)(b)": ClauseInfo(
        "Maximum Area - Sheds",
        "The floor area of a shed must not exceed 20 square metres in a residential "
        "zone or 50 square metres in a rural zone.",
    ),
    "2.9(1)(c)": ClauseInfo(
        "Front Setback - Sheds",
        "A shed must be located behind the building line of any road frontage.",
    ),
    "2.9(1)(d)": ClauseInfo("Side and Rear Setbacks - Sheds", f"A shed {_SETBACKS}"),
    "2.9(1)(e)": ClauseInfo("Easements and Services - Sheds", f"A shed {_SERVICES}"),
    "2.9(1)(f)": ClauseInfo("Detachment - Sheds", "A shed must be detached from any other building."),
    "2.9(1)(g)": ClauseInfo(
        "Shipping Containers - Sheds",
        "A shipping container is not a shed for the purposes of this exemption.",
    ),
    "2.9(1)(h)": ClauseInfo(
        "Number of Sheds",
        "No more than 2 sheds may be erected on a lot under this exemption.",
    ),
    "2.9(2)": ClauseInfo("Heritage and Conservation - Sheds", _HERITAGE),
    "2.9(3)": ClauseInfo("Flood and Bushfire - Sheds", _OVERLAYS),

    # Subdivision 6 - patios
    "2.6(1)(a)": ClauseInfo(
        "Maximum Height - Patios",
        "The height of a patio roof must not exceed 3 metres above ground level (existing).",
    ),
    "2.6(1)(b)": ClauseInfo(
        "Maximum Area - Patios",
        "The floor area of a patio must not exceed 25 square metres.",
    ),
    "2.6(1)(c)": ClauseInfo(
        "Front Setback - Patios",
        "A patio must be located behind the building line of any road frontage.",
    ),
    "2.6(1)(d)": ClauseInfo("Side and Rear Setbacks - Patios", f"A patio {_SETBACKS}"),
    "2.6(1)(e)": ClauseInfo("Easements and Services - Patios", f"A patio {_SERVICES}"),
    "2.6(1)(f)": ClauseInfo("Attachment - Patios", "A patio may be attached to a dwelling house."),
    "2.6(2)": ClauseInfo("Heritage and Conservation - Patios", _HERITAGE),
    "2.6(3)": ClauseInfo("Flood and Bushfire - Patios", _OVERLAYS),

    # Subdivision 10 - carports
    "2.10(1)(a)": ClauseInfo(
        "Maximum Height - Carports",
        "The height of a carport must not exceed 3 metres above ground level (existing).",
    ),
    "2.10(1)(b)": ClauseInfo(
        "Maximum Area - Carports",
        "The floor area of a carport must not exceed 20 square metres on a lot of 300 "
        "square metres or less, otherwise 25 square metres in a residential zone or "
        "50 square metres in a rural zone.",
    ),
    "2.10(1)(c)": ClauseInfo(
        "Front Setback - Carports",
        "A carport must be behind the building line, or at least 1 metre behind the "
        "front boundary where it is forward of it.",
    ),
    "2.10(1)(d)": ClauseInfo(
        "Side and Rear Setbacks - Carports",
        f"A carport {_SETBACKS} The roof must be at least 0.5 metres from any boundary.",
    ),
    "2.10(1)(e)": ClauseInfo("Easements and Services - Carports", f"A carport {_SERVICES}"),
    "2.10(1)(f)": ClauseInfo("Attachment - Carports", "A carport may be attached to a dwelling house."),
    "2.10(2)": ClauseInfo("Heritage and Conservation - Carports", _HERITAGE),
    "2.10(3)": ClauseInfo("Flood and Bushfire - Carports", _OVERLAYS),

    # Shared by patios, sheds and carports
    "2.6(1)/2.9(1)/2.10(1)": ClauseInfo(
        "Development Standards",
        "The general development standards for patios, sheds and carports.",
    ),
    "2.6(1)(b)/2.9(1)(b)/2.10(1)(b)": ClauseInfo(
        "Floor Area",
        "The declared floor area must agree with the structure's length and width.",
    ),
    "2.6(1)(e)/2.9(1)(e)/2.10(1)(e)": ClauseInfo(
        "Easements and Services",
        "The structure must not be located on an easement and must keep at least 1 metre "
        "clear of a registered easement on the lot.",
    ),
    "2.6(2)/2.9(2)/2.10(2)": ClauseInfo(
        "Heritage and Conservation",
        f"{_HERITAGE} In a conservation area the structure must be in the rear yard.",
    ),
    "2.6(3)/2.9(3)/2.10(3)": ClauseInfo(
        "Flood and Bushfire",
        "On bushfire prone land the structure must be of non-combustible construction "
        "where it is close to a dwelling.",
    ),
})


def lookup_clause(citation: str) -> ClauseInfo:
    """Return the title and summary for ``citation``.

    Unknown citations get a not-found record rather than an error.
    """
    key = (citation or "").strip()
    info = CLAUSES.get(key)
    if info is not None:
        return info
    return ClauseInfo(
        title=NOT_FOUND_TITLE,
        summary=f"Clause reference {citation} not found in database.",
        found=False,
    )
