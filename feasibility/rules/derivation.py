"""Derived fields computed from submitted ratings.

Every ``Rating.<attribute>`` field is placed on a fixed seven-level scale.
The number of ratings at or above ``moderate`` is injected back into the
field map so rules can test it like any submitted field.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

from feasibility.lang.aliases import build_alias_index

if TYPE_CHECKING:
    from .schema import Ruleset

logger = logging.getLogger(__name__)

RATING_PREFIX = "rating."

# Weakest -> strongest
RATING_SCALE = ("excellent", "good", "fair", "moderate", "poor", "major", "critical")
THRESHOLD_LEVEL = "moderate"
MAX_LEVEL = RATING_SCALE[-1]

MODERATE_OR_WORSE_COUNT = "ModerateOrWorseCount"
ANY_CRITICAL_FLAG = "AnyCriticalFlag"
RATING_PARSE_WARNING = "RatingParseWarning"

# Ruleset aliases that may name the derived count, in order of preference
DERIVED_COUNT_ALIASES = (
    "moderateorworsecount",
    "count of attributes rated moderate or worse",
)


class Contributor(BaseModel):
    """A rating field that counted towards a derived value."""

    model_config = ConfigDict(frozen=True)

    field: str
    level: str


class Derivation(BaseModel):
    """A computed field or diagnostic, not supplied directly by the user."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    value: Any = None
    contributors: list[Contributor] | None = Field(default=None, alias="from")

    @property
    def is_warning(self) -> bool:
        return self.name == RATING_PARSE_WARNING


def rating_rank(level: Any) -> int | None:
    """Position of ``level`` on the rating scale, or None if unrecognized."""
    text = str(level if level is not None else "").strip().lower()
    try:
        return RATING_SCALE.index(text)
    except ValueError:
        return None


def derived_count_field(ruleset: "Ruleset | None") -> str:
    """Field name to store the moderate-or-worse tally under."""
    index = build_alias_index(ruleset)
    for alias in DERIVED_COUNT_ALIASES:
        if alias in index:
            return index[alias]
    return MODERATE_OR_WORSE_COUNT


def derive_fields(
    fields: Mapping[str, Any], ruleset: "Ruleset | None" = None
) -> tuple[dict[str, Any], list[Derivation]]:
    """Compute derived fields.

    Returns a new field map (the input is left untouched) together with
    the derivation records. With no rating fields present the map is
    returned unchanged and no derivations are produced.
    """
    derived = dict(fields)
    derivations: list[Derivation] = []
    contributors: list[Contributor] = []
    threshold = RATING_SCALE.index(THRESHOLD_LEVEL)
    rating_count = 0

    for key, value in fields.items():
        if not str(key).lower().startswith(RATING_PREFIX):
            continue
        rating_count += 1

        level = str(value).strip().lower()
        rank = rating_rank(level)
        if rank is None:
            logger.warning("Ignoring rating field %r with unrecognized level %r", key, level)
            derivations.append(
                Derivation(
                    name=RATING_PARSE_WARNING,
                    value=f"Ignored Rating field '{key}' with unrecognized level '{level}'",
                )
            )
            continue

        if rank >= threshold:
            contributors.append(Contributor(field=str(key), level=level))

    if rating_count == 0:
        return derived, derivations

    count = len(contributors)
    derived[derived_count_field(ruleset)] = count
    derivations.append(
        Derivation(name=MODERATE_OR_WORSE_COUNT, value=count, contributors=contributors)
    )
    derivations.append(
        Derivation(
            name=ANY_CRITICAL_FLAG,
            value=any(c.level == MAX_LEVEL for c in contributors),
        )
    )
    return derived, derivations
