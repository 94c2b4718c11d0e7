"""Classification of batch sub-responses into outcome categories.

Default status mapping:

    =========  ==============
    status     category
    =========  ==============
    201        CREATED
    304        UNCHANGED
    404        SKIPPED
    409, 412   CONFLICT
    other 1xx  PUBLISHED
    other 2xx  PUBLISHED
    other 3xx  UNCHANGED
    other 4xx  CLIENT_ERROR
    other 5xx  SERVER_ERROR
    anything   SERVER_ERROR
    =========  ==============
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from ...core.enums import OutcomeCategory
from ...core.exceptions import PreconditionViolationError
from ...models import RequestDescriptor, ResponseEnvelope

ResultPair = tuple[RequestDescriptor, ResponseEnvelope]

_DEFAULT_EXACT: dict[int, OutcomeCategory] = {
    201: OutcomeCategory.CREATED,
    304: OutcomeCategory.UNCHANGED,
    404: OutcomeCategory.SKIPPED,
    409: OutcomeCategory.CONFLICT,
    412: OutcomeCategory.CONFLICT,
}

# Keyed by status class (status // 100)
_DEFAULT_RANGES: dict[int, OutcomeCategory] = {
    1: OutcomeCategory.PUBLISHED,
    2: OutcomeCategory.PUBLISHED,
    3: OutcomeCategory.UNCHANGED,
    4: OutcomeCategory.CLIENT_ERROR,
    5: OutcomeCategory.SERVER_ERROR,
}


@dataclass(frozen=True)
class StatusMapping:
    """Total mapping from status code to outcome category.

    Lookup order is ``exact`` codes, then ``ranges`` by status class, then
    ``fallback``, so every integer maps to exactly one category.

    Attributes:
        exact: Per-code overrides
        ranges: Category per status class (1 for 1xx, 2 for 2xx, ...)
        fallback: Category for anything else
    """

    exact: Mapping[int, OutcomeCategory] = field(default_factory=lambda: dict(_DEFAULT_EXACT))
    ranges: Mapping[int, OutcomeCategory] = field(default_factory=lambda: dict(_DEFAULT_RANGES))
    fallback: OutcomeCategory = OutcomeCategory.SERVER_ERROR

    def __post_init__(self) -> None:
        """Validate that every target is a known category."""
        targets = [*self.exact.values(), *self.ranges.values(), self.fallback]
        for target in targets:
            if not isinstance(target, OutcomeCategory):
                raise ValueError(f"StatusMapping target must be an OutcomeCategory: {target!r}")

    def classify(self, status: int) -> OutcomeCategory:
        if status in self.exact:
            return self.exact[status]
        return self.ranges.get(status // 100, self.fallback)


DEFAULT_STATUS_MAPPING = StatusMapping()


@dataclass
class AggregatedResult:
    """Sub-request/sub-response pairs grouped by outcome category.

    Every category is present, possibly empty. Within a category pairs keep
    their original relative order.
    """

    categories: dict[OutcomeCategory, list[ResultPair]]

    def __getitem__(self, category: OutcomeCategory | str) -> list[ResultPair]:
        return self.categories[OutcomeCategory(category)]

    @property
    def total(self) -> int:
        return sum(len(pairs) for pairs in self.categories.values())

    @property
    def has_errors(self) -> bool:
        return any(
            self.categories[category]
            for category in (
                OutcomeCategory.CONFLICT,
                OutcomeCategory.CLIENT_ERROR,
                OutcomeCategory.SERVER_ERROR,
            )
        )

    def counts(self) -> dict[OutcomeCategory, int]:
        return {category: len(pairs) for category, pairs in self.categories.items()}


def aggregate(
    responses: Sequence[ResponseEnvelope],
    requests: Sequence[RequestDescriptor],
    mapping: StatusMapping | None = None,
) -> AggregatedResult:
    """Pair responses with their requests by index and categorize them.

    Args:
        responses: Sub-responses, in submission order
        requests: Sub-requests that produced them, same order and length
        mapping: Status mapping (default: ``DEFAULT_STATUS_MAPPING``)

    Raises:
        PreconditionViolationError: If the two sequences differ in length
    """
    if len(responses) != len(requests):
        raise PreconditionViolationError(
            f"Responses length ({len(responses)}) should match requests one ({len(requests)})"
        )

    mapping = mapping or DEFAULT_STATUS_MAPPING
    categories: dict[OutcomeCategory, list[ResultPair]] = {
        category: [] for category in OutcomeCategory
    }
    for request, response in zip(requests, responses, strict=True):
        categories[mapping.classify(response.status)].append((request, response))
    return AggregatedResult(categories=categories)
