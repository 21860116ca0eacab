"""
Developer Registry — Sort & Filter Engine
===========================================

What:  In-memory ordering and filtering of record lists for the table views.
How:   Comparators are built from an explicit key-extraction function, so the
       same code sorts ORM rows, response models or plain dicts.
Who:   LevelService.list_levels and DeveloperService.list_developers; any
       client wanting table semantics can reuse it directly.

Ordering rules:
    - None on either side compares equal (no ordering decision)
    - str vs str: lexicographic; numbers and dates: natural order
    - values that cannot be compared with each other compare equal
    - ties keep their input order in both directions (stable sort)

Sorting a developer list by `nivel_id` sorts by `nivel_nome` instead, so
"sort by level" orders by the level's name rather than its internal id.

SortState is not used by the services. It is the header-click toggle for
table clients that keep their own sort state and send the resulting
`order_by` / `order` pair with each list request.
"""

from dataclasses import dataclass
from functools import cmp_to_key
from typing import (
    Any,
    Callable,
    Iterable,
    List,
    Literal,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
)

from devregistry.exceptions import ValidationError

T = TypeVar("T")

SortOrder = Literal["asc", "desc"]
KeyFunc = Callable[[Any], Any]
Comparator = Callable[[Any, Any], int]

# Foreign-key columns whose sort uses the referenced display name
DEVELOPER_SORT_SUBSTITUTIONS: Mapping[str, str] = {"nivel_id": "nivel_nome"}


def field_getter(name: str) -> KeyFunc:
    """Key function reading `name` from a mapping or an attribute."""

    def get(record: Any) -> Any:
        if isinstance(record, Mapping):
            return record.get(name)
        return getattr(record, name, None)

    return get


def compare_values(a: Any, b: Any) -> int:
    """Three-way compare: -1 if a < b, 1 if a > b, else 0."""
    if a is None or b is None:
        return 0
    try:
        if a < b:
            return -1
        if a > b:
            return 1
    except TypeError:
        return 0
    return 0


def descending_comparator(key: KeyFunc) -> Comparator:
    """Comparator placing the record with the larger key first."""

    def compare(a: Any, b: Any) -> int:
        return compare_values(key(b), key(a))

    return compare


def get_comparator(order: SortOrder, key: KeyFunc) -> Comparator:
    if order not in ("asc", "desc"):
        raise ValidationError(f"Invalid sort order '{order}'. Must be 'asc' or 'desc'", field="order")
    desc = descending_comparator(key)
    if order == "desc":
        return desc
    return lambda a, b: -desc(a, b)


def stable_sort(records: Iterable[T], comparator: Comparator) -> List[T]:
    """
    Sort with `comparator`, breaking ties by original position.

    Decorate each record with its index, sort on (comparator, index),
    then strip the index again.
    """
    decorated: List[Tuple[T, int]] = [(record, index) for index, record in enumerate(records)]

    def compare(a: Tuple[T, int], b: Tuple[T, int]) -> int:
        order = comparator(a[0], b[0])
        if order != 0:
            return order
        return a[1] - b[1]

    decorated.sort(key=cmp_to_key(compare))
    return [record for record, _ in decorated]


def filter_records(records: Iterable[T], text: Optional[str], key: KeyFunc) -> List[T]:
    """Keep records whose key contains `text`, ignoring case. Blank text keeps all."""
    if not text:
        return list(records)
    needle = text.casefold()
    matches = []
    for record in records:
        value = key(record)
        if value is not None and needle in str(value).casefold():
            matches.append(record)
    return matches


def resolve_sort_key(
    column: str,
    substitutions: Optional[Mapping[str, str]] = None,
) -> str:
    """Column actually used for ordering when `column` is requested."""
    if substitutions and column in substitutions:
        return substitutions[column]
    return column


@dataclass(frozen=True)
class SortState:
    """
    Active sort column and direction of a table view.

    request_sort() follows the header-click convention: clicking the
    column already sorted ascending flips it to descending; clicking any
    other column (or the same column while descending) sorts ascending.
    """
    order_by: str
    order: SortOrder = "asc"

    def request_sort(self, column: str) -> "SortState":
        is_asc = self.order_by == column and self.order == "asc"
        return SortState(order_by=column, order="desc" if is_asc else "asc")


def apply_query(
    records: Sequence[T],
    order_by: Optional[str] = None,
    order: SortOrder = "asc",
    *,
    filter_text: Optional[str] = None,
    filter_field: Optional[str] = None,
    sortable: Optional[Iterable[str]] = None,
    substitutions: Optional[Mapping[str, str]] = None,
) -> List[T]:
    """
    Filter, then sort, a list of records.

    Args:
        records: rows to transform (left untouched)
        order_by: requested sort column; None keeps the input order
        order: "asc" or "desc"
        filter_text: substring to look for, case-insensitive
        filter_field: field the substring is matched against
        sortable: allowed sort columns; None allows anything
        substitutions: requested column → column really sorted on

    Raises:
        ValidationError: order_by not in `sortable`, or an invalid order
    """
    result = list(records)
    if filter_field is not None:
        result = filter_records(result, filter_text, field_getter(filter_field))

    if order_by is None:
        return result

    if sortable is not None:
        allowed = set(sortable)
        if order_by not in allowed:
            raise ValidationError(
                f"Cannot sort by '{order_by}'",
                field="order_by",
                context={"allowed": sorted(allowed)},
            )

    key = field_getter(resolve_sort_key(order_by, substitutions))
    return stable_sort(result, get_comparator(order, key))
