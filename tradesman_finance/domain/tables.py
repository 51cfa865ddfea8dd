"""Immutable enum-keyed lookup tables"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Type, TypeVar

from tradesman_finance.domain.exceptions import IncompleteTableError

K = TypeVar("K", bound=Enum)
V = TypeVar("V")


def band_table(enum_cls: Type[K], entries: Mapping[K, V]) -> Mapping[K, V]:
    """
    Freeze a band table. Every enum member must have an entry; tables are
    built at import time so a gap surfaces when the module loads.
    """
    missing = [member.value for member in enum_cls if member not in entries]
    extra = [key for key in entries if not isinstance(key, enum_cls)]
    if missing or extra:
        raise IncompleteTableError(f"{enum_cls.__name__} table mismatch: missing={missing} unexpected={extra}")
    return MappingProxyType(dict(entries))
