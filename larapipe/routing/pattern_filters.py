"""
Pattern Filters
Global before filters attached to URI patterns (Laravel Route::when)
"""
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Iterable, Union

from larapipe.defaults import DEFAULT_FILTER_DELIMITER
from larapipe.support import Str


@dataclass(frozen=True)
class PatternFilter:
    """One when() registration"""
    pattern: str
    names: Tuple[str, ...]
    methods: Optional[Tuple[str, ...]] = None

    def applies_to(self, path: str, method: Optional[str]) -> bool:
        if self.methods is not None and (method or '').upper() not in self.methods:
            return False
        return Str.is_(self.pattern, path)


class PatternFilterResolver:
    """
    Resolves the global filters applicable to a request

    Usage:
        patterns = PatternFilterResolver()
        patterns.when('admin/*', 'auth')
        patterns.when('*', 'csrf', methods=['POST', 'PUT', 'DELETE'])

        patterns.filters_for(request)  # ['auth', 'csrf'] for POST /admin/users
    """

    def __init__(self):
        self._patterns: List[PatternFilter] = []

    def when(
        self,
        pattern: str,
        names: Union[str, Iterable[str]],
        methods: Optional[Iterable[str]] = None
    ) -> PatternFilter:
        """
        Register filters for every request whose path matches pattern

        Args:
            pattern: URI pattern, '*' matches anything (leading/trailing '/' ignored)
            names: Filter name, 'a|b' string, or list of names
            methods: Restrict to these HTTP methods (default: all)

        Returns:
            The registered PatternFilter
        """
        if isinstance(names, str):
            names = Str.explode(DEFAULT_FILTER_DELIMITER, names)

        entry = PatternFilter(
            pattern=pattern.strip('/') or '/',
            names=tuple(names),
            methods=tuple(m.upper() for m in methods) if methods is not None else None,
        )
        self._patterns.append(entry)
        return entry

    def filters_for(self, request: Any) -> List[str]:
        """
        Get the filter names applicable to a request, in registration order

        Args:
            request: Object exposing path and method

        Returns:
            De-duplicated list of filter names
        """
        path = (getattr(request, 'path', '') or '').strip('/') or '/'
        method = getattr(request, 'method', None)

        found: List[str] = []
        for entry in self._patterns:
            if entry.applies_to(path, method):
                for name in entry.names:
                    if name not in found:
                        found.append(name)
        return found

    def get_patterns(self) -> List[PatternFilter]:
        return list(self._patterns)
