"""
Route Class
Represents a single route definition with fluent API (Laravel-style)
"""
from typing import Union, List, Dict, Optional, Callable, Any, Iterable, Mapping
import re

from larapipe.defaults import DEFAULT_FILTER_DELIMITER, DEFAULT_ROUTE_METHODS
from larapipe.support import Str

PLACEHOLDER_PATTERN = re.compile(r'\{(\w+)(\?)?}')


class Route:
    """
    Route class with fluent API for defining routes

    A Route is built once while the route table is assembled and is
    shared by every request it serves. Per-request parameter values never
    live on the Route; bind() returns a separate BoundRoute instead.

    Usage:
        route = Route(['GET'], '/users/{id}', handler)
        route.where('id', '[0-9]+').before('auth').after('log')

        # Laravel action-array form
        route = Route(['GET'], '/admin', {'uses': handler, 'before': 'auth|csrf'})
    """

    def __init__(
        self,
        methods: Optional[List[str]],
        uri: str,
        action: Union[Callable, Dict],
        before: Union[str, Iterable[str], None] = None,
        after: Union[str, Iterable[str], None] = None,
    ):
        """
        Initialize a Route instance

        Args:
            methods: HTTP methods (GET, POST, etc.)
            uri: Route URI pattern with {name} / {name?} placeholders
            action: Handler callable, or action dict with 'uses', 'before', 'after', 'as'
            before: Initial before filters (list or pipe-separated string)
            after: Initial after filters (list or pipe-separated string)
        """
        self.methods = [m.upper() for m in (methods or DEFAULT_ROUTE_METHODS)]
        self.uri = uri.strip('/')
        self._name: Optional[str] = None
        self._wheres: Dict[str, str] = {}
        self._defaults: Dict[str, Any] = {}
        self._before: List[str] = []
        self._after: List[str] = []

        if isinstance(action, dict):
            action = dict(action)
            handler = action.pop('uses', None)
            before = self._merge_specs(action.pop('before', None), before)
            after = self._merge_specs(action.pop('after', None), after)
            if action.get('as'):
                self._name = action['as']
        else:
            handler = action

        if not callable(handler):
            raise TypeError(f"Route action for [{self.uri}] must be callable, got {type(handler).__name__}")

        self.action = handler
        self._action_name = getattr(handler, '__qualname__', getattr(handler, '__name__', 'Closure'))

        # Compiled placeholder order, optional markers recorded separately
        self._parameter_names: List[str] = []
        self._optional_parameters: List[str] = []
        self._parse_parameters()

        if before:
            self.before(*self._as_names(before))
        if after:
            self.after(*self._as_names(after))

    def _parse_parameters(self):
        """Extract parameter names from URI pattern"""
        for match in PLACEHOLDER_PATTERN.finditer(self.uri):
            self._parameter_names.append(match.group(1))
            if match.group(2):
                self._optional_parameters.append(match.group(1))

    @staticmethod
    def _as_names(value: Union[str, Iterable[str], None]) -> List[str]:
        """Normalize a name, 'a|b' string or iterable of names to a list"""
        if value is None:
            return []
        if isinstance(value, str):
            return Str.explode(DEFAULT_FILTER_DELIMITER, value)
        return list(value)

    @classmethod
    def _flatten(cls, names: Iterable[Any]) -> List[str]:
        """Expand every name, 'a|b' string or list into one list of names"""
        flat: List[str] = []
        for value in names:
            flat.extend(cls._as_names(value))
        return flat

    @classmethod
    def _merge_specs(cls, first, second) -> List[str]:
        return cls._as_names(first) + cls._as_names(second)

    @staticmethod
    def _unique(current: List[str], names: Iterable[str]) -> List[str]:
        """Set-union preserving first-seen order"""
        merged = list(current)
        for name in names:
            if name not in merged:
                merged.append(name)
        return merged

    # =========================================================================
    # Filters
    # =========================================================================

    def before(self, *names: Union[str, Iterable[str]]) -> 'Route':
        """
        Add before filters to the route

        Names already present are ignored, new ones are appended in order.

        Args:
            *names: Filter names, 'a|b' strings or lists of names

        Returns:
            Self for method chaining
        """
        self._before = self._unique(self._before, self._flatten(names))
        return self

    def after(self, *names: Union[str, Iterable[str]]) -> 'Route':
        """
        Add after filters to the route

        Args:
            *names: Filter names, 'a|b' strings or lists of names

        Returns:
            Self for method chaining
        """
        self._after = self._unique(self._after, self._flatten(names))
        return self

    add_before_filters = before
    add_after_filters = after

    def set_before_filters(self, value: Optional[str]) -> 'Route':
        """
        Replace the before filters with a pipe-separated list

        An empty string clears the list; empty segments inside a
        non-empty string are kept as names.

        Example:
            route.set_before_filters('auth|throttle')  # ['auth', 'throttle']
        """
        self._before = self._unique([], self._as_names(value))
        return self

    def set_after_filters(self, value: Optional[str]) -> 'Route':
        """Replace the after filters with a pipe-separated list"""
        self._after = self._unique([], self._as_names(value))
        return self

    def get_before_filters(self) -> List[str]:
        """Get route before filters"""
        return list(self._before)

    def get_after_filters(self) -> List[str]:
        """Get route after filters"""
        return list(self._after)

    # =========================================================================
    # Constraints & defaults
    # =========================================================================

    def where(self, parameter: Union[str, Dict[str, str]], pattern: Optional[str] = None) -> 'Route':
        """
        Add parameter constraints

        Args:
            parameter: Parameter name or dict of constraints
            pattern: Regex pattern (if parameter is string)

        Returns:
            Self for method chaining

        Usage:
            route.where('id', '[0-9]+')
            route.where({'id': '[0-9]+', 'slug': '[a-z-]+'})
        """
        if isinstance(parameter, dict):
            self._wheres.update(parameter)
        elif pattern is not None:
            self._wheres[parameter] = pattern
        return self

    constrain = where

    def whereNumber(self, parameter: str) -> 'Route':
        """Constrain parameter to be numeric"""
        return self.where(parameter, r'[0-9]+')

    def whereAlpha(self, parameter: str) -> 'Route':
        """Constrain parameter to be alphabetic"""
        return self.where(parameter, r'[a-zA-Z]+')

    def whereAlphaNumeric(self, parameter: str) -> 'Route':
        """Constrain parameter to be alphanumeric"""
        return self.where(parameter, r'[a-zA-Z0-9]+')

    def whereUuid(self, parameter: str) -> 'Route':
        """Constrain parameter to be a UUID"""
        pattern = r'[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}'
        return self.where(parameter, pattern)

    def whereIn(self, parameter: str, values: List[str]) -> 'Route':
        """Constrain parameter to be one of given values"""
        escaped_values = [re.escape(v) for v in values]
        return self.where(parameter, f"({'|'.join(escaped_values)})")

    def defaults(self, key: Union[str, Dict], value: Any = None) -> 'Route':
        """
        Set default values for parameters

        Args:
            key: Parameter name or dict of defaults
            value: Default value (if key is string)

        Returns:
            Self for method chaining
        """
        if isinstance(key, dict):
            self._defaults.update(key)
        else:
            self._defaults[key] = value
        return self

    with_default = defaults

    def get_wheres(self) -> Dict[str, str]:
        """Get parameter constraints"""
        return dict(self._wheres)

    def get_defaults(self) -> Dict[str, Any]:
        """Get default parameter values"""
        return dict(self._defaults)

    # =========================================================================
    # Binding
    # =========================================================================

    def bind(self, parameters: Optional[Mapping[str, Any]] = None):
        """
        Bind matched placeholder values for one dispatch

        The route itself is left untouched, so the same Route can serve
        concurrent requests.

        Args:
            parameters: Placeholder values produced by the matcher

        Returns:
            BoundRoute

        Raises:
            BindingError: a placeholder has no value and no default
        """
        from larapipe.routing.bound_route import BoundRoute
        return BoundRoute.create(self, parameters or {})

    def resolved_arguments(self, parameters: Optional[Mapping[str, Any]] = None) -> tuple:
        """Handler arguments for the given parameters, in placeholder order"""
        return self.bind(parameters).resolved_arguments()

    # =========================================================================
    # Accessors
    # =========================================================================

    def name(self, name: str) -> 'Route':
        """Set the route name"""
        self._name = name
        return self

    def get_name(self) -> Optional[str]:
        """Get the route name"""
        return self._name

    def get_uri(self) -> str:
        """Get the route URI pattern"""
        return self.uri or '/'

    def get_methods(self) -> List[str]:
        """Get HTTP methods"""
        return self.methods

    def get_action(self) -> Callable:
        """Get route handler"""
        return self.action

    def get_action_name(self) -> str:
        """Get the action name (for display)"""
        return self._action_name

    def get_parameter_names(self) -> List[str]:
        """Get parameter names from URI, in compiled order"""
        return list(self._parameter_names)

    def get_optional_parameter_names(self) -> List[str]:
        """Get names of {name?} placeholders"""
        return list(self._optional_parameters)

    def has_parameters(self) -> bool:
        """Check if route has parameters"""
        return len(self._parameter_names) > 0

    def to_dict(self) -> Dict[str, Any]:
        """Describe the route definition as a plain dict"""
        route_dict = {
            'name': self._name,
            'uri': self.get_uri(),
            'methods': self.methods,
            'action': self._action_name,
            'parameters': self.get_parameter_names(),
            'before': self.get_before_filters(),
            'after': self.get_after_filters(),
        }
        if self._wheres:
            route_dict['constraints'] = self.get_wheres()
        if self._defaults:
            route_dict['defaults'] = self.get_defaults()
        return route_dict

    def __repr__(self) -> str:
        """String representation of route"""
        methods_str = '|'.join(self.methods)
        name_str = f" (name: {self._name})" if self._name else ""
        return f"<Route [{methods_str}] {self.get_uri()}{name_str}>"
