"""
Bound Route
Immutable pairing of a Route with the placeholder values matched for one request
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional, List, Tuple, TYPE_CHECKING

from larapipe.exceptions import BindingError

if TYPE_CHECKING:
    from larapipe.routing.route import Route


@dataclass(frozen=True)
class BoundRoute:
    """
    A route bound to one dispatch

    This is what filters receive as their "current route": they can read
    the route definition and the matched parameters, but cannot change
    either for other requests.

    Usage:
        bound = route.bind({'id': '42'})
        bound.get_parameter('id')     # '42'
        bound.resolved_arguments()    # ('42',)
    """

    route: 'Route'
    parameters: Mapping[str, Any]
    arguments: Tuple[Any, ...]

    @classmethod
    def create(cls, route: 'Route', parameters: Mapping[str, Any]) -> 'BoundRoute':
        """
        Resolve handler arguments and freeze the binding

        Raises:
            BindingError: placeholders without a bound value or default
        """
        defaults = route.get_defaults()
        arguments = []
        missing = []

        for name in route.get_parameter_names():
            if name in parameters:
                arguments.append(parameters[name])
            elif name in defaults:
                arguments.append(defaults[name])
            else:
                missing.append(name)

        if missing:
            raise BindingError(route, missing)

        return cls(
            route=route,
            parameters=MappingProxyType(dict(parameters)),
            arguments=tuple(arguments),
        )

    def resolved_arguments(self) -> Tuple[Any, ...]:
        """Handler arguments in compiled placeholder order"""
        return self.arguments

    def get_parameter(self, name: str, default: Any = None) -> Any:
        """
        Get a matched parameter, falling back to the route default, then `default`
        """
        if name in self.parameters:
            return self.parameters[name]
        return self.route.get_defaults().get(name, default)

    def get_name(self) -> Optional[str]:
        return self.route.get_name()

    def get_uri(self) -> str:
        return self.route.get_uri()

    def get_action(self):
        return self.route.get_action()

    def get_before_filters(self) -> List[str]:
        return self.route.get_before_filters()

    def get_after_filters(self) -> List[str]:
        return self.route.get_after_filters()

    def __repr__(self) -> str:
        return f"<BoundRoute {self.route.get_uri()} {dict(self.parameters)!r}>"
