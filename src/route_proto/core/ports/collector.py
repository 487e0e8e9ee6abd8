from collections.abc import Sequence
from typing import Protocol

from route_proto.models import RouteDescriptor


class RouteCollector(Protocol):
    def routes(self) -> Sequence[RouteDescriptor]: ...

    def title(self) -> str | None: ...
