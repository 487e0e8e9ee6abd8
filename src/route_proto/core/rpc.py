from route_proto.core.types import EMPTY_TYPE, TEXT_PLACEHOLDER_TYPE
from route_proto.models import RouteDescriptor

RPC_TIMEOUT = 5000
DEFAULT_VISIBILITY = "internal"
BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


def request_type_name(rpc_name: str, has_params: bool) -> str:
    return f"{rpc_name}Request" if has_params else EMPTY_TYPE


def response_type_name(rpc_name: str, has_schema: bool) -> str:
    # a route without any schema falls back to a bare string, not to Empty
    return f"{rpc_name}Response" if has_schema else TEXT_PLACEHOLDER_TYPE


def render_rpc(
    route: RouteDescriptor,
    rpc_name: str,
    service_name: str,
    has_params: bool,
    default_visibility: str = DEFAULT_VISIBILITY,
) -> str:
    """Render one ``rpc`` declaration with its ``msp.http`` transport options."""
    request_type = request_type_name(rpc_name, has_params)
    response_type = response_type_name(rpc_name, route.route_schema is not None)
    visibility = route.visibility or default_visibility

    lines = [
        f"rpc {rpc_name}( {request_type} ) returns( {response_type} ) {{",
        f'  option (msp.http).templatedUrl = "/{service_name}{route.url}";',
        f'  option (msp.http).method = "{route.method}";',
        f"  option (msp.http).timeout = {RPC_TIMEOUT};",
        f'  option (msp.http).visibility = "{visibility}";',
    ]
    if route.method in BODY_METHODS:
        lines.append('  option (msp.http).body = "request";')
    lines.append("}")
    return "\n".join(lines)
