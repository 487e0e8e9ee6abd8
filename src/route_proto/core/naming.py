import re

PLACEHOLDER_MARKER = ":"

_BRACE_PLACEHOLDER = re.compile(r"\{([^}:]+)(?::[^}]*)?\}")


def normalize_url_template(url: str) -> str:
    """Rewrite OpenAPI-style ``{name}`` placeholders into ``:name`` form."""
    return _BRACE_PLACEHOLDER.sub(lambda m: PLACEHOLDER_MARKER + m.group(1), url)


def _capitalize(token: str) -> str:
    return token[0].upper() + token[1:].lower()


def _readable_token(token: str) -> str:
    if token.startswith(PLACEHOLDER_MARKER):
        name = token.lstrip(PLACEHOLDER_MARKER)
        prefix = "By" * (len(token) - len(name))
        return prefix + (_capitalize(name).replace(PLACEHOLDER_MARKER, "By") if name else "")
    return _capitalize(token).replace(PLACEHOLDER_MARKER, "By")


def generate_rpc_name(method: str, url: str) -> str:
    """Derive a PascalCase RPC name from an HTTP method and URL template.

    ``GET /users/:id`` becomes ``GetUsersById``; ``POST /user-groups`` becomes
    ``PostUserGroups``.
    """
    tokens = [method]
    for segment in normalize_url_template(url).split("/"):
        tokens.extend(segment.split("-"))
    return "".join(_readable_token(token) for token in tokens if token)
