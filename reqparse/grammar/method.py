"""Method token classification."""

from reqparse.domain.request_types import ExtensionMethod, Method, StandardMethod

_STANDARD_METHODS = {method.value: method for method in StandardMethod}


def parse_method(token: str) -> Method:
    """Return the standard method for ``token`` or an extension carrying it.

    Matching is exact and case-sensitive, so ``get`` is an extension method.
    This never fails; the request line parser only calls it with a token
    that is already known to be present.
    """
    standard = _STANDARD_METHODS.get(token)
    if standard is not None:
        return standard
    return ExtensionMethod(token)
