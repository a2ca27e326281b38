# ngsi2/core/values.py
"""
Attribute value codec for the ``.../attrs/{name}/value`` endpoints.

JSON is the default encoding of attribute values. The ``text/plain``
variant of the endpoint uses a simpler text form for scalars:

==========  ==================  =========================================
value       rendered as         parsed back from
==========  ==================  =========================================
null        ``null``            ``null`` (any case)
bool        ``true``/``false``  ``true``/``false`` (any case)
string      ``"<s>"``           ``"<s>"`` (quotes stripped, no unescaping)
number      ``42``, ``25.0``    integer, then float32, then float64
structure   compact JSON        not accepted
==========  ==================  =========================================
"""
from __future__ import annotations

import json
import logging
from typing import Any, Callable

from ngsi2.contracts.errors import NotAcceptable
from ngsi2.core.numbers import parse_decimal, parse_float32, parse_int64

logger = logging.getLogger(__name__)

# first success wins
_NUMBER_PARSERS: tuple[Callable[[str], Any], ...] = (
    parse_int64,
    parse_float32,
    parse_decimal,
)


def value_to_text(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def text_to_value(text: str) -> Any:
    """Decode a ``text/plain`` request body into an attribute value.

    Raises:
        NotAcceptable: When the text is neither a keyword, a quoted string
            nor a number.
    """
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if lowered == "null":
        return None
    if len(text) > 1 and text.startswith('"') and text.endswith('"'):
        return text[1:-1]

    for parse in _NUMBER_PARSERS:
        try:
            return parse(text)
        except ValueError:
            continue

    logger.debug("Plain text value %r is not a scalar literal", text)
    raise NotAcceptable()


def ensure_structured(value: Any) -> Any:
    """Only objects and arrays can be served as ``application/json`` values."""
    if value is None or isinstance(value, (str, int, float, bool)):
        raise NotAcceptable()
    return value
