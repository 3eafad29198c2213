"""printf-style positional substitution for localization templates.

Templates use printf verbs (%s, %d, %.2f, %[2]s ...). Substitution is
tolerant by contract and never raises:

- A verb with no remaining argument renders literally ("%s").
- Surplus arguments are ignored.
- A value the verb cannot convert renders as its plain text.
- A value whose __str__ raises renders as "%!v(PANIC=String method: <Error>)".
- Unknown verbs render literally and consume no argument.
- "%%" renders "%".
"""

import json
import re
from typing import Any, Callable, Dict, Optional, Tuple

from infrastructure.logging import get_module_logger

logger = get_module_logger()

_VERB_PATTERN = re.compile(
    r"%(?P<flags>[-+# 0]*)"
    r"(?:\[(?P<index>\d+)\])?"
    r"(?P<width>\d+)?"
    r"(?:\.(?P<precision>\d+))?"
    r"(?P<verb>[a-zA-Z%])"
)


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "<nil>"
    try:
        return str(value)
    except Exception as e:  # pylint: disable=broad-except
        return f"%!v(PANIC=String method: {type(e).__name__})"


def _to_bool_text(value: Any) -> str:
    if not isinstance(value, bool):
        raise TypeError(f"%t expects a bool, got {type(value).__name__}")
    return _to_text(value)


def _quote(value: Any) -> str:
    return json.dumps(_to_text(value), ensure_ascii=False)


def _to_binary(value: Any) -> str:
    return format(value, "b")


def _identity(value: Any) -> Any:
    return value


# verb -> (python conversion, value preparation)
_CONVERTERS: Dict[str, Tuple[str, Callable[[Any], Any]]] = {
    "v": ("s", _to_text),
    "s": ("s", _to_text),
    "q": ("s", _quote),
    "t": ("s", _to_bool_text),
    "b": ("s", _to_binary),
    "d": ("d", _identity),
    "i": ("d", _identity),
    "c": ("c", _identity),
    "o": ("o", _identity),
    "x": ("x", _identity),
    "X": ("X", _identity),
    "e": ("e", _identity),
    "E": ("E", _identity),
    "f": ("f", _identity),
    "F": ("F", _identity),
    "g": ("g", _identity),
    "G": ("G", _identity),
}


def format_value(
    verb: str,
    value: Any,
    flags: str = "",
    width: Optional[str] = None,
    precision: Optional[str] = None,
) -> str:
    """Render a single value for a printf verb.

    Args:
        verb: Verb letter (e.g., "s", "d", "f").
        value: Value to render.
        flags: printf flags ("-", "+", "#", " ", "0").
        width: Optional minimum width digits.
        precision: Optional precision digits.

    Returns:
        Rendered value; plain text of the value when the verb cannot
        convert it.
    """
    conversion, prepare = _CONVERTERS[verb]
    if verb in "xX" and isinstance(value, str):
        conversion, value = "s", value.encode("utf-8").hex()
        if verb == "X":
            value = value.upper()

    directive = "%" + flags + (width or "")
    if precision is not None:
        directive += "." + precision

    try:
        return (directive + conversion) % (prepare(value),)
    except Exception:  # pylint: disable=broad-except
        return _to_text(value)


def sprintf(template: str, *params: Any) -> str:
    """Substitute params into template positionally.

    Args:
        template: printf-style template (e.g., "Hello, %s!").
        *params: Values consumed by verbs in order. "%[n]v" selects the
            n-th param (1-based) and following verbs continue from there.

    Returns:
        Formatted string. Never raises.

    Example:
        sprintf("%d items", 5)        # "5 items"
        sprintf("%s and %s", "a")     # "a and %s"
        sprintf("%[2]s %[1]s", "a", "b")  # "b a"
    """
    position = 0
    used = set()

    def replace(match: "re.Match[str]") -> str:
        nonlocal position
        verb = match.group("verb")
        if verb == "%":
            return "%"
        if verb not in _CONVERTERS:
            return match.group(0)

        index = match.group("index")
        if index is not None:
            position = int(index) - 1
        if not 0 <= position < len(params):
            return match.group(0)

        value = params[position]
        used.add(position)
        position += 1
        return format_value(
            verb,
            value,
            flags=match.group("flags"),
            width=match.group("width"),
            precision=match.group("precision"),
        )

    result = _VERB_PATTERN.sub(replace, template)

    if len(used) < len(params):
        logger.debug(
            "format_extra_arguments",
            template=template,
            param_count=len(params),
            used_count=len(used),
        )

    return result
