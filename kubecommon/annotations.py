"""Pod annotation helpers."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping

NETWORK_ATTACHMENT_ANNOT = "k8s.v1.cni.cncf.io/networks"

_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


class AnnotationValueError(ValueError):
    """An annotation exists but its value is not a valid boolean."""

    def __init__(self, key: str, value: str) -> None:
        super().__init__(f"annotation {key!r}: invalid boolean value {value!r}")
        self.key = key
        self.value = value


def _encode(payload: object) -> str:
    text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    for char, escaped in _HTML_ESCAPES.items():
        text = text.replace(char, escaped)
    return text


def get_nad_annotation(namespace: str, nads: Iterable[str]) -> dict[str, str]:
    """Return the network-attachment-definition pod annotation for the given networks."""
    networks = [{"Name": nad, "Namespace": namespace} for nad in nads]
    return {NETWORK_ATTACHMENT_ANNOT: _encode(networks)}


def get_bool_from_annotation(
    annotations: Mapping[str, str], key: str
) -> tuple[bool, bool]:
    """Return ``(value, exists)`` for a boolean annotation.

    A missing key gives ``(False, False)``. A present key whose value is not a
    valid boolean raises :class:`AnnotationValueError`.
    """
    if key not in annotations:
        return False, False
    value = annotations[key]
    if value in _TRUE_VALUES:
        return True, True
    if value in _FALSE_VALUES:
        return False, True
    raise AnnotationValueError(key, value)