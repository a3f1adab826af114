"""Pod affinity rules."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

_WEIGHT = 100


def distribute_pods(
    selector_key: str,
    selector_values: Iterable[str],
    topology_key: str,
) -> dict[str, Any]:
    """Return an affinity that prefers not to place two matching pods on one topology domain.

    The topology key is usually ``kubernetes.io/hostname``.
    """
    return {
        "podAntiAffinity": {
            "preferredDuringSchedulingIgnoredDuringExecution": [
                {
                    "podAffinityTerm": {
                        "labelSelector": {
                            "matchExpressions": [
                                {
                                    "key": selector_key,
                                    "operator": "In",
                                    "values": list(selector_values),
                                }
                            ]
                        },
                        "topologyKey": topology_key,
                    },
                    "weight": _WEIGHT,
                }
            ]
        }
    }