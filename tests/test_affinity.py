from kubecommon.affinity import distribute_pods

EXPECTED = {
    "podAntiAffinity": {
        "preferredDuringSchedulingIgnoredDuringExecution": [
            {
                "podAffinityTerm": {
                    "labelSelector": {
                        "matchExpressions": [
                            {
                                "key": "ThisSelector",
                                "operator": "In",
                                "values": ["selectorValue1", "selectorValue2"],
                            }
                        ]
                    },
                    "topologyKey": "ThisTopologyKey",
                },
                "weight": 100,
            }
        ]
    }
}


def test_default_pod_distribution():
    result = distribute_pods(
        "ThisSelector", ["selectorValue1", "selectorValue2"], "ThisTopologyKey"
    )
    assert result == EXPECTED


def test_values_are_copied():
    values = ["selectorValue1"]
    result = distribute_pods("ThisSelector", values, "ThisTopologyKey")
    values.append("other")
    term = result["podAntiAffinity"]["preferredDuringSchedulingIgnoredDuringExecution"][0]
    assert term["podAffinityTerm"]["labelSelector"]["matchExpressions"][0]["values"] == [
        "selectorValue1"
    ]