# The registry of collision strategies (cell-overlap tests)
COLLISION_STRATEGY_REGISTRY = {}


def register_collision_strategy(kind: str):
    def deco(fn):
        COLLISION_STRATEGY_REGISTRY[kind] = fn
        return fn
    return deco


def get_collision_strategy(kind: str):
    if kind not in COLLISION_STRATEGY_REGISTRY:
        raise ValueError(
            f"Unknown collision strategy: {kind}. "
            f"Available: {sorted(COLLISION_STRATEGY_REGISTRY)}"
        )
    return COLLISION_STRATEGY_REGISTRY[kind]
