import random


def choose(candidates, rng=random):
    if not candidates:
        raise ValueError("choose() needs at least one candidate")
    return rng.choice(candidates)
