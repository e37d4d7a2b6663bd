import math
from numbers import Real
from typing import List, Sequence, Tuple

import numpy as np

from .errors import InvalidInputError


City = Tuple[float, float]


def _is_coordinate(value) -> bool:
    return isinstance(value, (Real, np.floating, np.integer)) and not isinstance(value, bool)


def validate_cities(cities: Sequence[Sequence[float]]) -> List[City]:
    """Check coordinates and return them as a list of float pairs.

    Raises InvalidInputError for an empty list, a pair that is not exactly
    two real numbers, or a coordinate that is NaN or infinite.
    """
    if cities is None or len(cities) == 0:
        raise InvalidInputError("at least one city is required")
    validated: List[City] = []
    for idx, city in enumerate(cities):
        try:
            x, y = city
        except (TypeError, ValueError):
            raise InvalidInputError(f"city {idx} is not an (x, y) pair: {city!r}") from None
        if not (_is_coordinate(x) and _is_coordinate(y)):
            raise InvalidInputError(f"city {idx} has a non-numeric coordinate: {city!r}")
        x, y = float(x), float(y)
        if not (math.isfinite(x) and math.isfinite(y)):
            raise InvalidInputError(f"city {idx} has a non-finite coordinate: {city!r}")
        validated.append((x, y))
    return validated


def build_distance_matrix(cities: Sequence[Sequence[float]]) -> np.ndarray:
    """Pairwise Euclidean distances, symmetric with a zero diagonal.

    The returned array is marked read-only; it is shared by every component
    of a run.
    """
    coords = np.asarray(validate_cities(cities), dtype=np.float64)
    with np.errstate(over="ignore", invalid="ignore"):
        diff = coords[:, None, :] - coords[None, :, :]
        dist = np.hypot(diff[..., 0], diff[..., 1])
    if not np.isfinite(dist).all():
        raise InvalidInputError("city coordinates are too far apart: a distance overflows float64")
    np.fill_diagonal(dist, 0.0)
    dist.setflags(write=False)
    return dist
