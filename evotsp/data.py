import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

import tsplib95
from tsplib95.exceptions import TsplibError

from .distance import City, build_distance_matrix, validate_cities
from .errors import InvalidInputError
from .solvers.base import tour_length


logger = logging.getLogger(__name__)


@dataclass
class Instance:
    name: str
    path: Path
    cities: List[City]
    optimum: Optional[float]
    # TSPLIB node id of each city, in city-index order.
    node_ids: List[int] = field(default_factory=list)

    def to_node_ids(self, tour: Iterable[int]) -> List[int]:
        return [self.node_ids[i] for i in tour]


def _solution_candidates(path: Path) -> Iterable[Path]:
    yield path.with_suffix(".opt.tour")
    for ext in (".opt.tour", ".opt", ".tour"):
        yield path.parent / "solutions" / f"{path.stem}{ext}"


def _read_dimension(path: Path) -> Optional[int]:
    try:
        with path.open("r") as f:
            for line in f:
                if "DIMENSION" in line.upper():
                    parts = line.replace(":", " ").split()
                    for token in parts:
                        if token.isdigit():
                            return int(token)
        return None
    except OSError:
        return None


def _load_optimum(path: Path, cities: List[City], node_ids: List[int]) -> Optional[float]:
    """Length of a known optimal tour, measured like every other tour here."""
    index_of = {node: i for i, node in enumerate(node_ids)}
    for candidate in _solution_candidates(path):
        if not candidate.exists():
            continue
        try:
            tour_file = tsplib95.load(candidate)
            tour = [index_of[node] for node in tour_file.tours[0]]
        except (KeyError, IndexError, ValueError, TsplibError) as exc:
            logger.warning("ignoring unreadable tour file %s: %s", candidate, exc)
            continue
        if sorted(tour) != list(range(len(cities))):
            logger.warning("ignoring tour file %s: not a tour of %s", candidate, path.name)
            continue
        return tour_length(build_distance_matrix(cities), tour)
    return None


def load_instance(path: Path) -> Instance:
    """Read the NODE_COORD_SECTION of a TSPLIB file into an Instance."""
    path = Path(path)
    try:
        problem = tsplib95.load(path)
    except (OSError, ValueError, TsplibError) as exc:
        raise InvalidInputError(f"cannot read TSPLIB file {path}: {exc}") from exc
    coords = problem.node_coords
    if not coords:
        raise InvalidInputError(f"{path} has no node coordinates")
    node_ids = sorted(coords)
    for node in node_ids:
        if len(coords[node]) != 2:
            raise InvalidInputError(f"{path}: node {node} is not a 2D coordinate: {coords[node]!r}")
    cities = validate_cities([tuple(coords[node]) for node in node_ids])
    optimum = _load_optimum(path, cities, node_ids)
    name = problem.name or path.stem
    logger.debug("loaded %s: %d cities, optimum=%s", name, len(cities), optimum)
    return Instance(name=name, path=path, cities=cities, optimum=optimum, node_ids=node_ids)


def load_tsplib_instances(
    root: Path, max_nodes: Optional[int] = None, max_instances: Optional[int] = None
) -> List[Instance]:
    tsp_files = sorted(Path(root).glob("*.tsp"))
    instances: List[Instance] = []
    for p in tsp_files:
        if max_nodes is not None:
            dim = _read_dimension(p)
            if dim is not None and dim > max_nodes:
                continue
        instances.append(load_instance(p))
        if max_instances is not None and len(instances) >= max_instances:
            break
    return instances
