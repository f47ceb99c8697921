"""
Reference Platonic solids.

Unit-edge solids centred on the origin, described by their vertices and
faces. The polyhedral point groups derive one transform per (face, vertex)
pair of these solids.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class Polyhedron:
    """A convex polyhedron as vertices plus faces of vertex indices.

    Attributes:
        name: Solid name
        vertices: (N, 3) vertex positions
        faces: Vertex index lists, one per face
    """
    name: str
    vertices: np.ndarray
    faces: tuple[tuple[int, ...], ...]

    def face_points(self) -> list[np.ndarray]:
        """Vertex positions of every face, in face order."""
        return [self.vertices[list(face)] for face in self.faces]

    def face_centroids(self) -> np.ndarray:
        return np.array([pts.mean(axis=0) for pts in self.face_points()])

    def get_edges(self) -> list[tuple[int, int]]:
        """Unique undirected edges as sorted index pairs."""
        edges = set()
        for face in self.faces:
            n = len(face)
            for i in range(n):
                a, b = face[i], face[(i + 1) % n]
                edges.add((min(a, b), max(a, b)))
        return sorted(edges)

    def center(self) -> np.ndarray:
        return self.vertices.mean(axis=0)

    def euler_characteristic(self) -> int:
        """V - E + F (2 for a closed convex solid)."""
        return len(self.vertices) - len(self.get_edges()) + len(self.faces)

    def edge_lengths(self) -> np.ndarray:
        return np.array([
            np.linalg.norm(self.vertices[a] - self.vertices[b])
            for a, b in self.get_edges()
        ])


def _solid(name: str, named_vertices: dict[str, tuple], faces: list[str]) -> Polyhedron:
    """Build a polyhedron from single-letter vertex names and face strings."""
    keys = list(named_vertices)
    index = {key: i for i, key in enumerate(keys)}
    vertices = np.array([named_vertices[k] for k in keys], dtype=np.float64)
    return Polyhedron(
        name=name,
        vertices=vertices,
        faces=tuple(tuple(index[c] for c in face) for face in faces),
    )


def tetrahedron(side_length: float = 1.0) -> Polyhedron:
    """Regular tetrahedron inscribed in alternate cube corners."""
    x = side_length / (2 * np.sqrt(2))
    y = -x
    return _solid(
        'tetrahedron',
        {'a': (x, x, x), 'b': (y, y, x), 'c': (y, x, y), 'd': (x, y, y)},
        ['abc', 'abd', 'acd', 'bcd'],
    )


def cube(side_length: float = 1.0) -> Polyhedron:
    x = 0.5 * side_length
    y = -x
    return _solid(
        'cube',
        {
            'a': (y, y, y), 'b': (x, y, y), 'c': (y, x, y), 'd': (y, y, x),
            'e': (x, x, y), 'f': (x, y, x), 'g': (y, x, x), 'h': (x, x, x),
        },
        ['abec', 'abfd', 'acgd', 'hfdg', 'hebf', 'hecg'],
    )


def octahedron(side_length: float = 1.0) -> Polyhedron:
    x = side_length / np.sqrt(2)
    y = -x
    return _solid(
        'octahedron',
        {
            'a': (x, 0, 0), 'b': (0, x, 0), 'c': (0, 0, x),
            'd': (y, 0, 0), 'e': (0, y, 0), 'f': (0, 0, y),
        },
        ['bac', 'baf', 'bcd', 'bdf', 'efd', 'efa', 'eca', 'ecd'],
    )


def icosahedron(side_length: float = 1.0) -> Polyhedron:
    """Regular icosahedron from three orthogonal golden rectangles."""
    half = side_length / 2
    x = half * (1 + np.sqrt(5)) / 2
    y = -x
    z = half
    w = -half
    return _solid(
        'icosahedron',
        {
            'a': (x, z, 0), 'b': (y, z, 0), 'c': (x, w, 0), 'd': (y, w, 0),
            'e': (z, 0, x), 'f': (z, 0, y), 'g': (w, 0, x), 'h': (w, 0, y),
            'i': (0, x, z), 'j': (0, y, z), 'k': (0, x, w), 'l': (0, y, w),
        },
        [
            'aie', 'afk', 'cej', 'clf', 'bgi', 'bkh', 'djg', 'dhl',
            'aki', 'bik', 'cjl', 'dlj', 'eca', 'fac', 'gbd', 'hdb',
            'ige', 'jeg', 'kfh', 'lhf',
        ],
    )


def dodecahedron(side_length: float = 1.0) -> Polyhedron:
    """Regular dodecahedron: cube corners plus three golden rectangles."""
    root5 = np.sqrt(5)
    phi = (1 + root5) / 2
    phibar = (1 - root5) / 2
    x = side_length / (root5 - 1)
    y = x * phi
    z = x * phibar
    s, t, w = -x, -y, -z
    return _solid(
        'dodecahedron',
        {
            'a': (x, x, x), 'b': (x, x, s), 'c': (x, s, x), 'd': (x, s, s),
            'e': (s, x, x), 'f': (s, x, s), 'g': (s, s, x), 'h': (s, s, s),
            'i': (w, y, 0), 'j': (z, y, 0), 'k': (w, t, 0), 'l': (z, t, 0),
            'm': (y, 0, w), 'n': (y, 0, z), 'o': (t, 0, w), 'p': (t, 0, z),
            'q': (0, w, y), 'r': (0, z, y), 's': (0, w, t), 't': (0, z, t),
        },
        [
            'biamn', 'ejfpo', 'ckdnm', 'hlgop', 'cmaqr', 'bndts',
            'eogrq', 'hpfst', 'eqaij', 'crglk', 'bsfji', 'htdkl',
        ],
    )


REFERENCE_SOLIDS = {
    'tetrahedron': tetrahedron,
    'cube': cube,
    'octahedron': octahedron,
    'icosahedron': icosahedron,
    'dodecahedron': dodecahedron,
}


def get_reference_solid(name: str, side_length: float = 1.0) -> Polyhedron:
    """Look up a reference solid by name.

    Raises:
        ValueError: If the solid is unknown
    """
    key = name.lower()
    if key not in REFERENCE_SOLIDS:
        raise ValueError(
            f"Unknown reference solid: {name}. Available: {list(REFERENCE_SOLIDS)}"
        )
    return REFERENCE_SOLIDS[key](side_length)
