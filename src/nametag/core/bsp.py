"""Binary space partitioning for constructive solid geometry.

Boolean operations on polyhedral solids are computed by building a BSP tree
from each operand's faces and clipping the faces of one operand against the
tree of the other. A tree node holds a splitting plane, the faces coplanar
with it, and subtrees for the front and back half-spaces. The leaves of the
back side are inside the solid.

Every routine here is iterative: a tree built from a few thousand text faces
can be deeper than the interpreter's recursion limit.

Key functions:
- split_face: Classify a face against a plane, splitting spanning faces
- union_faces / subtract_faces / intersect_faces: Boolean operations on
  face lists
"""

import logging
from collections.abc import Iterable

from nametag.domain import Face, Plane

logger = logging.getLogger(__name__)

# Distance below which a vertex is treated as lying on a plane
EPSILON = 1e-5

COPLANAR = 0
FRONT = 1
BACK = 2
SPANNING = 3


def split_face(
    plane: Plane,
    face: Face,
    coplanar_front: list[Face],
    coplanar_back: list[Face],
    front: list[Face],
    back: list[Face],
    epsilon: float = EPSILON,
) -> None:
    """Sort a face into the lists matching its position relative to a plane.

    Coplanar faces go to coplanar_front when they face the same way as the
    plane, otherwise to coplanar_back. Faces crossing the plane are cut in
    two; both halves keep the original face's plane and colour.

    Args:
        plane: Splitting plane
        face: Face to classify
        coplanar_front: Receives coplanar faces oriented like the plane
        coplanar_back: Receives coplanar faces oriented against the plane
        front: Receives faces (or pieces) in front of the plane
        back: Receives faces (or pieces) behind the plane
        epsilon: Coplanarity tolerance
    """
    normal = plane.normal
    nx, ny, nz, w = normal.x, normal.y, normal.z, plane.w

    face_type = COPLANAR
    types = []
    for v in face.vertices:
        t = nx * v.x + ny * v.y + nz * v.z - w
        if t < -epsilon:
            vertex_type = BACK
        elif t > epsilon:
            vertex_type = FRONT
        else:
            vertex_type = COPLANAR
        face_type |= vertex_type
        types.append(vertex_type)

    if face_type == COPLANAR:
        if normal.dot(face.plane.normal) > 0:
            coplanar_front.append(face)
        else:
            coplanar_back.append(face)
    elif face_type == FRONT:
        front.append(face)
    elif face_type == BACK:
        back.append(face)
    else:
        f = []
        b = []
        vertices = face.vertices
        n = len(vertices)
        for i in range(n):
            j = (i + 1) % n
            ti = types[i]
            tj = types[j]
            vi = vertices[i]
            vj = vertices[j]
            if ti != BACK:
                f.append(vi)
            if ti != FRONT:
                b.append(vi)
            if (ti | tj) == SPANNING:
                t = (w - normal.dot(vi)) / normal.dot(vj.minus(vi))
                v = vi.lerp(vj, t)
                f.append(v)
                b.append(v)
        if len(f) >= 3:
            front.append(Face(tuple(f), face.plane, face.color))
        if len(b) >= 3:
            back.append(Face(tuple(b), face.plane, face.color))


class BSPNode:
    """A node of a BSP tree over solid faces.

    Nodes are scratch structures private to a single boolean operation; they
    are mutated while clipping but never shared between operations.
    """

    __slots__ = ("back", "epsilon", "faces", "front", "plane")

    def __init__(self, faces: Iterable[Face] | None = None, epsilon: float = EPSILON) -> None:
        self.plane: Plane | None = None
        self.front: BSPNode | None = None
        self.back: BSPNode | None = None
        self.faces: list[Face] = []
        self.epsilon = epsilon
        if faces is not None:
            self.build(list(faces))

    def _nodes(self) -> list["BSPNode"]:
        nodes = []
        stack = [self]
        while stack:
            node = stack.pop()
            nodes.append(node)
            if node.front is not None:
                stack.append(node.front)
            if node.back is not None:
                stack.append(node.back)
        return nodes

    def invert(self) -> None:
        """Swap inside and outside of the represented solid."""
        for node in self._nodes():
            node.faces = [face.flipped() for face in node.faces]
            if node.plane is not None:
                node.plane = node.plane.flipped()
            node.front, node.back = node.back, node.front

    def clip_faces(self, faces: list[Face]) -> list[Face]:
        """Remove the parts of faces that lie inside this tree's solid."""
        result: list[Face] = []
        stack = [(self, faces)]
        while stack:
            node, items = stack.pop()
            if node.plane is None:
                result.extend(items)
                continue
            front: list[Face] = []
            back: list[Face] = []
            for face in items:
                split_face(node.plane, face, front, back, front, back, node.epsilon)
            if front:
                if node.front is not None:
                    stack.append((node.front, front))
                else:
                    result.extend(front)
            if back and node.back is not None:
                stack.append((node.back, back))
        return result

    def clip_to(self, other: "BSPNode") -> None:
        """Remove all faces of this tree that lie inside the other tree."""
        for node in self._nodes():
            node.faces = other.clip_faces(node.faces)

    def all_faces(self) -> list[Face]:
        faces: list[Face] = []
        for node in self._nodes():
            faces.extend(node.faces)
        return faces

    def build(self, faces: list[Face]) -> None:
        """Insert faces into the tree, splitting them where needed.

        A node without a plane takes the plane of the first face it receives
        and keeps that face, so every step consumes at least one face.
        """
        stack = [(self, faces)]
        while stack:
            node, items = stack.pop()
            if not items:
                continue
            if node.plane is None:
                node.plane = items[0].plane
                node.faces.append(items[0])
                items = items[1:]
            front: list[Face] = []
            back: list[Face] = []
            for face in items:
                split_face(node.plane, face, node.faces, node.faces, front, back, node.epsilon)
            if front:
                if node.front is None:
                    node.front = BSPNode(epsilon=node.epsilon)
                stack.append((node.front, front))
            if back:
                if node.back is None:
                    node.back = BSPNode(epsilon=node.epsilon)
                stack.append((node.back, back))


def union_faces(
    a_faces: list[Face], b_faces: list[Face], epsilon: float = EPSILON
) -> list[Face]:
    """Boundary faces of the union of two closed solids."""
    a = BSPNode(a_faces, epsilon)
    b = BSPNode(b_faces, epsilon)
    a.clip_to(b)
    b.clip_to(a)
    b.invert()
    b.clip_to(a)
    b.invert()
    a.build(b.all_faces())
    result = a.all_faces()
    logger.debug("union: %d + %d faces -> %d", len(a_faces), len(b_faces), len(result))
    return result


def subtract_faces(
    a_faces: list[Face], b_faces: list[Face], epsilon: float = EPSILON
) -> list[Face]:
    """Boundary faces of solid a with solid b removed."""
    a = BSPNode(a_faces, epsilon)
    b = BSPNode(b_faces, epsilon)
    a.invert()
    a.clip_to(b)
    b.clip_to(a)
    b.invert()
    b.clip_to(a)
    b.invert()
    a.build(b.all_faces())
    a.invert()
    result = a.all_faces()
    logger.debug("difference: %d - %d faces -> %d", len(a_faces), len(b_faces), len(result))
    return result


def intersect_faces(
    a_faces: list[Face], b_faces: list[Face], epsilon: float = EPSILON
) -> list[Face]:
    """Boundary faces of the volume shared by two closed solids."""
    a = BSPNode(a_faces, epsilon)
    b = BSPNode(b_faces, epsilon)
    a.invert()
    b.clip_to(a)
    b.invert()
    a.clip_to(b)
    b.clip_to(a)
    a.build(b.all_faces())
    a.invert()
    result = a.all_faces()
    logger.debug("intersection: %d & %d faces -> %d", len(a_faces), len(b_faces), len(result))
    return result
