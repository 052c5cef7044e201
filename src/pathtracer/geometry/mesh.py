# geometry/mesh.py
import logging
import os
from typing import Dict, List, Optional, Sequence, Tuple

from pathtracer.core.aabb import AABB
from pathtracer.core.onb import OrthoNormalBasis
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord, ShadingGeometry
from pathtracer.materials.material import Material
from pathtracer.materials.wavefront import load_mtl

logger = logging.getLogger(__name__)

# Below this the ray is treated as parallel to the triangle
PARALLEL_EPSILON = 1e-6
# Triangles lying in a coordinate plane still get a box with some thickness
BOX_PADDING = 1e-4

DEFAULT_UVS = ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0))


class TriangleMesh:
    """
    Shared vertex storage for a set of triangles. Every three entries of
    vertex_indices form one face; n and uv, when given, hold one entry per
    vertex in p.
    """
    def __init__(self, vertex_indices: Sequence[int], p: Sequence[Vector3], material,
                 n: Optional[Sequence[Vector3]] = None,
                 uv: Optional[Sequence[Tuple[float, float]]] = None):
        if len(vertex_indices) % 3 != 0:
            raise ValueError(
                f"Index buffer length {len(vertex_indices)} is not a multiple of 3"
            )
        for index in vertex_indices:
            if index < 0 or index >= len(p):
                raise ValueError(f"Vertex index {index} out of range for {len(p)} vertices")
        if n is not None and len(n) != len(p):
            raise ValueError(f"Mesh has {len(p)} positions but {len(n)} normals")
        if uv is not None and len(uv) != len(p):
            raise ValueError(f"Mesh has {len(p)} positions but {len(uv)} texture coordinates")

        self.vertex_indices = list(vertex_indices)
        self.p = list(p)
        self.n = list(n) if n is not None else None
        self.uv = list(uv) if uv is not None else None
        self.material = material

    @property
    def n_triangles(self) -> int:
        return len(self.vertex_indices) // 3

    def triangles(self) -> List["Triangle"]:
        return [Triangle(self, i) for i in range(self.n_triangles)]


class Triangle(Hittable):
    """A single face of a TriangleMesh."""
    def __init__(self, mesh: TriangleMesh, face: int):
        self.mesh = mesh
        self.face = face
        self.v = mesh.vertex_indices[3 * face:3 * face + 3]

    def _uvs(self):
        if self.mesh.uv is None:
            return DEFAULT_UVS
        return tuple(self.mesh.uv[i] for i in self.v)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        p0, p1, p2 = (self.mesh.p[i] for i in self.v)

        # Möller–Trumbore
        edge1 = p1 - p0
        edge2 = p2 - p0
        pvec = ray.direction.cross(edge2)
        det = edge1.dot(pvec)
        if abs(det) < PARALLEL_EPSILON:
            return None
        inv_det = 1.0 / det

        tvec = ray.origin - p0
        b1 = tvec.dot(pvec) * inv_det
        if b1 < 0.0 or b1 > 1.0:
            return None
        qvec = tvec.cross(edge1)
        b2 = ray.direction.dot(qvec) * inv_det
        if b2 < 0.0 or b1 + b2 > 1.0:
            return None
        t = edge2.dot(qvec) * inv_det
        if t < t_min or t > t_max:
            return None
        b0 = 1.0 - b1 - b2

        uv0, uv1, uv2 = self._uvs()
        u = b0 * uv0[0] + b1 * uv1[0] + b2 * uv2[0]
        v = b0 * uv0[1] + b1 * uv1[1] + b2 * uv2[1]

        # Partial derivatives from the uv parameterization
        du02, dv02 = uv0[0] - uv2[0], uv0[1] - uv2[1]
        du12, dv12 = uv1[0] - uv2[0], uv1[1] - uv2[1]
        dp02 = p0 - p2
        dp12 = p1 - p2
        det_uv = du02 * dv12 - dv02 * du12
        if abs(det_uv) < PARALLEL_EPSILON:
            uvw = OrthoNormalBasis.build_from_w((p2 - p0).cross(p1 - p0))
            dpdu, dpdv = uvw.u, uvw.v
        else:
            inv_uv = 1.0 / det_uv
            dpdu = (dp02 * dv12 - dp12 * dv02) * inv_uv
            dpdv = (dp12 * du02 - dp02 * du12) * inv_uv

        outward_normal = dpdu.cross(dpdv).normalize()
        shading_normal = None
        if self.mesh.n is not None:
            n0, n1, n2 = (self.mesh.n[i] for i in self.v)
            shading_normal = (n0 * b0 + n1 * b1 + n2 * b2).normalize()
            # Let the authored normals decide which side is the front
            if shading_normal.dot(outward_normal) < 0.0:
                outward_normal = -outward_normal

        p = p0 * b0 + p1 * b1 + p2 * b2
        rec = HitRecord.from_ray(ray, p, outward_normal, t, u, v,
                                 self.mesh.material, dpdu, dpdv)
        if shading_normal is not None and not shading_normal.near_zero():
            if shading_normal.dot(rec.normal) < 0.0:
                shading_normal = -shading_normal
            rec.shading = ShadingGeometry(shading_normal, dpdu, dpdv)
        return rec

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> AABB:
        p0, p1, p2 = (self.mesh.p[i] for i in self.v)
        pad = Vector3(BOX_PADDING, BOX_PADDING, BOX_PADDING)
        lo = Vector3(min(p0.x, p1.x, p2.x), min(p0.y, p1.y, p2.y), min(p0.z, p1.z, p2.z))
        hi = Vector3(max(p0.x, p1.x, p2.x), max(p0.y, p1.y, p2.y), max(p0.z, p1.z, p2.z))
        return AABB(lo - pad, hi + pad)


class ObjFormatError(ValueError):
    """A bad statement in an OBJ file, reported as file:line: message."""
    def __init__(self, filename: str, line_num: int, message: str):
        super().__init__(f"{filename}:{line_num}: {message}")


Corner = Tuple[int, Optional[int], Optional[int]]


class _FaceGroup:
    """Faces sharing one material, with their own deduplicated vertex table."""
    def __init__(self, material):
        self.material = material
        self.corners: Dict[Corner, int] = {}
        self.corner_list: List[Corner] = []
        self.indices: List[int] = []

    def add_face(self, face_corners: List[Corner]):
        face = []
        for key in face_corners:
            if key not in self.corners:
                self.corners[key] = len(self.corner_list)
                self.corner_list.append(key)
            face.append(self.corners[key])

        for i in range(1, len(face) - 1):
            self.indices.extend((face[0], face[i], face[i + 1]))

    def to_mesh(self, positions, uvs, normals) -> TriangleMesh:
        p = [positions[v] for v, _, _ in self.corner_list]
        uv = None
        if all(t is not None for _, t, _ in self.corner_list):
            uv = [uvs[t] for _, t, _ in self.corner_list]
        n = None
        if all(k is not None for _, _, k in self.corner_list):
            n = [normals[k] for _, _, k in self.corner_list]
        return TriangleMesh(self.indices, p, self.material, n=n, uv=uv)


def _resolve_index(token: str, count: int, line_num: int, filename: str) -> int:
    index = int(token)
    # OBJ indices are 1-based, negative ones count back from the end
    resolved = index - 1 if index > 0 else count + index
    if index == 0 or resolved < 0 or resolved >= count:
        raise ObjFormatError(filename, line_num, f"index {index} out of range")
    return resolved


def load_obj(filename: str, material, scale: float = 1.0) -> List[TriangleMesh]:
    """
    Load a Wavefront OBJ file, one TriangleMesh per material group.

    Polygons are fan triangulated. Materials come from the MTL libraries
    named by `mtllib` (resolved next to the OBJ file) and are selected with
    `usemtl`; faces that name no material get `material`. Within a group each
    distinct (position, uv, normal) corner becomes one mesh vertex, and uvs
    and normals are only kept when every corner of the group has them.
    """
    if not os.path.isfile(filename):
        raise FileNotFoundError(f"OBJ file not found: {filename}")
    base_dir = os.path.dirname(filename)

    positions: List[Vector3] = []
    normals: List[Vector3] = []
    uvs: List[Tuple[float, float]] = []
    library: Dict[str, Material] = {}
    groups: Dict[Optional[str], _FaceGroup] = {}
    current: Optional[str] = None

    logger.info("Loading mesh %s", filename)
    with open(filename, 'r') as f:
        for line_num, line in enumerate(f, 1):
            values = line.split()
            if not values or values[0].startswith('#'):
                continue

            keyword = values[0]
            if keyword == 'mtllib':
                for name in values[1:]:
                    library.update(load_mtl(os.path.join(base_dir, name)))
                continue
            if keyword == 'usemtl':
                name = ' '.join(values[1:])
                if name not in library:
                    raise ObjFormatError(filename, line_num, f"unknown material {name!r}")
                current = name
                continue

            try:
                if keyword == 'v':
                    positions.append(Vector3(float(values[1]) * scale,
                                             float(values[2]) * scale,
                                             float(values[3]) * scale))
                elif keyword == 'vn':
                    normals.append(Vector3(float(values[1]),
                                           float(values[2]),
                                           float(values[3])).normalize())
                elif keyword == 'vt':
                    uvs.append((float(values[1]), float(values[2])))
                elif keyword == 'f':
                    if len(values) < 4:
                        raise ObjFormatError(filename, line_num, "face needs at least three vertices")
                    face = []
                    for vertex_str in values[1:]:
                        parts = vertex_str.split('/')
                        v_idx = _resolve_index(parts[0], len(positions), line_num, filename)
                        t_idx = _resolve_index(parts[1], len(uvs), line_num, filename) \
                            if len(parts) > 1 and parts[1] else None
                        n_idx = _resolve_index(parts[2], len(normals), line_num, filename) \
                            if len(parts) > 2 and parts[2] else None
                        face.append((v_idx, t_idx, n_idx))

                    group = groups.get(current)
                    if group is None:
                        group_material = material if current is None else library[current]
                        group = groups[current] = _FaceGroup(group_material)
                    group.add_face(face)
            except ObjFormatError:
                raise
            except (IndexError, ValueError) as e:
                raise ObjFormatError(filename, line_num,
                                     f"malformed line {line.strip()!r} ({e})") from e

    meshes = [group.to_mesh(positions, uvs, normals) for group in groups.values()]
    logger.info("Loaded %d vertices, %d normals, %d UVs, %d triangles in %d material group(s)",
                len(positions), len(normals), len(uvs),
                sum(mesh.n_triangles for mesh in meshes), len(meshes))
    return meshes
