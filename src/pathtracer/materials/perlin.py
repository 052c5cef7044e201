# materials/perlin.py
import math
import random

from pathtracer.core.utils import random_vector
from pathtracer.core.vector import Vector3

POINT_COUNT = 256


def _generate_perm():
    perm = list(range(POINT_COUNT))
    for i in range(POINT_COUNT - 1, 0, -1):
        target = random.randint(0, i)
        perm[i], perm[target] = perm[target], perm[i]
    return perm


class Perlin:
    """
    Gradient noise over a 256-entry lattice of random unit vectors.
    Built from the module-level random stream, so it is reproducible under a
    fixed seed.
    """
    def __init__(self):
        self.ranvec = [random_vector(-1.0, 1.0).normalize() for _ in range(POINT_COUNT)]
        self.perm_x = _generate_perm()
        self.perm_y = _generate_perm()
        self.perm_z = _generate_perm()

    def noise(self, p: Vector3) -> float:
        fx, fy, fz = math.floor(p.x), math.floor(p.y), math.floor(p.z)
        u, v, w = p.x - fx, p.y - fy, p.z - fz
        i, j, k = int(fx), int(fy), int(fz)

        # Hermite smoothing of the fractional parts
        uu = u * u * (3.0 - 2.0 * u)
        vv = v * v * (3.0 - 2.0 * v)
        ww = w * w * (3.0 - 2.0 * w)

        accum = 0.0
        for di in range(2):
            for dj in range(2):
                for dk in range(2):
                    gradient = self.ranvec[
                        self.perm_x[(i + di) & 255] ^
                        self.perm_y[(j + dj) & 255] ^
                        self.perm_z[(k + dk) & 255]
                    ]
                    weight = Vector3(u - di, v - dj, w - dk)
                    accum += ((di * uu + (1 - di) * (1.0 - uu)) *
                              (dj * vv + (1 - dj) * (1.0 - vv)) *
                              (dk * ww + (1 - dk) * (1.0 - ww)) *
                              gradient.dot(weight))
        return accum

    def turb(self, p: Vector3, depth: int = 7) -> float:
        """Sum of `depth` octaves of noise, each at double frequency and half weight."""
        accum = 0.0
        temp_p = p
        weight = 1.0
        for _ in range(depth):
            accum += weight * self.noise(temp_p)
            weight *= 0.5
            temp_p = temp_p * 2.0
        return abs(accum)
