# scene/library.py
import logging
import math
import random
from typing import Callable, Dict

from pathtracer.core.utils import random_vector
from pathtracer.core.vector import Color, Point3, Vector3
from pathtracer.geometry.aarect import AARect
from pathtracer.geometry.box import Box
from pathtracer.geometry.bvh import BVHNode
from pathtracer.geometry.cylinder import Cylinder
from pathtracer.geometry.disk import Disk
from pathtracer.geometry.medium import ConstantMedium
from pathtracer.geometry.mesh import load_obj
from pathtracer.geometry.sphere import MovingSphere, Sphere
from pathtracer.geometry.transform import FlipFace, Rotate, Translate
from pathtracer.geometry.world import HittableList
from pathtracer.materials.corroded import Corroded
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials.phong import AnisotropicPhong
from pathtracer.materials.textures import CheckerBump, CheckerTexture, MarbleTexture
from pathtracer.materials.wavefront import WavefrontMaterial
from pathtracer.scene.scene import Scene

logger = logging.getLogger(__name__)

RED = Color(0.65, 0.05, 0.05)
WHITE = Color(0.73, 0.73, 0.73)
GREEN = Color(0.12, 0.45, 0.15)
SKY = Color(0.7, 0.8, 1.0)
BLACK = Color(0.0, 0.0, 0.0)

CORNELL_VIEW = dict(lookfrom=Point3(278.0, 278.0, -800.0),
                    lookat=Point3(278.0, 278.0, 0.0), vfov=40.0)
OUTDOOR_VIEW = dict(lookfrom=Point3(13.0, 2.0, 3.0),
                    lookat=Point3(0.0, 0.0, 0.0), vfov=20.0)


def _random_color(lo: float = 0.0, hi: float = 1.0) -> Color:
    return random_vector(lo, hi)


def random_scene() -> Scene:
    """Checkered ground covered in small random spheres around three large ones."""
    world = HittableList()
    checker = CheckerTexture(Color(0.2, 0.3, 0.1), Color(0.9, 0.9, 0.9))
    world.add(Sphere(Point3(0.0, -1000.0, 0.0), 1000.0, Lambertian(checker)))

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = random.random()
            center = Point3(a + 0.9 * random.random(), 0.2, b + 0.9 * random.random())
            if (center - Point3(4.0, 0.2, 0.0)).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                albedo = _random_color() * _random_color()
                center2 = center + Vector3(0.0, random.uniform(0.0, 0.5), 0.0)
                world.add(MovingSphere(center, center2, 0.0, 1.0, 0.2, Lambertian(albedo)))
            elif choose_mat < 0.95:
                world.add(Sphere(center, 0.2,
                                 Metal(_random_color(0.5, 1.0), random.uniform(0.0, 0.5))))
            else:
                world.add(Sphere(center, 0.2, Dielectric(1.5)))

    world.add(Sphere(Point3(0.0, 1.0, 0.0), 1.0, Dielectric(1.5)))
    world.add(Sphere(Point3(-4.0, 1.0, 0.0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    world.add(Sphere(Point3(4.0, 1.0, 0.0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)))

    return Scene.from_objects(world, background=SKY, **OUTDOOR_VIEW)


def two_spheres() -> Scene:
    checker = Lambertian(CheckerTexture(Color(0.2, 0.3, 0.1), Color(0.9, 0.9, 0.9)))
    world = HittableList([
        Sphere(Point3(0.0, -10.0, 0.0), 10.0, checker),
        Sphere(Point3(0.0, 10.0, 0.0), 10.0, checker),
    ])
    return Scene.from_objects(world, background=SKY, **OUTDOOR_VIEW)


def _cornell_walls(world: HittableList, lights: HittableList,
                   emit: Color = Color(15.0, 15.0, 15.0)):
    red = Lambertian(RED)
    white = Lambertian(WHITE)
    green = Lambertian(GREEN)
    light_panel = AARect.xz_rect(213.0, 343.0, 227.0, 332.0, 554.0, DiffuseLight(emit))

    world.add(AARect.yz_rect(0.0, 555.0, 0.0, 555.0, 555.0, green))
    world.add(AARect.yz_rect(0.0, 555.0, 0.0, 555.0, 0.0, red))
    world.add(AARect.xz_rect(0.0, 555.0, 0.0, 555.0, 0.0, white))
    world.add(AARect.xz_rect(0.0, 555.0, 0.0, 555.0, 555.0, white))
    world.add(AARect.xy_rect(0.0, 555.0, 0.0, 555.0, 555.0, white))
    # The panel faces up; flip it so it lights the room
    world.add(FlipFace(light_panel))
    lights.add(light_panel)


def _tall_box(material):
    box = Box(Point3(0.0, 0.0, 0.0), Point3(165.0, 330.0, 165.0), material)
    return Translate(Rotate.rotate_y(box, 15.0), Vector3(265.0, 0.0, 295.0))


def _short_box(material):
    box = Box(Point3(0.0, 0.0, 0.0), Point3(165.0, 165.0, 165.0), material)
    return Translate(Rotate.rotate_y(box, -18.0), Vector3(130.0, 0.0, 65.0))


def cornell_box() -> Scene:
    world, lights = HittableList(), HittableList()
    _cornell_walls(world, lights)
    white = Lambertian(WHITE)
    world.add(_tall_box(white))
    world.add(_short_box(white))
    return Scene.from_objects(world, lights, background=BLACK, **CORNELL_VIEW)


def cornell_sphere() -> Scene:
    """Cornell box with a tall block and a glass ball, the ball also sampled as a light target."""
    world, lights = HittableList(), HittableList()
    _cornell_walls(world, lights)
    sphere = Sphere(Point3(190.0, 90.0, 190.0), 90.0, Dielectric(1.5))
    world.add(_tall_box(Lambertian(WHITE)))
    world.add(sphere)
    lights.add(sphere)
    return Scene.from_objects(world, lights, background=BLACK, **CORNELL_VIEW)


def cornell_smoke() -> Scene:
    world, lights = HittableList(), HittableList()
    _cornell_walls(world, lights, emit=Color(7.0, 7.0, 7.0))
    white = Lambertian(WHITE)
    world.add(ConstantMedium.from_color(_tall_box(white), 0.01, Color(0.0, 0.0, 0.0)))
    world.add(ConstantMedium.from_color(_short_box(white), 0.01, Color(1.0, 1.0, 1.0)))
    return Scene.from_objects(world, lights, background=BLACK, **CORNELL_VIEW)


def two_perlin_spheres() -> Scene:
    marble = Lambertian(MarbleTexture(4.0))
    world = HittableList([
        Sphere(Point3(0.0, -1000.0, 0.0), 1000.0, marble),
        Sphere(Point3(0.0, 2.0, 0.0), 2.0, marble),
    ])
    return Scene.from_objects(world, background=SKY, **OUTDOOR_VIEW)


def simple_light() -> Scene:
    marble = Lambertian(MarbleTexture(4.0))
    light_panel = AARect.xy_rect(3.0, 5.0, 1.0, 3.0, -2.0, DiffuseLight(Color(7.0, 7.0, 7.0)))
    world = HittableList([
        Sphere(Point3(0.0, -1000.0, 0.0), 1000.0, marble),
        Sphere(Point3(0.0, 2.0, 0.0), 2.0, marble),
        light_panel,
    ])
    return Scene.from_objects(world, HittableList([light_panel]), background=BLACK,
                              lookfrom=Point3(26.0, 3.0, 6.0),
                              lookat=Point3(0.0, 2.0, 0.0), vfov=20.0)


def subsurface_perlin_spheres() -> Scene:
    marble = Lambertian(MarbleTexture(4.0))
    turquoise = Sphere(Point3(6.0, 4.0, -4.0), 2.0, DiffuseLight(Color(0.0, 12.0, 10.0)))
    red = Sphere(Point3(-3.0, 3.0, 4.0), 1.0, DiffuseLight(Color(12.0, 0.0, 5.0)))
    world = HittableList([
        Sphere(Point3(0.0, -1000.0, 0.0), 999.5, marble),
        Sphere(Point3(0.0, 2.0, 0.0), 2.0, Dielectric(1.5, density=0.3,
                                                      volume_color=Color(0.2, 0.8, 0.9))),
        Sphere(Point3(0.0, 2.0, 0.0), 1.5, marble),
        turquoise,
        red,
    ])
    return Scene.from_objects(world, HittableList([turquoise, red]), background=BLACK,
                              lookfrom=Point3(13.0, 5.0, 3.0),
                              lookat=Point3(0.0, 0.0, 0.0), vfov=40.0)


def solids() -> Scene:
    """Rotated light panels, a small sun and a foggy glass ball inside a brushed metal room."""
    light = DiffuseLight(Color(7.0, 7.0, 7.0))
    walls = Metal(WHITE, 0.95)
    world = HittableList([
        AARect.yz_rect(-10.0, 10.0, -10.0, 10.0, -10.0, walls),
        AARect.yz_rect(-10.0, 10.0, -10.0, 10.0, 10.0, walls),
        AARect.xz_rect(-10.0, 10.0, -10.0, 10.0, -10.0, walls),
        AARect.xz_rect(-10.0, 10.0, -10.0, 10.0, 10.0, walls),
        AARect.xy_rect(-10.0, 10.0, -10.0, 10.0, -10.0, walls),
    ])

    panel = AARect.xz_rect(-3.0, 3.0, -2.0, 2.0, -3.0, light)
    right_panel = Translate(Rotate.rotate_z(panel, 45.0), Vector3(2.0, 0.0, 0.0))
    left_panel = Translate(Rotate.rotate_z(panel, 315.0), Vector3(-2.0, 0.0, 0.0))
    front_panel = Translate(Rotate.rotate_x(panel, -45.0), Vector3(1.0, 1.0, 4.0))
    sun = Sphere(Point3(0.0, 3.5, 0.0), 1.0, DiffuseLight(Color(20.0, 15.5, 11.0)))
    for obj in (right_panel, left_panel, front_panel, sun):
        world.add(obj)

    world.add(Sphere(Point3(0.0, 0.0, 0.0), 2.0,
                     Lambertian(MarbleTexture(4.0, Color(0.7, 0.3, 0.1)))))
    boundary = Sphere(Point3(3.0, 3.0, 0.0), 1.0, Dielectric(1.5))
    world.add(boundary)
    world.add(ConstantMedium.from_color(boundary, 1.0, Color(0.2, 0.4, 0.9)))

    lights = HittableList([sun, right_panel, left_panel, front_panel])
    return Scene.from_objects(world, lights, background=BLACK,
                              lookfrom=Point3(-4.0, 4.0, 15.0),
                              lookat=Point3(0.0, 0.0, 0.0), vfov=40.0)


def glossy_shapes() -> Scene:
    """Glossy, corroded and bumped surfaces on cylinders and disks."""
    light_panel = AARect.xz_rect(-3.0, 3.0, -3.0, 3.0, 8.0, DiffuseLight(Color(6.0, 6.0, 6.0)))
    phong = AnisotropicPhong(Color(0.1, 0.2, 0.5), Color(0.9, 0.9, 0.9), nu=1000.0, nv=100.0)
    rusty = Corroded(Metal(Color(0.8, 0.5, 0.3), 0.2))
    tiles = Corroded(Lambertian(WHITE), CheckerBump(0.0, -0.05, 2.0))

    pillar = Translate(Cylinder(1.0, 0.0, 3.0, rusty), Vector3(-2.5, 0.0, 0.0))
    tube = Translate(Cylinder(0.8, 0.0, 2.0, phong, phi_max=1.5 * math.pi),
                     Vector3(2.5, 0.0, 0.0))
    cap = Translate(Disk(3.0, 1.0, Lambertian(RED), inner_radius=0.4), Vector3(-2.5, 0.0, 0.0))

    world = HittableList([
        AARect.xz_rect(-20.0, 20.0, -20.0, 20.0, 0.0, tiles),
        Sphere(Point3(0.0, 1.2, 0.0), 1.2, phong),
        pillar, tube, cap,
        FlipFace(light_panel),
    ])
    return Scene.from_objects(world, HittableList([light_panel]), background=Color(0.05, 0.05, 0.08),
                              lookfrom=Point3(0.0, 4.0, 14.0),
                              lookat=Point3(0.0, 1.0, 0.0), vfov=35.0)


def final_scene() -> Scene:
    """Ground of random-height boxes with one of every feature above it."""
    ground = Lambertian(Color(0.48, 0.83, 0.53))
    boxes = HittableList()
    boxes_per_side = 20
    for i in range(boxes_per_side):
        for j in range(boxes_per_side):
            w = 100.0
            p0 = Point3(-1000.0 + i * w, 0.0, -1000.0 + j * w)
            p1 = Point3(p0.x + w, random.uniform(1.0, 101.0), p0.z + w)
            boxes.add(Box(p0, p1, ground))

    objects = HittableList()
    objects.add(BVHNode.build(boxes.objects, 0.0, 1.0))

    light_panel = AARect.xz_rect(123.0, 423.0, 147.0, 412.0, 554.0,
                                 DiffuseLight(Color(7.0, 7.0, 7.0)))
    objects.add(FlipFace(light_panel))

    center1 = Point3(400.0, 400.0, 200.0)
    center2 = center1 + Vector3(30.0, 0.0, 0.0)
    objects.add(MovingSphere(center1, center2, 0.0, 1.0, 50.0,
                             Lambertian(Color(0.7, 0.3, 0.1))))
    objects.add(Sphere(Point3(260.0, 150.0, 45.0), 50.0, Dielectric(1.5)))
    objects.add(Sphere(Point3(0.0, 150.0, 145.0), 50.0, Metal(Color(0.8, 0.8, 0.9), 1.0)))

    boundary = Sphere(Point3(360.0, 150.0, 145.0), 70.0, Dielectric(1.5))
    objects.add(boundary)
    objects.add(ConstantMedium.from_color(boundary, 0.2, Color(0.2, 0.4, 0.9)))
    mist = Sphere(Point3(0.0, 0.0, 0.0), 5000.0, Dielectric(1.5))
    objects.add(ConstantMedium.from_color(mist, 0.0001, Color(1.0, 1.0, 1.0)))

    objects.add(Sphere(Point3(220.0, 280.0, 300.0), 80.0, Lambertian(MarbleTexture(0.1))))

    white = Lambertian(WHITE)
    cluster = [Sphere(random_vector(0.0, 165.0), 10.0, white) for _ in range(1000)]
    objects.add(Translate(Rotate.rotate_y(BVHNode.build(cluster, 0.0, 1.0), 15.0),
                          Vector3(-100.0, 270.0, 395.0)))

    return Scene.from_objects(objects, HittableList([light_panel]), background=BLACK,
                              lookfrom=Point3(478.0, 278.0, -600.0),
                              lookat=Point3(278.0, 278.0, 0.0), vfov=40.0)


def mesh_in_cornell_box(path: str, scale: float = 1.0,
                        offset: Vector3 = Vector3(278.0, 100.0, 278.0)) -> Scene:
    """
    Load an OBJ model and place it in the Cornell box. Faces without an MTL
    material get a gold Wavefront material.
    """
    world, lights = HittableList(), HittableList()
    _cornell_walls(world, lights)
    material = WavefrontMaterial(2, Lambertian(Color(0.8, 0.6, 0.2)),
                                 Metal(Color(0.9, 0.9, 0.9), 0.1),
                                 DiffuseLight(BLACK))
    triangles = [tri for mesh in load_obj(path, material, scale) for tri in mesh.triangles()]
    if not triangles:
        raise ValueError(f"{path} contains no faces")
    world.add(Translate(BVHNode.build(triangles, 0.0, 1.0), offset))
    return Scene.from_objects(world, lights, background=BLACK, **CORNELL_VIEW)


SCENES: Dict[int, Callable[[], Scene]] = {
    1: random_scene,
    2: two_spheres,
    3: cornell_sphere,
    4: cornell_box,
    5: two_perlin_spheres,
    6: simple_light,
    7: cornell_smoke,
    8: subsurface_perlin_spheres,
    9: solids,
    10: glossy_shapes,
}


def select_scene(number: int) -> Scene:
    """Build scene `number`; anything outside the table gives the final scene."""
    factory = SCENES.get(number, final_scene)
    logger.info("Building scene %d (%s)", number, factory.__name__)
    return factory()
