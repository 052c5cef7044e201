# renderer/integrator.py
from pathtracer.config import T_MIN
from pathtracer.core.ray import Ray
from pathtracer.core.utils import INFINITY
from pathtracer.core.vector import Color
from pathtracer.sampling.pdf import HittablePDF, MixturePDF


def ray_color(ray: Ray, scene, depth: int) -> Color:
    """
    Radiance arriving along `ray`, estimated with one path of at most
    `depth` bounces.

    Diffuse bounces draw their direction from an even mixture of the light
    density and the material's own density, and weight the result by the
    mixture's density in that direction.
    """
    if depth <= 0:
        return Color(0.0, 0.0, 0.0)

    rec = scene.world.hit(ray, T_MIN, INFINITY)
    if rec is None:
        return scene.background

    emitted = rec.material.emitted(ray, rec, rec.u, rec.v, rec.p)
    srec = rec.material.scatter(ray, rec)
    if srec is None:
        return emitted

    if srec.is_specular:
        return srec.attenuation * ray_color(srec.specular_ray, scene, depth - 1)

    if scene.lights.empty():
        light_pdf = srec.pdf
    else:
        light_pdf = HittablePDF(scene.lights, rec.p)
    mixture = MixturePDF(light_pdf, srec.pdf)

    scattered = Ray(rec.p, mixture.generate(srec), ray.time)
    pdf_value = mixture.value(scattered.direction)
    if not pdf_value > 0.0:
        raise RuntimeError(f"PDF value {pdf_value:.4f} is not positive at {rec.p}")

    return (emitted +
            srec.attenuation *
            rec.material.scattering_pdf(ray, rec, scattered) *
            ray_color(scattered, scene, depth - 1) / pdf_value)
