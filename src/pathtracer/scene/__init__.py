from pathtracer.scene.scene import Scene

__all__ = ['Scene']
