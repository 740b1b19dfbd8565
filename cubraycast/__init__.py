"""Grid raycaster that loads .cub scenes and renders them with XPM wall textures."""

__version__ = "0.1.0"

__all__ = ["app", "colors", "image", "map", "render", "scene", "text", "xpm"]