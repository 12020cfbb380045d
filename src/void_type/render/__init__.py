from void_type.render.export import ExportDocument, export_filename, export_svg
from void_type.render.params import RenderParams, clamp_params
from void_type.render.preview import render_preview
from void_type.render.raster import render_raster
from void_type.render.scene import AlternateChoices, Scene, build_scene
from void_type.render.svg import render_svg

__all__ = [
    "AlternateChoices",
    "ExportDocument",
    "RenderParams",
    "Scene",
    "build_scene",
    "clamp_params",
    "export_filename",
    "export_svg",
    "render_preview",
    "render_raster",
    "render_svg",
]
