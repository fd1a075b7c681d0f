"""SVG page to preview the polylines of a flattened path."""

from __future__ import annotations

import copy
import gzip
import io
from typing import Optional, Tuple, Union

import svgwrite
import svgwrite.base
import svgwrite.container
import svgwrite.elementfactory
from svgwrite.extensions import Inkscape

from arcpath.path import VectorPath


class PolylineSvgPage:
    """A page (canvas) described by SVG showing the polylines of one or more paths.

    The viewbox uses the coordinate system of the paths (x to the right, y downwards).
    Contains groups/layers:
        - root       -- (group)
            - main   -- polylines  --  editable->locked=False  --  hidden->display="block"
            - debug  -- vertex dots  --  editable->locked=False  --  hidden->display="none"
    """

    _inkscape: Inkscape  # extension to support layers

    drawing: svgwrite.Drawing
    root_group: svgwrite.container.Group
    main_layer: svgwrite.container.Group
    debug_layer: svgwrite.container.Group

    def __init__(self, viewbox: Tuple[float, float, float, float], width: str = "100%", height: str = "100%"):
        """
        Initialize the SVG page.

        Args:
            viewbox (Tuple[float, float, float, float]): (x, y, width, height) of the visible area
            width (str, optional): width of the canvas. Defaults to "100%".
            height (str, optional): height of the canvas. Defaults to "100%".
        """
        vb_x, vb_y, vb_width, vb_height = viewbox

        # profile="full" to support numbers with more than 4 decimal digits
        self.drawing = svgwrite.Drawing(
            size=(width, height),
            viewBox=f"{vb_x:g} {vb_y:g} {vb_width:g} {vb_height:g}",
            profile="full",
        )
        self.root_group = self.drawing.g(id="root")

        # Initialize Inkscape extension for layer support
        self._inkscape = Inkscape(self.drawing)

        # Define layers
        self.main_layer = self._inkscape.layer(label="main", locked=False)
        self.debug_layer = self._inkscape.layer(label="debug", locked=False, display="none")

    @classmethod
    def from_path(cls, path: VectorPath, margin: float = 1.0) -> PolylineSvgPage:
        """Create a page whose viewbox fits the polylines of _path_ plus _margin_ on each side.

        The path must have been traced or resampled before. A path without
        vertices gets a unit viewbox.
        """
        xmin, ymin, xmax, ymax = (0.0, 0.0, 1.0, 1.0)
        bounds = [polyline.bounds() for polyline in path.polylines if polyline.num_vertices]
        if bounds:
            xmin = min(bound[0] for bound in bounds)
            ymin = min(bound[1] for bound in bounds)
            xmax = max(bound[2] for bound in bounds)
            ymax = max(bound[3] for bound in bounds)
        return cls((xmin - margin, ymin - margin, xmax - xmin + 2 * margin, ymax - ymin + 2 * margin))

    def add(
        self,
        element: Union[svgwrite.base.BaseElement, svgwrite.elementfactory.ElementBuilder],
        add_to_debug_layer: bool = False,
    ) -> Union[svgwrite.base.BaseElement, svgwrite.elementfactory.ElementBuilder]:
        """Append _element_ to the debug layer or the main layer and return it."""
        layer = self.debug_layer if add_to_debug_layer else self.main_layer
        return layer.add(element)

    def add_path(
        self,
        path: VectorPath,
        stroke: str = "black",
        stroke_width: float = 0.1,
        vertex_radius: Optional[float] = None,
    ) -> int:
        """Add every non-empty polyline of _path_ as <polyline> to the main layer.

        If _vertex_radius_ is given, each vertex is also drawn as a dot on the debug layer.

        Returns:
            int: number of polylines added
        """
        added = 0
        for polyline in path.polylines:
            if not polyline.num_vertices:
                continue
            points = [tuple(vertex) for vertex in polyline.vertices.tolist()]
            self.add(self.drawing.polyline(points=points, stroke=stroke, stroke_width=stroke_width, fill="none"))
            if vertex_radius is not None:
                for point in points:
                    self.add(self.drawing.circle(center=point, r=vertex_radius, fill=stroke), True)
            added += 1
        return added

    def to_string(self, include_debug_layer: bool = False, pretty: bool = False, indent: int = 2) -> str:
        """Return the page as SVG document text.

        The layers are copied into a fresh drawing, so the page stays
        editable and repeated calls give the same text.
        """
        drawing = copy.deepcopy(self.drawing)
        root_group = copy.deepcopy(self.root_group)
        if include_debug_layer:
            root_group.add(copy.deepcopy(self.debug_layer))
        root_group.add(copy.deepcopy(self.main_layer))
        drawing.add(root_group)

        svg_buffer = io.StringIO()
        drawing.write(svg_buffer, pretty=pretty, indent=indent)
        return svg_buffer.getvalue()

    def save_as(
        self,
        filename: str,
        include_debug_layer: bool = False,
        pretty: bool = False,
        indent: int = 2,
        compressed: bool = False,
    ):
        """Write to_string() to _filename_, gzip-compressed (svgz) if _compressed_."""
        content = self.to_string(include_debug_layer, pretty, indent)
        opener = gzip.open if compressed else open
        with opener(filename, "wt", encoding="utf-8") as svg_file:
            svg_file.write(content)
