"""Trace and resample a path description and write both results into a preview SVG."""

import os

from arcpath.page import PolylineSvgPage
from arcpath.path import VectorPath
from arcpath.svgpath import SvgPathNormalizer

# Two subpaths: a rounded drop built of curves and a closed triangle
PATH_STRING_INPUT = "M0 10 C0 4 6 0 10 0 Q20 0 20 10 L10 20 Z m25 0 l10 -10 h10 v10 z"
RESAMPLE_INTERVAL = 1.5
OUTPUT_FILE = "data/output/example/svg/svg_resample_path.svg"


def main(output_file: str = OUTPUT_FILE):
    """Main"""
    path_description = SvgPathNormalizer.to_simplified(PATH_STRING_INPUT)
    print("Input     :", PATH_STRING_INPUT)
    print("Simplified:", path_description)

    path = VectorPath(path_description)

    path.trace()
    traced = path.polylines
    for index, polyline in enumerate(traced):
        print(f"  traced    polyline {index}: {polyline.num_vertices:4d} vertices, length {polyline.total_distance:.3f}")

    page = PolylineSvgPage.from_path(path, margin=2.0)
    page.add_path(path, stroke="black", stroke_width=0.2)

    path.resample(RESAMPLE_INTERVAL)
    for index, polyline in enumerate(path.polylines):
        print(f"  resampled polyline {index}: {polyline.num_vertices:4d} vertices, length {polyline.total_distance:.3f}")

    page.add_path(path, stroke="red", stroke_width=0.1, vertex_radius=0.2)

    os.makedirs(os.path.dirname(output_file) or ".", exist_ok=True)
    print(f"save file {output_file} ...")
    page.save_as(output_file, include_debug_layer=True, pretty=True)
    print("save done.")


if __name__ == "__main__":
    main()
