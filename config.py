import os


# Absolute path to project root
# (a stable anchor for all file paths)
basedir = os.path.abspath(os.path.dirname(__file__))


class Config:
    # Catalog exports (JSON from the browser extension, or CSV/xlsx). Put your files in this folder.
    CATALOG_DIR = os.environ.get("CATALOG_DIR") or os.path.join(basedir, "data_catalog")

    # Diagram only shows undergrad courses; prereqs pointing at grad-level courses are dropped.
    MAX_COURSE_NUMBER = 500

    PREREQ_TREE_MAX_DEPTH = 5

    # Sort the selection by course id before grouping so layouts don't depend on file order.
    SORT_COURSES_BEFORE_GROUPING = True

    # Layout (pixels, renderer coordinates)
    NODE_WIDTH = 150
    NODE_HEIGHT = 54
    HORIZONTAL_SPACING = 160   # space between levels
    VERTICAL_SPACING = 48      # space between nodes in the same level
    INNER_MEMBER_GAP = -10     # gap between members inside a grouped node (smaller -> closer)
    ISOLATED_COLUMN_OFFSET = 100
    ISOLATED_SPACING = 24

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
