from __future__ import annotations

from functools import lru_cache

from flask import current_app

from utils.course_catalog import CourseRecord, load_catalog


@lru_cache(maxsize=4)
def load_catalog_cached(directory: str) -> dict[str, CourseRecord]:
    """
    Catalog exports are immutable once scraped, so one load per directory.
    Missing directory -> empty catalog.
    """
    return load_catalog(directory)


def get_catalog() -> dict[str, CourseRecord]:
    return load_catalog_cached(str(current_app.config["CATALOG_DIR"]))


def get_course(code: str) -> CourseRecord | None:
    return get_catalog().get(code)
