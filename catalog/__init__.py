"""Catalog module for fetching course sections from the course-outlines feed."""

from .client import CatalogClient, CatalogFetchError
from .loader import CourseLoader
from .models import Course, Department, SectionListing, Term

__all__ = [
    "CatalogClient",
    "CatalogFetchError",
    "Course",
    "CourseLoader",
    "Department",
    "SectionListing",
    "Term",
]
