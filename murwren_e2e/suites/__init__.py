"""Test suites for the Edward R. Mur-Wren app."""

from murwren_e2e.suites.full_suite import full_suite_manifest
from murwren_e2e.suites.og_image import og_image_manifest
from murwren_e2e.suites.serve_and_test import serve_and_test_manifest
from murwren_e2e.suites.upload import upload_manifest

__all__ = [
    "full_suite_manifest",
    "og_image_manifest",
    "serve_and_test_manifest",
    "upload_manifest",
]
